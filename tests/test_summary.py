from decimal import Decimal

from bank_orchestrator.aggregation.summary import AccountSummaryAggregator
from bank_orchestrator.schemas.ledger_models import Account


def _account(number, balance):
    return Account.model_validate({"accountNumber": number, "accountType": "SAVINGS", "balance": balance})


def test_unparseable_balance_counts_as_zero():
    summary = AccountSummaryAggregator().summarize([_account("A", 100.5), _account("B", "bad")])
    assert summary.total_balance == Decimal("100.5")
    assert summary.account_count == 2


def test_missing_balances_and_strings_mix():
    accounts = [_account("A", "250.25"), _account("B", None), _account("C", 49.75)]
    summary = AccountSummaryAggregator().summarize(accounts)
    assert summary.total_balance == Decimal("300.00")
    assert summary.account_count == 3


def test_empty_input():
    summary = AccountSummaryAggregator().summarize([])
    assert summary.total_balance == Decimal("0")
    assert summary.account_count == 0
