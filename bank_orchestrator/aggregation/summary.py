"""
Account summary: total balance and account count.
"""

from decimal import Decimal
from typing import Sequence

from bank_orchestrator.schemas.feed_models import AccountSummary
from bank_orchestrator.schemas.ledger_models import Account


class AccountSummaryAggregator:
    """
    Reduces a list of accounts to a balance total. Unparseable balances count as 0.
    """

    def summarize(self, accounts: Sequence[Account]) -> AccountSummary:
        total = sum((account.balance_value for account in accounts), Decimal("0"))
        return AccountSummary(total_balance=total, account_count=len(accounts))
