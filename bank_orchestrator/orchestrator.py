"""
bank_orchestrator/orchestrator.py

BankOrchestrator wires the ledger client, aggregators and transfer submitter
together for one signed-in user and exposes the operations a UI triggers:
load the dashboard, load one account's history, submit a transfer or deposit.
"""

from typing import Any, List, Optional

import httpx

from bank_orchestrator.aggregation.feed import TransactionFeedAggregator, classify_history
from bank_orchestrator.aggregation.summary import AccountSummaryAggregator
from bank_orchestrator.clients.ledger_client import LedgerClient
from bank_orchestrator.config import FEED_LIMIT
from bank_orchestrator.context.retry import RetryableOperation
from bank_orchestrator.context.session import Navigator, Renderer, TokenProvider
from bank_orchestrator.logging_config import get_logger
from bank_orchestrator.schemas.feed_models import Dashboard, FeedEntry
from bank_orchestrator.transfer.submitter import TransferSubmitter

logger = get_logger("bank_orchestrator")


class BankOrchestrator:
    def __init__(
        self,
        token_provider: TokenProvider,
        navigator: Optional[Navigator] = None,
        renderer: Optional[Renderer] = None,
        base_url: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
        feed_limit: int = FEED_LIMIT,
    ):
        self.client = LedgerClient(token_provider, navigator, base_url=base_url, http=http)
        self.renderer = renderer
        self.summary = AccountSummaryAggregator()
        self.feed = TransactionFeedAggregator.from_client(self.client, limit=feed_limit)
        self.transfers = TransferSubmitter(self.client)
        # Re-invocable handle behind the dashboard's "Retry" control
        self.dashboard_loader: RetryableOperation[Dashboard] = RetryableOperation(
            self.load_dashboard, name="dashboard"
        )

    async def __aenter__(self) -> "BankOrchestrator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.client.aclose()

    def _render(self, data: Any) -> None:
        if self.renderer is not None:
            self.renderer.show(data)

    async def load_dashboard(self) -> Dashboard:
        """
        Accounts + balance summary + recent activity across all accounts.

        The account-list fetch is the top-level call: its errors (including
        AuthExpired, which clears the session) propagate. History failures for
        individual accounts only thin out the activity feed.
        """
        accounts = await self.client.get_accounts()
        summary = self.summary.summarize(accounts)
        recent = await self.feed.aggregate(accounts)
        dashboard = Dashboard(accounts=accounts, summary=summary, recent_activity=recent)
        logger.info(
            "Dashboard loaded: accounts=%d total=%s recent=%d",
            summary.account_count,
            summary.total_balance,
            len(recent),
        )
        self._render(dashboard)
        return dashboard

    async def load_account_history(self, account_number: str) -> List[FeedEntry]:
        transactions = await self.client.get_transactions(account_number)
        history = classify_history(transactions, account_number)
        self._render(history)
        return history

    async def transfer(self, **fields: Any) -> str:
        """
        Validate and submit a transfer; see TransferSubmitter.submit for the fields.
        """
        return await self.transfers.submit(**fields)

    async def deposit(self, account_number: str, amount: Any, description: Optional[str] = None) -> str:
        return await self.transfers.submit_deposit(account_number, amount, description)
