"""
aggregation/feed.py

Recent-activity feed across all of a user's accounts.

One history request per account is started concurrently; every request is
settled into a FetchOutcome so that a failing account contributes an empty
history instead of failing the whole feed. The merged records are sorted
newest first (undated records last, merge order kept for ties) and cut
to the configured limit.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from bank_orchestrator.clients.ledger_client import LedgerClient
from bank_orchestrator.config import FEED_LIMIT
from bank_orchestrator.errors import LedgerError
from bank_orchestrator.logging_config import get_logger
from bank_orchestrator.schemas.feed_models import FeedEntry, FeedResult, FetchOutcome
from bank_orchestrator.schemas.ledger_models import Account, Transaction

logger = get_logger("bank_orchestrator.feed")

TransactionFetcher = Callable[[str], Awaitable[Sequence[Transaction]]]


def _sort_key(entry: FeedEntry) -> Tuple[bool, float]:
    # undated records rank below every dated one, including pre-1970 dates
    when = entry.transaction.transaction_date
    if when is None:
        return (False, 0.0)
    return (True, when.timestamp())


def sort_newest_first(entries: Sequence[FeedEntry]) -> List[FeedEntry]:
    # sorted() stays stable with reverse=True
    return sorted(entries, key=_sort_key, reverse=True)


def classify_history(transactions: Sequence[Transaction], account_number: str) -> List[FeedEntry]:
    """
    Single-account view: tag every record with the viewed account, keeping ledger order.
    """
    return [FeedEntry(tx, account_number) for tx in transactions]


class TransactionFeedAggregator:
    """
    Merges transaction histories of several accounts into one bounded feed.
    """

    def __init__(self, fetch: TransactionFetcher, limit: int = FEED_LIMIT):
        self.fetch = fetch
        self.limit = limit

    @classmethod
    def from_client(cls, client: LedgerClient, limit: int = FEED_LIMIT) -> "TransactionFeedAggregator":
        """
        Use the ledger client as the history source. A 401 on one account only
        empties that account's history; it never clears the session.
        """

        async def fetch(account_number: str) -> List[Transaction]:
            return await client.get_transactions(account_number, expire_session=False)

        return cls(fetch, limit=limit)

    async def _settle(self, account_number: str) -> FetchOutcome:
        try:
            result = await self.fetch(account_number)
            if not isinstance(result, (list, tuple)):
                raise TypeError(f"expected a list of transactions, got {type(result).__name__}")
            transactions = list(result)
        except LedgerError as e:
            logger.warning("History fetch failed for account=%s: %s", account_number, e)
            return FetchOutcome(account_number, error=e)
        except Exception as e:
            # any fetcher fault only empties this account's history
            logger.warning("History fetch for account=%s raised %s: %s", account_number, type(e).__name__, e)
            return FetchOutcome(account_number, error=e)
        return FetchOutcome(account_number, transactions)

    async def fetch_all(self, accounts: Sequence[Account]) -> List[FetchOutcome]:
        """
        Start every account's request at once and wait for all of them to settle.
        """
        return list(await asyncio.gather(*(self._settle(a.account_number) for a in accounts)))

    async def aggregate_detailed(self, accounts: Sequence[Account], limit: Optional[int] = None) -> FeedResult:
        limit = self.limit if limit is None else limit
        outcomes = await self.fetch_all(accounts)

        merged: List[FeedEntry] = []
        for outcome in outcomes:
            merged.extend(outcome.entries())

        failed = [o.account_number for o in outcomes if not o.ok]
        entries = sort_newest_first(merged)[: max(limit, 0)]
        logger.info(
            "Feed built: accounts=%d failed=%d merged=%d returned=%d",
            len(outcomes),
            len(failed),
            len(merged),
            len(entries),
        )
        return FeedResult(entries=entries, failed_accounts=failed)

    async def aggregate(self, accounts: Sequence[Account], limit: Optional[int] = None) -> List[FeedEntry]:
        result = await self.aggregate_detailed(accounts, limit)
        return result.entries
