from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Sequence

from bank_orchestrator.schemas.ledger_models import Account, Transaction, TransactionType


class Direction(Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    NEUTRAL = "neutral"


def classify_direction(tx: Transaction, account_number: str) -> Direction:
    """
    Direction of a transaction relative to the account whose history it came from.
    """
    if tx.transaction_type == TransactionType.DEPOSIT:
        return Direction.CREDIT
    if tx.transaction_type == TransactionType.WITHDRAWAL:
        return Direction.DEBIT
    if tx.from_account_number and tx.from_account_number == account_number:
        return Direction.DEBIT
    if account_number and account_number in (tx.to_account_number, tx.external_account_number):
        return Direction.CREDIT
    return Direction.NEUTRAL


@dataclass(frozen=True)
class FeedEntry:
    """A transaction tagged with the account whose history it was fetched from."""

    transaction: Transaction
    originating_account_number: str

    @property
    def direction(self) -> Direction:
        return classify_direction(self.transaction, self.originating_account_number)

    @property
    def direction_label(self) -> str:
        kind = self.transaction.transaction_type
        if kind == TransactionType.DEPOSIT:
            return "Received"
        if kind == TransactionType.WITHDRAWAL:
            return "Withdrawn"
        direction = self.direction
        if direction is Direction.DEBIT:
            return "Transferred"
        if direction is Direction.CREDIT:
            return "Received"
        return ""

    @property
    def sign(self) -> str:
        direction = self.direction
        if direction is Direction.CREDIT:
            return "+"
        if direction is Direction.DEBIT:
            return "-"
        return ""

    @property
    def signed_amount(self) -> str:
        return f"{self.sign}{self.transaction.amount:.2f}"


@dataclass
class FetchOutcome:
    """Settled result of one per-account history fetch."""

    account_number: str
    transactions: List[Transaction] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def entries(self) -> List[FeedEntry]:
        # a failed fetch contributes nothing
        if not self.ok:
            return []
        return [FeedEntry(tx, self.account_number) for tx in self.transactions]


@dataclass
class FeedResult:
    entries: List[FeedEntry]
    failed_accounts: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failed_accounts)


@dataclass(frozen=True)
class AccountSummary:
    total_balance: Decimal
    account_count: int


@dataclass
class Dashboard:
    accounts: Sequence[Account]
    summary: AccountSummary
    recent_activity: List[FeedEntry]
