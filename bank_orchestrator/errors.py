"""
Error taxonomy for the orchestrator.

LedgerClient raises LedgerError subclasses; validators raise
ValidationRejected subclasses carrying a single rejection reason.
"""

from enum import Enum
from typing import Optional


class BankingError(Exception):
    """Base class for every error raised by this package."""


# ------------------------------------------------------------------
# Ledger / transport errors
# ------------------------------------------------------------------
class LedgerError(BankingError):
    """A call to the remote ledger did not produce a usable result."""


class Unauthenticated(LedgerError):
    """No credential is held locally; no request was issued."""

    def __init__(self, message: str = "no credential available"):
        super().__init__(message)


class AuthExpired(LedgerError):
    """The ledger rejected the credential (HTTP 401)."""

    def __init__(self, message: str = "session expired"):
        super().__init__(message)


class NetworkError(LedgerError):
    """The request never produced a response."""

    def __init__(self, cause: Exception):
        super().__init__(f"ledger unreachable: {cause}")
        self.cause = cause


class ServerError(LedgerError):
    """Non-success status other than 401."""

    def __init__(self, status: int, message: str):
        super().__init__(f"ledger error {status}: {message}")
        self.status = status
        self.message = message


class MalformedResponse(LedgerError):
    """A success response whose body could not be decoded into the expected shape."""


# ------------------------------------------------------------------
# Parsing / validation errors
# ------------------------------------------------------------------
class ParseError(BankingError):
    """A numeric or date field could not be parsed."""

    def __init__(self, field: str, value: object = None):
        super().__init__(f"could not parse {field}: {value!r}")
        self.field = field
        self.value = value


class TransferRejection(Enum):
    MISSING_SOURCE = "missing_source"
    MISSING_DESTINATION = "missing_destination"
    SELF_TRANSFER = "self_transfer"
    INVALID_AMOUNT = "invalid_amount"
    MISSING_ROUTING_CODE = "missing_routing_code"


class DepositRejection(Enum):
    MISSING_ACCOUNT = "missing_account"
    INVALID_AMOUNT = "invalid_amount"


# User-facing wording for each rejection
REJECTION_MESSAGES = {
    TransferRejection.MISSING_SOURCE: "Please select a from account",
    TransferRejection.MISSING_DESTINATION: (
        "Please select a to account from the dropdown or enter an external account number"
    ),
    TransferRejection.SELF_TRANSFER: "Cannot transfer to the same account",
    TransferRejection.INVALID_AMOUNT: "Please enter a valid amount",
    TransferRejection.MISSING_ROUTING_CODE: "IFSC code is required for external transfers",
    DepositRejection.MISSING_ACCOUNT: "Please select an account",
    DepositRejection.INVALID_AMOUNT: "Please enter a valid amount",
}


class ValidationRejected(BankingError):
    """Raw input failed local validation; nothing was sent to the ledger."""

    def __init__(self, reason: Enum, message: Optional[str] = None):
        super().__init__(message or REJECTION_MESSAGES.get(reason, reason.value))
        self.reason = reason


class TransferRejected(ValidationRejected):
    reason: TransferRejection


class DepositRejected(ValidationRejected):
    reason: DepositRejection
