"""
Ledger wire models.

Field names on the wire are camelCase; the Python attributes are snake_case
and every model accepts either form.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bank_orchestrator.errors import ParseError
from bank_orchestrator.guards.parsing import number_or_zero, parse_timestamp


class AccountType(str, Enum):
    SAVINGS = "SAVINGS"
    CURRENT = "CURRENT"
    FIXED_DEPOSIT = "FIXED_DEPOSIT"
    RECURRING_DEPOSIT = "RECURRING_DEPOSIT"


class TransactionType(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"
    BILL_PAYMENT = "BILL_PAYMENT"
    RECHARGE = "RECHARGE"
    INTEREST = "INTEREST"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"


class LedgerModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _upper_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text.upper() or None


class Account(LedgerModel):
    account_number: str = Field(..., alias="accountNumber")
    account_type: Optional[str] = Field(None, alias="accountType")
    # Raw balance as sent; may be missing or non-numeric
    balance: Any = None
    ifsc_code: Optional[str] = Field(None, alias="ifscCode")
    account_name: Optional[str] = Field(None, alias="accountName")

    @field_validator("account_type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Optional[str]:
        return _upper_or_none(value)

    @property
    def kind(self) -> Optional[AccountType]:
        try:
            return AccountType(self.account_type)
        except ValueError:
            return None

    @property
    def balance_value(self) -> Decimal:
        return number_or_zero(self.balance, "balance")

    @property
    def type_label(self) -> str:
        if not self.account_type:
            return "Unknown"
        return self.account_type.replace("_", " ")

    @property
    def display_name(self) -> str:
        if self.account_name:
            return self.account_name
        return f"{self.type_label} Account"


class Transaction(LedgerModel):
    id: Optional[str] = None
    transaction_id: Optional[str] = Field(None, alias="transactionId")
    reference_number: Optional[str] = Field(None, alias="referenceNumber")
    transaction_type: Optional[str] = Field(None, alias="transactionType")
    from_account_number: Optional[str] = Field(None, alias="fromAccountNumber")
    to_account_number: Optional[str] = Field(None, alias="toAccountNumber")
    external_account_number: Optional[str] = Field(None, alias="externalAccountNumber")
    amount: Decimal = Decimal("0")
    status: TransactionStatus = TransactionStatus.UNKNOWN
    transaction_date: Optional[datetime] = Field(None, alias="transactionDate")
    description: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_counterparties(cls, data: Any) -> Any:
        # The ledger may embed whole account objects instead of numbers
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for nested, flat in (("fromAccount", "fromAccountNumber"), ("toAccount", "toAccountNumber")):
            obj = data.get(nested)
            if not data.get(flat) and isinstance(obj, dict) and obj.get("accountNumber"):
                data[flat] = obj["accountNumber"]
        return data

    @field_validator("id", "transaction_id", "reference_number", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    @field_validator("transaction_type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Optional[str]:
        return _upper_or_none(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _lenient_amount(cls, value: Any) -> Decimal:
        return number_or_zero(value, "amount")

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value: Any) -> TransactionStatus:
        try:
            return TransactionStatus(_upper_or_none(value))
        except ValueError:
            return TransactionStatus.UNKNOWN

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> Optional[datetime]:
        if value is None:
            return None
        try:
            return parse_timestamp(value)
        except ParseError:
            return None

    @property
    def reference(self) -> Optional[str]:
        """Identifier shown to the user: id, then transactionId."""
        return self.id or self.transaction_id


class TransferRequest(LedgerModel):
    from_account_number: str = Field(..., alias="fromAccountNumber")
    to_account_number: str = Field(..., alias="toAccountNumber")
    amount: Decimal = Field(..., gt=0)
    description: Optional[str] = None
    ifsc_code: Optional[str] = Field(None, alias="ifscCode")

    def to_wire(self) -> Dict[str, Any]:
        return {
            "fromAccountNumber": self.from_account_number,
            "toAccountNumber": self.to_account_number,
            "amount": float(self.amount),
            "description": self.description or None,
            "ifscCode": self.ifsc_code or None,
        }


class DepositRequest(LedgerModel):
    account_number: str = Field(..., alias="accountNumber")
    amount: Decimal = Field(..., gt=0)
    description: Optional[str] = None


class UserProfile(LedgerModel):
    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    @property
    def display_name(self) -> str:
        return self.first_name or self.username or "User"
