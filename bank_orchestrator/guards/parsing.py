"""
Lenient parsing helpers for ledger payloads and raw form input.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from bank_orchestrator.errors import ParseError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_number(value: Any, field: str = "amount", thousands: bool = False) -> Decimal:
    """
    Parse a numeric field into a finite Decimal.

    Accepts ints, floats, Decimals and numeric strings (surrounding whitespace
    is ignored). Commas are only dropped as thousands separators when
    `thousands` is set; otherwise "1,5" is rejected. Raises ParseError otherwise.
    """
    if value is None or isinstance(value, bool):
        raise ParseError(field, value)
    try:
        if isinstance(value, str):
            cleaned = value.strip()
            if thousands:
                cleaned = cleaned.replace(",", "")
            if not cleaned:
                raise ParseError(field, value)
            num = Decimal(cleaned)
        else:
            num = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ParseError(field, value)

    if not num.is_finite():
        raise ParseError(field, value)
    return num


def number_or_zero(value: Any, field: str = "balance") -> Decimal:
    """Lenient ledger-side parse_number: thousands separators allowed, 0 for anything unparseable."""
    try:
        return parse_number(value, field, thousands=True)
    except ParseError:
        return Decimal("0")


def parse_timestamp(value: Any, field: str = "transactionDate") -> datetime:
    """
    Parse a ledger timestamp into an aware UTC datetime.

    Handles ISO-8601 strings (with or without offset or trailing "Z"),
    epoch milliseconds, datetime objects and the
    [year, month, day, hour, minute, second, nanos] array form.
    Naive values are taken to be UTC.
    """
    if value is None or isinstance(value, bool):
        raise ParseError(field, value)

    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        elif isinstance(value, (list, tuple)):
            parts = [int(p) for p in value]
            if len(parts) < 3:
                raise ParseError(field, value)
            nanos = parts[6] if len(parts) > 6 else 0
            parsed = datetime(*parts[:6], microsecond=nanos // 1000)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                raise ParseError(field, value)
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
        else:
            raise ParseError(field, value)
    except (ValueError, TypeError, OverflowError, OSError):
        raise ParseError(field, value)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_or_epoch(value: Any) -> datetime:
    try:
        return parse_timestamp(value)
    except ParseError:
        return EPOCH


def clean_text(value: Optional[str]) -> str:
    """Strip a possibly-missing form field down to a plain string."""
    if value is None:
        return ""
    return str(value).strip()
