"""
Transfer / deposit input validation.

Rules are checked in a fixed order and the first failing rule wins:
  1. source account present
  2. destination present (dropdown selection, else external account number)
  3. source != destination
  4. amount parses and is > 0
  5. external destination carries an IFSC routing code
"""

import math
from typing import Any, Optional

from bank_orchestrator.errors import (
    DepositRejected,
    DepositRejection,
    ParseError,
    TransferRejected,
    TransferRejection,
)
from bank_orchestrator.guards.parsing import clean_text, parse_number
from bank_orchestrator.schemas.ledger_models import DepositRequest, TransferRequest


def _positive_amount(raw: Any):
    try:
        amount = parse_number(raw, "amount")
    except ParseError:
        return None
    # sent as a JSON number: the float form must be finite and > 0
    wire = float(amount)
    if amount <= 0 or not math.isfinite(wire) or wire <= 0:
        return None
    return amount


class TransferRequestValidator:
    """
    Turns raw transfer form fields into a TransferRequest or raises TransferRejected.
    """

    def validate(
        self,
        from_account_number: Optional[str],
        to_account_number: Optional[str] = None,
        external_account_number: Optional[str] = None,
        amount: Any = None,
        ifsc_code: Optional[str] = None,
        description: Optional[str] = None,
    ) -> TransferRequest:
        source = clean_text(from_account_number)
        internal = clean_text(to_account_number)
        external = clean_text(external_account_number)
        ifsc = clean_text(ifsc_code)
        destination = internal or external

        if not source:
            raise TransferRejected(TransferRejection.MISSING_SOURCE)
        if not destination:
            raise TransferRejected(TransferRejection.MISSING_DESTINATION)
        if source == destination:
            raise TransferRejected(TransferRejection.SELF_TRANSFER)

        value = _positive_amount(amount)
        if value is None:
            raise TransferRejected(TransferRejection.INVALID_AMOUNT)

        if not internal and not ifsc:
            raise TransferRejected(TransferRejection.MISSING_ROUTING_CODE)

        return TransferRequest(
            from_account_number=source,
            to_account_number=destination,
            amount=value,
            description=clean_text(description) or None,
            ifsc_code=ifsc or None,
        )


def validate_deposit(
    account_number: Optional[str],
    amount: Any,
    description: Optional[str] = None,
) -> DepositRequest:
    account = clean_text(account_number)
    if not account:
        raise DepositRejected(DepositRejection.MISSING_ACCOUNT)

    value = _positive_amount(amount)
    if value is None:
        raise DepositRejected(DepositRejection.INVALID_AMOUNT)

    return DepositRequest(
        account_number=account,
        amount=value,
        description=clean_text(description) or None,
    )
