"""
Transfer Submitter
Validates raw transfer/deposit input and hands well-formed requests to the ledger.

Balances and the activity feed are not refreshed here; callers re-run the
aggregators after a successful submission.
"""

from typing import Any, Optional

from bank_orchestrator.clients.ledger_client import LedgerClient
from bank_orchestrator.errors import LedgerError, ValidationRejected
from bank_orchestrator.guards.transfer_validator import TransferRequestValidator, validate_deposit
from bank_orchestrator.logging_config import get_logger

logger = get_logger("bank_orchestrator.transfer")

# Shown when the ledger confirms but returns no identifier
MISSING_REFERENCE = "N/A"


class TransferSubmitter:
    def __init__(self, client: LedgerClient, validator: Optional[TransferRequestValidator] = None):
        self.client = client
        self.validator = validator or TransferRequestValidator()

    async def submit(
        self,
        from_account_number: Optional[str],
        to_account_number: Optional[str] = None,
        external_account_number: Optional[str] = None,
        amount: Any = None,
        ifsc_code: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """
        Validate and submit a transfer. Returns the ledger's transaction identifier.

        Raises TransferRejected (nothing sent) or the LedgerError raised by the client.
        """
        try:
            request = self.validator.validate(
                from_account_number,
                to_account_number=to_account_number,
                external_account_number=external_account_number,
                amount=amount,
                ifsc_code=ifsc_code,
                description=description,
            )
        except ValidationRejected as e:
            logger.info("Transfer rejected locally: %s", e.reason.value)
            raise

        logger.info(
            "Submitting transfer from=%s to=%s amount=%s external=%s",
            request.from_account_number,
            request.to_account_number,
            request.amount,
            bool(request.ifsc_code),
        )
        try:
            transaction = await self.client.post_transfer(request)
        except LedgerError as e:
            logger.error("Transfer from=%s failed: %s", request.from_account_number, e)
            raise

        reference = transaction.reference or MISSING_REFERENCE
        logger.info("Transfer accepted reference=%s", reference)
        return reference

    async def submit_deposit(
        self,
        account_number: Optional[str],
        amount: Any,
        description: Optional[str] = None,
    ) -> str:
        try:
            request = validate_deposit(account_number, amount, description)
        except ValidationRejected as e:
            logger.info("Deposit rejected locally: %s", e.reason.value)
            raise

        logger.info("Submitting deposit account=%s amount=%s", request.account_number, request.amount)
        try:
            transaction = await self.client.post_deposit(
                request.account_number, request.amount, request.description
            )
        except LedgerError as e:
            logger.error("Deposit to account=%s failed: %s", request.account_number, e)
            raise
        return transaction.reference or MISSING_REFERENCE
