from decimal import Decimal

import pytest

from bank_orchestrator.errors import DepositRejected, DepositRejection, TransferRejected, TransferRejection
from bank_orchestrator.guards.transfer_validator import TransferRequestValidator, validate_deposit


@pytest.fixture
def validator():
    return TransferRequestValidator()


def _reason(validator, **fields):
    with pytest.raises(TransferRejected) as exc:
        validator.validate(**fields)
    return exc.value.reason


def test_missing_source(validator):
    assert _reason(validator, from_account_number="", to_account_number="A2", amount="10") is TransferRejection.MISSING_SOURCE


def test_missing_destination_regardless_of_amount(validator):
    assert _reason(
        validator, from_account_number="A1", to_account_number="", external_account_number="", amount="50"
    ) is TransferRejection.MISSING_DESTINATION
    assert _reason(
        validator, from_account_number="A1", to_account_number=None, amount="-3"
    ) is TransferRejection.MISSING_DESTINATION


def test_self_transfer_even_when_otherwise_valid(validator):
    assert _reason(validator, from_account_number="A1", to_account_number="A1", amount="10") is TransferRejection.SELF_TRANSFER
    assert _reason(
        validator, from_account_number="A1", external_account_number="A1", ifsc_code="IFSC1", amount="10"
    ) is TransferRejection.SELF_TRANSFER


@pytest.mark.parametrize("amount", ["", "abc", "0", "-5", "NaN", None, "1e-400", "1e400", "1,5", "1,000"])
def test_invalid_amount(validator, amount):
    assert _reason(validator, from_account_number="A1", to_account_number="A2", amount=amount) is TransferRejection.INVALID_AMOUNT


def test_external_destination_needs_routing_code(validator):
    assert _reason(
        validator, from_account_number="A1", external_account_number="EXT1", ifsc_code="", amount="10"
    ) is TransferRejection.MISSING_ROUTING_CODE


def test_invalid_amount_reported_before_missing_routing_code(validator):
    assert _reason(
        validator, from_account_number="A1", external_account_number="EXT1", amount="zero"
    ) is TransferRejection.INVALID_AMOUNT


def test_first_rule_wins_when_everything_is_wrong(validator):
    assert _reason(validator, from_account_number=" ", amount="bad") is TransferRejection.MISSING_SOURCE


def test_internal_destination_takes_precedence_over_external(validator):
    request = validator.validate(
        from_account_number="A1", to_account_number="A2", external_account_number="EXT1", amount="25.50"
    )
    assert request.to_account_number == "A2"
    assert request.amount == Decimal("25.50")
    assert request.ifsc_code is None


def test_external_transfer_request(validator):
    request = validator.validate(
        from_account_number=" A1 ",
        external_account_number="EXT1",
        ifsc_code="HDFC0000123",
        amount="1000",
        description="  Invoice 7 ",
    )
    assert request.from_account_number == "A1"
    assert request.to_account_number == "EXT1"
    assert request.ifsc_code == "HDFC0000123"
    assert request.description == "Invoice 7"


def test_rejection_carries_user_message(validator):
    with pytest.raises(TransferRejected) as exc:
        validator.validate(from_account_number="A1", to_account_number="A1", amount="1")
    assert str(exc.value) == "Cannot transfer to the same account"


def test_validate_deposit():
    request = validate_deposit("SB1", "200", "")
    assert request.amount == Decimal("200")
    assert request.description is None

    with pytest.raises(DepositRejected) as exc:
        validate_deposit("", "200")
    assert exc.value.reason is DepositRejection.MISSING_ACCOUNT

    with pytest.raises(DepositRejected) as exc:
        validate_deposit("SB1", "-1")
    assert exc.value.reason is DepositRejection.INVALID_AMOUNT


@pytest.mark.parametrize("amount", ["1e-400", "1e400", "1,5"])
def test_deposit_amount_must_survive_json_encoding(amount):
    with pytest.raises(DepositRejected) as exc:
        validate_deposit("SB1", amount)
    assert exc.value.reason is DepositRejection.INVALID_AMOUNT


def test_decimal_comma_is_not_read_as_thousands(validator):
    # "1,5" must never become a transfer of 15
    with pytest.raises(TransferRejected) as exc:
        validator.validate(from_account_number="A1", to_account_number="A2", amount="1,5")
    assert exc.value.reason is TransferRejection.INVALID_AMOUNT
