"""Tests for the DetailRecord input model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from achbuilder.models.records import DetailRecord
from tests.fakes import credit


def test_defaults():
    record = credit()
    assert record.entry_trace is None
    assert record.discretionary_data == "S"
    assert record.addenda_flag == 0
    assert record.customer_account == "0000006124"


def test_hash_contribution_drops_check_digit():
    assert credit(routing_number="010010101").hash_contribution == 1001010


def test_legacy_customer_acct_key():
    record = DetailRecord.model_validate({
        "customer_name": "JOHN SMITH", "customer_acct": "123", "amount": 1,
        "routing_number": "010010101", "bank_account": "1", "transaction_code": 22,
    })
    assert record.customer_account == "123"


def test_integer_routing_number_is_zero_padded():
    assert credit(routing_number=10010101).routing_number == "010010101"


@pytest.mark.parametrize("routing", ["01001010", "0100101011", "01001010X"])
def test_routing_number_must_be_nine_digits(routing):
    with pytest.raises(PydanticValidationError):
        credit(routing_number=routing)


def test_records_are_immutable():
    record = credit()
    with pytest.raises(PydanticValidationError):
        record.amount = 1  # type: ignore[misc]
