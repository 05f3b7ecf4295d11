"""Shared test doubles — fixed clock, file identifiers and detail records."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from achbuilder.models.records import DetailRecord

FIXED_NOW = datetime(2026, 10, 19, 9, 30)

FILE_IDENTIFIERS: dict[str, Any] = {
    "company_id": "11-111111",
    "company_name": "MY COMPANY",
    "entry_description": "TV-TELCOM",
    "destination": "123123123",
    "destination_name": "COMMERCE BANK",
    "origination": "12312311",
    "origination_name": "MYCOMPANY",
    "effective_date": "261020",
}


def fixed_clock() -> datetime:
    return FIXED_NOW


def credit(amount: int = 2501, routing_number: str = "010010101", **overrides: Any) -> DetailRecord:
    values: dict[str, Any] = {
        "customer_name": "JOHN SMITH",
        "customer_account": "0000006124",
        "amount": amount,
        "routing_number": routing_number,
        "bank_account": "103030030",
        "transaction_code": 32,
    }
    values.update(overrides)
    return DetailRecord(**values)


def debit(amount: int = 2501, routing_number: str = "010010401", **overrides: Any) -> DetailRecord:
    values: dict[str, Any] = {
        "customer_name": "JANE SMITH",
        "customer_account": "0000004124",
        "amount": amount,
        "routing_number": routing_number,
        "bank_account": "440030030",
        "transaction_code": 27,
    }
    values.update(overrides)
    return DetailRecord(**values)


def balanced_pair() -> list[DetailRecord]:
    """A savings credit and a checking debit of 2501 cents each."""
    return [credit(), debit()]
