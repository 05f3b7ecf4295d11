"""Type aliases and code tables used across achbuilder."""

from __future__ import annotations

from enum import IntEnum, StrEnum

RecordDefinition = tuple[str, ...]
Line = str


class Justify(StrEnum):
    LEFT = "L"
    RIGHT = "R"


class FieldKind(StrEnum):
    TEXT = "TEXT"
    ZERO_FILLED_INTEGER = "ZERO_FILLED_INTEGER"
    FIXED_POINT = "FIXED_POINT"


class RecordType(IntEnum):
    FILE_HEADER = 1
    BATCH_HEADER = 5
    ENTRY_DETAIL = 6
    BATCH_CONTROL = 8
    FILE_CONTROL = 9


class TransactionCode(IntEnum):
    CHECKING_CREDIT = 22
    CHECKING_DEBIT = 27
    SAVINGS_CREDIT = 32
    SAVINGS_DEBIT = 37


class ServiceClassCode(IntEnum):
    MIXED = 200
    CREDITS_ONLY = 220
    DEBITS_ONLY = 225


CREDIT_CODES = frozenset({TransactionCode.CHECKING_CREDIT, TransactionCode.SAVINGS_CREDIT})
DEBIT_CODES = frozenset({TransactionCode.CHECKING_DEBIT, TransactionCode.SAVINGS_DEBIT})
