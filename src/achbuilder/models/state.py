"""Running totals and builder lifecycle state."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

ENTRY_HASH_MODULUS = 10**10  # Entry hash fields keep the rightmost 10 digits


class BuilderState(StrEnum):
    EMPTY = "EMPTY"
    HEADER_WRITTEN = "HEADER_WRITTEN"
    BATCH_OPEN = "BATCH_OPEN"
    BATCH_CLOSED = "BATCH_CLOSED"
    FINALIZED = "FINALIZED"


class EntryDirection(StrEnum):
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class FileState(BaseModel):
    """File-scope accumulator; lives as long as its builder."""

    batch_count: int = 0
    entry_count: int = 0
    entry_hash: int = 0
    total_debit: int = 0
    total_credit: int = 0
    line_count: int = 0

    @property
    def written_entry_hash(self) -> int:
        return self.entry_hash % ENTRY_HASH_MODULUS

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


class BatchState(BaseModel):
    """Per-batch accumulator, folded into ``FileState`` when the batch closes."""

    batch_number: int
    service_class_code: int
    entry_count: int = 0
    entry_hash: int = 0
    total_debit: int = 0
    total_credit: int = 0

    @property
    def written_entry_hash(self) -> int:
        return self.entry_hash % ENTRY_HASH_MODULUS

    def add(self, amount: int, direction: EntryDirection, hash_contribution: int) -> None:
        self.entry_count += 1
        self.entry_hash += hash_contribution
        if direction is EntryDirection.DEBIT:
            self.total_debit += amount
        else:
            self.total_credit += amount

    def fold_into(self, file_state: FileState) -> None:
        file_state.entry_count += self.entry_count
        file_state.entry_hash += self.entry_hash
        file_state.total_debit += self.total_debit
        file_state.total_credit += self.total_credit
