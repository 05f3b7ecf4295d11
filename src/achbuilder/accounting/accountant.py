"""Batch and file accounting: entry counts, entry hash and debit/credit totals.

A batch is checked in full by ``validate_batch`` before anything is posted, so
a rejected record leaves every accumulator exactly as it was.
"""

from __future__ import annotations

from collections.abc import Sequence

from achbuilder.core.exceptions import ValidationError
from achbuilder.core.types import CREDIT_CODES, DEBIT_CODES, ServiceClassCode
from achbuilder.logging_setup import get_logger
from achbuilder.models.records import DetailRecord
from achbuilder.models.state import BatchState, EntryDirection, FileState

logger = get_logger(__name__)

MAX_AMOUNT = 10**10 - 1  # Detail amount field: 10 digits
MAX_TOTAL = 10**12 - 1  # Control total fields: 12 digits
MAX_BATCH_ENTRIES = 10**6 - 1
MAX_FILE_ENTRIES = 10**7 - 1  # Default trace numbers carry a 7-digit sequence
MAX_BATCHES = 10**6 - 1  # File control batch count: 6 digits
MAX_BLOCKS = 10**6 - 1  # File control block count: 6 digits


def classify(transaction_code: int) -> EntryDirection:
    """Return whether ``transaction_code`` credits or debits the receiver."""
    if transaction_code in CREDIT_CODES:
        return EntryDirection.CREDIT
    if transaction_code in DEBIT_CODES:
        return EntryDirection.DEBIT
    raise ValidationError(f"unsupported transaction code {transaction_code!r}", field="transaction_code")


def check_service_class(service_class_code: int, direction: EntryDirection) -> None:
    """Reject entries whose direction the batch's service class code forbids."""
    if service_class_code == ServiceClassCode.CREDITS_ONLY and direction is EntryDirection.DEBIT:
        raise ValidationError(
            f"debit entry not allowed in a credits-only batch (service class {service_class_code})",
            field="transaction_code",
        )
    if service_class_code == ServiceClassCode.DEBITS_ONLY and direction is EntryDirection.CREDIT:
        raise ValidationError(
            f"credit entry not allowed in a debits-only batch (service class {service_class_code})",
            field="transaction_code",
        )


class Accountant:
    """Mutable running totals for one file build."""

    def __init__(self) -> None:
        self.file = FileState()
        self.batch: BatchState | None = None

    def validate_batch(
        self, records: Sequence[DetailRecord], service_class_code: int,
    ) -> list[EntryDirection]:
        """Classify every record, raising on the first one that cannot be posted."""
        if not records:
            raise ValidationError("a batch needs at least one detail record")
        if self.file.batch_count + 1 > MAX_BATCHES:
            raise ValidationError(f"a file cannot hold more than {MAX_BATCHES} batches")
        if len(records) > MAX_BATCH_ENTRIES:
            raise ValidationError(f"a batch cannot hold more than {MAX_BATCH_ENTRIES} entries")
        if self.file.entry_count + len(records) > MAX_FILE_ENTRIES:
            raise ValidationError(f"a file cannot hold more than {MAX_FILE_ENTRIES} entries")

        directions: list[EntryDirection] = []
        debit, credit = 0, 0
        for index, record in enumerate(records):
            if record.amount < 0:
                raise ValidationError("amount cannot be negative", field="amount", index=index)
            if record.amount > MAX_AMOUNT:
                raise ValidationError(f"amount {record.amount} exceeds 10 digits", field="amount", index=index)
            try:
                direction = classify(record.transaction_code)
                check_service_class(service_class_code, direction)
            except ValidationError as exc:
                raise ValidationError(str(exc), field=exc.field, index=index) from exc
            if direction is EntryDirection.DEBIT:
                debit += record.amount
            else:
                credit += record.amount
            directions.append(direction)

        if self.file.total_debit + debit > MAX_TOTAL or self.file.total_credit + credit > MAX_TOTAL:
            raise ValidationError("debit/credit totals would exceed 12 digits")
        return directions

    def open_batch(self, service_class_code: int) -> BatchState:
        self.file.batch_count += 1
        self.batch = BatchState(batch_number=self.file.batch_count, service_class_code=service_class_code)
        return self.batch

    def post(self, record: DetailRecord, direction: EntryDirection) -> None:
        if self.batch is None:
            raise RuntimeError("post() called with no open batch")
        self.batch.add(record.amount, direction, record.hash_contribution)

    def close_batch(self) -> BatchState:
        """Fold the open batch into the file totals and return it."""
        if self.batch is None:
            raise RuntimeError("close_batch() called with no open batch")
        batch, self.batch = self.batch, None
        batch.fold_into(self.file)
        logger.debug(
            "Closed batch %d: entries=%d hash=%d debit=%d credit=%d",
            batch.batch_number, batch.entry_count, batch.written_entry_hash,
            batch.total_debit, batch.total_credit,
        )
        return batch

    def count_lines(self, n: int = 1) -> None:
        self.file.line_count += n
