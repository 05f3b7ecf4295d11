"""ACHFileBuilder — assembles a complete ACH file one record group at a time.

Usage::

    builder = ACHFileBuilder(config)
    builder.make_file_header_record()
    builder.make_batch(records)
    builder.make_file_control_record()
    text = builder.to_string()

Calls must follow ``EMPTY -> HEADER_WRITTEN -> (BATCH_OPEN -> BATCH_CLOSED)* ->
FINALIZED``; anything else raises ``BuilderStateError`` and leaves the output
untouched.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from achbuilder.accounting.accountant import MAX_BLOCKS, Accountant
from achbuilder.core.config import FileConfig, load_file_config
from achbuilder.core.exceptions import BuilderStateError, ValidationError
from achbuilder.core.types import Line
from achbuilder.logging_setup import get_logger
from achbuilder.models.records import (
    BatchControlFields,
    BatchHeaderFields,
    DetailFields,
    DetailRecord,
    FileControlFields,
    FileHeaderFields,
    RecordFields,
)
from achbuilder.models.state import BuilderState, FileState

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def coerce_records(records: Any) -> list[DetailRecord]:
    """Turn a list of ``DetailRecord`` objects or mappings into validated records."""
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise ValidationError(f"expected a list of detail records, got {type(records).__name__}")
    out: list[DetailRecord] = []
    for index, record in enumerate(records):
        if isinstance(record, DetailRecord):
            out.append(record)
            continue
        if not isinstance(record, Mapping):
            raise ValidationError(f"expected a detail record, got {type(record).__name__}", index=index)
        try:
            out.append(DetailRecord.model_validate(dict(record)))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or None
            raise ValidationError(f"{field}: {first['msg']}", field=field, index=index) from exc
    return out


class ACHFileBuilder:
    """Stateful builder for one ACH file. Not shared between threads."""

    def __init__(self, config: FileConfig | Mapping[str, Any], *, clock: Clock | None = None) -> None:
        self._config = load_file_config(config)
        self._clock = clock or datetime.now
        self._accountant = Accountant()
        self._lines: list[Line] = []
        self._state = BuilderState.EMPTY

    # ---- accessors ----

    @property
    def config(self) -> FileConfig:
        return self._config

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def file_state(self) -> FileState:
        """Snapshot of the file-scope totals."""
        return self._accountant.file.model_copy()

    # ---- internals ----

    def _require(self, operation: str, *allowed: BuilderState) -> None:
        if self._state not in allowed:
            raise BuilderStateError(operation, self._state.value)

    def _emit(self, fields: RecordFields) -> Line:
        line = fields.to_line()
        self._lines.append(line)
        self._accountant.count_lines()
        return line

    def _next_trace(self) -> str:
        batch = self._accountant.batch
        sequence = self._accountant.file.entry_count + (batch.entry_count if batch else 0) + 1
        dfi = self._config.origin_dfi[:8].rjust(8, "0")
        return f"{dfi}{sequence:07d}"

    # ---- operations ----

    def make_file_header_record(self) -> Line:
        """Emit the file header (record type 1). Only valid on an empty builder."""
        self._require("make_file_header_record", BuilderState.EMPTY)
        cfg = self._config
        now = self._clock()
        line = self._emit(FileHeaderFields(
            immediate_dest=cfg.destination,
            immediate_origin=cfg.origination,
            date=now.strftime("%y%m%d"),
            time=now.strftime("%H%M"),
            file_id_modifier=cfg.file_id_modifier,
            record_size=cfg.record_size,
            blocking_factor=cfg.blocking_factor,
            format_code=cfg.format_code,
            immediate_dest_name=cfg.destination_name,
            immediate_origin_name=cfg.origination_name,
            reference_code=cfg.reference_code,
        ))
        self._state = BuilderState.HEADER_WRITTEN
        logger.debug("File header written for destination %s", cfg.destination)
        return line

    def make_batch(
        self,
        records: Iterable[DetailRecord | Mapping[str, Any]],
        *,
        entry_class_code: str | None = None,
        entry_description: str | None = None,
        service_class_code: int | None = None,
        company_note: str | None = None,
    ) -> int:
        """Emit a batch header, one detail line per record and a batch control.

        Keyword overrides apply to this batch only. The whole batch is checked
        before anything is written; on error no line is appended and no total
        changes. Returns the 1-based batch number.
        """
        self._require("make_batch", BuilderState.HEADER_WRITTEN, BuilderState.BATCH_CLOSED)
        entries = coerce_records(records)
        overrides = {
            "entry_class_code": entry_class_code,
            "entry_description": entry_description,
            "service_class_code": service_class_code,
            "company_note": company_note,
        }
        cfg = self._config
        if any(v is not None for v in overrides.values()):
            cfg = load_file_config({
                **cfg.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            })

        directions = self._accountant.validate_batch(entries, cfg.service_class_code)

        snapshot = self._accountant.file.model_copy()
        line_mark = len(self._lines)
        previous_state = self._state
        self._state = BuilderState.BATCH_OPEN
        try:
            batch = self._accountant.open_batch(cfg.service_class_code)
            self._emit(BatchHeaderFields(
                service_class_code=cfg.service_class_code,
                company_name=cfg.company_name,
                company_note=cfg.company_note,
                company_id=cfg.company_id,
                entry_class_code=cfg.entry_class_code,
                entry_description=cfg.entry_description,
                date=self._clock().strftime("%y%m%d"),
                effective_date=cfg.effective_date,
                origin_status_code=cfg.origin_status_code,
                origin_dfi=cfg.origin_dfi,
                batch_number=batch.batch_number,
            ))
            for record, direction in zip(entries, directions):
                trace = self._next_trace()
                self._accountant.post(record, direction)
                self._emit(DetailFields.from_detail(record, trace))
            closed = self._accountant.close_batch()
            self._emit(BatchControlFields(
                service_class_code=closed.service_class_code,
                entry_count=closed.entry_count,
                entry_hash=closed.written_entry_hash,
                total_debit=closed.total_debit,
                total_credit=closed.total_credit,
                company_id=cfg.company_id,
                origin_dfi=cfg.origin_dfi,
                batch_number=closed.batch_number,
            ))
        except Exception:
            del self._lines[line_mark:]
            self._accountant.file = snapshot
            self._accountant.batch = None
            self._state = previous_state
            raise

        self._state = BuilderState.BATCH_CLOSED
        return closed.batch_number

    def make_file_control_record(self) -> Line:
        """Emit the file control (record type 9) once the totals balance."""
        self._require("make_file_control_record", BuilderState.BATCH_CLOSED)
        totals = self._accountant.file
        if not totals.is_balanced:
            raise ValidationError(
                f"file is unbalanced: total debit {totals.total_debit} != total credit {totals.total_credit}"
            )
        block_count = math.ceil((totals.line_count + 1) / self._config.blocking_factor)
        if block_count > MAX_BLOCKS:
            raise ValidationError(f"block count {block_count} exceeds {MAX_BLOCKS}")
        line = self._emit(FileControlFields(
            batch_count=totals.batch_count,
            block_count=block_count,
            file_entry_count=totals.entry_count,
            entry_hash=totals.written_entry_hash,
            total_debit=totals.total_debit,
            total_credit=totals.total_credit,
        ))
        self._state = BuilderState.FINALIZED
        logger.info(
            "ACH file finalized: batches=%d entries=%d lines=%d blocks=%d",
            totals.batch_count, totals.entry_count, totals.line_count, block_count,
        )
        return line

    def to_string(self) -> str:
        """Return every line emitted so far, newline-joined."""
        self._require(
            "to_string",
            BuilderState.HEADER_WRITTEN, BuilderState.BATCH_CLOSED, BuilderState.FINALIZED,
        )
        return "\n".join(self._lines)
