"""Field schema registry: the format descriptor for every named ACH field.

The registry is built once from ``_FIELD_TABLE`` at import time and exposed
read-only. Record definitions list the fields of each line type in wire order;
both are validated before the module finishes importing, so a bad table fails
at startup rather than while a file is being assembled.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from achbuilder.core.exceptions import SchemaError
from achbuilder.core.types import FieldKind, Justify, RecordDefinition, RecordType

RECORD_SIZE = 94


class FieldSpec(BaseModel):
    """Format descriptor for one fixed-width field."""

    model_config = {"frozen": True}

    name: str
    width: int = Field(gt=0)
    justify: Justify = Justify.LEFT
    kind: FieldKind = FieldKind.TEXT
    zero_fill: bool = False
    precision: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _precision_matches_kind(self) -> FieldSpec:
        if self.kind is FieldKind.FIXED_POINT and self.precision is None:
            raise ValueError(f"{self.name}: fixed-point field needs a precision")
        if self.kind is not FieldKind.FIXED_POINT and self.precision is not None:
            raise ValueError(f"{self.name}: precision only applies to fixed-point fields")
        return self

    @classmethod
    def text(cls, name: str, width: int, justify: Justify = Justify.LEFT) -> FieldSpec:
        return cls(name=name, width=width, justify=justify)

    @classmethod
    def number(cls, name: str, width: int) -> FieldSpec:
        """Right-justified, zero-filled integer field."""
        return cls(
            name=name, width=width, justify=Justify.RIGHT,
            kind=FieldKind.ZERO_FILLED_INTEGER, zero_fill=True,
        )


_R = Justify.RIGHT

_FIELD_TABLE: tuple[FieldSpec, ...] = (
    FieldSpec.text("record_type", 1),

    # --- File Header ---
    FieldSpec.number("priority_code", 2),
    FieldSpec.text("immediate_dest", 10, _R),
    FieldSpec.text("immediate_origin", 10, _R),
    FieldSpec.text("date", 6),
    FieldSpec.text("time", 4),
    FieldSpec.text("file_id_modifier", 1),
    FieldSpec.number("record_size", 3),
    FieldSpec.number("blocking_factor", 2),
    FieldSpec.text("format_code", 1),
    FieldSpec.text("immediate_dest_name", 23),
    FieldSpec.text("immediate_origin_name", 23),
    FieldSpec.text("reference_code", 8),

    # --- Batch Header ---
    FieldSpec.number("service_class_code", 3),
    FieldSpec.text("company_name", 16),
    FieldSpec.text("company_note", 20),
    FieldSpec.text("company_id", 10),
    FieldSpec.text("entry_class_code", 3),
    FieldSpec.text("entry_description", 10),
    FieldSpec.text("effective_date", 6),
    FieldSpec.text("settlement_date", 3),
    FieldSpec.text("origin_status_code", 1),
    FieldSpec.text("origin_dfi", 8),
    FieldSpec.number("batch_number", 7),

    # --- Entry Detail ---
    FieldSpec.number("transaction_code", 2),
    FieldSpec.number("routing_number", 9),
    FieldSpec.text("bank_account", 17),
    FieldSpec.number("amount", 10),
    FieldSpec.text("customer_account", 15),
    FieldSpec.text("customer_name", 22),
    FieldSpec.text("discretionary_data", 2),
    FieldSpec.text("addenda_flag", 1),
    FieldSpec.text("entry_trace", 15),

    # --- Batch / File Control ---
    FieldSpec.number("entry_count", 6),
    FieldSpec.number("entry_hash", 10),
    FieldSpec.number("total_debit", 12),
    FieldSpec.number("total_credit", 12),
    FieldSpec.text("authentication_code", 19),
    FieldSpec.text("reserved_6", 6),
    FieldSpec.number("batch_count", 6),
    FieldSpec.number("block_count", 6),
    FieldSpec.number("file_entry_count", 8),
    FieldSpec.text("reserved_39", 39),
)

FIELD_REGISTRY: Mapping[str, FieldSpec] = MappingProxyType({spec.name: spec for spec in _FIELD_TABLE})

RECORD_DEFINITIONS: Mapping[RecordType, RecordDefinition] = MappingProxyType({
    RecordType.FILE_HEADER: (
        "record_type", "priority_code", "immediate_dest", "immediate_origin",
        "date", "time", "file_id_modifier", "record_size", "blocking_factor",
        "format_code", "immediate_dest_name", "immediate_origin_name", "reference_code",
    ),
    RecordType.BATCH_HEADER: (
        "record_type", "service_class_code", "company_name", "company_note",
        "company_id", "entry_class_code", "entry_description", "date",
        "effective_date", "settlement_date", "origin_status_code", "origin_dfi",
        "batch_number",
    ),
    RecordType.ENTRY_DETAIL: (
        "record_type", "transaction_code", "routing_number", "bank_account",
        "amount", "customer_account", "customer_name", "discretionary_data",
        "addenda_flag", "entry_trace",
    ),
    RecordType.BATCH_CONTROL: (
        "record_type", "service_class_code", "entry_count", "entry_hash",
        "total_debit", "total_credit", "company_id", "authentication_code",
        "reserved_6", "origin_dfi", "batch_number",
    ),
    RecordType.FILE_CONTROL: (
        "record_type", "batch_count", "block_count", "file_entry_count",
        "entry_hash", "total_debit", "total_credit", "reserved_39",
    ),
})


def lookup(name: str) -> FieldSpec:
    """Return the spec for ``name`` or raise ``SchemaError``."""
    try:
        return FIELD_REGISTRY[name]
    except KeyError:
        raise SchemaError(f"Format for the field {name!r} is not defined") from None


def record_width(definition: RecordDefinition) -> int:
    return sum(lookup(name).width for name in definition)


def validate_definition(definition: RecordDefinition, size: int = RECORD_SIZE) -> None:
    """Check every field resolves and the widths add up to ``size``."""
    if len(set(definition)) != len(definition):
        raise SchemaError(f"Record definition repeats a field: {definition}")
    width = record_width(definition)
    if width != size:
        raise SchemaError(f"Record definition is {width} characters wide, expected {size}")


for _definition in RECORD_DEFINITIONS.values():
    validate_definition(_definition)
