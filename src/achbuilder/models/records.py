"""Typed record structs: caller input and one model per ACH line type.

Each ``*Fields`` model declares exactly the fields of its record definition, so
a struct that drifts from the wire layout fails when the class is created.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from achbuilder.core.exceptions import SchemaError
from achbuilder.core.types import Line, RecordType
from achbuilder.formatting.assembler import assemble
from achbuilder.formatting.schema import RECORD_DEFINITIONS


class DetailRecord(BaseModel):
    """One caller-supplied transaction."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    # Missing names and accounts are rendered blank with a FieldWarning
    customer_name: Optional[str] = None
    customer_account: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("customer_account", "customer_acct"),
    )
    amount: int  # Cents
    routing_number: str = Field(pattern=r"^\d{9}$")
    bank_account: Optional[str] = None
    transaction_code: int
    entry_trace: Optional[str] = Field(default=None, max_length=15)
    discretionary_data: str = Field(default="S", max_length=2)
    addenda_flag: int = Field(default=0, ge=0, le=1)

    @field_validator("routing_number", mode="before")
    @classmethod
    def _routing_as_digits(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return f"{value:09d}"
        return value

    @property
    def hash_contribution(self) -> int:
        """Routing number without its check digit, as summed into the entry hash."""
        return int(self.routing_number[:8])


class RecordFields(BaseModel):
    """Base for line structs; subclasses bind a ``RECORD_TYPE``."""

    RECORD_TYPE: ClassVar[RecordType]

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        definition = RECORD_DEFINITIONS[cls.RECORD_TYPE]
        declared = set(cls.model_fields)
        if declared != set(definition):
            missing = sorted(set(definition) - declared)
            extra = sorted(declared - set(definition))
            raise SchemaError(f"{cls.__name__} does not match its record definition: missing={missing} extra={extra}")

    def to_line(self) -> Line:
        return assemble(RECORD_DEFINITIONS[self.RECORD_TYPE], self.model_dump())


class FileHeaderFields(RecordFields):
    RECORD_TYPE: ClassVar[RecordType] = RecordType.FILE_HEADER

    record_type: int = int(RecordType.FILE_HEADER)
    priority_code: int = 1
    immediate_dest: str
    immediate_origin: str
    date: str  # YYMMDD
    time: str  # HHMM
    file_id_modifier: str
    record_size: int
    blocking_factor: int
    format_code: int
    immediate_dest_name: str
    immediate_origin_name: str
    reference_code: str = ""


class BatchHeaderFields(RecordFields):
    RECORD_TYPE: ClassVar[RecordType] = RecordType.BATCH_HEADER

    record_type: int = int(RecordType.BATCH_HEADER)
    service_class_code: int
    company_name: str
    company_note: str = ""
    company_id: str
    entry_class_code: str
    entry_description: str
    date: str  # Company descriptive date
    effective_date: str
    settlement_date: str = ""  # Filled in by the ACH operator
    origin_status_code: str
    origin_dfi: str
    batch_number: int


class DetailFields(RecordFields):
    RECORD_TYPE: ClassVar[RecordType] = RecordType.ENTRY_DETAIL

    record_type: int = int(RecordType.ENTRY_DETAIL)
    transaction_code: int
    routing_number: str
    bank_account: Optional[str]
    amount: int
    customer_account: Optional[str]
    customer_name: Optional[str]
    discretionary_data: str
    addenda_flag: int
    entry_trace: str

    @classmethod
    def from_detail(cls, record: DetailRecord, entry_trace: str) -> DetailFields:
        return cls(
            transaction_code=record.transaction_code,
            routing_number=record.routing_number,
            bank_account=record.bank_account,
            amount=record.amount,
            customer_account=record.customer_account,
            customer_name=record.customer_name,
            discretionary_data=record.discretionary_data,
            addenda_flag=record.addenda_flag,
            entry_trace=record.entry_trace or entry_trace,
        )


class BatchControlFields(RecordFields):
    RECORD_TYPE: ClassVar[RecordType] = RecordType.BATCH_CONTROL

    record_type: int = int(RecordType.BATCH_CONTROL)
    service_class_code: int
    entry_count: int
    entry_hash: int
    total_debit: int
    total_credit: int
    company_id: str
    authentication_code: str = ""
    reserved_6: str = ""
    origin_dfi: str
    batch_number: int


class FileControlFields(RecordFields):
    RECORD_TYPE: ClassVar[RecordType] = RecordType.FILE_CONTROL

    record_type: int = int(RecordType.FILE_CONTROL)
    batch_count: int
    block_count: int
    file_entry_count: int
    entry_hash: int
    total_debit: int
    total_credit: int
    reserved_39: str = ""
