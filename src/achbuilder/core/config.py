"""Builder configuration: per-file identifiers and process-wide defaults.

``FileConfig`` holds the identifiers written into header and control records
and is frozen once built. ``BuilderSettings`` supplies environment-driven
defaults (``ACHBUILDER_*``) for the optional identifiers.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings

from achbuilder.core.exceptions import ConfigurationError
from achbuilder.core.types import ServiceClassCode

DATE_FORMAT = "%y%m%d"


def effective_date_in(days: int, today: date | None = None) -> str:
    """Return ``today + days`` formatted as ``YYMMDD``."""
    base = today or date.today()
    return (base + timedelta(days=days)).strftime(DATE_FORMAT)


class BuilderSettings(BaseSettings):
    """Process defaults for optional file identifiers."""

    model_config = {"env_prefix": "ACHBUILDER_"}

    log_level: str = "INFO"
    service_class_code: int = int(ServiceClassCode.MIXED)
    entry_class_code: str = "PPD"
    file_id_modifier: str = "A"
    origin_status_code: str = "1"
    effective_date_offset_days: int = 1


class FileConfig(BaseModel):
    """Identifiers for one ACH file build. Immutable after construction."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    # --- Required Identifiers ---
    company_id: str = Field(min_length=1, max_length=10)
    company_name: str = Field(min_length=1)
    entry_description: str = Field(min_length=1)
    destination: str = Field(min_length=1, max_length=10)  # Immediate destination routing number
    destination_name: str = Field(min_length=1)
    origination: str = Field(min_length=1, max_length=10)
    origination_name: str = Field(min_length=1)

    # --- Optional Identifiers ---
    company_note: str = ""
    originating_dfi: Optional[str] = Field(default=None, max_length=8)  # Defaults to destination[:8]
    origin_status_code: str = Field(default="1", min_length=1, max_length=1)
    entry_class_code: str = Field(default="PPD", min_length=3, max_length=3)
    service_class_code: int = int(ServiceClassCode.MIXED)
    file_id_modifier: str = Field(default="A", pattern=r"^[A-Z0-9]$")
    effective_date: str = Field(default_factory=lambda: effective_date_in(1))
    reference_code: str = ""

    # --- Fixed Format Parameters ---
    record_size: Literal[94] = 94
    blocking_factor: Literal[10] = 10
    format_code: Literal[1] = 1

    @field_validator("service_class_code")
    @classmethod
    def _known_service_class(cls, value: int) -> int:
        if value not in {int(code) for code in ServiceClassCode}:
            allowed = ", ".join(str(int(code)) for code in ServiceClassCode)
            raise ValueError(f"service class code {value} is not one of {allowed}")
        return value

    @field_validator("effective_date")
    @classmethod
    def _yymmdd(cls, value: str) -> str:
        if len(value) != 6 or not value.isdigit():
            raise ValueError(f"effective date {value!r} must be YYMMDD")
        try:
            datetime.strptime(value, DATE_FORMAT)
        except ValueError as exc:
            raise ValueError(f"effective date {value!r} is not a calendar date") from exc
        return value

    @property
    def origin_dfi(self) -> str:
        """Originating DFI identification written to batch records."""
        return self.originating_dfi or self.destination[:8]

    @classmethod
    def from_settings(cls, settings: BuilderSettings | None = None, **identifiers: Any) -> FileConfig:
        """Build a config whose optional identifiers default from ``settings``."""
        if settings is None:
            settings = BuilderSettings()
        values: dict[str, Any] = {
            "service_class_code": settings.service_class_code,
            "entry_class_code": settings.entry_class_code,
            "file_id_modifier": settings.file_id_modifier,
            "origin_status_code": settings.origin_status_code,
            "effective_date": effective_date_in(settings.effective_date_offset_days),
        }
        values.update({k: v for k, v in identifiers.items() if v is not None})
        return load_file_config(values)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def load_file_config(data: FileConfig | Mapping[str, Any]) -> FileConfig:
    """Validate ``data`` into a ``FileConfig``, raising ``ConfigurationError`` on failure."""
    if isinstance(data, FileConfig):
        return data
    try:
        return FileConfig.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Invalid file configuration: {_describe(exc)}") from exc
