"""Build fixed-width ACH (NACHA) batch files."""

from __future__ import annotations

from achbuilder.builder import ACHFileBuilder
from achbuilder.core.config import BuilderSettings, FileConfig, load_file_config
from achbuilder.core.exceptions import (
    ACHBuilderError,
    BuilderStateError,
    ConfigurationError,
    FieldWarning,
    SchemaError,
    ValidationError,
)
from achbuilder.core.types import ServiceClassCode, TransactionCode
from achbuilder.logging_setup import configure_logging
from achbuilder.models.records import DetailRecord

__all__ = [
    "ACHBuilderError",
    "ACHFileBuilder",
    "BuilderSettings",
    "BuilderStateError",
    "ConfigurationError",
    "DetailRecord",
    "FieldWarning",
    "FileConfig",
    "SchemaError",
    "ServiceClassCode",
    "TransactionCode",
    "ValidationError",
    "configure_logging",
    "load_file_config",
]

__version__ = "0.1.0"
