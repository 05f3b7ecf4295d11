"""Assemble fixed-width lines from record definitions and field values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from achbuilder.core.types import Line, RecordDefinition
from achbuilder.formatting.formatter import format_field
from achbuilder.formatting.schema import lookup


def assemble(definition: RecordDefinition, values: Mapping[str, Any]) -> Line:
    """Format each field of ``definition`` in order and join them without separators.

    Fields absent from ``values`` are rendered as padding with a ``FieldWarning``.
    """
    specs = [lookup(name) for name in definition]
    return "".join(format_field(spec, values.get(spec.name)) for spec in specs)
