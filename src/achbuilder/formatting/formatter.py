"""Render single field values into fixed-width text."""

from __future__ import annotations

import warnings
from decimal import Decimal, InvalidOperation
from typing import Any

from achbuilder.core.exceptions import FieldWarning, ValidationError
from achbuilder.core.types import FieldKind, Justify
from achbuilder.formatting.schema import FieldSpec, lookup
from achbuilder.logging_setup import get_logger

logger = get_logger(__name__)


def _render_integer(spec: FieldSpec, value: Any) -> str:
    if value == "":
        return ""
    if isinstance(value, bool):
        raise ValidationError(f"{spec.name} expects an integer, got {value!r}", field=spec.name)
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(f"{spec.name} expects an integer, got {value!r}", field=spec.name) from exc
    if isinstance(value, (float, Decimal)) and number != value:
        raise ValidationError(f"{spec.name} expects a whole number, got {value!r}", field=spec.name)
    return str(number)


def _render_fixed_point(spec: FieldSpec, value: Any) -> str:
    if value == "":
        return ""
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"{spec.name} expects a number, got {value!r}", field=spec.name) from exc
    if not number.is_finite():
        raise ValidationError(f"{spec.name} expects a finite number, got {value!r}", field=spec.name)
    return f"{number:.{spec.precision}f}"


def format_field(spec: FieldSpec, value: Any) -> str:
    """Render ``value`` into exactly ``spec.width`` characters.

    Text longer than the field keeps its first ``width`` characters. Numeric
    values are rendered first and then cut the same way, so an oversized
    number loses its low-order digits; callers range-check numbers up front.
    """
    if value is None:
        message = f"data for {spec.name} is not defined"
        logger.warning(message)
        warnings.warn(message, FieldWarning, stacklevel=3)
        value = ""

    if spec.kind is FieldKind.ZERO_FILLED_INTEGER:
        text = _render_integer(spec, value)
    elif spec.kind is FieldKind.FIXED_POINT:
        text = _render_fixed_point(spec, value)
    else:
        text = str(value)

    if len(text) > spec.width:
        text = text[: spec.width]

    pad = "0" if spec.zero_fill and spec.kind is not FieldKind.TEXT else " "
    if spec.justify is Justify.LEFT and pad == " ":
        return text.ljust(spec.width, pad)
    return text.rjust(spec.width, pad)


def format_named(name: str, value: Any) -> str:
    """Look ``name`` up in the registry and format ``value`` against it."""
    return format_field(lookup(name), value)
