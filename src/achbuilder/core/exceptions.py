"""achbuilder exception hierarchy."""

from __future__ import annotations


class ACHBuilderError(Exception):
    """Base exception for all achbuilder errors."""


class ConfigurationError(ACHBuilderError):
    """Builder configuration is missing an identifier or holds an invalid value."""


class SchemaError(ACHBuilderError):
    """A record definition references a field the registry does not define."""


class ValidationError(ACHBuilderError):
    """Caller-supplied data cannot be encoded into a valid file."""

    def __init__(self, message: str, *, field: str | None = None, index: int | None = None) -> None:
        self.field = field
        self.index = index
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class BuilderStateError(ACHBuilderError):
    """An operation was called out of order for the current builder state."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"{operation}() is not allowed in state {state}")


class FieldWarning(UserWarning):
    """A field value was absent and has been rendered as padding."""
