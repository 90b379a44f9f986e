"""Exception classes for conversion errors."""

from typing import Any


class ConversionError(Exception):
    """Base exception for conversion failures.

    Carries the offending field name and raw value, when known, so that
    batch callers can report which part of a record was rejected.
    """

    def __init__(
        self, message: str, field: str | None = None, value: Any = None
    ):
        """Initialize with message and optional field context."""
        self.message = message
        self.field = field
        self.value = value
        if field is not None:
            message = f"{message} [field='{field}', value='{value}']"
        super().__init__(message)


class ValidationError(ConversionError, ValueError):
    """Raised when a required field or shape constraint is violated."""

    pass


class MissingFieldError(ValidationError):
    """Raised when a required field is absent or blank."""

    def __init__(self, field: str, value: Any = None):
        """Initialize with the missing field name."""
        super().__init__(f"Required field '{field}' is missing", field, value)


class UnsupportedTypeError(ValidationError):
    """Raised when an entry or document type has no mapping."""

    def __init__(self, type_name: Any):
        """Initialize with the unsupported type name."""
        super().__init__(f"Unsupported type: {type_name}", "type", type_name)


class GraphStructureError(ValidationError):
    """Raised when a statement graph cannot be read back as a document."""

    pass


class DateError(ConversionError, ValueError):
    """Raised on calendar or date grammar violations."""

    pass


class IdentifierError(ConversionError, ValueError):
    """Raised on identifier checksum or format violations."""

    pass
