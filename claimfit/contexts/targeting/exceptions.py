"""Custom exceptions for the targeting context."""

from typing import Any, Optional


class InvalidRecordStructureError(ValueError):
    """
    Exception raised when an upstream claim or role record has the wrong shape.

    Attributes:
        message: Error description
        field_name: Name of the offending field, when one can be identified
        record_id: Identifier of the offending record, when known
        value: The rejected value
    """

    record_kind = "record"

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        record_id: Optional[str] = None,
        value: Any = None,
    ):
        self.message = message
        self.field_name = field_name
        self.record_id = record_id
        self.value = value

        parts = [message]

        if record_id is not None:
            parts.append(f"{self.record_kind.capitalize()}: {record_id}")

        if field_name is not None:
            parts.append(f"Field: {field_name}")

        if value is not None:
            text = repr(value)
            parts.append(f"Got: {text[:200] + '...' if len(text) > 200 else text}")

        super().__init__("\n".join(parts))


class InvalidClaimStructureError(InvalidRecordStructureError):
    """Raised when a claim record is missing required fields or has malformed values."""

    record_kind = "claim"


class InvalidRoleStructureError(InvalidRecordStructureError):
    """Raised when a role intent record or one of its requirements is malformed."""

    record_kind = "role"
