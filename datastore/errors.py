"""
Error types for the datastore field layer.

This module defines all exception types raised while defining fields
and handling their change records:
- DatastoreError: Base exception
- FieldConfigError: Missing or invalid field configuration
- ChangeError: Malformed change record or change that cannot be applied
- SchemaError: Schema-level violations (duplicate identities, bad names)

Invariants:
    - All errors inherit from DatastoreError
    - Errors are raised synchronously, at schema-definition time for
      configuration problems
    - Error messages name the offending option, kind or field
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DatastoreError(Exception):
    """Base exception for all datastore errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "DATASTORE_ERROR"
        self.details = details or {}


class FieldConfigError(DatastoreError):
    """Field configuration is invalid.

    Raised when:
    - A required option is missing (``value`` for value fields)
    - An option has an unusable value (non-JSON initial value)
    """

    def __init__(
        self,
        message: str,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="CONFIG_ERROR",
            details={"option": option},
        )
        self.option = option


class ChangeError(DatastoreError):
    """A change record is malformed or does not fit the state it is applied to.

    Raised when:
    - A serialized change is missing keys or has an unknown type
    - An index is out of range for the state
    - A removal does not match the values present at its index
    """

    def __init__(
        self,
        message: str,
        kind: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="CHANGE_ERROR",
            details={"kind": kind},
        )
        self.kind = kind


class SchemaError(DatastoreError):
    """Schema-related error.

    Raised when:
    - Two fields in one schema share an identity
    - A schema or field name is empty
    """

    def __init__(
        self,
        message: str,
        schema_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="SCHEMA_ERROR",
            details={"schema_id": schema_id},
        )
        self.schema_id = schema_id
