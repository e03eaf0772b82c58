"""
Schema definition for a datastore table.

A Schema maps field names to field instances. It is the unit a store is
created from and the unit serialized alongside patches, so that a
receiving process can correlate fields by identity.

Invariants:
    - Schema id and field names are non-empty
    - Every field identity is unique within one schema
    - Schemas are immutable once constructed
    - The fingerprint changes whenever a field, option or identity changes

Example:
    >>> from datastore.schema import Field, Schema
    >>> tasks = Schema(
    ...     id="tasks",
    ...     fields={
    ...         "title": Field.Text(),
    ...         "done": Field.Boolean(),
    ...     },
    ... )
    >>> tasks.get_field("done").kind
    <FieldKind.VALUE: 'value'>
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..errors import SchemaError
from .base import BaseField
from .fields import AnyField, field_from_dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Schema:
    """A named collection of fields.

    Attributes:
        id: Schema identifier
        fields: Mapping of field name to field

    Schemas hold a mapping and are not hashable; use the fingerprint
    as a key instead.
    """

    id: str
    fields: Mapping[str, AnyField] = dataclass_field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        """Validate schema definition."""
        if not self.id:
            raise SchemaError("Schema id cannot be empty")

        seen: Dict[str, str] = {}
        for name, f in self.fields.items():
            if not name:
                raise SchemaError(f"Field name cannot be empty in schema '{self.id}'", schema_id=self.id)
            if not isinstance(f, BaseField):
                raise SchemaError(
                    f"Field '{name}' in schema '{self.id}' is not a field: {type(f).__name__}",
                    schema_id=self.id,
                )
            if f.identity in seen:
                raise SchemaError(
                    f"Fields '{seen[f.identity]}' and '{name}' in schema '{self.id}' "
                    f"share identity {f.identity}",
                    schema_id=self.id,
                )
            seen[f.identity] = name

        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        logger.debug(f"Defined schema '{self.id}' with {len(self.fields)} fields")

    def get_field(self, name: str) -> Optional[AnyField]:
        """Get field by name."""
        return self.fields.get(name)

    def field_by_identity(self, identity: str) -> Optional[AnyField]:
        """Get field by identity."""
        for f in self.fields.values():
            if f.identity == identity:
                return f
        return None

    def name_of(self, identity: str) -> Optional[str]:
        """Get the name a field is registered under, by identity."""
        for name, f in self.fields.items():
            if f.identity == identity:
                return name
        return None

    def undoable_fields(self) -> Dict[str, AnyField]:
        """Fields whose changes are kept in undo history."""
        return {name: f for name, f in self.fields.items() if f.undoable}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation, fields sorted by name."""
        return {
            "id": self.id,
            "fields": {name: self.fields[name].to_dict() for name in sorted(self.fields)},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Schema:
        """Create from dictionary representation, keeping field identities."""
        if "id" not in data:
            raise SchemaError("Serialized schema is missing 'id'")
        return cls(
            id=data["id"],
            fields={name: field_from_dict(fd) for name, fd in data.get("fields", {}).items()},
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Convert schema to JSON string.

        Args:
            indent: JSON indentation (None for compact)
        """
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @property
    def fingerprint(self) -> str:
        """SHA-256 fingerprint of the canonical schema representation.

        Returns:
            Fingerprint string in format 'sha256:<hash>'
        """
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(',', ':'))
        hash_bytes = hashlib.sha256(canonical.encode('utf-8')).hexdigest()
        return f"sha256:{hash_bytes}"
