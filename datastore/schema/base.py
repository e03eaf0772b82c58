"""
Base class for datastore schema fields.

A field is the immutable description of one schema slot: its kind, its
identity, and whether its changes are undoable. Concrete kinds live in
fields.py; this module holds the contract they share.

Invariants:
    - BaseField cannot be instantiated directly (abstract ``kind``)
    - identity is assigned once, at construction, by the identity service
    - undoable, description and identity are read-only after construction
    - Two fields are equal if and only if their identities are equal

How to change safely:
    - Do not add mutable state to fields; stores cache dispatch decisions
      keyed by identity for the lifetime of a schema
    - New options must have defaults so existing schemas still construct

Example:
    >>> from datastore.schema import ListField
    >>> tags = ListField(description="Tags attached to the row")
    >>> tags.kind
    <FieldKind.LIST: 'list'>
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from dataclasses import field as dataclass_field
from typing import Any, Dict, Generic, Mapping, TypeVar

from ..errors import FieldConfigError
from ..identity import new_identity
from . import changes
from .types import FieldKind

logger = logging.getLogger(__name__)

ValueT = TypeVar("ValueT")
ChangeT = TypeVar("ChangeT")


@dataclass(frozen=True, eq=False)
class BaseField(ABC, Generic[ValueT, ChangeT]):
    """Common contract of every field kind.

    The ``ValueT``/``ChangeT`` type parameters tie a field to the value it
    holds and the change record it emits. They exist for static checkers
    only and have no runtime representation.

    Attributes:
        undoable: Whether changes to the field are kept in undo history
        description: Human-readable description (no runtime effect)
        identity: Globally unique token for the field

    Notes:
        The store does not support user-defined fields.
    """

    undoable: bool = True
    description: str = ""
    identity: str = dataclass_field(default_factory=new_identity)

    def __post_init__(self) -> None:
        """Validate field options."""
        if not isinstance(self.undoable, bool):
            raise FieldConfigError(
                f"undoable must be a bool, got {type(self.undoable).__name__}",
                option="undoable",
            )
        if not isinstance(self.description, str):
            raise FieldConfigError(
                f"description must be a string, got {type(self.description).__name__}",
                option="description",
            )
        if not isinstance(self.identity, str) or not self.identity:
            raise FieldConfigError("identity must be a non-empty string", option="identity")
        logger.debug(f"Created {self.kind.value} field (identity={self.identity})")

    @property
    @abstractmethod
    def kind(self) -> FieldKind:
        """The discriminated kind of the field."""

    @classmethod
    def from_options(cls, options: Mapping[str, Any]):
        """Create a field from a configuration mapping.

        Only the options the field class recognizes are read; other keys
        are ignored so callers can carry extra configuration alongside.

        Args:
            options: Configuration mapping

        Returns:
            New field instance
        """
        recognized = {f.name for f in fields(cls)}
        ignored = sorted(set(options) - recognized)
        if ignored:
            logger.debug(f"Ignoring unrecognized {cls.__name__} options: {ignored}")
        return cls(**{k: v for k, v in options.items() if k in recognized})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseField):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {
            "kind": self.kind.value,
            "identity": self.identity,
            "undoable": self.undoable,
        }
        if self.description:
            result["description"] = self.description
        return result

    def encode_change(self, change: ChangeT) -> Any:
        """Serialize a change record emitted by this field."""
        return changes.encode_change(self.kind, change)

    def decode_change(self, data: Any) -> ChangeT:
        """Deserialize a change record for this field."""
        return changes.decode_change(self.kind, data)

    def invert_change(self, change: ChangeT) -> ChangeT:
        """Compute the change that undoes ``change``."""
        return changes.invert_change(self.kind, change)

    def apply_change(self, state: Any, change: ChangeT) -> Any:
        """Apply a change record to a value of this field."""
        return changes.apply_change(self.kind, state, change)
