"""
The four concrete field kinds.

- ListField:  mutable sequence of JSON values, changes are ListChange arrays
- MapField:   mutable str -> JSON mapping, changes are MapChange records
- TextField:  mutable string, changes are TextChange arrays
- ValueField: single JSON value replaced wholesale, changes are ValueChange

Invariants:
    - The set of kinds is closed; AnyField is the union of all of them
    - kind is a per-class constant and never changes for an instance
    - ValueField requires an explicit JSON-serializable initial value

Example:
    >>> status = ValueField(value="todo", description="Task status")
    >>> restored = field_from_dict(status.to_dict())
    >>> restored == status
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Type, TypeVar, Union

from ..errors import FieldConfigError
from .base import BaseField
from .changes import ListChangeArray, MapChange, TextChangeArray, ValueChange
from .types import FieldKind, is_json_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Unset:
    """Marker for an option that was not supplied."""

    def __repr__(self) -> str:
        return "<unset>"


UNSET: Any = _Unset()


@dataclass(frozen=True, eq=False)
class ListField(BaseField[Sequence[T], ListChangeArray[T]]):
    """A field which represents a mutable sequence of values.

    Initial contents are the concern of the list value type, not of the
    field, so there are no list-specific options.
    """

    @property
    def kind(self) -> FieldKind:
        return FieldKind.LIST


@dataclass(frozen=True, eq=False)
class MapField(BaseField[Mapping[str, T], MapChange[T]]):
    """A field which represents a mutable map of values keyed by string."""

    @property
    def kind(self) -> FieldKind:
        return FieldKind.MAP


@dataclass(frozen=True, eq=False)
class TextField(BaseField[str, TextChangeArray]):
    """A field which represents a mutable text value.

    Text is kept distinct from a list of characters so a store can use
    text-specific storage and merge strategies.
    """

    @property
    def kind(self) -> FieldKind:
        return FieldKind.TEXT


@dataclass(frozen=True, eq=False)
class ValueField(BaseField[T, ValueChange[T]]):
    """A field which represents a readonly JSON value.

    Attributes:
        value: The initial value for the field (required)
    """

    value: Any = UNSET

    def __post_init__(self) -> None:
        """Validate the initial value."""
        if self.value is UNSET:
            raise FieldConfigError("ValueField requires an initial 'value'", option="value")
        if not is_json_value(self.value):
            raise FieldConfigError(
                f"ValueField value must be JSON-serializable, got {type(self.value).__name__}",
                option="value",
            )
        super().__post_init__()

    @property
    def kind(self) -> FieldKind:
        return FieldKind.VALUE

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["value"] = self.value
        return result


AnyField = Union[ListField[Any], MapField[Any], TextField, ValueField[Any]]

_FIELD_TYPES: Dict[FieldKind, Type[BaseField[Any, Any]]] = {
    FieldKind.LIST: ListField,
    FieldKind.MAP: MapField,
    FieldKind.TEXT: TextField,
    FieldKind.VALUE: ValueField,
}


def field_type(kind: Union[str, FieldKind]) -> Type[BaseField[Any, Any]]:
    """Get the field class for a kind.

    Raises:
        ValueError: If kind is not a valid field kind
    """
    if not isinstance(kind, FieldKind):
        kind = FieldKind.from_str(kind)
    return _FIELD_TYPES[kind]


def field_from_dict(data: Dict[str, Any]) -> AnyField:
    """Create a field from its dictionary representation.

    The serialized identity is kept, so the restored field is equal to
    the one that was serialized.

    Raises:
        FieldConfigError: If ``kind`` or ``identity`` is missing
        ValueError: If ``kind`` is not a valid field kind
    """
    for key in ("kind", "identity"):
        if key not in data:
            raise FieldConfigError(f"Serialized field is missing '{key}'", option=key)
    cls = field_type(data["kind"])
    options = {k: v for k, v in data.items() if k != "kind"}
    logger.debug(f"Restoring {cls.__name__} (identity={data['identity']})")
    return cls.from_options(options)  # type: ignore[return-value]
