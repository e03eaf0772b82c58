"""
Core type definitions shared by the field schema layer.

This module defines:
- FieldKind: The closed set of field kinds (list, map, text, value)
- ChangeType: Whether a sequence change inserted or removed content
- JSONValue: Type alias for the values a field may hold
- is_json_value: Runtime check for JSON-serializable values

Invariants:
    - The kind set is closed; consumers dispatch on FieldKind, never on
      the Python class of a field
    - Kind string values are part of the serialized format and never change
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence, Union

JSONPrimitive = Union[str, int, float, bool, None]
JSONValue = Union[JSONPrimitive, Sequence[Any], Mapping[str, Any]]
JSONObject = Dict[str, Any]
JSONArray = List[Any]


class FieldKind(Enum):
    """Supported field kinds.

    The kind selects how a store holds the field's value and how it
    interprets the field's change records.
    """

    LIST = "list"
    MAP = "map"
    TEXT = "text"
    VALUE = "value"

    @classmethod
    def from_str(cls, value: str) -> FieldKind:
        """Convert string representation to FieldKind.

        Args:
            value: String name of the field kind

        Returns:
            Corresponding FieldKind enum value

        Raises:
            ValueError: If value is not a valid field kind
        """
        for kind in cls:
            if kind.value == value:
                return kind
        valid = [k.value for k in cls]
        raise ValueError(f"Invalid field kind '{value}'. Valid kinds: {valid}")


class ChangeType(Enum):
    """Operation type of a list or text change."""

    INSERT = "insert"
    REMOVE = "remove"

    @property
    def opposite(self) -> ChangeType:
        """The operation that undoes this one."""
        return ChangeType.REMOVE if self is ChangeType.INSERT else ChangeType.INSERT

    @classmethod
    def from_str(cls, value: str) -> ChangeType:
        """Convert string to ChangeType."""
        for change_type in cls:
            if change_type.value == value:
                return change_type
        raise ValueError(f"Invalid change type: {value}")


class Absent:
    """Marker for a map key that does not exist.

    Distinct from None, which is the JSON value null.
    """

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = Absent()


def is_json_value(value: Any) -> bool:
    """Check that a value can be serialized to JSON without loss.

    Accepts None, bool, int, finite float, str, lists/tuples of JSON values
    and dicts with string keys and JSON values.
    """
    if value is None or isinstance(value, (str, bool, int)):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, (list, tuple)):
        return all(is_json_value(v) for v in value)
    if isinstance(value, dict):
        return all(isinstance(k, str) and is_json_value(v) for k, v in value.items())
    return False


def json_equal(a: Any, b: Any) -> bool:
    """Compare two JSON values without Python's bool/int coercion.

    ``True`` and ``1`` (or ``False`` and ``0``) are different JSON values,
    so booleans only equal booleans. Lists and tuples compare element-wise,
    dicts by key set and value.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if isinstance(a, (list, tuple)) or isinstance(b, (list, tuple)):
        if not (isinstance(a, (list, tuple)) and isinstance(b, (list, tuple))):
            return False
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) or isinstance(b, dict):
        if not (isinstance(a, dict) and isinstance(b, dict)):
            return False
        return a.keys() == b.keys() and all(json_equal(a[k], b[k]) for k in a)
    return a == b
