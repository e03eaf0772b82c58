"""
Change records produced by field mutations.

Each field kind emits one change shape when its value is mutated:
- list:  tuple of ListChange(type, index, values)
- text:  tuple of TextChange(type, index, text)
- map:   MapChange(previous, current), ABSENT marking a missing key
- value: ValueChange(previous, current)

A change record is enough, on its own, to replicate a mutation and to
compute its inverse. The transaction engine records these shapes, the
undo manager inverts them.

Invariants:
    - Change records are immutable once constructed
    - Sequence changes in one array apply left to right, each against the
      state left by the previous one
    - invert(c) applied after c restores the original state exactly
    - A map change lists every changed key on both sides

How to change safely:
    - The serialized shapes (to_dict) are a wire format; add keys, never
      rename or remove them
    - Keep the dispatch tables below exhaustive over FieldKind

Example:
    >>> change = (ListChange(ChangeType.INSERT, 2, (9,)),)
    >>> state = apply_changes([1, 2, 3], change)
    >>> apply_changes(state, invert_changes(change))
    [1, 2, 3]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Mapping, Sequence, Tuple, TypeVar, Union

from ..errors import ChangeError
from .types import ABSENT, Absent, ChangeType, FieldKind, JSONObject, is_json_value, json_equal

T = TypeVar("T")
C = TypeVar("C")


def _coerce_change_type(value: Union[ChangeType, str], kind: FieldKind) -> ChangeType:
    if isinstance(value, ChangeType):
        return value
    try:
        return ChangeType.from_str(value)
    except ValueError as e:
        raise ChangeError(f"Invalid {kind.value} change type: {value!r}", kind=kind.value) from e


def _check_index(index: Any, kind: FieldKind) -> None:
    if not isinstance(index, int) or isinstance(index, bool) or index < 0:
        raise ChangeError(
            f"{kind.value} change index must be a non-negative integer, got {index!r}",
            kind=kind.value,
        )


def _require_keys(data: Any, keys: Tuple[str, ...], kind: FieldKind) -> None:
    if not isinstance(data, dict):
        raise ChangeError(
            f"{kind.value} change must be an object, got {type(data).__name__}",
            kind=kind.value,
        )
    missing = [k for k in keys if k not in data]
    if missing:
        raise ChangeError(f"{kind.value} change missing keys: {missing}", kind=kind.value)


@dataclass(frozen=True)
class ListChange(Generic[T]):
    """A single insert or remove on a list field.

    Attributes:
        type: Whether values were inserted or removed
        index: Insertion position, or position of the first removed value
            before the removal
        values: The values that were inserted or removed

    Values may be dicts or lists, so list changes are not hashable.
    """

    type: ChangeType
    index: int
    values: Tuple[T, ...]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _coerce_change_type(self.type, FieldKind.LIST))
        _check_index(self.index, FieldKind.LIST)
        values = tuple(self.values)
        if not is_json_value(values):
            raise ChangeError("list change values must be JSON-serializable", kind=FieldKind.LIST.value)
        object.__setattr__(self, "values", values)

    def inverse(self) -> ListChange[T]:
        """Change that undoes this one."""
        return ListChange(self.type.opposite, self.index, self.values)

    def apply(self, state: Sequence[T]) -> list[T]:
        """Apply to a sequence, returning a new list.

        Raises:
            ChangeError: If the index is out of range or removed values do
                not match the state
        """
        items = list(state)
        if self.type is ChangeType.INSERT:
            if self.index > len(items):
                raise ChangeError(
                    f"Insert index {self.index} out of range for list of length {len(items)}",
                    kind=FieldKind.LIST.value,
                )
            items[self.index:self.index] = self.values
            return items

        end = self.index + len(self.values)
        if end > len(items) or not json_equal(items[self.index:end], self.values):
            raise ChangeError(
                f"Removed values do not match list at index {self.index}",
                kind=FieldKind.LIST.value,
            )
        del items[self.index:end]
        return items

    def to_dict(self) -> JSONObject:
        """Convert to dictionary representation."""
        return {
            "type": self.type.value,
            "index": self.index,
            "values": list(self.values),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ListChange[Any]:
        """Create from dictionary representation."""
        _require_keys(data, ("type", "index", "values"), FieldKind.LIST)
        if not isinstance(data["values"], (list, tuple)):
            raise ChangeError("list change values must be an array", kind=FieldKind.LIST.value)
        return cls(type=data["type"], index=data["index"], values=tuple(data["values"]))


@dataclass(frozen=True)
class TextChange:
    """A single insert or remove on a text field.

    Attributes:
        type: Whether text was inserted or removed
        index: Character offset of the modification
        text: The text that was inserted or removed
    """

    type: ChangeType
    index: int
    text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _coerce_change_type(self.type, FieldKind.TEXT))
        _check_index(self.index, FieldKind.TEXT)
        if not isinstance(self.text, str):
            raise ChangeError(
                f"text change text must be a string, got {type(self.text).__name__}",
                kind=FieldKind.TEXT.value,
            )

    def inverse(self) -> TextChange:
        """Change that undoes this one."""
        return TextChange(self.type.opposite, self.index, self.text)

    def apply(self, state: str) -> str:
        """Apply to a string, returning the new string."""
        if self.type is ChangeType.INSERT:
            if self.index > len(state):
                raise ChangeError(
                    f"Insert offset {self.index} out of range for text of length {len(state)}",
                    kind=FieldKind.TEXT.value,
                )
            return state[:self.index] + self.text + state[self.index:]

        end = self.index + len(self.text)
        if end > len(state) or state[self.index:end] != self.text:
            raise ChangeError(
                f"Removed text does not match text at offset {self.index}",
                kind=FieldKind.TEXT.value,
            )
        return state[:self.index] + state[end:]

    def to_dict(self) -> JSONObject:
        """Convert to dictionary representation."""
        return {"type": self.type.value, "index": self.index, "text": self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TextChange:
        """Create from dictionary representation."""
        _require_keys(data, ("type", "index", "text"), FieldKind.TEXT)
        return cls(type=data["type"], index=data["index"], text=data["text"])


@dataclass(frozen=True)
class MapChange(Generic[T]):
    """A change to a map field.

    Attributes:
        previous: Value of every changed key before the change, or ABSENT
            if the key did not exist
        current: Value of every changed key after the change, or ABSENT
            if the key no longer exists

    None is the JSON value null, never "absent". Keys found on only one
    side are absent on the other, so after construction both sides hold
    the same key set. Keys in neither side were not changed.

    Map changes hold dicts and are not hashable.
    """

    previous: Mapping[str, Union[T, Absent]]
    current: Mapping[str, Union[T, Absent]]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        previous = dict(self.previous)
        current = dict(self.current)
        for key in set(previous).union(current):
            if not isinstance(key, str):
                raise ChangeError(f"map change keys must be strings, got {key!r}", kind=FieldKind.MAP.value)
            previous.setdefault(key, ABSENT)
            current.setdefault(key, ABSENT)
            for value in (previous[key], current[key]):
                if value is not ABSENT and not is_json_value(value):
                    raise ChangeError(
                        f"map change value for '{key}' must be JSON-serializable, "
                        f"got {type(value).__name__}",
                        kind=FieldKind.MAP.value,
                    )
        object.__setattr__(self, "previous", previous)
        object.__setattr__(self, "current", current)

    @classmethod
    def between(cls, before: Mapping[str, T], after: Mapping[str, T]) -> MapChange[T]:
        """Compute the change that turns ``before`` into ``after``.

        Added keys are absent in ``previous``, removed keys are absent in
        ``current``.
        """
        previous: Dict[str, Union[T, Absent]] = {}
        current: Dict[str, Union[T, Absent]] = {}
        for key in set(before).union(after):
            old = before[key] if key in before else ABSENT
            new = after[key] if key in after else ABSENT
            if old is not ABSENT and new is not ABSENT and json_equal(old, new):
                continue
            previous[key] = old
            current[key] = new
        return cls(previous=previous, current=current)

    @property
    def keys(self) -> frozenset[str]:
        """Keys touched by this change."""
        return frozenset(self.current)

    def inverse(self) -> MapChange[T]:
        """Change that undoes this one."""
        return MapChange(previous=self.current, current=self.previous)

    def apply(self, state: Mapping[str, T]) -> dict[str, T]:
        """Apply to a mapping, returning a new dict.

        Raises:
            ChangeError: If the state does not hold the previous values
        """
        result = dict(state)
        for key, value in self.current.items():
            old = self.previous[key]
            if key in result:
                matches = old is not ABSENT and json_equal(result[key], old)
            else:
                matches = old is ABSENT
            if not matches:
                raise ChangeError(
                    f"Map key '{key}' does not hold the change's previous value",
                    kind=FieldKind.MAP.value,
                )
            if value is ABSENT:
                result.pop(key, None)
            else:
                result[key] = value
        return result

    def to_dict(self) -> JSONObject:
        """Convert to dictionary representation.

        Absent keys are left out of their side; null values are kept.
        """
        return {
            "previous": {k: v for k, v in self.previous.items() if v is not ABSENT},
            "current": {k: v for k, v in self.current.items() if v is not ABSENT},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MapChange[Any]:
        """Create from dictionary representation.

        A key missing from one side is read as absent on that side.
        """
        _require_keys(data, ("previous", "current"), FieldKind.MAP)
        if not isinstance(data["previous"], dict) or not isinstance(data["current"], dict):
            raise ChangeError("map change sides must be objects", kind=FieldKind.MAP.value)
        return cls(previous=data["previous"], current=data["current"])


@dataclass(frozen=True)
class ValueChange(Generic[T]):
    """A wholesale replacement of a value field.

    Attributes:
        previous: The previous value of the field
        current: The current value of the field

    Value changes may hold dicts or lists and are not hashable.
    """

    previous: T
    current: T

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        for name in ("previous", "current"):
            if not is_json_value(getattr(self, name)):
                raise ChangeError(
                    f"value change {name} must be JSON-serializable, "
                    f"got {type(getattr(self, name)).__name__}",
                    kind=FieldKind.VALUE.value,
                )

    def inverse(self) -> ValueChange[T]:
        """Change that undoes this one."""
        return ValueChange(previous=self.current, current=self.previous)

    def apply(self, state: T) -> T:
        """Apply to a value, returning the new value."""
        if not json_equal(state, self.previous):
            raise ChangeError(
                "Value does not match the change's previous value",
                kind=FieldKind.VALUE.value,
            )
        return self.current

    def to_dict(self) -> JSONObject:
        """Convert to dictionary representation."""
        return {"previous": self.previous, "current": self.current}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ValueChange[Any]:
        """Create from dictionary representation."""
        _require_keys(data, ("previous", "current"), FieldKind.VALUE)
        return cls(previous=data["previous"], current=data["current"])


ListChangeArray = Tuple[ListChange[T], ...]
TextChangeArray = Tuple[TextChange, ...]
AnyChange = Union[Tuple[ListChange[Any], ...], MapChange[Any], TextChangeArray, ValueChange[Any]]


def invert_changes(changes: Sequence[C]) -> Tuple[C, ...]:
    """Invert a batched change array.

    Each change is inverted and the order is reversed, so applying the
    result after ``changes`` restores the original state.
    """
    return tuple(change.inverse() for change in reversed(changes))


def apply_changes(state: Any, changes: Sequence[C]) -> Any:
    """Apply a batched change array left to right."""
    for change in changes:
        state = change.apply(state)
    return state


# Kinds whose change record is an array of atomic operations
_SEQUENCE_CHANGES: Dict[FieldKind, Any] = {
    FieldKind.LIST: ListChange,
    FieldKind.TEXT: TextChange,
}

# Kinds whose change record is a single before/after record
_RECORD_CHANGES: Dict[FieldKind, Any] = {
    FieldKind.MAP: MapChange,
    FieldKind.VALUE: ValueChange,
}


def _check_record(kind: FieldKind, change: Any) -> None:
    expected = _RECORD_CHANGES[kind]
    if not isinstance(change, expected):
        raise ChangeError(
            f"{kind.value} field expects {expected.__name__}, got {type(change).__name__}",
            kind=kind.value,
        )


def _check_sequence(kind: FieldKind, changes: Any) -> None:
    expected = _SEQUENCE_CHANGES[kind]
    if isinstance(changes, (str, bytes)) or not isinstance(changes, Sequence):
        raise ChangeError(f"{kind.value} field expects a change array", kind=kind.value)
    for change in changes:
        if not isinstance(change, expected):
            raise ChangeError(
                f"{kind.value} field expects {expected.__name__}, got {type(change).__name__}",
                kind=kind.value,
            )


def encode_change(kind: FieldKind, change: Any) -> Any:
    """Serialize a change record of the given kind to JSON data."""
    if kind in _SEQUENCE_CHANGES:
        _check_sequence(kind, change)
        return [c.to_dict() for c in change]
    _check_record(kind, change)
    return change.to_dict()


def decode_change(kind: FieldKind, data: Any) -> Any:
    """Deserialize JSON data into a change record of the given kind.

    Raises:
        ChangeError: If the data does not have the kind's change shape
    """
    if kind in _SEQUENCE_CHANGES:
        if not isinstance(data, list):
            raise ChangeError(f"{kind.value} change data must be an array", kind=kind.value)
        change_cls = _SEQUENCE_CHANGES[kind]
        return tuple(change_cls.from_dict(item) for item in data)
    return _RECORD_CHANGES[kind].from_dict(data)


def invert_change(kind: FieldKind, change: Any) -> Any:
    """Compute the inverse of a change record of the given kind."""
    if kind in _SEQUENCE_CHANGES:
        _check_sequence(kind, change)
        return invert_changes(change)
    _check_record(kind, change)
    return change.inverse()


def apply_change(kind: FieldKind, state: Any, change: Any) -> Any:
    """Apply a change record of the given kind to a value."""
    if kind in _SEQUENCE_CHANGES:
        _check_sequence(kind, change)
        return apply_changes(state, change)
    _check_record(kind, change)
    return change.apply(state)
