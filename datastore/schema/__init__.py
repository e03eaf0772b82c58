"""
Schema module for the datastore.

This module provides the field type system, including:
- Field kinds (ListField, MapField, TextField, ValueField)
- The Field factory namespace
- Change records for every kind, with inversion and application
- Schema definitions with identity checks

Invariants:
    - The field kind set is closed (list, map, text, value)
    - Fields are immutable; identity, kind and options never change
    - Field identities are unique within a schema
    - Every change record can be inverted from its own contents

How to change safely:
    - Add options to fields with backward-compatible defaults
    - Only add keys to serialized change shapes, never rename them
    - Dispatch on FieldKind, never on the Python class of a field
"""

from .base import BaseField
from .changes import (
    AnyChange,
    ListChange,
    ListChangeArray,
    MapChange,
    TextChange,
    TextChangeArray,
    ValueChange,
    apply_change,
    apply_changes,
    decode_change,
    encode_change,
    invert_change,
    invert_changes,
)
from .factory import Field
from .fields import (
    AnyField,
    ListField,
    MapField,
    TextField,
    ValueField,
    field_from_dict,
    field_type,
)
from .registry import Schema
from .types import ABSENT, Absent, ChangeType, FieldKind, JSONValue, is_json_value, json_equal

__all__ = [
    # Types
    "FieldKind",
    "ChangeType",
    "JSONValue",
    "is_json_value",
    "json_equal",
    "ABSENT",
    "Absent",
    # Fields
    "BaseField",
    "ListField",
    "MapField",
    "TextField",
    "ValueField",
    "AnyField",
    "Field",
    "field_from_dict",
    "field_type",
    # Changes
    "ListChange",
    "ListChangeArray",
    "MapChange",
    "TextChange",
    "TextChangeArray",
    "ValueChange",
    "AnyChange",
    "apply_change",
    "apply_changes",
    "decode_change",
    "encode_change",
    "invert_change",
    "invert_changes",
    # Schema
    "Schema",
]
