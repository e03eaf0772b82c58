"""
Datastore field schema package.

Defines the closed set of field kinds a datastore table can hold, the
identity and undo metadata of each field, and the change records every
kind emits when mutated.

Example:
    >>> from datastore import Field, Schema
    >>> notes = Schema(id="notes", fields={"body": Field.Text()})
"""

from .config import DatastoreSettings, configure
from .errors import ChangeError, DatastoreError, FieldConfigError, SchemaError
from .identity import (
    SequentialIdentity,
    get_identity_generator,
    new_identity,
    set_identity_generator,
    use_identity_generator,
    uuid4_identity,
)
from .schema import (
    ABSENT,
    AnyField,
    BaseField,
    ChangeType,
    Field,
    FieldKind,
    ListChange,
    ListField,
    MapChange,
    MapField,
    Schema,
    TextChange,
    TextField,
    ValueChange,
    ValueField,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "DatastoreSettings",
    "configure",
    # Errors
    "DatastoreError",
    "FieldConfigError",
    "ChangeError",
    "SchemaError",
    # Identity
    "SequentialIdentity",
    "get_identity_generator",
    "new_identity",
    "set_identity_generator",
    "use_identity_generator",
    "uuid4_identity",
    # Schema
    "ABSENT",
    "AnyField",
    "BaseField",
    "ChangeType",
    "Field",
    "FieldKind",
    "ListChange",
    "ListField",
    "MapChange",
    "MapField",
    "Schema",
    "TextChange",
    "TextField",
    "ValueChange",
    "ValueField",
]
