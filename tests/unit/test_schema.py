"""
Unit tests for schema definitions.

Tests cover:
- Schema creation and validation
- Identity uniqueness within a schema
- Lookup by name and identity
- Serialization and fingerprinting
"""

import pytest

from datastore.errors import SchemaError
from datastore.schema import Field, FieldKind, ListField, Schema, TextField


@pytest.fixture
def tasks():
    """A small task schema."""
    return Schema(
        id="tasks",
        fields={
            "title": Field.Text(description="Task title"),
            "done": Field.Boolean(),
            "tags": Field.List(),
            "meta": Field.Map(undoable=False),
        },
    )


class TestSchema:
    """Tests for Schema."""

    def test_create_schema(self, tasks):
        """Schema can be created."""
        assert tasks.id == "tasks"
        assert len(tasks.fields) == 4
        assert tasks.get_field("done").kind is FieldKind.VALUE

    def test_empty_id_raises(self):
        """Schema id cannot be empty."""
        with pytest.raises(SchemaError, match="id cannot be empty"):
            Schema(id="")

    def test_empty_field_name_raises(self):
        """Field names cannot be empty."""
        with pytest.raises(SchemaError, match="name cannot be empty"):
            Schema(id="s", fields={"": Field.Text()})

    def test_non_field_raises(self):
        """Only fields can be registered."""
        with pytest.raises(SchemaError, match="not a field"):
            Schema(id="s", fields={"x": "text"})

    def test_duplicate_identity_raises(self):
        """Two fields cannot share an identity."""
        shared = Field.List()
        with pytest.raises(SchemaError, match="share identity") as exc_info:
            Schema(id="s", fields={"a": shared, "b": shared})
        assert exc_info.value.schema_id == "s"

    def test_duplicate_explicit_identity_raises(self):
        """Identity collisions across kinds are also rejected."""
        with pytest.raises(SchemaError):
            Schema(id="s", fields={"a": ListField(identity="x"), "b": TextField(identity="x")})

    def test_fields_read_only(self, tasks):
        """Schema fields cannot be modified after construction."""
        with pytest.raises(TypeError):
            tasks.fields["extra"] = Field.Text()

    def test_lookup_by_identity(self, tasks):
        """Fields can be found by identity."""
        tags = tasks.get_field("tags")
        assert tasks.field_by_identity(tags.identity) is tags
        assert tasks.name_of(tags.identity) == "tags"
        assert tasks.field_by_identity("missing") is None
        assert tasks.name_of("missing") is None

    def test_not_hashable(self, tasks):
        """Schemas cannot be hashed; the fingerprint serves as a key."""
        with pytest.raises(TypeError):
            hash(tasks)
        assert {tasks.fingerprint: tasks}[tasks.fingerprint] is tasks

    def test_undoable_fields(self, tasks):
        """Fields with undoable=False are excluded from undo history."""
        assert set(tasks.undoable_fields()) == {"title", "done", "tags"}


class TestSchemaSerialization:
    """Tests for schema serialization."""

    def test_to_dict(self, tasks):
        """Schema serializes its fields sorted by name."""
        d = tasks.to_dict()
        assert d["id"] == "tasks"
        assert list(d["fields"]) == ["done", "meta", "tags", "title"]
        assert d["fields"]["done"]["value"] is False

    def test_roundtrip_keeps_identities(self, tasks):
        """A deserialized schema correlates with the original by identity."""
        restored = Schema.from_dict(tasks.to_dict())
        for name, f in tasks.fields.items():
            assert restored.get_field(name) == f
            assert restored.get_field(name).kind is f.kind
        assert restored.fingerprint == tasks.fingerprint

    def test_from_dict_missing_id(self):
        """Serialized schemas must carry an id."""
        with pytest.raises(SchemaError, match="missing 'id'"):
            Schema.from_dict({"fields": {}})

    def test_fingerprint_format(self, tasks):
        """Fingerprint is a sha256 digest."""
        assert tasks.fingerprint.startswith("sha256:")
        assert len(tasks.fingerprint) == len("sha256:") + 64

    def test_fingerprint_changes_with_fields(self, tasks):
        """Adding a field changes the fingerprint."""
        extended = Schema(id="tasks", fields={**tasks.fields, "notes": Field.Text()})
        assert extended.fingerprint != tasks.fingerprint

    def test_to_json(self, tasks):
        """Schema serializes to JSON."""
        assert '"id": "tasks"' in tasks.to_json()
