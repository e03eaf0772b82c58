"""
Convenience constructors for schema fields.

``Field`` is a namespace, not a field type: each function builds one of
the concrete field kinds with sensible defaults and forwards the common
options (undoable, description) unchanged.

Example:
    >>> from datastore.schema import Field
    >>> schema_fields = {
    ...     "done": Field.Boolean(),
    ...     "title": Field.Text(description="Task title"),
    ...     "tags": Field.List(),
    ... }
"""

from __future__ import annotations

from typing import Any

from .fields import ListField, MapField, TextField, ValueField


class Field:
    """Namespace of field factory functions."""

    def __init__(self) -> None:
        raise TypeError("Field is a namespace of factory functions and cannot be instantiated")

    @staticmethod
    def Boolean(**options: Any) -> ValueField[bool]:
        """Create a boolean value field.

        Args:
            **options: Field options; ``value`` defaults to False

        Returns:
            New boolean value field
        """
        return ValueField.from_options({"value": False, **options})

    @staticmethod
    def Number(**options: Any) -> ValueField[float]:
        """Create a number value field; ``value`` defaults to 0."""
        return ValueField.from_options({"value": 0, **options})

    @staticmethod
    def String(**options: Any) -> ValueField[str]:
        """Create a string value field; ``value`` defaults to ''."""
        return ValueField.from_options({"value": "", **options})

    @staticmethod
    def List(**options: Any) -> ListField[Any]:
        """Create a list field."""
        return ListField.from_options(options)

    @staticmethod
    def Map(**options: Any) -> MapField[Any]:
        """Create a map field."""
        return MapField.from_options(options)

    @staticmethod
    def Text(**options: Any) -> TextField:
        """Create a text field."""
        return TextField.from_options(options)

    @staticmethod
    def Value(**options: Any) -> ValueField[Any]:
        """Create a value field.

        Args:
            **options: Field options; ``value`` is required

        Raises:
            FieldConfigError: If ``value`` is omitted
        """
        return ValueField.from_options(options)
