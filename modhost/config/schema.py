"""
Configuration Schema System.

This module provides schema declaration and validation for the host
configuration file.

Key features:
- Type-safe field definitions with choices and list item types
- Validation of values against schema
- Default configuration generation
"""

import copy
from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    pass


class ValidationError(SchemaError):
    """Raised when value validation fails."""

    pass


@dataclass
class ConfigField:
    """
    Represents a configuration field with type and constraints.

    Attributes:
        type_: The expected type of the field value
        default: Default value for the field
        description: Human-readable description
        choices: List of allowed values (optional)
        item_type: Expected type of list items (lists only)
    """

    type_: type
    default: Any
    description: str = ""
    choices: list[Any] | None = None
    item_type: type | None = None

    def __post_init__(self):
        """Validate field definition."""
        if not isinstance(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )

        if self.item_type is not None and self.type_ is not list:
            raise SchemaError(
                f"item_type only supported for list. Got {self.type_.__name__}"
            )

        if self.choices is not None:
            if not isinstance(self.choices, list):
                raise SchemaError("choices must be a list")
            if self.default not in self.choices:
                raise SchemaError(
                    f"Default value {self.default!r} not in choices {self.choices}"
                )

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field's constraints.

        Args:
            value: The value to validate

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(value, self.type_):
            raise ValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )

        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Value {value!r} not in allowed choices {self.choices}"
            )

        if self.item_type is not None:
            for item in value:
                if not isinstance(item, self.item_type):
                    raise ValidationError(
                        f"Expected list of {self.item_type.__name__}, "
                        f"got item {item!r}"
                    )


def validate_config(config: dict[str, Any], schema: dict[str, ConfigField]) -> None:
    """
    Validate a configuration dictionary against a schema.

    Missing fields are not an error here; callers fill them from defaults.

    Args:
        config: The configuration dictionary to validate
        schema: The schema dictionary (field_name -> ConfigField)

    Raises:
        ValidationError: If validation fails
    """
    for key in config:
        if key not in schema:
            raise ValidationError(f"Unknown configuration field: {key}")

    for field_name, value in config.items():
        try:
            schema[field_name].validate(value)
        except ValidationError as e:
            raise ValidationError(f"Field '{field_name}': {e}") from e


def generate_default_config(schema: dict[str, ConfigField]) -> dict[str, Any]:
    """
    Generate a default configuration from a schema.

    Defaults are deep-copied so mutable defaults are never shared.

    Args:
        schema: The schema dictionary (field_name -> ConfigField)

    Returns:
        A dictionary with default values for all fields
    """
    return {
        field_name: copy.deepcopy(field.default)
        for field_name, field in schema.items()
    }
