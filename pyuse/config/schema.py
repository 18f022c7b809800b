"""
Configuration Schema.

Typed field declarations for the ``[use]`` table of the config file, and
validation of loaded values against them.
"""

from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Raised for an invalid field declaration."""

    pass


class ValidationError(SchemaError):
    """Raised when a configured value fails validation."""

    pass


@dataclass
class ConfigField:
    """
    A configuration field with type and constraints.

    Attributes:
        type_: Expected type of the value
        default: Value used when the field is not configured
        description: Human-readable description, written as a comment
        min_length: Minimum string length (optional)
        placeholders: Template placeholders the value may use (optional)
    """

    type_: type
    default: Any
    description: str = ""
    min_length: int | None = None
    placeholders: tuple[str, ...] | None = None

    def __post_init__(self):
        if not isinstance(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )
        if (self.min_length is not None or self.placeholders is not None) and self.type_ is not str:
            raise SchemaError(
                f"String constraints only supported for str. Got {self.type_.__name__}"
            )

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field.

        Args:
            value: The value to validate

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(value, self.type_):
            raise ValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )

        if self.min_length is not None and len(value) < self.min_length:
            raise ValidationError(
                f"String length {len(value)} is less than minimum {self.min_length}"
            )

        if self.placeholders is not None:
            try:
                value.format(**{name: "" for name in self.placeholders})
            except (KeyError, IndexError, ValueError) as e:
                raise ValidationError(
                    f"Invalid template {value!r}; allowed placeholders: "
                    f"{', '.join(self.placeholders)}"
                ) from e


def validate_config(config: dict[str, Any], schema: dict[str, ConfigField]) -> None:
    """
    Validate a partial configuration against a schema.

    Missing fields fall back to their defaults, so only present fields are
    checked.

    Raises:
        ValidationError: For unknown fields or invalid values
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
    """Default value of every field in a schema."""
    return {field_name: field.default for field_name, field in schema.items()}
