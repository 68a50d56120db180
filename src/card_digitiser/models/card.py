"""Pydantic model for a digitised business card."""

from typing import Any, get_origin

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_AVAILABLE = "N/A"
"""Placeholder for a scalar field that could not be determined."""


class Card(BaseModel):
    """Contact fields extracted from one business card image."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(default="", description="Best-guess person name")
    phones: list[str] = Field(
        default_factory=list, description="Phone numbers in extraction order"
    )
    email: str = Field(default="", description="Primary email address")
    other: list[str] = Field(
        default_factory=list,
        description="Remaining lines: company, title, address, website",
    )

    @field_validator("name", "email", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, list):
            return str(value[0]) if value else ""
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("phones", "other", mode="before")
    @classmethod
    def _coerce_sequence(cls, value: Any) -> Any:
        # Models sometimes answer a single string where an array was asked for
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, list):
            return [str(item) for item in value if item is not None]
        return value

    @classmethod
    def sequence_fields(cls) -> frozenset[str]:
        """Names of the fields holding a list of strings."""
        return frozenset(
            name
            for name, info in cls.model_fields.items()
            if get_origin(info.annotation) is list
        )

    @classmethod
    def is_sequence_field(cls, field: str) -> bool:
        """
        Check whether a field holds a list of strings.

        Raises:
            KeyError: If the field is not part of the card schema.
        """
        if field not in cls.model_fields:
            raise KeyError(f"Unknown card field: {field}")
        return field in cls.sequence_fields()
