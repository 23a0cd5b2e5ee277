"""
Typed read access to a submitted value snapshot.
"""

from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from form_engine.models.field_value import (
    BooleanValue,
    DateValue,
    FieldValue,
    FieldValueBase,
    MultiSelectionValue,
    NumberValue,
    SelectionValue,
    TextValue,
)


class FormData(BaseModel):
    """
    Read-only view over the values handed to a submit handler.

    Each getter returns None when the field is missing or holds a
    different variant, so host code can pull out typed data without
    matching on every variant itself.

    Example:
        >>> data = FormData.of({"name": TextValue("Ada")})
        >>> data.get_string("name")
        'Ada'
    """

    model_config = ConfigDict(frozen=True)

    values: dict[str, FieldValue] = Field(default_factory=dict)

    @classmethod
    def of(cls, values: Mapping[str, FieldValueBase]) -> "FormData":
        return cls(values=dict(values))

    def get(self, field_id: str) -> FieldValueBase | None:
        return self.values.get(field_id)

    def get_string(self, field_id: str) -> str | None:
        value = self.values.get(field_id)
        return value.value if isinstance(value, TextValue) else None

    def get_number(self, field_id: str) -> float | None:
        value = self.values.get(field_id)
        return value.value if isinstance(value, NumberValue) else None

    def get_bool(self, field_id: str) -> bool | None:
        value = self.values.get(field_id)
        return value.value if isinstance(value, BooleanValue) else None

    def get_date(self, field_id: str) -> datetime | None:
        value = self.values.get(field_id)
        return value.value if isinstance(value, DateValue) else None

    def get_selection(self, field_id: str) -> str | None:
        value = self.values.get(field_id)
        return value.value if isinstance(value, SelectionValue) else None

    def get_selections(self, field_id: str) -> list[str] | None:
        value = self.values.get(field_id)
        return list(value.value) if isinstance(value, MultiSelectionValue) else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dict of plain Python payloads (None for empty fields)."""
        return {field_id: value.to_python() for field_id, value in self.values.items()}

    def __contains__(self, field_id: object) -> bool:
        return field_id in self.values

    def __len__(self) -> int:
        return len(self.values)
