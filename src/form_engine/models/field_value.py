"""
Field value models.

A field's runtime payload is one of a closed set of variants. Each variant
is a frozen Pydantic model tagged by a ``kind`` literal, so values are
immutable, hashable, compare by content and can be parsed back from their
serialized form through the discriminated ``FieldValue`` union.
"""

from datetime import date, datetime, time, timezone
from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def to_naive_datetime(value: date) -> datetime:
    """Promote a date to midnight and convert an aware date-time to naive UTC."""
    if not isinstance(value, datetime):
        return datetime.combine(value, time())
    if value.tzinfo is not None and value.utcoffset() is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(tzinfo=None)


class FieldValueBase(BaseModel):
    """Common behaviour shared by every field value variant."""

    model_config = ConfigDict(frozen=True)

    @property
    def string_value(self) -> str:
        """Lossy string projection, for display and logging only."""
        raise NotImplementedError

    @property
    def bool_value(self) -> bool:
        """Truthiness projection: presence of a value counts as True."""
        return True

    @property
    def is_empty(self) -> bool:
        """Whether the value counts as "not provided" for required fields."""
        return False

    def to_python(self) -> Any:
        """Return the plain Python payload of this value."""
        raise NotImplementedError


class TextValue(FieldValueBase):
    """Free text input."""

    kind: Literal["text"] = "text"
    value: str

    def __init__(self, value: str, **data: Any) -> None:
        super().__init__(value=value, **data)

    @property
    def string_value(self) -> str:
        return self.value

    @property
    def bool_value(self) -> bool:
        return self.value != ""

    @property
    def is_empty(self) -> bool:
        return self.value == ""

    def to_python(self) -> str:
        return self.value


class NumberValue(FieldValueBase):
    """Numeric input, stored as a float."""

    kind: Literal["number"] = "number"
    value: float

    def __init__(self, value: float, **data: Any) -> None:
        super().__init__(value=value, **data)

    @property
    def string_value(self) -> str:
        return str(self.value)

    def to_python(self) -> float:
        return self.value


class BooleanValue(FieldValueBase):
    """Toggle or checkbox input."""

    kind: Literal["boolean"] = "boolean"
    value: bool

    def __init__(self, value: bool, **data: Any) -> None:
        super().__init__(value=value, **data)

    @property
    def string_value(self) -> str:
        return "true" if self.value else "false"

    @property
    def bool_value(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value


class DateValue(FieldValueBase):
    """Date or date-time input.

    Plain dates are promoted to midnight and aware date-times are converted
    to naive UTC, so every stored date compares with every other.
    """

    kind: Literal["date"] = "date"
    value: datetime

    def __init__(self, value: date, **data: Any) -> None:
        super().__init__(value=value, **data)

    @field_validator("value", mode="before")
    @classmethod
    def _promote_date(cls, v: Any) -> Any:
        if isinstance(v, date):
            return to_naive_datetime(v)
        return v

    @field_validator("value", mode="after")
    @classmethod
    def _drop_timezone(cls, v: datetime) -> datetime:
        # Parsed strings may carry an offset
        return to_naive_datetime(v)

    @property
    def string_value(self) -> str:
        return self.value.strftime("%c")

    def to_python(self) -> datetime:
        return self.value


class SelectionValue(FieldValueBase):
    """A single option picked from a list."""

    kind: Literal["selection"] = "selection"
    value: str

    def __init__(self, value: str, **data: Any) -> None:
        super().__init__(value=value, **data)

    @property
    def string_value(self) -> str:
        return self.value

    @property
    def is_empty(self) -> bool:
        return self.value == ""

    def to_python(self) -> str:
        return self.value


class MultiSelectionValue(FieldValueBase):
    """Several options picked from a list, kept as an ordered set."""

    kind: Literal["multi_selection"] = "multi_selection"
    value: tuple[str, ...] = ()

    def __init__(self, value: Iterable[str] = (), **data: Any) -> None:
        super().__init__(value=tuple(value), **data)

    @field_validator("value", mode="before")
    @classmethod
    def _dedupe(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(dict.fromkeys(v))
        return v

    @property
    def string_value(self) -> str:
        return ", ".join(self.value)

    @property
    def is_empty(self) -> bool:
        return len(self.value) == 0

    def to_python(self) -> list[str]:
        return list(self.value)


class EmptyValue(FieldValueBase):
    """No input yet. Distinct from an empty text or selection."""

    kind: Literal["empty"] = "empty"

    @property
    def string_value(self) -> str:
        return ""

    @property
    def bool_value(self) -> bool:
        return False

    @property
    def is_empty(self) -> bool:
        return True

    def to_python(self) -> None:
        return None


FieldValue = Annotated[
    Union[
        TextValue,
        NumberValue,
        BooleanValue,
        DateValue,
        SelectionValue,
        MultiSelectionValue,
        EmptyValue,
    ],
    Field(discriminator="kind"),
]

EMPTY = EmptyValue()

_field_value_adapter: TypeAdapter[FieldValue] = TypeAdapter(FieldValue)


def parse_field_value(data: Any) -> FieldValueBase:
    """Parse a serialized value such as ``{"kind": "text", "value": "a"}``."""
    return _field_value_adapter.validate_python(data)


def from_python(obj: Any) -> FieldValueBase:
    """
    Coerce plain Python data into the matching field value variant.

    Selections are never inferred: a ``str`` always becomes text. Build a
    SelectionValue explicitly for picker fields.

    Raises:
        TypeError: If the object has no matching variant.
    """
    if isinstance(obj, FieldValueBase):
        return obj
    if obj is None:
        return EMPTY
    # bool is a subclass of int, check it first
    if isinstance(obj, bool):
        return BooleanValue(obj)
    if isinstance(obj, (int, float)):
        return NumberValue(float(obj))
    if isinstance(obj, date):
        return DateValue(obj)
    if isinstance(obj, str):
        return TextValue(obj)
    if isinstance(obj, (list, tuple)):
        return MultiSelectionValue([str(item) for item in obj])
    if isinstance(obj, (set, frozenset)):
        return MultiSelectionValue(sorted(str(item) for item in obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a field value")
