"""
Field descriptors.

A descriptor is the immutable configuration of one input: its id, label,
required flag, explicit validation rules and kind-specific constraints.
Every configuration method returns a new descriptor, so a descriptor can be
shared freely between renders and used as a cache key.

Example:
    >>> email = text_field("email").with_label("Email Address").required().email()
    >>> email.is_required
    True
"""

import re
from datetime import date, datetime
from typing import Any, ClassVar, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from form_engine.models.field_value import (
    BooleanValue,
    FieldValueBase,
    NumberValue,
    to_naive_datetime,
)
from form_engine.validation.rules import (
    DateRange,
    Email,
    MaxLength,
    MinLength,
    NumberRange,
    OneOf,
    Pattern,
    Required,
    ValidationRule,
)


def default_label(field_id: str) -> str:
    """Turn an id such as ``firstName`` or ``first_name`` into ``First Name``."""
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", field_id)
    words = re.split(r"[\s_\-]+", spaced)
    return " ".join(word[:1].upper() + word[1:] for word in words if word)


def _to_datetime(value: date | None) -> datetime | None:
    return None if value is None else to_naive_datetime(value)


class FieldDescriptor(BaseModel):
    """Configuration shared by every field kind."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ClassVar[str] = "field"

    id: str = Field(..., min_length=1, description="Unique field identifier")
    label: str = Field(default="", description="Human-readable label")
    is_required: bool = Field(default=False)
    rules: tuple[ValidationRule, ...] = Field(default=(), description="Explicit rules, in order")
    placeholder: str | None = Field(default=None)
    help_text: str | None = Field(default=None)

    def __init__(self, id: str, **data: Any) -> None:
        super().__init__(id=id, **data)

    @model_validator(mode="before")
    @classmethod
    def _fill_label(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("label") and data.get("id"):
            data = {**data, "label": default_label(data["id"])}
        return data

    @property
    def validation_rules(self) -> tuple[ValidationRule, ...]:
        """Explicit rules followed by the rules implied by kind constraints."""
        return self.rules + self.constraint_rules()

    def constraint_rules(self) -> tuple[ValidationRule, ...]:
        return ()

    def initial_value(self) -> FieldValueBase | None:
        """Value seeded into the store when the form mounts, if any."""
        return None

    def _with(self, **update: Any):
        # Rebuild through validation so every setter is type checked
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(update)
        return type(self).model_validate(data)

    def with_label(self, label: str):
        return self._with(label=label)

    def with_placeholder(self, placeholder: str):
        return self._with(placeholder=placeholder)

    def with_help(self, help_text: str):
        return self._with(help_text=help_text)

    def required(self, flag: bool = True):
        """Mark the field required (adding one Required rule) or optional."""
        if flag:
            rules = self.rules
            if Required() not in rules:
                rules = rules + (Required(),)
        else:
            rules = tuple(rule for rule in self.rules if not isinstance(rule, Required))
        return self._with(is_required=flag, rules=rules)

    def validate_with(self, *rules: ValidationRule):
        """Append custom rules to the chain."""
        return self._with(rules=self.rules + tuple(rules))


class TextField(FieldDescriptor):
    """Single or multi-line text input."""

    kind: ClassVar[str] = "text"

    multiline: bool = False

    def min_length(self, length: int) -> "TextField":
        return self.validate_with(MinLength(length))

    def max_length(self, length: int) -> "TextField":
        return self.validate_with(MaxLength(length))

    def email(self) -> "TextField":
        return self.validate_with(Email())

    def matches(self, regex: str, message: str | None = None) -> "TextField":
        return self.validate_with(Pattern(regex, message))

    def as_multiline(self, flag: bool = True) -> "TextField":
        return self._with(multiline=flag)


class NumberField(FieldDescriptor):
    """Stepper / numeric input with an optional closed range.

    Without an explicit default the field mounts with 0 clamped into its
    range, so a bounded stepper never starts outside its bounds.
    """

    kind: ClassVar[str] = "number"

    value_range: tuple[float | None, float | None] | None = None
    step: float = 1.0
    default: float | None = None
    format: str | None = None

    def within(self, minimum: float | None, maximum: float | None) -> "NumberField":
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ValueError(f"Empty range: {minimum} > {maximum}")
        return self._with(value_range=(minimum, maximum))

    def with_step(self, step: float) -> "NumberField":
        if step <= 0:
            raise ValueError("step must be positive")
        return self._with(step=step)

    def with_default(self, default: float) -> "NumberField":
        return self._with(default=default)

    def with_format(self, fmt: str) -> "NumberField":
        return self._with(format=fmt)

    def constraint_rules(self) -> tuple[ValidationRule, ...]:
        if self.value_range is None:
            return ()
        return (NumberRange(*self.value_range),)

    def initial_value(self) -> FieldValueBase:
        if self.default is not None:
            return NumberValue(self.default)
        value = 0.0
        if self.value_range is not None:
            minimum, maximum = self.value_range
            if minimum is not None:
                value = max(value, minimum)
            if maximum is not None:
                value = min(value, maximum)
        return NumberValue(value)


class ToggleField(FieldDescriptor):
    """On/off switch."""

    kind: ClassVar[str] = "toggle"

    default: bool = False

    def with_default(self, default: bool) -> "ToggleField":
        return self._with(default=default)

    def initial_value(self) -> FieldValueBase:
        return BooleanValue(self.default)


class DateField(FieldDescriptor):
    """Date picker with optional bounds."""

    kind: ClassVar[str] = "date"

    earliest: datetime | None = None
    latest: datetime | None = None

    @field_validator("earliest", "latest", mode="before")
    @classmethod
    def _promote(cls, v: Any) -> Any:
        return _to_datetime(v) if isinstance(v, date) else v

    def min_date(self, earliest: date) -> "DateField":
        return self._with(earliest=_to_datetime(earliest))

    def max_date(self, latest: date) -> "DateField":
        return self._with(latest=_to_datetime(latest))

    def between(self, earliest: date, latest: date) -> "DateField":
        return self.min_date(earliest).max_date(latest)

    def constraint_rules(self) -> tuple[ValidationRule, ...]:
        if self.earliest is None and self.latest is None:
            return ()
        return (DateRange(self.earliest, self.latest),)


class PickerField(FieldDescriptor):
    """Single or multiple choice from a fixed list of options."""

    kind: ClassVar[str] = "picker"

    options: tuple[str, ...] = ()
    multiple: bool = False

    def with_options(self, *options: str | Iterable[str]) -> "PickerField":
        """Set the allowed options, given either as arguments or one iterable."""
        if len(options) == 1 and not isinstance(options[0], str):
            options = tuple(options[0])
        return self._with(options=tuple(dict.fromkeys(options)))

    def allow_multiple(self, flag: bool = True) -> "PickerField":
        return self._with(multiple=flag)

    def constraint_rules(self) -> tuple[ValidationRule, ...]:
        if not self.options:
            return ()
        return (OneOf(self.options),)
