"""
Validation rules.

A rule is a pure, synchronous function from a field value to a
ValidationResult. Every rule handles every value variant: variants outside
a rule's concern either pass or fail as documented per rule, they never
raise.

Rules are frozen dataclasses so they are hashable and compare by content.
Field descriptors rely on that to avoid adding ``Required`` twice and the
validator relies on it for its cache key.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from form_engine.models.field_value import (
    DateValue,
    EmptyValue,
    FieldValueBase,
    MultiSelectionValue,
    NumberValue,
    SelectionValue,
    TextValue,
    to_naive_datetime,
)
from form_engine.models.validation_result import FieldValidationError, ValidationResult
from form_engine.validation.constants import EMAIL_PATTERN


class ValidationRule(ABC):
    """Base class for all validation rules."""

    @abstractmethod
    def validate(self, value: FieldValueBase) -> ValidationResult:
        """Validate a value and return the outcome."""

    def __call__(self, value: FieldValueBase) -> ValidationResult:
        return self.validate(value)


def _check(passed: bool, error: FieldValidationError) -> ValidationResult:
    return ValidationResult.valid() if passed else ValidationResult.invalid(error)


@dataclass(frozen=True)
class Required(ValidationRule):
    """
    Fails when no value was provided.

    Empty, empty text, empty selection and an empty multi-selection count
    as missing. ``Number(0)``, ``Boolean(False)`` and any date count as
    provided.
    """

    def validate(self, value: FieldValueBase) -> ValidationResult:
        return _check(not value.is_empty, FieldValidationError.required())


@dataclass(frozen=True)
class MinLength(ValidationRule):
    """Text must have at least ``length`` characters. Non-text values fail."""

    length: int

    def validate(self, value: FieldValueBase) -> ValidationResult:
        error = FieldValidationError.min_length(self.length)
        match value:
            case TextValue(value=text):
                return _check(len(text) >= self.length, error)
            case _:
                return ValidationResult.invalid(error)


@dataclass(frozen=True)
class MaxLength(ValidationRule):
    """Text must have at most ``length`` characters.

    Empty passes. Any other non-text value fails, like MinLength.
    """

    length: int

    def validate(self, value: FieldValueBase) -> ValidationResult:
        error = FieldValidationError.max_length(self.length)
        match value:
            case TextValue(value=text):
                return _check(len(text) <= self.length, error)
            case EmptyValue():
                return ValidationResult.valid()
            case _:
                return ValidationResult.invalid(error)


@dataclass(frozen=True)
class Email(ValidationRule):
    """Text must look like an email address. Non-text values fail."""

    def validate(self, value: FieldValueBase) -> ValidationResult:
        error = FieldValidationError.invalid_email()
        match value:
            case TextValue(value=text):
                return _check(EMAIL_PATTERN.fullmatch(text) is not None, error)
            case _:
                return ValidationResult.invalid(error)


@dataclass(frozen=True)
class Pattern(ValidationRule):
    """Text must fully match a regular expression."""

    regex: str
    message: str | None = None

    def validate(self, value: FieldValueBase) -> ValidationResult:
        if self.message:
            error = FieldValidationError.custom(self.message, code="pattern_mismatch")
        else:
            error = FieldValidationError.pattern_mismatch(self.regex)
        match value:
            case TextValue(value=text):
                return _check(re.fullmatch(self.regex, text) is not None, error)
            case EmptyValue():
                return ValidationResult.valid()
            case _:
                return ValidationResult.invalid(error)


@dataclass(frozen=True)
class NumberRange(ValidationRule):
    """Number must lie in the closed range. Either bound may be open (None)."""

    minimum: float | None = None
    maximum: float | None = None

    def validate(self, value: FieldValueBase) -> ValidationResult:
        error = FieldValidationError.out_of_range(self.minimum, self.maximum)
        match value:
            case NumberValue(value=number):
                in_range = (self.minimum is None or number >= self.minimum) and (
                    self.maximum is None or number <= self.maximum
                )
                return _check(in_range, error)
            case EmptyValue():
                return ValidationResult.valid()
            case _:
                return ValidationResult.invalid(error)


@dataclass(frozen=True)
class DateRange(ValidationRule):
    """Date must lie between ``earliest`` and ``latest`` inclusive."""

    earliest: datetime | None = None
    latest: datetime | None = None

    def __post_init__(self) -> None:
        # Bounds share DateValue's naive UTC representation
        for name in ("earliest", "latest"):
            bound = getattr(self, name)
            if bound is not None:
                object.__setattr__(self, name, to_naive_datetime(bound))

    def validate(self, value: FieldValueBase) -> ValidationResult:
        error = FieldValidationError.date_out_of_range(self.earliest, self.latest)
        match value:
            case DateValue(value=moment):
                in_range = (self.earliest is None or moment >= self.earliest) and (
                    self.latest is None or moment <= self.latest
                )
                return _check(in_range, error)
            case EmptyValue():
                return ValidationResult.valid()
            case _:
                return ValidationResult.invalid(error)


@dataclass(frozen=True)
class OneOf(ValidationRule):
    """Selections must come from the allowed options.

    An empty selection passes; whether something must be picked is
    Required's concern.
    """

    options: tuple[str, ...]

    def validate(self, value: FieldValueBase) -> ValidationResult:
        match value:
            case SelectionValue(value=choice):
                if choice == "" or choice in self.options:
                    return ValidationResult.valid()
                return ValidationResult.invalid(FieldValidationError.invalid_option(choice))
            case MultiSelectionValue(value=choices):
                return ValidationResult.from_errors(
                    FieldValidationError.invalid_option(choice)
                    for choice in choices
                    if choice not in self.options
                )
            case EmptyValue():
                return ValidationResult.valid()
            case _:
                return ValidationResult.invalid(
                    FieldValidationError.invalid_option(value.string_value)
                )


@dataclass(frozen=True)
class Custom(ValidationRule):
    """Wraps a pure predicate over the field value."""

    check: Callable[[FieldValueBase], bool]
    message: str
    code: str = "custom"

    def validate(self, value: FieldValueBase) -> ValidationResult:
        return _check(bool(self.check(value)), FieldValidationError.custom(self.message, self.code))
