"""
Validation result models for form field validation.

These models are the output of validation rules and of the validator.
They are immutable values: safe to cache, share and compare by content.
"""

from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldValidationError(BaseModel):
    """A single structured validation failure."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(default=None, description="Machine-readable error code")
    field_id: str | None = Field(default=None, description="Field the error belongs to")

    def for_field(self, field_id: str) -> "FieldValidationError":
        """Return a copy of this error bound to a field."""
        if self.field_id == field_id:
            return self
        return self.model_copy(update={"field_id": field_id})

    @classmethod
    def required(cls) -> "FieldValidationError":
        return cls(message="This field is required", code="required")

    @classmethod
    def invalid_email(cls) -> "FieldValidationError":
        return cls(message="Please enter a valid email address", code="invalid_email")

    @classmethod
    def min_length(cls, length: int) -> "FieldValidationError":
        return cls(message=f"Must be at least {length} characters", code="min_length")

    @classmethod
    def max_length(cls, length: int) -> "FieldValidationError":
        return cls(message=f"Must be no more than {length} characters", code="max_length")

    @classmethod
    def custom(cls, message: str, code: str = "custom") -> "FieldValidationError":
        return cls(message=message, code=code)

    @classmethod
    def out_of_range(
        cls, minimum: float | None, maximum: float | None
    ) -> "FieldValidationError":
        return cls(
            message=f"Must be between {_bound(minimum)} and {_bound(maximum)}",
            code="out_of_range",
        )

    @classmethod
    def date_out_of_range(
        cls, earliest: datetime | None, latest: datetime | None
    ) -> "FieldValidationError":
        return cls(
            message=f"Date must be between {_bound(earliest)} and {_bound(latest)}",
            code="date_out_of_range",
        )

    @classmethod
    def invalid_option(cls, value: str) -> "FieldValidationError":
        return cls(message=f"'{value}' is not one of the allowed options", code="invalid_option")

    @classmethod
    def pattern_mismatch(cls, pattern: str) -> "FieldValidationError":
        return cls(message=f"Must match the pattern {pattern}", code="pattern_mismatch")


def _bound(value: object) -> str:
    if value is None:
        return "any"
    if isinstance(value, datetime):
        return value.date().isoformat() if value.time() == datetime.min.time() else value.isoformat()
    return f"{value:g}" if isinstance(value, float) else str(value)


class ValidationResult(BaseModel):
    """Pass/fail outcome of validating one value."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(..., description="Whether the value passed every rule")
    errors: tuple[FieldValidationError, ...] = Field(
        default=(), description="Errors in the order the rules produced them"
    )

    @model_validator(mode="after")
    def _check_consistency(self) -> "ValidationResult":
        if self.is_valid != (len(self.errors) == 0):
            raise ValueError("is_valid must be True exactly when there are no errors")
        return self

    @classmethod
    def valid(cls) -> "ValidationResult":
        return _VALID

    @classmethod
    def invalid(cls, *errors: FieldValidationError) -> "ValidationResult":
        if not errors:
            raise ValueError("An invalid result needs at least one error")
        return cls(is_valid=False, errors=errors)

    @classmethod
    def from_errors(cls, errors: Iterable[FieldValidationError]) -> "ValidationResult":
        errors = tuple(errors)
        if not errors:
            return _VALID
        return cls(is_valid=False, errors=errors)

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]

    @property
    def codes(self) -> list[str | None]:
        return [e.code for e in self.errors]

    def get_field_errors(self, field_id: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_id == field_id]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field ids to error messages.

        Errors that are not bound to a field are grouped under ``""``.
        """
        result: dict[str, list[str]] = {}
        for error in self.errors:
            key = error.field_id or ""
            if key not in result:
                result[key] = []
            result[key].append(error.message)
        return result

    def merge(self, *others: "ValidationResult") -> "ValidationResult":
        """Concatenate the errors of several results, keeping their order."""
        errors = list(self.errors)
        for other in others:
            errors.extend(other.errors)
        return ValidationResult.from_errors(errors)


_VALID = ValidationResult(is_valid=True)
