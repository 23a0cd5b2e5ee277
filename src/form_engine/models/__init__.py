"""
Data models for form-engine.

This module contains Pydantic models for:
- Field values (the tagged union of every payload kind)
- Validation errors and results
- Typed access to submitted data
"""

from form_engine.models.field_value import (
    EMPTY,
    BooleanValue,
    DateValue,
    EmptyValue,
    FieldValue,
    FieldValueBase,
    MultiSelectionValue,
    NumberValue,
    SelectionValue,
    TextValue,
    from_python,
    parse_field_value,
)
from form_engine.models.form_data import FormData
from form_engine.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Field values
    "FieldValue",
    "FieldValueBase",
    "TextValue",
    "NumberValue",
    "BooleanValue",
    "DateValue",
    "SelectionValue",
    "MultiSelectionValue",
    "EmptyValue",
    "EMPTY",
    "from_python",
    "parse_field_value",
    # Submitted data
    "FormData",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
