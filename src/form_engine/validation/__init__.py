"""
Validation for form-engine.

Built-in rules and the validator that runs a field's rule chain.
"""

from form_engine.validation.rules import (
    Custom,
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
from form_engine.validation.validator import FormValidator

__all__ = [
    "ValidationRule",
    "Required",
    "MinLength",
    "MaxLength",
    "Email",
    "Pattern",
    "NumberRange",
    "DateRange",
    "OneOf",
    "Custom",
    "FormValidator",
]
