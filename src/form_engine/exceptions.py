"""
Exceptions raised by form-engine.

Validation failures are never raised: they are returned as
ValidationResult values. The exceptions here report programmer errors
in a form definition or in the way a session is driven.
"""


class FormEngineError(Exception):
    """Base class for all form-engine errors."""


class DuplicateFieldIdError(FormEngineError):
    """Two fields in one form tree share the same identifier."""

    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(
            f"Duplicate field id '{field_id}': field ids must be unique across "
            "the whole form, including conditional branches and list items"
        )


class UnknownFieldError(FormEngineError):
    """A session operation referenced a field id that is not in the tree."""

    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(f"Unknown field id '{field_id}'")
