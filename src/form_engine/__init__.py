"""
form-engine: Declarative form construction with validation.

Describe a form as a tree, mount it, feed it values and let the engine
track validity and gate submission.

Simple Usage:
    from form_engine import FormSession, form, text_field

    tree = form(
        text_field("name").required(),
        text_field("email").required().email(),
        title="Sign up",
    )

    with FormSession(tree) as session:
        session.on_submit(lambda values: print(values))
        session.commit("name", "Ada")
        session.commit("email", "ada@example.com")
        session.submit()

Conditional sections:
    from form_engine import EMPTY, conditional, toggle_field

    tree = form(
        toggle_field("has_company"),
        conditional(
            lambda values: values.get("has_company", EMPTY).bool_value,
            text_field("company").required(),
        ),
    )

    # "company" only blocks submission while the toggle is on

Tracing:
    from form_engine.tracing import configure_logging, setup_tracing

    configure_logging("INFO")
    setup_tracing(session, verbose=True)

    # Or write to file
    setup_tracing(session, console=False, file_path="traces.jsonl")
"""

from form_engine.conditional import ConditionalEvaluator
from form_engine.components import (
    DateField,
    FieldDescriptor,
    FormTree,
    NumberField,
    PickerField,
    TextField,
    ToggleField,
    card,
    column,
    conditional,
    date_picker,
    divider,
    dynamic_list,
    form,
    number_field,
    picker_field,
    row,
    section,
    spacer,
    step,
    stepper,
    text,
    text_field,
    toggle_field,
)
from form_engine.config import FormEngineConfig, get_config, update_config
from form_engine.coordinator import FormBehavior, SubmissionCoordinator
from form_engine.exceptions import DuplicateFieldIdError, FormEngineError, UnknownFieldError
from form_engine.models import (
    EMPTY,
    BooleanValue,
    DateValue,
    EmptyValue,
    FieldValidationError,
    FieldValue,
    FormData,
    MultiSelectionValue,
    NumberValue,
    SelectionValue,
    TextValue,
    ValidationResult,
    from_python,
)
from form_engine.session import FormSession
from form_engine.state import FormStateStore
from form_engine.validation import FormValidator, ValidationRule

__all__ = [
    # Main interface
    "FormSession",
    "FormBehavior",
    # Builder
    "form",
    "text_field",
    "number_field",
    "toggle_field",
    "date_picker",
    "picker_field",
    "row",
    "column",
    "section",
    "card",
    "conditional",
    "dynamic_list",
    "step",
    "stepper",
    "spacer",
    "divider",
    "text",
    # Descriptors
    "FormTree",
    "FieldDescriptor",
    "TextField",
    "NumberField",
    "ToggleField",
    "DateField",
    "PickerField",
    # Values
    "FieldValue",
    "TextValue",
    "NumberValue",
    "BooleanValue",
    "DateValue",
    "SelectionValue",
    "MultiSelectionValue",
    "EmptyValue",
    "EMPTY",
    "from_python",
    "FormData",
    # Validation
    "ValidationRule",
    "ValidationResult",
    "FieldValidationError",
    "FormValidator",
    # Runtime
    "FormStateStore",
    "ConditionalEvaluator",
    "SubmissionCoordinator",
    # Configuration
    "FormEngineConfig",
    "get_config",
    "update_config",
    # Errors
    "FormEngineError",
    "DuplicateFieldIdError",
    "UnknownFieldError",
]

__version__ = "0.1.0"
