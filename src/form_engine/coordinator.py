"""
Submission Coordinator.

Orchestrates "validate everything, then hand the values to the host only
if the form is valid". Submission is blocked, never failed: when the form
is invalid the submit handlers are simply not called and the freshly
stored validation results stay in the store for the UI to display.
"""

import logging
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from form_engine.components.tree import FormTree
from form_engine.models.field_value import FieldValueBase
from form_engine.state.events import Channel, Subscription
from form_engine.state.store import FormStateStore
from form_engine.validation.validator import FormValidator

logger = logging.getLogger(__name__)


class FormBehavior(BaseModel):
    """How a mounted form validates and gates submission."""

    model_config = ConfigDict(frozen=True)

    validate_on_submit: bool = Field(default=True, description="Validate every live field on submit")
    validate_on_change: bool = Field(default=True, description="Validate a field after each edit")
    disable_submit_when_invalid: bool = Field(
        default=True, description="Report can_submit=False while the form is invalid"
    )
    prevent_submit_when_invalid: bool = Field(
        default=True, description="Do not call submit handlers while the form is invalid"
    )
    auto_scroll: bool = Field(
        default=False, description="Request a scroll to the first invalid field on blocked submit"
    )
    validate_on_mount: bool = Field(
        default=False, description="Validate every live field once when the form mounts"
    )
    debounce_seconds: float = Field(default=0.3, ge=0.0, description="Delay for debounced edits")

    @classmethod
    def default(cls) -> "FormBehavior":
        return cls()

    @classmethod
    def lenient(cls) -> "FormBehavior":
        """Never block submission; the host decides what to do with invalid data."""
        return cls(disable_submit_when_invalid=False, prevent_submit_when_invalid=False)


class SubmissionCoordinator:
    """
    Gated submission for one mounted form.

    Usage:
        coordinator = SubmissionCoordinator(tree, store, FormValidator())
        coordinator.on_submit(lambda values: save(values))
        coordinator.submit()
    """

    def __init__(
        self,
        tree: FormTree,
        store: FormStateStore,
        validator: FormValidator,
        behavior: FormBehavior | None = None,
    ):
        self.tree = tree
        self.store = store
        self.validator = validator
        self.behavior = behavior or FormBehavior.default()
        self.submitted: Channel[dict[str, FieldValueBase]] = Channel("submitted")
        self.scroll_requested: Channel[str] = Channel("scroll_requested")
        self._scroll_target: str | None = None

    def on_submit(self, handler: Callable[[dict[str, FieldValueBase]], None]) -> Subscription:
        return self.submitted.subscribe(handler)

    def on_validation_changed(self, handler: Callable[[bool], None]) -> Subscription:
        return self.store.validity_changed.subscribe(handler)

    def on_value_changed(self, handler: Callable[[dict[str, FieldValueBase]], None]) -> Subscription:
        return self.store.value_changed.subscribe(handler)

    def validate_live_fields(self) -> bool:
        """
        Validate every field reachable through active branches and store the results.

        Returns:
            Validity of the live fields after the pass
        """
        for descriptor in self.tree.fields(self.store.get_all_values()):
            result = self.validator.validate(descriptor, self.store.get_value(descriptor.id))
            self.store.set_validation_result(descriptor.id, result)
        return self.is_valid

    def invalid_live_fields(self) -> list[str]:
        """Live fields, in tree order, whose stored result is invalid.

        Results stored for fields inside inactive conditional branches are
        ignored, so hidden fields never block submission.
        """
        invalid = []
        for descriptor in self.tree.fields(self.store.get_all_values()):
            result = self.store.get_validation_result(descriptor.id)
            if result is not None and not result.is_valid:
                invalid.append(descriptor.id)
        return invalid

    @property
    def is_valid(self) -> bool:
        """True when no live field has an invalid stored result."""
        return not self.invalid_live_fields()

    def submit(self) -> bool:
        """
        Validate (if configured) and forward the value snapshot to submit handlers.

        Returns:
            True if the submit handlers were invoked
        """
        if self.behavior.validate_on_submit:
            self.validate_live_fields()

        invalid = self.invalid_live_fields()
        if invalid and self.behavior.prevent_submit_when_invalid:
            logger.info("Submission blocked: %d invalid field(s) %s", len(invalid), invalid)
            if self.behavior.auto_scroll:
                self._scroll_target = invalid[0]
                logger.info("Scrolling to first invalid field '%s'", self._scroll_target)
                self.scroll_requested.publish(self._scroll_target)
            return False

        self._scroll_target = None
        if invalid:
            logger.warning("Submitting invalid form (prevent_submit_when_invalid is off)")
        else:
            logger.info("Submitting form '%s'", self.tree.title)
        self.submitted.publish(self.store.get_all_values())
        return True

    @property
    def can_submit(self) -> bool:
        """Whether a submit control should be enabled."""
        return self.is_valid or not self.behavior.disable_submit_when_invalid

    def first_invalid_field(self) -> str | None:
        """First live field, in tree order, whose stored result is invalid."""
        invalid = self.invalid_live_fields()
        return invalid[0] if invalid else None

    def submit_target(self) -> str | None:
        """Field the last blocked submit asked to scroll to (auto_scroll only)."""
        return self._scroll_target
