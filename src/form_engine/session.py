"""
Form session: one mounted form tree with its runtime state.

The session is the render context a rendering layer is handed. It wires
the store, validator, debounce scheduler, conditional evaluators and the
submission coordinator together, and is the only place that knows how
they interact.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Callable

from form_engine.components.fields import FieldDescriptor
from form_engine.components.nodes import FormNode, StepperNode
from form_engine.components.tree import FormTree
from form_engine.components.walk import iter_fields
from form_engine.conditional import ConditionalEvaluator
from form_engine.config import FormEngineConfig, get_config
from form_engine.coordinator import FormBehavior, SubmissionCoordinator
from form_engine.models.field_value import FieldValueBase, from_python
from form_engine.models.form_data import FormData
from form_engine.models.validation_result import ValidationResult
from form_engine.state.events import Subscription
from form_engine.state.scheduler import ValidationScheduler
from form_engine.state.store import FormStateStore
from form_engine.validation.validator import FormValidator

logger = logging.getLogger(__name__)


class FormSession:
    """
    A mounted form.

    Usage:
        tree = form(text_field("name").required(), title="Sign up")
        with FormSession(tree) as session:
            session.on_submit(lambda values: print(FormData.of(values).to_dict()))
            session.commit("name", "Ada")
            session.submit()

    Values may be given as field values or plain Python objects; plain
    objects go through ``from_python``.
    """

    def __init__(
        self,
        tree: FormTree,
        behavior: FormBehavior | None = None,
        validator: FormValidator | None = None,
        config: FormEngineConfig | None = None,
    ):
        self.tree = tree
        self.config = config or get_config()
        self.behavior = behavior or FormBehavior(
            validate_on_mount=self.config.validate_on_mount,
            debounce_seconds=self.config.debounce_seconds,
        )
        self.store = FormStateStore()
        self.validator = validator or FormValidator(self.config.validator_cache_size)
        self.scheduler = ValidationScheduler(self.behavior.debounce_seconds)
        self.coordinator = SubmissionCoordinator(tree, self.store, self.validator, self.behavior)
        self.evaluators: list[ConditionalEvaluator] = []
        self._subscriptions: list[Subscription] = []
        self.mounted = False

    def __enter__(self) -> "FormSession":
        self.mount()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unmount()

    # Lifecycle

    def mount(self) -> None:
        """
        Start following conditionals, seed initial values for unset fields,
        then validate if configured.

        Mounting an already mounted session only re-seeds missing values.
        A session can be mounted again after ``unmount``.
        """
        if not self.evaluators:
            self._attach_evaluators()
        for descriptor in self.tree.fields():
            initial = descriptor.initial_value()
            if initial is not None and not self.store.has_value(descriptor.id):
                self.store.set_value(descriptor.id, initial)
        self.mounted = True
        logger.info(
            "Mounted form '%s' with %d field(s)", self.tree.title, len(self.tree.field_ids())
        )
        if self.behavior.validate_on_mount:
            self.validate_all()

    def unmount(self) -> None:
        """Cancel pending work, stop listening and drop all state."""
        self.scheduler.cancel_all()
        self._detach_evaluators()
        self.store.reset()
        self.mounted = False
        logger.info("Unmounted form '%s'", self.tree.title)

    def _attach_evaluators(self) -> None:
        # One evaluator per conditional node, nested ones included
        self.evaluators = [ConditionalEvaluator(node, self.store) for node in self.tree.conditionals()]
        self._subscriptions = [
            evaluator.active_changed.subscribe(partial(self._on_active_changed, evaluator))
            for evaluator in self.evaluators
        ]

    def _detach_evaluators(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        for evaluator in self.evaluators:
            evaluator.detach()
        self._subscriptions = []
        self.evaluators = []

    # Edits

    def commit(self, field_id: str, value: Any) -> ValidationResult | None:
        """
        Write a value and validate it right away (when validate_on_change).

        Returns:
            The new result, or None if the field was not validated

        Raises:
            UnknownFieldError: If the tree has no such field.
        """
        self._write(field_id, value)
        if not self._validates_on_change(field_id):
            return None
        self.scheduler.cancel(field_id)
        return self.validate_field(field_id)

    def edit(self, field_id: str, value: Any) -> asyncio.Task | None:
        """
        Write a value and validate it after the debounce delay.

        Must run on an event loop. Later edits to the same field supersede
        the pending validation.

        Returns:
            The scheduled task, or None if the field will not be validated
        """
        self._write(field_id, value)
        if not self._validates_on_change(field_id):
            return None
        return self.scheduler.schedule(field_id, partial(self.validate_field, field_id))

    # Validation

    def validate_field(self, field_id: str) -> ValidationResult:
        """Validate one field against its current value and store the result."""
        descriptor = self.tree.field(field_id)
        result = self.validator.validate(descriptor, self.store.get_value(field_id))
        self.store.set_validation_result(field_id, result)
        return result

    def validate_all(self) -> bool:
        """Validate every live field now. Returns overall validity."""
        self.scheduler.cancel_all()
        return self.coordinator.validate_live_fields()

    def validate_step(self, index: int, stepper: StepperNode | None = None) -> bool:
        """
        Validate the live fields of one step and check its own gate.

        Args:
            index: Step position within the stepper
            stepper: Stepper node; defaults to the first one in the tree

        Raises:
            ValueError: If the tree has no stepper.
            IndexError: If the step does not exist.
        """
        if stepper is None:
            steppers = self.tree.steppers()
            if not steppers:
                raise ValueError(f"Form '{self.tree.title}' has no stepper")
            stepper = steppers[0]
        step = stepper.steps[index]
        values = self.store.get_all_values()
        results = [self.validate_field(descriptor.id) for descriptor in iter_fields(step.children, values)]
        return all(result.is_valid for result in results) and bool(step.is_valid(values))

    # Queries

    def live_fields(self) -> list[FieldDescriptor]:
        """Fields reachable through active conditional branches, in tree order."""
        return self.tree.fields(self.store.get_all_values())

    def is_live(self, field_id: str) -> bool:
        return any(descriptor.id == field_id for descriptor in self.live_fields())

    def visible_nodes(self) -> tuple[FormNode, ...]:
        return self.tree.visible(self.store.get_all_values())

    @property
    def values(self) -> dict[str, FieldValueBase]:
        return self.store.get_all_values()

    def form_data(self) -> FormData:
        return FormData.of(self.store.get_all_values())

    # Submission

    def on_submit(self, handler: Callable[[dict[str, FieldValueBase]], None]) -> Subscription:
        return self.coordinator.on_submit(handler)

    def submit(self) -> bool:
        """Gated submission; see SubmissionCoordinator.submit."""
        if self.behavior.validate_on_submit:
            self.scheduler.cancel_all()
        return self.coordinator.submit()

    @property
    def can_submit(self) -> bool:
        return self.coordinator.can_submit

    def _write(self, field_id: str, value: Any) -> None:
        self.tree.field(field_id)
        self.store.set_value(field_id, from_python(value))

    def _validates_on_change(self, field_id: str) -> bool:
        # Hidden fields are validated again by submit once they are shown
        return self.behavior.validate_on_change and self.is_live(field_id)

    def _on_active_changed(self, evaluator: ConditionalEvaluator, active: bool) -> None:
        if active:
            return
        # Values stay cached; only results and pending validations are dropped
        for descriptor in evaluator.fields():
            self.scheduler.cancel(descriptor.id)
            if self.store.get_validation_result(descriptor.id) is not None:
                self.store.set_validation_result(descriptor.id, None)
        logger.debug("Cleared results for hidden conditional %s", evaluator.node.node_id)
