"""
Form state store.

The store is the single owner of every field value and every stored
validation result while a form is mounted. Everything else reads through
its accessors or receives snapshots from its channels.
"""

import logging

from form_engine.models.field_value import EMPTY, FieldValueBase
from form_engine.models.validation_result import ValidationResult
from form_engine.state.events import Channel

logger = logging.getLogger(__name__)


class FormStateStore:
    """
    Mutable runtime state of one mounted form.

    Two channels carry notifications:

    - ``value_changed`` publishes a copy of the full value map after every
      value write, as of that write.
    - ``validity_changed`` publishes overall validity after every
      validation result write.

    Setting a value never validates. Validation is a separate step so the
    rendering layer can debounce edits before committing them.

    Not thread-safe: all calls are expected from one event loop thread.

    Usage:
        store = FormStateStore()
        store.value_changed.subscribe(lambda values: print(values))
        store.set_value("email", TextValue("ada@example.com"))
    """

    def __init__(self) -> None:
        self._values: dict[str, FieldValueBase] = {}
        self._results: dict[str, ValidationResult] = {}
        self.value_changed: Channel[dict[str, FieldValueBase]] = Channel("value_changed")
        self.validity_changed: Channel[bool] = Channel("validity_changed")

    def set_value(self, field_id: str, value: FieldValueBase) -> None:
        """Overwrite a field's value and broadcast the full value map."""
        if not isinstance(value, FieldValueBase):
            raise TypeError(f"Expected a field value, got {type(value).__name__}")
        self._values[field_id] = value
        logger.debug("Value set for '%s' (%s)", field_id, value.kind)
        self.value_changed.publish(self.get_all_values())

    def get_value(self, field_id: str) -> FieldValueBase:
        """Current value of a field; EMPTY if it was never set."""
        return self._values.get(field_id, EMPTY)

    def get_all_values(self) -> dict[str, FieldValueBase]:
        """Snapshot of every stored value. Mutating it does not touch the store."""
        return dict(self._values)

    def set_validation_result(self, field_id: str, result: ValidationResult | None) -> None:
        """Store a field's result (None clears it) and broadcast overall validity."""
        if result is None:
            self._results.pop(field_id, None)
        else:
            self._results[field_id] = result
        self.validity_changed.publish(self.is_form_valid)

    def get_validation_result(self, field_id: str) -> ValidationResult | None:
        return self._results.get(field_id)

    def get_all_results(self) -> dict[str, ValidationResult]:
        return dict(self._results)

    @property
    def is_form_valid(self) -> bool:
        """True when every stored result is valid. Unvalidated fields do not block."""
        return all(result.is_valid for result in self._results.values())

    def invalid_field_ids(self) -> list[str]:
        return [field_id for field_id, result in self._results.items() if not result.is_valid]

    def has_value(self, field_id: str) -> bool:
        return field_id in self._values

    def clear_field(self, field_id: str) -> None:
        """Forget a field's value and result, then broadcast both channels."""
        self._values.pop(field_id, None)
        self._results.pop(field_id, None)
        self.value_changed.publish(self.get_all_values())
        self.validity_changed.publish(self.is_form_valid)

    def reset(self) -> None:
        """Forget everything, then broadcast both channels."""
        self._values.clear()
        self._results.clear()
        self.value_changed.publish({})
        self.validity_changed.publish(True)
