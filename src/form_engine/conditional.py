"""
Conditional subtree evaluation.

A ConditionalEvaluator keeps one conditional node's activation in sync
with the store. Evaluation is level-triggered: every value broadcast
re-runs the predicate over the full value map, whichever field changed.
The predicate alone decides which keys matter.
"""

import logging

from form_engine.components.fields import FieldDescriptor
from form_engine.components.nodes import ConditionalNode, ValueMap
from form_engine.components.walk import iter_fields
from form_engine.state.events import Channel
from form_engine.state.store import FormStateStore

logger = logging.getLogger(__name__)


class ConditionalEvaluator:
    """
    Tracks whether a conditional subtree is active.

    ``active_changed`` publishes the new state only when activation flips.
    Predicate errors propagate to whoever wrote the value.
    """

    def __init__(self, node: ConditionalNode, store: FormStateStore):
        self.node = node
        self.store = store
        self.active_changed: Channel[bool] = Channel("active_changed")
        self.is_active = node.is_active(store.get_all_values())
        self._subscription = store.value_changed.subscribe(self._on_values)

    def fields(self, values: ValueMap | None = None) -> list[FieldDescriptor]:
        """Descriptors inside the subtree (live ones only when ``values`` is given)."""
        return list(iter_fields(self.node.children, values))

    def evaluate(self, values: ValueMap | None = None) -> bool:
        """Re-run the predicate, publishing on a flip. Returns the new state."""
        if values is None:
            values = self.store.get_all_values()
        active = self.node.is_active(values)
        if active != self.is_active:
            self.is_active = active
            logger.debug(
                "Conditional %s %s", self.node.node_id, "activated" if active else "deactivated"
            )
            self.active_changed.publish(active)
        return active

    def detach(self) -> None:
        """Stop following the store."""
        self._subscription.cancel()

    def _on_values(self, values: dict) -> None:
        self.evaluate(values)
