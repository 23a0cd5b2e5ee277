"""
The composed form tree.
"""

from dataclasses import dataclass

from form_engine.components.fields import FieldDescriptor
from form_engine.components.nodes import ConditionalNode, FormNode, StepperNode, ValueMap
from form_engine.components.walk import (
    check_unique_ids,
    iter_conditionals,
    iter_fields,
    iter_nodes,
    visible_nodes,
)
from form_engine.exceptions import UnknownFieldError


@dataclass(frozen=True)
class FormTree:
    """
    Immutable form definition: title, submit label and root nodes.

    Built once with ``form(...)``. Field ids are checked for uniqueness at
    construction unless ``strict_ids`` is False.
    """

    children: tuple[FormNode, ...]
    title: str = ""
    submit_title: str = "Submit"
    strict_ids: bool = True

    def __post_init__(self) -> None:
        if self.strict_ids:
            check_unique_ids(self.children)

    def fields(self, values: ValueMap | None = None) -> list[FieldDescriptor]:
        """All field descriptors, or only live ones when ``values`` is given."""
        return list(iter_fields(self.children, values))

    def field(self, field_id: str) -> FieldDescriptor:
        """
        Look up a descriptor by id.

        Raises:
            UnknownFieldError: If no field has this id.
        """
        for descriptor in iter_fields(self.children):
            if descriptor.id == field_id:
                return descriptor
        raise UnknownFieldError(field_id)

    def field_ids(self) -> list[str]:
        return [descriptor.id for descriptor in iter_fields(self.children)]

    def conditionals(self) -> list[ConditionalNode]:
        return list(iter_conditionals(self.children))

    def steppers(self) -> list[StepperNode]:
        return [node for node in iter_nodes(self.children) if isinstance(node, StepperNode)]

    def visible(self, values: ValueMap) -> tuple[FormNode, ...]:
        return visible_nodes(self.children, values)
