"""
Builder API for assembling form trees.

Factory functions mirror the shape of the form: containers take their
children as positional arguments, in order. Children may be nodes, field
descriptors, nested lists (e.g. from a comprehension) or None (e.g. from
``x if flag else None``).

Example:
    tree = form(
        section(
            row(
                text_field("firstName").required(),
                text_field("lastName").required(),
            ),
            text_field("email").required().email(),
            title="Personal Information",
        ),
        toggle_field("newsletter").with_default(True),
        conditional(
            lambda values: values.get("newsletter", EMPTY).bool_value,
            picker_field("frequency").with_options("daily", "weekly"),
        ),
        title="Registration",
    )
"""

from typing import Any, Callable, Iterable

from form_engine.components.fields import (
    DateField,
    NumberField,
    PickerField,
    TextField,
    ToggleField,
)
from form_engine.components.nodes import (
    CardNode,
    CardStyle,
    ColumnNode,
    ConditionalNode,
    DividerNode,
    DynamicListNode,
    Predicate,
    RowNode,
    SectionNode,
    SpacerNode,
    Step,
    StepperNode,
    TextNode,
    normalize_children,
)
from form_engine.components.tree import FormTree
from form_engine.config import get_config


# Field factories

def text_field(field_id: str) -> TextField:
    return TextField(field_id)


def number_field(field_id: str) -> NumberField:
    return NumberField(field_id)


def toggle_field(field_id: str) -> ToggleField:
    return ToggleField(field_id)


def date_picker(field_id: str) -> DateField:
    return DateField(field_id)


def picker_field(field_id: str) -> PickerField:
    return PickerField(field_id)


# Layout containers

def row(*children: Any, spacing: float = 16.0, alignment: str = "top") -> RowNode:
    return RowNode(normalize_children(children), spacing=spacing, alignment=alignment)


def column(*children: Any, spacing: float = 16.0, alignment: str = "leading") -> ColumnNode:
    return ColumnNode(normalize_children(children), spacing=spacing, alignment=alignment)


def section(*children: Any, title: str | None = None) -> SectionNode:
    return SectionNode(normalize_children(children), title=title)


def card(
    *children: Any,
    title: str | None = None,
    subtitle: str | None = None,
    style: CardStyle | None = None,
) -> CardNode:
    return CardNode(
        normalize_children(children),
        title=title,
        subtitle=subtitle,
        style=style or CardStyle(),
    )


# Dynamic structure

def conditional(predicate: Predicate, *children: Any) -> ConditionalNode:
    """Children are live only while ``predicate(values)`` is true."""
    return ConditionalNode(predicate, normalize_children(children))


def dynamic_list(items: Iterable[Any], factory: Callable[[Any], Any]) -> DynamicListNode:
    """
    Generate one subtree per item.

    The factory runs once per item, at construction. It must derive
    distinct field ids from the item (e.g. ``f"guest_{item.id}_name"``).
    """
    items = tuple(items)
    return DynamicListNode(
        items=items,
        factory=factory,
        children=normalize_children(factory(item) for item in items),
    )


def step(title: str, *children: Any, is_valid: Predicate | None = None) -> Step:
    if is_valid is None:
        return Step(title, normalize_children(children))
    return Step(title, normalize_children(children), is_valid)


def stepper(*steps: Step, current_step: int = 0) -> StepperNode:
    if steps and not 0 <= current_step < len(steps):
        raise ValueError(f"current_step {current_step} out of range for {len(steps)} steps")
    return StepperNode(tuple(steps), current_step=current_step)


# Display nodes

def spacer(height: float | None = None, width: float | None = None) -> SpacerNode:
    return SpacerNode(height, width)


def divider(thickness: float = 1.0) -> DividerNode:
    return DividerNode(thickness)


def text(content: str, font: str = "body", alignment: str = "leading") -> TextNode:
    return TextNode(content, font=font, alignment=alignment)


# Root

def form(
    *children: Any,
    title: str = "",
    submit_title: str = "Submit",
    strict_ids: bool | None = None,
) -> FormTree:
    """
    Build an immutable form tree.

    Args:
        children: Root nodes, in display order
        title: Form title
        submit_title: Label of the submit action
        strict_ids: Reject duplicate field ids. If None, uses config.strict_field_ids.

    Raises:
        DuplicateFieldIdError: If strict and two fields share an id.
    """
    if strict_ids is None:
        strict_ids = get_config().strict_field_ids
    return FormTree(
        normalize_children(children),
        title=title,
        submit_title=submit_title,
        strict_ids=strict_ids,
    )
