"""
Form tree nodes.

The tree is a closed set of node kinds. Nodes are frozen dataclasses and
consumers dispatch on them with ``match``; ``FormNode`` is the union of
every kind. Layout and display nodes carry no form state: their
``node_id`` only exists so a renderer can key them.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Union

from form_engine.components.fields import FieldDescriptor
from form_engine.models.field_value import FieldValueBase

ValueMap = Mapping[str, FieldValueBase]
Predicate = Callable[[ValueMap], bool]


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class FieldNode:
    """Leaf wrapping one field descriptor."""

    descriptor: FieldDescriptor

    @property
    def node_id(self) -> str:
        return self.descriptor.id


@dataclass(frozen=True)
class RowNode:
    children: tuple["FormNode", ...]
    spacing: float = 16.0
    alignment: str = "top"
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class ColumnNode:
    children: tuple["FormNode", ...]
    spacing: float = 16.0
    alignment: str = "leading"
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class SectionNode:
    children: tuple["FormNode", ...]
    title: str | None = None
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class CardStyle:
    padding: float = 16.0
    corner_radius: float = 12.0
    shadow_radius: float = 2.0
    border_width: float = 0.0


@dataclass(frozen=True)
class CardNode:
    children: tuple["FormNode", ...]
    title: str | None = None
    subtitle: str | None = None
    style: CardStyle = CardStyle()
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class ConditionalNode:
    """Subtree shown only while ``predicate(values)`` is true."""

    predicate: Predicate
    children: tuple["FormNode", ...]
    node_id: str = field(default_factory=_new_id, kw_only=True)

    def is_active(self, values: ValueMap) -> bool:
        return bool(self.predicate(values))


@dataclass(frozen=True)
class DynamicListNode:
    """One generated subtree per item; ``children`` holds the expansion."""

    items: tuple[Any, ...]
    factory: Callable[[Any], Any]
    children: tuple["FormNode", ...]
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class Step:
    """One page of a multi-step form.

    ``is_valid`` is an extra gate over the value map, checked on top of
    the step's own field validation.
    """

    title: str
    children: tuple["FormNode", ...]
    is_valid: Predicate = lambda values: True
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class StepperNode:
    steps: tuple[Step, ...]
    current_step: int = 0
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class SpacerNode:
    height: float | None = None
    width: float | None = None
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class DividerNode:
    thickness: float = 1.0
    node_id: str = field(default_factory=_new_id, kw_only=True)


@dataclass(frozen=True)
class TextNode:
    text: str
    font: str = "body"
    alignment: str = "leading"
    node_id: str = field(default_factory=_new_id, kw_only=True)


FormNode = Union[
    FieldNode,
    RowNode,
    ColumnNode,
    SectionNode,
    CardNode,
    ConditionalNode,
    DynamicListNode,
    StepperNode,
    SpacerNode,
    DividerNode,
    TextNode,
]

NODE_TYPES = (
    FieldNode,
    RowNode,
    ColumnNode,
    SectionNode,
    CardNode,
    ConditionalNode,
    DynamicListNode,
    StepperNode,
    SpacerNode,
    DividerNode,
    TextNode,
)


def normalize_children(children: Iterable[Any]) -> tuple[FormNode, ...]:
    """
    Turn builder input into a flat tuple of nodes.

    Descriptors are wrapped in FieldNode, nested lists and tuples are
    flattened and None entries are dropped, so optional and generated
    children can be written inline.

    Raises:
        TypeError: If a child is not a node, a descriptor, a sequence or None.
    """
    nodes: list[FormNode] = []
    for child in children:
        if child is None:
            continue
        if isinstance(child, NODE_TYPES):
            nodes.append(child)
        elif isinstance(child, FieldDescriptor):
            nodes.append(FieldNode(child))
        elif isinstance(child, (list, tuple)):
            nodes.extend(normalize_children(child))
        else:
            raise TypeError(f"Cannot use {type(child).__name__} as a form node")
    return tuple(nodes)
