"""
Form tree traversal.

Every traversal dispatches on the closed set of node kinds with ``match``.
Passing a value map switches a walk to "live" mode: conditional branches
whose predicate is false are skipped. Without a value map every branch is
visited, which is what uniqueness checks need.
"""

from dataclasses import replace
from typing import Iterable, Iterator

from form_engine.components.fields import FieldDescriptor
from form_engine.components.nodes import (
    CardNode,
    ColumnNode,
    ConditionalNode,
    DividerNode,
    DynamicListNode,
    FieldNode,
    FormNode,
    RowNode,
    SectionNode,
    SpacerNode,
    StepperNode,
    TextNode,
    ValueMap,
)
from form_engine.exceptions import DuplicateFieldIdError


def child_nodes(node: FormNode) -> tuple[FormNode, ...]:
    """Direct children of a node; steps of a stepper are concatenated."""
    match node:
        case FieldNode() | SpacerNode() | DividerNode() | TextNode():
            return ()
        case (
            RowNode(children=children)
            | ColumnNode(children=children)
            | SectionNode(children=children)
            | CardNode(children=children)
            | ConditionalNode(children=children)
            | DynamicListNode(children=children)
        ):
            return children
        case StepperNode(steps=steps):
            return tuple(child for step in steps for child in step.children)
        case _:
            raise TypeError(f"Unknown form node: {type(node).__name__}")


def iter_nodes(nodes: Iterable[FormNode], values: ValueMap | None = None) -> Iterator[FormNode]:
    """Pre-order walk. With ``values``, inactive conditional subtrees are skipped."""
    for node in nodes:
        if isinstance(node, ConditionalNode) and values is not None and not node.is_active(values):
            continue
        yield node
        yield from iter_nodes(child_nodes(node), values)


def iter_fields(
    nodes: Iterable[FormNode], values: ValueMap | None = None
) -> Iterator[FieldDescriptor]:
    """Field descriptors in tree order, through every grouping node kind."""
    for node in iter_nodes(nodes, values):
        if isinstance(node, FieldNode):
            yield node.descriptor


def iter_conditionals(nodes: Iterable[FormNode]) -> Iterator[ConditionalNode]:
    """Every conditional node, nested ones included, regardless of activation."""
    for node in iter_nodes(nodes):
        if isinstance(node, ConditionalNode):
            yield node


def check_unique_ids(nodes: Iterable[FormNode]) -> None:
    """
    Fail fast when two fields share an id anywhere in the tree.

    Mutually exclusive conditional branches and list items are included:
    their state would alias in the store otherwise.

    Raises:
        DuplicateFieldIdError: On the first repeated id.
    """
    seen: set[str] = set()
    for descriptor in iter_fields(nodes):
        if descriptor.id in seen:
            raise DuplicateFieldIdError(descriptor.id)
        seen.add(descriptor.id)


def visible_nodes(nodes: Iterable[FormNode], values: ValueMap) -> tuple[FormNode, ...]:
    """Copy of the tree with inactive conditional subtrees removed."""
    visible: list[FormNode] = []
    for node in nodes:
        match node:
            case ConditionalNode() if not node.is_active(values):
                continue
            case FieldNode() | SpacerNode() | DividerNode() | TextNode():
                visible.append(node)
            case StepperNode(steps=steps):
                pruned = tuple(
                    replace(step, children=visible_nodes(step.children, values)) for step in steps
                )
                visible.append(replace(node, steps=pruned))
            case _:
                visible.append(replace(node, children=visible_nodes(child_nodes(node), values)))
    return tuple(visible)
