"""
Form components for form-engine.

This package contains:
- Field descriptors (immutable, copy-on-configure)
- Tree node kinds and the FormTree root
- The builder functions used to assemble a form
- Tree walks (field extraction, visibility, id checks)
"""

from form_engine.components.builder import (
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
from form_engine.components.fields import (
    DateField,
    FieldDescriptor,
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
    FieldNode,
    FormNode,
    RowNode,
    SectionNode,
    SpacerNode,
    Step,
    StepperNode,
    TextNode,
)
from form_engine.components.tree import FormTree
from form_engine.components.walk import iter_fields, visible_nodes

__all__ = [
    # Descriptors
    "FieldDescriptor",
    "TextField",
    "NumberField",
    "ToggleField",
    "DateField",
    "PickerField",
    # Nodes
    "FormNode",
    "FieldNode",
    "RowNode",
    "ColumnNode",
    "SectionNode",
    "CardNode",
    "CardStyle",
    "ConditionalNode",
    "DynamicListNode",
    "Step",
    "StepperNode",
    "SpacerNode",
    "DividerNode",
    "TextNode",
    "FormTree",
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
    # Walks
    "iter_fields",
    "visible_nodes",
]
