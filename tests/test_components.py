"""Tests for field descriptors, the builder API and tree walks."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

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
from form_engine.components.fields import TextField, default_label
from form_engine.components.nodes import (
    CardNode,
    ConditionalNode,
    FieldNode,
    RowNode,
    SectionNode,
    StepperNode,
)
from form_engine.exceptions import DuplicateFieldIdError, UnknownFieldError
from form_engine.models.field_value import EMPTY, BooleanValue, NumberValue
from form_engine.validation.rules import (
    DateRange,
    Email,
    MinLength,
    NumberRange,
    OneOf,
    Required,
)


def newsletter_on(values):
    return values.get("newsletter", EMPTY).bool_value


class TestFieldDescriptor:
    """Tests for immutable descriptor configuration."""

    def test_default_label(self):
        """Test labels derived from ids."""
        assert default_label("firstName") == "First Name"
        assert default_label("postal_code") == "Postal Code"
        assert text_field("email").label == "Email"

    def test_configuration_returns_new_descriptor(self):
        """Test that configuring never mutates the original."""
        base = text_field("email")
        configured = base.with_label("Email Address").required().email()
        assert base.label == "Email"
        assert base.rules == ()
        assert configured.label == "Email Address"
        assert configured.is_required
        assert configured.rules == (Required(), Email())

    def test_descriptor_is_frozen(self):
        """Test that descriptors reject attribute assignment."""
        descriptor = text_field("name")
        with pytest.raises(ValidationError):
            descriptor.label = "Other"

    def test_required_added_once(self):
        """Test that required() is idempotent and can be undone."""
        descriptor = text_field("name").required().required()
        assert descriptor.rules.count(Required()) == 1
        optional = descriptor.required(False)
        assert not optional.is_required
        assert Required() not in optional.rules

    def test_empty_id_rejected(self):
        """Test that ids must be non-empty."""
        with pytest.raises(ValidationError):
            TextField("")

    def test_text_rules_in_order(self):
        """Test text helpers append rules in call order."""
        descriptor = text_field("bio").min_length(10).max_length(200).as_multiline()
        assert descriptor.multiline
        assert [type(rule).__name__ for rule in descriptor.validation_rules] == [
            "MinLength",
            "MaxLength",
        ]

    def test_number_field(self):
        """Test number constraints and initial value."""
        descriptor = number_field("age").within(18, 120).with_step(1).with_default(30)
        assert descriptor.validation_rules == (NumberRange(18, 120),)
        assert descriptor.initial_value() == NumberValue(30)
        with pytest.raises(ValueError):
            number_field("age").within(10, 1)
        with pytest.raises(ValueError):
            number_field("age").with_step(0)

    def test_number_default_follows_range(self):
        """Test a bounded number field mounts inside its range."""
        assert number_field("age").initial_value() == NumberValue(0)
        assert number_field("age").within(18, 120).initial_value() == NumberValue(18)
        assert number_field("delta").within(-10, 10).initial_value() == NumberValue(0)
        assert number_field("debt").within(None, -5).initial_value() == NumberValue(-5)
        explicit = number_field("age").with_default(30).within(18, 120)
        assert explicit.initial_value() == NumberValue(30)

    def test_configuration_is_validated(self):
        """Test configuration methods run the same checks as construction."""
        with pytest.raises(ValidationError):
            toggle_field("terms").with_default("x")
        with pytest.raises(ValidationError):
            number_field("age").with_default("many")
        assert text_field("email").with_label("Email Address").with_label("").label == "Email"
        assert date_picker("start").min_date(date(2024, 1, 1)).earliest == datetime(2024, 1, 1)

    def test_toggle_field(self):
        """Test toggle default seeds a boolean."""
        assert toggle_field("terms").initial_value() == BooleanValue(False)
        assert toggle_field("news").with_default(True).initial_value() == BooleanValue(True)

    def test_date_field(self):
        """Test date bounds are promoted to datetimes."""
        descriptor = date_picker("start").between(date(2024, 1, 1), date(2024, 12, 31))
        assert descriptor.earliest == datetime(2024, 1, 1)
        assert descriptor.constraint_rules() == (
            DateRange(datetime(2024, 1, 1), datetime(2024, 12, 31)),
        )
        assert date_picker("start").initial_value() is None

    def test_picker_field(self):
        """Test options given as arguments or one iterable."""
        assert picker_field("c").with_options("a", "b").options == ("a", "b")
        assert picker_field("c").with_options(["a", "b", "a"]).options == ("a", "b")
        assert picker_field("c").with_options("a").constraint_rules() == (OneOf(("a",)),)
        assert picker_field("c").allow_multiple().multiple

    def test_descriptor_hashable(self):
        """Test descriptors can be used as dict keys."""
        assert hash(text_field("a").min_length(2)) == hash(text_field("a").min_length(2))
        assert text_field("a").min_length(2) != text_field("a").min_length(3)
        assert MinLength(2) in text_field("a").min_length(2).rules


class TestBuilder:
    """Tests for the builder functions."""

    def test_descriptors_wrapped(self):
        """Test that descriptors become field nodes."""
        node = row(text_field("first"), text_field("last"), spacing=8)
        assert isinstance(node, RowNode)
        assert node.spacing == 8
        assert all(isinstance(child, FieldNode) for child in node.children)

    def test_children_flattened_and_none_dropped(self):
        """Test lists flatten and None entries disappear."""
        node = column([text_field("a"), [text_field("b")]], None, divider())
        assert len(node.children) == 3

    def test_bad_child_rejected(self):
        """Test builder TypeError for unsupported children."""
        with pytest.raises(TypeError):
            section(42, title="Bad")

    def test_section_and_card(self):
        """Test titled containers."""
        node = section(text_field("name"), title="Personal")
        assert isinstance(node, SectionNode)
        assert node.title == "Personal"
        boxed = card(text_field("x"), title="Box", subtitle="Sub")
        assert isinstance(boxed, CardNode)
        assert boxed.style.corner_radius == 12.0

    def test_section_children_are_positional(self):
        """Test an untitled section keeps its first child as a child."""
        node = section(row(text_field("a"), text_field("b")))
        assert node.title is None
        assert isinstance(node.children[0], RowNode)

    def test_display_nodes(self):
        """Test display nodes carry no fields."""
        tree = form(spacer(height=10), divider(2), text("Hello", font="title"))
        assert tree.fields() == []
        assert len(tree.children) == 3

    def test_dynamic_list_expands_at_construction(self):
        """Test one subtree per item."""
        node = dynamic_list(["ada", "bob"], lambda name: text_field(f"guest_{name}"))
        assert [child.descriptor.id for child in node.children] == ["guest_ada", "guest_bob"]

    def test_stepper(self):
        """Test steps and the current step bound."""
        node = stepper(step("One", text_field("a")), step("Two", text_field("b")), current_step=1)
        assert isinstance(node, StepperNode)
        assert node.steps[1].title == "Two"
        assert node.steps[0].is_valid({})
        with pytest.raises(ValueError):
            stepper(step("One"), current_step=3)

    def test_node_ids(self):
        """Test field nodes are keyed by field id, others get a generated id."""
        tree = form(section(text_field("a")))
        section_node = tree.children[0]
        assert section_node.children[0].node_id == "a"
        assert len(section_node.node_id) == 32


class TestFormTree:
    """Tests for the composed form tree."""

    @pytest.fixture
    def tree(self):
        return form(
            section(
                row(text_field("firstName").required(), text_field("lastName").required()),
                text_field("email").required().email(),
                title="Personal",
            ),
            toggle_field("newsletter"),
            conditional(
                newsletter_on,
                picker_field("frequency").with_options("daily", "weekly"),
                conditional(lambda values: True, text_field("topic")),
            ),
            stepper(step("Extra", number_field("age"))),
            title="Registration",
        )

    def test_fields_in_tree_order(self, tree):
        """Test the full walk visits every field in order."""
        assert tree.field_ids() == [
            "firstName",
            "lastName",
            "email",
            "newsletter",
            "frequency",
            "topic",
            "age",
        ]

    def test_live_fields_skip_inactive_conditionals(self, tree):
        """Test inactive branches (and their nested conditionals) are skipped."""
        live = [d.id for d in tree.fields({"newsletter": BooleanValue(False)})]
        assert "frequency" not in live
        assert "topic" not in live
        live = [d.id for d in tree.fields({"newsletter": BooleanValue(True)})]
        assert "frequency" in live
        assert "topic" in live

    def test_field_lookup(self, tree):
        """Test looking up descriptors by id."""
        assert tree.field("email").is_required
        with pytest.raises(UnknownFieldError) as exc_info:
            tree.field("missing")
        assert exc_info.value.field_id == "missing"

    def test_conditionals_and_steppers(self, tree):
        """Test nested conditionals and steppers are found."""
        assert len(tree.conditionals()) == 2
        assert all(isinstance(node, ConditionalNode) for node in tree.conditionals())
        assert len(tree.steppers()) == 1

    def test_visible_tree(self, tree):
        """Test the visible tree drops inactive conditionals."""
        hidden = tree.visible({})
        assert not any(isinstance(node, ConditionalNode) for node in hidden)
        shown = tree.visible({"newsletter": BooleanValue(True)})
        assert any(isinstance(node, ConditionalNode) for node in shown)

    def test_duplicate_ids_rejected(self):
        """Test duplicates across exclusive branches fail fast."""
        with pytest.raises(DuplicateFieldIdError) as exc_info:
            form(
                conditional(lambda values: True, text_field("x")),
                conditional(lambda values: False, text_field("x")),
            )
        assert exc_info.value.field_id == "x"

    def test_duplicate_ids_in_dynamic_list(self):
        """Test a factory that ignores its item is caught."""
        with pytest.raises(DuplicateFieldIdError):
            form(dynamic_list([1, 2], lambda item: text_field("guest")))

    def test_strict_ids_can_be_disabled(self):
        """Test non-strict trees accept duplicates."""
        tree = form(text_field("x"), text_field("x"), strict_ids=False)
        assert tree.field_ids() == ["x", "x"]
