"""Tests for FormSession."""

import asyncio

import pytest

from form_engine.components.builder import (
    conditional,
    form,
    number_field,
    step,
    stepper,
    text_field,
    toggle_field,
)
from form_engine.config import FormEngineConfig
from form_engine.coordinator import FormBehavior
from form_engine.exceptions import UnknownFieldError
from form_engine.models.field_value import EMPTY, BooleanValue, NumberValue, TextValue
from form_engine.session import FormSession


def company_on(values):
    return values.get("company", EMPTY).bool_value


@pytest.fixture
def tree():
    return form(
        text_field("name").required(),
        number_field("age").within(18, 120).with_default(18),
        toggle_field("company"),
        conditional(company_on, text_field("companyName").required()),
        title="Signup",
    )


class TestLifecycle:
    """Tests for mounting and unmounting."""

    def test_mount_seeds_initial_values(self, tree):
        """Test kinds with defaults are seeded, others stay unset."""
        session = FormSession(tree)
        session.mount()
        assert session.values == {"age": NumberValue(18), "company": BooleanValue(False)}
        assert session.store.get_all_results() == {}
        assert session.mounted

    def test_mount_keeps_existing_values(self, tree):
        """Test seeding never overwrites a value."""
        session = FormSession(tree)
        session.store.set_value("age", NumberValue(40))
        session.mount()
        assert session.store.get_value("age") == NumberValue(40)

    def test_validate_on_mount(self, tree):
        """Test the mount-time pass validates every live field."""
        session = FormSession(tree, FormBehavior(validate_on_mount=True))
        session.mount()
        assert not session.store.is_form_valid
        assert session.store.invalid_field_ids() == ["name"]

    def test_validate_on_mount_from_config(self, tree):
        """Test the default behavior follows the configuration."""
        session = FormSession(tree, config=FormEngineConfig(validate_on_mount=True))
        assert session.behavior.validate_on_mount

    def test_bounded_number_mounts_in_range(self):
        """Test a bounded number field without a default mounts valid."""
        tree = form(number_field("age").within(18, 120))
        with FormSession(tree, FormBehavior(validate_on_mount=True)) as session:
            assert session.store.get_value("age") == NumberValue(18)
            assert session.store.is_form_valid

    def test_context_manager_unmounts(self, tree):
        """Test leaving the block drops all state and listeners."""
        with FormSession(tree) as session:
            session.commit("name", "Ada")
        assert session.values == {}
        assert not session.mounted
        assert session.store.value_changed.subscriber_count == 0

    def test_remount_follows_conditionals_again(self, tree):
        """Test a session mounted again after unmount still clears hidden results."""
        session = FormSession(tree)
        session.mount()
        session.unmount()
        session.mount()
        assert len(session.evaluators) == 1
        session.commit("name", "Ada")
        session.commit("company", True)
        assert not session.submit()
        session.commit("company", False)
        assert session.store.get_validation_result("companyName") is None
        assert session.submit()
        session.unmount()

    def test_mount_twice_attaches_once(self, tree):
        """Test a second mount does not duplicate conditional listeners."""
        session = FormSession(tree)
        session.mount()
        session.mount()
        assert len(session.evaluators) == 1
        assert session.store.value_changed.subscriber_count == 1
        session.unmount()


class TestEditing:
    """Tests for commit and edit."""

    def test_commit_validates(self, tree):
        """Test an immediate commit stores a result."""
        with FormSession(tree) as session:
            result = session.commit("name", "")
            assert result.codes == ["required"]
            assert session.commit("name", TextValue("Ada")).is_valid
            assert session.store.is_form_valid

    def test_commit_without_validate_on_change(self, tree):
        """Test values are stored but not validated."""
        with FormSession(tree, FormBehavior(validate_on_change=False)) as session:
            assert session.commit("name", "") is None
            assert session.store.get_validation_result("name") is None

    def test_commit_accepts_plain_values(self, tree):
        """Test plain Python values are converted."""
        with FormSession(tree) as session:
            session.commit("age", 42)
            assert session.store.get_value("age") == NumberValue(42)

    def test_unknown_field(self, tree):
        """Test operations on unknown ids raise."""
        with FormSession(tree) as session:
            with pytest.raises(UnknownFieldError):
                session.commit("nope", "x")
            with pytest.raises(UnknownFieldError):
                session.validate_field("nope")

    def test_edit_debounces(self, tree):
        """Test rapid edits are validated once, with the last value."""

        async def scenario():
            session = FormSession(tree, FormBehavior(debounce_seconds=0.01))
            session.mount()
            results = []
            session.store.validity_changed.subscribe(results.append)
            session.edit("name", "")
            task = session.edit("name", "Ada")
            assert session.store.get_validation_result("name") is None
            await task
            assert session.store.get_validation_result("name").is_valid
            assert results == [True]
            session.unmount()

        asyncio.run(scenario())

    def test_hidden_field_not_validated_on_change(self, tree):
        """Test edits to hidden fields are stored but not validated."""
        with FormSession(tree) as session:
            assert session.commit("companyName", "") is None
            assert session.store.get_value("companyName") == TextValue("")
            assert session.store.is_form_valid


class TestConditionalFields:
    """Tests for conditional activation inside a session."""

    def test_live_and_visible(self, tree):
        """Test live fields and the visible tree follow the toggle."""
        with FormSession(tree) as session:
            assert "companyName" not in [d.id for d in session.live_fields()]
            assert len(session.visible_nodes()) == 3
            session.commit("company", True)
            assert session.is_live("companyName")
            assert len(session.visible_nodes()) == 4

    def test_deactivation_clears_results(self, tree):
        """Test hiding a branch drops its results but keeps its values."""
        with FormSession(tree) as session:
            session.commit("company", True)
            session.commit("companyName", "")
            assert not session.store.is_form_valid
            session.commit("company", False)
            assert session.store.get_validation_result("companyName") is None
            assert session.store.get_value("companyName") == TextValue("")
            assert session.store.is_form_valid

    def test_deactivation_cancels_pending_validation(self, tree):
        """Test a pending validation for a hidden field never lands."""

        async def scenario():
            session = FormSession(tree, FormBehavior(debounce_seconds=0.01))
            session.mount()
            session.commit("company", True)
            session.edit("companyName", "")
            assert session.scheduler.pending("companyName")
            session.commit("company", False)
            assert not session.scheduler.pending("companyName")
            await asyncio.sleep(0.03)
            assert session.store.get_validation_result("companyName") is None
            session.unmount()

        asyncio.run(scenario())


class TestSubmit:
    """Tests for submission through the session."""

    def test_submit_end_to_end(self, tree):
        """Test blocked and successful submission with a form data view."""
        with FormSession(tree) as session:
            submitted = []
            session.on_submit(submitted.append)
            assert not session.submit()
            assert not session.can_submit
            session.commit("name", "Ada")
            assert session.submit()
            assert len(submitted) == 1
            assert session.form_data().get_string("name") == "Ada"
            assert session.form_data().get_number("age") == 18.0

    def test_validate_all(self, tree):
        """Test validating every live field at once."""
        with FormSession(tree) as session:
            assert not session.validate_all()
            session.commit("name", "Ada")
            assert session.validate_all()


class TestSteps:
    """Tests for per-step validation."""

    @pytest.fixture
    def wizard(self):
        return form(
            stepper(
                step("Account", text_field("email").required().email()),
                step(
                    "Profile",
                    number_field("age"),
                    is_valid=lambda values: values.get("age", EMPTY).to_python() != 0,
                ),
            )
        )

    def test_validate_step(self, wizard):
        """Test field rules and the step gate both count."""
        with FormSession(wizard) as session:
            assert not session.validate_step(0)
            session.commit("email", "ada@example.com")
            assert session.validate_step(0)
            assert not session.validate_step(1)
            session.commit("age", 36)
            assert session.validate_step(1)

    def test_validate_step_without_stepper(self, tree):
        """Test forms without a stepper reject step validation."""
        with FormSession(tree) as session:
            with pytest.raises(ValueError):
                session.validate_step(0)
