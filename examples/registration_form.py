#!/usr/bin/env python3
"""
Registration Form Example

Builds a registration form with a conditional company section, drives a
session the way a rendering layer would (debounced edits, then submit)
and prints what the submit handler receives.

Usage:
    python examples/registration_form.py
"""

import asyncio
import sys
from datetime import date
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from form_engine import (
    EMPTY,
    FormBehavior,
    FormData,
    FormSession,
    SelectionValue,
    card,
    conditional,
    date_picker,
    form,
    number_field,
    picker_field,
    row,
    section,
    text_field,
    toggle_field,
)
from form_engine.tracing import configure_logging, setup_tracing


def build_form():
    return form(
        section(
            row(
                text_field("firstName").required(),
                text_field("lastName").required(),
            ),
            text_field("email").with_label("Email Address").required().email(),
            number_field("age").within(18, 120).with_default(18),
            date_picker("startDate").min_date(date.today()),
            title="Personal Information",
        ),
        toggle_field("hasCompany").with_label("I am registering for a company"),
        conditional(
            lambda values: values.get("hasCompany", EMPTY).bool_value,
            card(
                text_field("companyName").required(),
                picker_field("companySize").with_options("1-10", "11-50", "51+").required(),
                title="Company",
            ),
        ),
        title="Registration",
        submit_title="Create account",
    )


def on_submit(values):
    data = FormData.of(values)
    print("\n" + "=" * 60)
    print("SUBMITTED")
    print("=" * 60)
    for field_id, payload in data.to_dict().items():
        print(f"  {field_id}: {payload!r}")


async def main():
    configure_logging("INFO")

    session = FormSession(build_form(), FormBehavior(auto_scroll=True, debounce_seconds=0.1))
    session.mount()
    setup_tracing(session)
    session.on_submit(on_submit)

    # Typing: only the last edit of a burst is validated
    for partial in ("a", "ad", "ada@", "ada@example.com"):
        session.edit("email", partial)
    await asyncio.sleep(0.2)

    session.commit("firstName", "Ada")
    session.commit("hasCompany", True)

    if not session.submit():
        print(f"\nBlocked, scrolling to '{session.coordinator.submit_target()}'")
        for field_id, result in session.store.get_all_results().items():
            if not result.is_valid:
                print(f"  {field_id}: {', '.join(result.messages)}")

    session.commit("lastName", "Lovelace")
    session.commit("companyName", "Analytical Engines Ltd")
    session.commit("companySize", SelectionValue("1-10"))
    session.submit()

    session.unmount()


if __name__ == "__main__":
    asyncio.run(main())
