"""
Tracing for form-engine sessions.

Trace processors subscribe to a session's channels and record value,
validity and submit events. Console output goes through the
``form_engine.trace`` logger; file output is JSON Lines.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from form_engine.config import get_config
from form_engine.models.field_value import FieldValueBase
from form_engine.session import FormSession
from form_engine.state.events import Subscription

trace_logger = logging.getLogger("form_engine.trace")


class TraceProcessor:
    """Base processor. Subclasses override the hooks they care about."""

    def on_value_changed(self, form: str, values: dict[str, FieldValueBase]) -> None:
        """Called after every value write."""

    def on_validity_changed(self, form: str, is_valid: bool) -> None:
        """Called after every validation result write."""

    def on_submitted(self, form: str, values: dict[str, FieldValueBase]) -> None:
        """Called when submit handlers receive the values."""

    def attach(self, session: FormSession) -> list[Subscription]:
        """Subscribe to a session's channels."""
        form = session.tree.title
        return [
            session.store.value_changed.subscribe(lambda values: self.on_value_changed(form, values)),
            session.store.validity_changed.subscribe(lambda valid: self.on_validity_changed(form, valid)),
            session.coordinator.submitted.subscribe(lambda values: self.on_submitted(form, values)),
        ]


class ConsoleTraceProcessor(TraceProcessor):
    """
    Logs session events to the console.

    Useful for development and debugging.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the console trace processor.

        Args:
            verbose: If True, log every value write with the full value map.
        """
        self.verbose = verbose

    def on_value_changed(self, form: str, values: dict[str, FieldValueBase]) -> None:
        if self.verbose:
            rendered = {field_id: value.string_value for field_id, value in values.items()}
            trace_logger.info("[VALUES] %s %s", form, rendered)

    def on_validity_changed(self, form: str, is_valid: bool) -> None:
        trace_logger.info("[VALIDITY] %s %s", form, "valid" if is_valid else "invalid")

    def on_submitted(self, form: str, values: dict[str, FieldValueBase]) -> None:
        trace_logger.info("[SUBMIT] %s (%d value(s))", form, len(values))


class FileTraceProcessor(TraceProcessor):
    """
    Appends session events to a JSON Lines file.

    Useful for persistent logging and later analysis.
    """

    def __init__(self, file_path: str = "traces.jsonl"):
        """
        Initialize the file trace processor.

        Args:
            file_path: Path to the output file (JSON Lines format).
        """
        self.file_path = file_path

    def on_value_changed(self, form: str, values: dict[str, FieldValueBase]) -> None:
        self._write("value_changed", form, values=_dump_values(values))

    def on_validity_changed(self, form: str, is_valid: bool) -> None:
        self._write("validity_changed", form, is_valid=is_valid)

    def on_submitted(self, form: str, values: dict[str, FieldValueBase]) -> None:
        self._write("submitted", form, values=_dump_values(values))

    def _write(self, event: str, form: str, **payload: Any) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "form": form,
            **payload,
        }
        with open(self.file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")


def _dump_values(values: dict[str, FieldValueBase]) -> dict[str, dict]:
    return {field_id: value.model_dump(mode="json") for field_id, value in values.items()}


def setup_tracing(
    session: FormSession,
    console: bool = True,
    verbose: bool = False,
    file_path: str | None = None,
) -> list[Subscription]:
    """
    Attach trace processors to a session.

    Args:
        session: The session to trace.
        console: Whether to log events to the console.
        verbose: Whether to log every value write.
        file_path: Optional JSON Lines file; defaults to the configured trace file.

    Returns:
        Subscriptions to cancel when tracing should stop.

    Example:
        >>> from form_engine.tracing import setup_tracing
        >>> subscriptions = setup_tracing(session, verbose=True)
        >>> # Every edit and submit of the session is now traced
    """
    file_path = file_path or session.config.trace_file

    processors: list[TraceProcessor] = []

    if console:
        processors.append(ConsoleTraceProcessor(verbose=verbose))

    if file_path:
        processors.append(FileTraceProcessor(file_path=file_path))

    subscriptions: list[Subscription] = []
    for processor in processors:
        subscriptions.extend(processor.attach(session))
    return subscriptions


def configure_logging(level: str | None = None) -> None:
    """
    Send form-engine logs to stderr. Meant for apps and scripts, not libraries.

    Args:
        level: Log level name; defaults to the configured level.
    """
    level = (level or get_config().log_level).upper()
    logger = logging.getLogger("form_engine")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
