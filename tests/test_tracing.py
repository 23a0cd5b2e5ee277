"""Tests for session tracing and logging setup."""

import json
import logging

import pytest

from form_engine.components.builder import form, text_field
from form_engine.config import FormEngineConfig
from form_engine.session import FormSession
from form_engine.tracing import (
    ConsoleTraceProcessor,
    FileTraceProcessor,
    configure_logging,
    setup_tracing,
)


@pytest.fixture
def session():
    session = FormSession(form(text_field("name").required(), title="Signup"))
    session.mount()
    yield session
    session.unmount()


class TestConsoleTracing:
    """Tests for console tracing."""

    def test_logs_validity_and_submit(self, session, caplog):
        """Test validity and submit events reach the trace logger."""
        ConsoleTraceProcessor().attach(session)
        with caplog.at_level(logging.INFO, logger="form_engine.trace"):
            session.commit("name", "Ada")
            session.submit()
        messages = [record.getMessage() for record in caplog.records if record.name == "form_engine.trace"]
        assert "[VALIDITY] Signup valid" in messages
        assert "[SUBMIT] Signup (1 value(s))" in messages
        assert not any(message.startswith("[VALUES]") for message in messages)

    def test_verbose_logs_values(self, session, caplog):
        """Test verbose mode logs every value write."""
        ConsoleTraceProcessor(verbose=True).attach(session)
        with caplog.at_level(logging.INFO, logger="form_engine.trace"):
            session.commit("name", "Ada")
        assert any("[VALUES] Signup {'name': 'Ada'}" == r.getMessage() for r in caplog.records)


class TestFileTracing:
    """Tests for JSON Lines tracing."""

    def test_writes_records(self, session, tmp_path):
        """Test one JSON record per event."""
        path = tmp_path / "traces.jsonl"
        FileTraceProcessor(str(path)).attach(session)
        session.commit("name", "Ada")
        session.submit()
        records = [json.loads(line) for line in path.read_text().splitlines()]
        events = [record["event"] for record in records]
        assert events[0] == "value_changed"
        assert events[-1] == "submitted"
        assert records[0]["values"] == {"name": {"kind": "text", "value": "Ada"}}
        assert all(record["form"] == "Signup" for record in records)


class TestSetupTracing:
    """Tests for setup_tracing."""

    def test_returns_cancellable_subscriptions(self, session, tmp_path):
        """Test tracing stops once its subscriptions are cancelled."""
        path = tmp_path / "traces.jsonl"
        subscriptions = setup_tracing(session, console=True, file_path=str(path))
        assert len(subscriptions) == 6
        for subscription in subscriptions:
            subscription.cancel()
        session.commit("name", "Ada")
        assert not path.exists()

    def test_trace_file_from_config(self, tmp_path):
        """Test the configured trace file is used by default."""
        path = tmp_path / "configured.jsonl"
        session = FormSession(
            form(text_field("name")), config=FormEngineConfig(trace_file=str(path))
        )
        setup_tracing(session, console=False)
        session.commit("name", "x")
        assert path.exists()

    def test_nothing_attached(self, session):
        """Test no processors means no subscriptions."""
        assert setup_tracing(session, console=False) == []


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_once(self):
        """Test the package logger gets one handler and the requested level."""
        logger = logging.getLogger("form_engine")
        try:
            configure_logging("debug")
            configure_logging("INFO")
            assert logger.level == logging.INFO
            assert len(logger.handlers) == 1
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
