import io
import json
import logging
from typing import Any

import pytest
from structlog.testing import capture_logs

from riftcoach.config.settings import reset_settings
from riftcoach.core.analysis import analyze_match
from riftcoach.core.observability import (
    _redact_obj,
    bind_match_context,
    clear_match_context,
    configure_logging,
    trace_analysis,
)


def test_trace_analysis_logs_start_and_finish() -> None:
    @trace_analysis(log_level="INFO")
    def _add(a: int, *, b: int) -> int:
        return a + b

    with capture_logs() as cap:
        assert _add(1, b=2) == 3

    events = [e["event"] for e in cap]
    assert events == ["analysis_started", "analysis_finished"]
    assert cap[0]["kwargs"] == {"b": 2}
    assert set(cap[0]) == {"event", "log_level", "function", "execution_id", "kwargs"}
    assert cap[0]["execution_id"] == cap[1]["execution_id"]
    assert cap[1]["duration_ms"] >= 0


def test_trace_analysis_logs_and_reraises_failures() -> None:
    @trace_analysis()
    def _boom() -> None:
        raise ValueError("bad input")

    with capture_logs() as cap, pytest.raises(ValueError, match="bad input"):
        _boom()

    failure = cap[-1]
    assert failure["event"] == "analysis_failed"
    assert failure["log_level"] == "error"
    assert failure["error_type"] == "ValueError"
    assert "Traceback" in failure["traceback"]


def test_trace_analysis_can_skip_kwargs() -> None:
    @trace_analysis(capture_kwargs=False)
    def _noop(*, secret: str) -> None:
        return None

    with capture_logs() as cap:
        _noop(secret="hunter2")

    assert cap[0]["kwargs"] is None


def test_sensitive_keys_are_masked() -> None:
    payload: dict[str, Any] = {"puuid": "abcdefghijklmnop", "nested": {"api_key": "short"}, "role": "TOP"}

    redacted = _redact_obj(payload)

    assert redacted["puuid"] == "abcd…nop"
    assert redacted["nested"]["api_key"] == "***"
    assert redacted["role"] == "TOP"


def test_match_context_binding_is_reversible() -> None:
    import structlog

    bind_match_context("EUW1_1", 3)
    assert structlog.contextvars.get_contextvars()["match_id"] == "EUW1_1"
    clear_match_context()
    assert "match_id" not in structlog.contextvars.get_contextvars()


@pytest.fixture
def restore_logging():
    yield
    configure_logging("INFO", json_output=False)


def _run_analysis(match_factory, timeline_factory) -> None:
    match = match_factory()
    analyze_match(match, timeline_factory(10), match.participant(1).puuid)


def test_analysis_writes_nothing_to_stdout(match_factory, timeline_factory, capsys, restore_logging) -> None:
    configure_logging()

    _run_analysis(match_factory, timeline_factory)

    assert capsys.readouterr().out == ""


def test_json_lines_reach_the_configured_stream(
    match_factory, timeline_factory, capsys, restore_logging
) -> None:
    buffer = io.StringIO()
    configure_logging("INFO", json_output=True, stream=buffer)

    _run_analysis(match_factory, timeline_factory)

    records = [json.loads(line) for line in buffer.getvalue().splitlines()]
    assert [r["event"] for r in records] == ["analysis_started", "analysis_assembled", "analysis_finished"]
    assert records[1]["match_id"] == "EUW1_7000000001"
    assert records[0]["logger"] == "riftcoach.core.observability"
    assert capsys.readouterr().out == ""


def test_settings_drive_level_and_format(
    monkeypatch, match_factory, timeline_factory, restore_logging
) -> None:
    monkeypatch.setenv("RIFTCOACH_LOG_LEVEL", "warning")
    monkeypatch.setenv("RIFTCOACH_LOG_JSON", "true")
    reset_settings()
    buffer = io.StringIO()

    configure_logging(stream=buffer)
    _run_analysis(match_factory, timeline_factory)

    assert logging.getLogger("riftcoach").level == logging.WARNING
    assert buffer.getvalue() == ""


def test_reconfiguring_replaces_the_stream_handler(restore_logging) -> None:
    configure_logging("INFO", stream=io.StringIO())
    configure_logging("INFO", stream=io.StringIO())

    assert len(logging.getLogger("riftcoach").handlers) == 1

    configure_logging("INFO")

    assert logging.getLogger("riftcoach").handlers == []
