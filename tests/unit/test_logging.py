"""Unit tests for structured logging and sinks."""

import json
import logging

import pytest

from prism_intelligence.core.logging import JsonFormatter, LoggingSink, RecordingSink


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="prism_intelligence.tasks",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Task completed: %s",
        args=("example-task",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_renders_message_and_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record(task="example-task", durationMs=1.5)))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "prism_intelligence.tasks"
    assert payload["message"] == "Task completed: example-task"
    assert payload["extra"] == {"task": "example-task", "durationMs": 1.5}
    assert "timestamp" in payload


def test_json_formatter_stringifies_unknown_values() -> None:
    payload = json.loads(JsonFormatter().format(_record(when=object())))

    assert isinstance(payload["extra"]["when"], str)


def test_logging_sink_forwards_fields_as_extra(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingSink(logging.getLogger("prism_intelligence.test"))

    with caplog.at_level(logging.WARNING, logger="prism_intelligence.test"):
        sink.log("warning", "Cost tracking failed", {"task": "t", "model": "m", "name": "x"})

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "Cost tracking failed"
    assert record.task == "t"  # type: ignore[attr-defined]
    assert record.field_name == "x"  # type: ignore[attr-defined]
    assert record.name == "prism_intelligence.test"


def test_recording_sink_filters_by_level() -> None:
    sink = RecordingSink()
    sink.log("info", "one", {"a": 1})
    sink.log("error", "two", {})

    assert sink.messages() == ["one", "two"]
    assert sink.messages("error") == ["two"]
    assert sink.entries[0].fields == {"a": 1}
