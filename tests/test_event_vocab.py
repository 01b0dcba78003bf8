"""
Contract test for event vocabulary enforcement.

The logging surface must reject unknown event types to keep aggregation stable.
"""

import io
import json

import pytest

from loadcheck.logging import emit_event


def test_emit_event_rejects_invalid_event_type() -> None:
    """
    Unknown event types must raise ValueError.
    """
    with pytest.raises(ValueError, match="invalid event_type"):
        emit_event("not_a_real_event", check_version="0.1.0")


def test_emit_event_writes_one_json_line_to_stderr(capsys) -> None:
    """
    Events never touch stdout; stdout belongs to the report line
    """
    emit_event("load_sampled", check_version="0.1.0", load=[0.1, 0.2, 0.15])

    captured = capsys.readouterr()
    assert captured.out == ""

    payload = json.loads(captured.err.strip())
    assert payload["event_type"] == "load_sampled"
    assert payload["check_version"] == "0.1.0"
    assert payload["load"] == [0.1, 0.2, 0.15]
    assert "utc_now" in payload


def test_emit_event_truncates_long_messages() -> None:
    stream = io.StringIO()
    emit_event("collector_failed", check_version="0.1.0", stream=stream, message="x" * 500)

    payload = json.loads(stream.getvalue())
    assert payload["message"].startswith("x" * 200)
    assert payload["message"].endswith("...[truncated 300 chars]")
