"""
loadcheck.logging
AUTHOR: carter-vin

Diagnostic events for a single check run (--verbose)

Each event is one compact JSON object on stderr, so the report line on
stdout stays untouched for the scheduler. Event names come from a fixed
list that follows the pipeline: start, thresholds, sample, scale, status,
process listing, finish.
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

VALID_EVENT_TYPES = {
    "check_start",
    "thresholds_parsed",
    "load_sampled",
    "load_scaled",
    "status_evaluated",
    "collector_failed",
    "command_stderr",
    "process_report_failed",
    "check_finished",
}

# uptime/ps stderr can be arbitrarily long
MESSAGE_LIMIT = 200


def _shorten(text: str, limit: int = MESSAGE_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + f"...[truncated {len(text) - limit} chars]"


def event_timestamp() -> str:
    """UTC, ISO 8601"""
    return datetime.now(timezone.utc).isoformat()


def emit_event(
    event_type: str,
    *,
    check_version: str,
    stream: Optional[TextIO] = None,
    **fields: Any,
) -> None:
    """
    Write one diagnostic event for the current check run

    event_type must be one of VALID_EVENT_TYPES (ValueError otherwise).
    Every event carries event_type, utc_now and check_version; a string
    `message` field is shortened to MESSAGE_LIMIT characters.
    Defaults to stderr when no stream is given.
    """
    if event_type not in VALID_EVENT_TYPES:
        raise ValueError(f"invalid event_type: {event_type}")

    message = fields.get("message")
    if isinstance(message, str):
        fields["message"] = _shorten(message)

    payload: dict[str, Any] = {
        **fields,
        "event_type": event_type,
        "utc_now": event_timestamp(),
        "check_version": check_version,
    }

    line = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    print(line, file=stream if stream is not None else sys.stderr)
