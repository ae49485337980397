"""Structured JSON-lines logger tests."""

import io
import json

from routecast.infrastructure.logging import StructuredLogger


def _lines(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines()]


def test_stage_events_share_trace_id_and_time_the_stage():
    buf = io.StringIO()
    slog = StructuredLogger(trace_id="abc123", output=buf)

    slog.stage_start("rank", candidates=3)
    slog.stage_end("rank", routes=3)

    start, end = _lines(buf)
    assert start["event"] == "stage_start"
    assert start["candidates"] == 3
    assert end["event"] == "stage_end"
    assert end["duration_ms"] >= 0
    assert {start["trace_id"], end["trace_id"]} == {"abc123"}


def test_warnings_are_scrubbed():
    buf = io.StringIO()
    slog = StructuredLogger(output=buf)

    slog.warning("fetch", "GET https://x.test/?key=hunter2 failed")

    (event,) = _lines(buf)
    assert event["event"] == "warning"
    assert "hunter2" not in event["message"]


def test_errors_are_scrubbed():
    buf = io.StringIO()
    slog = StructuredLogger(output=buf)

    slog.error("fetch", "[osrm_route] token=hunter2 rejected", attempts=3)

    (event,) = _lines(buf)
    assert event["event"] == "error"
    assert event["attempts"] == 3
    assert "hunter2" not in event["error"]
