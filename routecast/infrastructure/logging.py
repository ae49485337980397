"""Structured logging: JSON lines with per-stage timings and secret scrubbing."""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional

from routecast.security.redact import redact_sensitive


class StructuredLogger:
    """Emits one JSON object per line, scrubbed of credentials."""

    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr
        self._timers: dict[str, float] = {}

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        line = redact_sensitive(json.dumps(data, ensure_ascii=False, default=str))
        try:
            self._output.write(line + "\n")
            self._output.flush()
        except (OSError, ValueError) as exc:
            # Closed or broken stream; fall back to stderr once.
            sys.stderr.write(
                json.dumps({"event": "logger_internal_error", "trace_id": self.trace_id, "error": str(exc)})
                + "\n"
            )

    def stage_start(self, stage: str, **extra: Any) -> None:
        self._timers[stage] = time.time()
        self._emit({"event": "stage_start", "stage": stage, **extra})

    def stage_end(self, stage: str, **extra: Any) -> None:
        start = self._timers.pop(stage, time.time())
        duration_ms = round((time.time() - start) * 1000, 1)
        self._emit({"event": "stage_end", "stage": stage, "duration_ms": duration_ms, **extra})

    def error(self, stage: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "stage": stage, "error": redact_sensitive(error), **extra})

    def warning(self, stage: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "stage": stage, "message": redact_sensitive(message), **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})
