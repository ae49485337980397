"""HTTP client shared by every external provider call.

Responsibilities:
  1. timeout and bounded retries with doubling backoff
  2. client errors (4xx) fail fast, never retried
  3. error messages scrubbed of credentials before they reach logs
  4. isolate the httpx dependency
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from routecast.security.redact import redact_sensitive
from routecast.shared.exceptions import ToolError

_logger = logging.getLogger("routecast.http")


class SecureHttpClient:
    """Wraps httpx.get; every failure surfaces as ToolError."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        tool_name: str = "http",
        headers: Optional[dict[str, str]] = None,
    ):
        self._timeout = float(timeout)
        self._max_attempts = max(1, int(max_attempts))
        self._backoff = float(backoff_seconds)
        self._tool_name = tool_name
        self._headers = dict(headers or {})

    def backoff_delay(self, attempt: int) -> float:
        """Delay before the attempt following ``attempt`` (1s, 2s, 4s, ...)."""
        return self._backoff * (2 ** (attempt - 1))

    def get(
        self,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Perform GET and return the decoded JSON body."""
        merged_headers = {**self._headers, **(headers or {})}
        last_error: Optional[ToolError] = None

        for attempt in range(1, self._max_attempts + 1):
            try:
                resp = httpx.get(
                    url,
                    params=params,
                    headers=merged_headers or None,
                    timeout=self._timeout,
                )
                resp.raise_for_status()
                return resp.json()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                safe_msg = redact_sensitive(str(e))
                last_error = ToolError(self._tool_name, f"HTTP {status}: {safe_msg}", status_code=status)
                if 400 <= status < 500:
                    raise last_error from None
            except httpx.TimeoutException:
                last_error = ToolError(
                    self._tool_name, f"request timed out after {self._timeout}s (attempt {attempt})"
                )
            except httpx.HTTPError as e:
                last_error = ToolError(self._tool_name, f"request failed: {redact_sensitive(str(e))}")
            except ValueError as e:
                last_error = ToolError(self._tool_name, f"invalid JSON body: {redact_sensitive(str(e))}")

            if attempt < self._max_attempts:
                delay = self.backoff_delay(attempt)
                _logger.warning(
                    "%s attempt %d/%d failed, retrying in %.1fs: %s",
                    self._tool_name,
                    attempt,
                    self._max_attempts,
                    delay,
                    last_error,
                )
                time.sleep(delay)

        raise last_error  # type: ignore[misc]


__all__ = ["SecureHttpClient"]
