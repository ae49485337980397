"""Redact credentials that may leak into logs through provider URLs or headers."""

from __future__ import annotations

import re

_REDACTED = "***REDACTED***"

# key=..., api_key=..., access_token=... inside query strings and error messages
_QUERY_VALUE_RE = re.compile(
    r"(?i)(?P<prefix>\b(?:key|api[_-]?key|access[_-]?token|token|secret|sig)\s*=\s*)(?P<value>[^&\s\"']+)"
)
_AUTH_HEADER_RE = re.compile(
    r"(?i)(?P<prefix>\bauthorization\s*:\s*(?:bearer|basic|token)\s+)(?P<value>[^\s,;]+)"
)
_BEARER_RE = re.compile(r"(?i)(?P<prefix>\bbearer\s+)(?P<value>[A-Za-z0-9._~+/=-]+)")
_URL_CREDENTIAL_RE = re.compile(r"(?i)(?P<prefix>\bhttps?://)(?P<creds>[^@/\s]+)@")


def _replace_value(pattern: re.Pattern[str], text: str) -> str:
    return pattern.sub(lambda m: f"{m.group('prefix')}{_REDACTED}", text)


def redact_sensitive(text: str) -> str:
    """Redact secret-looking values while keeping the surrounding message readable."""
    if not text:
        return text

    redacted = str(text)
    for pattern in (_QUERY_VALUE_RE, _AUTH_HEADER_RE, _BEARER_RE):
        redacted = _replace_value(pattern, redacted)
    return _URL_CREDENTIAL_RE.sub(rf"\g<prefix>{_REDACTED}@", redacted)


__all__ = ["redact_sensitive"]
