"""Credential redaction tests."""

from routecast.security.redact import redact_sensitive


def test_query_keys_are_redacted():
    text = redact_sensitive("GET https://x.test/a?api_key=abc123&q=bulawayo")
    assert "abc123" not in text
    assert "q=bulawayo" in text


def test_bearer_and_url_credentials_are_redacted():
    assert "tok" not in redact_sensitive("Authorization: Bearer tok.en")
    assert "user:pw" not in redact_sensitive("https://user:pw@host.test/route")


def test_plain_text_is_untouched():
    assert redact_sensitive("route via Cecil Avenue") == "route via Cecil Avenue"
    assert redact_sensitive("") == ""
