"""Transport hardening: HTTP client and log redaction."""
