"""External provider adapters (real and mock)."""
