"""Route adapters."""
