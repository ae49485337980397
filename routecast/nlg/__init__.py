"""Natural-language forecast generation."""
