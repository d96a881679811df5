"""Core constants, settings and error types."""
