"""Schema, settings and output models."""
