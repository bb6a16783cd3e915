"""Image encoding helpers."""
