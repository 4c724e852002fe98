"""Output package - terminal formatting helpers."""
