"""Server package - FastAPI web API over the analytics engine."""
