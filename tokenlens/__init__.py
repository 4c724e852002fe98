"""TokenLens - usage analytics for per-request LLM usage exports."""

__version__ = "1.0.0"
