"""Shared helpers for TokenLens."""
