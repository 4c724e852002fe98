"""Tests for TokenLens."""
