"""Pydantic request/response models for the web API."""
