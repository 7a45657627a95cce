"""Pydantic request/response schemas (one read projection per entity)."""
