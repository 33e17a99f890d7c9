"""Pydantic request/response schemas, one module per content area."""
