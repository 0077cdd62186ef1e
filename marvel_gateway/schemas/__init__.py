"""Pydantic Schemas — record models for the local character store."""
