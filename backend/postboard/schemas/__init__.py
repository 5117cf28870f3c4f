"""Pydantic views of the API payloads."""
