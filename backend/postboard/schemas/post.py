"""
Postboard Backend — Pydantic Response Schemas
===============================================

What:  Pydantic models describing what the API returns.
How:   FastAPI serializes route results through these models and builds the
       OpenAPI document from them.

Posts are schema-free documents. `Post` declares only the store-assigned
`id` and keeps every other key as an extra field, so any caller-supplied
mapping round-trips verbatim.
"""

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """
    What:  One document of the posts collection.
    Who:   Returned as an array by GET /posts.

    Serialized as {"id": ..., **fields}. `title` and `content` are the usual
    fields but nothing requires them.
    """
    id: str = Field(description="Store-assigned document id")

    model_config = ConfigDict(extra="allow")


class HealthResponse(BaseModel):
    """
    What:  Process health snapshot.
    Who:   Returned by GET /health for container probes.
    """
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    document_store: str = Field(description="Configured document store backend")
    uptime_seconds: float = Field(description="Seconds since service started")
