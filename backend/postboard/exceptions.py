"""
Postboard Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the few ways a request can fail.
How:   Each exception carries a caller-safe message and an optional context
       dict. Global exception handlers (registered in main.py) log the context
       and answer with the message as plain text.
Who:   Raised by services and the body parser; caught by global handlers.

Exception Hierarchy:
    PostboardError (base)
    ├── ValidationError        → 400 Bad Request (body is not a JSON object)
    ├── DocumentStoreError     → 500 Internal Server Error
    ├── UpstreamServiceError   → 500 Internal Server Error
    └── ConfigurationError     → raised at startup, never reaches a handler

Messages are Portuguese and fixed per operation; no store or upstream detail
is ever part of a response.
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Erro interno do servidor.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostboardError):
    """
    Raised when a request body cannot be decoded into a document.

    When:    Unparseable JSON, or JSON whose top level is not an object.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Corpo da requisição inválido.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DocumentStoreError(PostboardError):
    """
    Raised when a document store operation fails.

    What:    Listing, creating, replacing, or deleting a post failed.
    When:    Network loss, permission denied, quota exhausted, invalid document.
    HTTP:    500 Internal Server Error

    The message is the fixed text of the failing operation (for example
    "Erro ao criar post."); the original exception type and the post id go
    into context for the server log.
    """

    def __init__(
        self,
        message: str = "Erro ao acessar o banco de dados.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamServiceError(PostboardError):
    """
    Raised when the motivational quote API cannot be reached or answers badly.

    When:    Connection error, timeout, non-2xx status, or a body that is not JSON.
    HTTP:    500 Internal Server Error (no retry, no circuit breaker)
    """

    def __init__(
        self,
        message: str = "Erro ao obter dados da API.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(PostboardError):
    """
    Raised when the process cannot start with the current settings.

    When:    The Firebase service account file is missing or unreadable.
    Effect:  Propagates out of the lifespan, so uvicorn aborts startup.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
