"""
Postboard Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers, and
       stores the services on app.state. Services that were not injected are
       built by the lifespan at startup.
Who:   uvicorn (`postboard.main:app`, or `python -m postboard`) and the tests,
       which inject an in-memory store and a mocked quote client.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → CORS → GZip → Logging    │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /posts CRUD  │ │ GET /motive  │ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers (plain text bodies):            │
    │  ValidationError→400 │ Store/Upstream→500           │
    │  anything else → 500 in RequestLoggingMiddleware    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the document store (fails fast without a credential file)
    3. Build the quote service
    Shutdown:
    1. Close the services the lifespan created
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from postboard import __version__
from postboard.config import Settings, settings
from postboard.database import build_document_store
from postboard.exceptions import (
    DocumentStoreError,
    PostboardError,
    UpstreamServiceError,
    ValidationError,
)
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from postboard.routes import health, motive, posts
from postboard.services.document_store import DocumentStore
from postboard.services.post_service import PostService
from postboard.services.quote_service import QuoteService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s,
    to stdout. The request id is "-" for lines logged outside a request.
    Called once during app startup, before any service is built.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party clients log every call at DEBUG/INFO
    for noisy in ("uvicorn.access", "httpcore", "httpx", "google", "grpc"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build missing services on startup and close them on shutdown.

    A ConfigurationError from build_document_store propagates, so uvicorn
    refuses to start without the Firebase credential file.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Postboard Backend starting up...")

    owned: List[object] = []

    if not hasattr(app.state, "post_service"):
        store = build_document_store(app_settings)
        owned.append(store)
        app.state.post_service = PostService(store, app_settings.posts_collection)

    if not hasattr(app.state, "quote_service"):
        quote_service = QuoteService(app_settings.quote_api_url)
        owned.append(quote_service)
        app.state.quote_service = quote_service

    logger.info(
        "O servidor está rodando na porta %d (host %s)",
        app_settings.backend_port,
        app_settings.backend_host,
    )
    logger.info("=" * 60)

    try:
        yield
    finally:
        logger.info("Postboard Backend shutting down...")
        for resource in reversed(owned):
            await resource.close()
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to plain-text responses.

    Handler hierarchy:
        ValidationError         → 400
        DocumentStoreError      → 500
        UpstreamServiceError    → 500
        PostboardError (base)   → 500

    Response bodies are only ever the exception's fixed message; context is
    logged server side. Any other exception is left to RequestLoggingMiddleware,
    which answers 500 "Erro interno do servidor." inside the CORS layer.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(DocumentStoreError)
    async def handle_document_store_error(request: Request, exc: DocumentStoreError):
        logger.error("Document store error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(UpstreamServiceError)
    async def handle_upstream_error(request: Request, exc: UpstreamServiceError):
        logger.error("Upstream error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(PostboardError)
    async def handle_postboard_error(request: Request, exc: PostboardError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    document_store: Optional[DocumentStore] = None,
    quote_service: Optional[QuoteService] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        document_store: Store to use instead of building one from settings.
        quote_service: Quote client to use instead of building one from settings.
        app_settings: Settings override; defaults to the module singleton.

    Injected services are owned by the caller and are not closed on shutdown.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Postboard API",
        description=(
            "CRUD over a Firestore posts collection, plus a pass-through "
            "motivational statement endpoint."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    if document_store is not None:
        app.state.post_service = PostService(document_store, app_settings.posts_collection)
    if quote_service is not None:
        app.state.quote_service = quote_service

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → CORS → GZip → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(posts.router)
    app.include_router(motive.router)
    app.include_router(health.router)

    return app


# uvicorn expects `postboard.main:app` to be importable
app = create_app()
