"""
Postboard Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the store bootstrap, and `python -m postboard`.
When:  Loaded once at module import time; the credential file is checked
       later, when the lifespan builds the document store.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults matching a local Firestore-backed deployment.
    The service account file is the only thing that must exist on disk.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # What: Service account JSON issued by the Firebase console
    # Required: YES when document_store_backend is "firestore"
    firebase_credentials_path: str = Field(
        default="conta-firestore.json",
        description="Path to the Firebase service account credential file",
    )

    # What: Which DocumentStore implementation the lifespan builds
    # Options: firestore (hosted), memory (process-local, for development)
    document_store_backend: str = Field(default="firestore")

    posts_collection: str = Field(default="posts", min_length=1)

    @field_validator("document_store_backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Ensures the backend name is one we know how to build."""
        valid_backends = {"firestore", "memory"}
        lower = v.lower()
        if lower not in valid_backends:
            raise ValueError(
                f"Invalid document_store_backend '{v}'. Must be one of: {valid_backends}"
            )
        return lower

    # ── Quote API ─────────────────────────────────────────────────────────
    # What: Upstream returning one motivational statement as JSON
    # No timeout or retry settings: the httpx defaults apply
    quote_api_url: str = Field(default="https://affirmations.dev/")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance — read by the app factory and the CLI entry point
settings = Settings()
