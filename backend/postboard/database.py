"""
Postboard Backend — Document Store Bootstrap
==============================================

What:  Builds the process-wide DocumentStore from settings.
How:   For the Firestore backend, loads the service account file, initializes
       a firebase_admin App with it, and wraps the async Firestore client.
Who:   Called by the app lifespan when no store was injected into create_app().
When:  Once at startup. A missing credential file aborts startup.
"""

import logging
from pathlib import Path

import firebase_admin
from firebase_admin import credentials, firestore_async

from postboard.config import Settings
from postboard.exceptions import ConfigurationError
from postboard.services.document_store import (
    DocumentStore,
    FirestoreDocumentStore,
    InMemoryDocumentStore,
)

logger = logging.getLogger(__name__)


def build_firestore_store(credentials_path: str) -> FirestoreDocumentStore:
    """
    Initialize Firebase with a service account and return a Firestore-backed store.

    Raises:
        ConfigurationError: the credential file is missing or is not a valid
            service account document
    """
    path = Path(credentials_path)
    if not path.is_file():
        raise ConfigurationError(
            message=f"Firebase credential file not found: {path}",
            context={"firebase_credentials_path": str(path)},
        )

    try:
        certificate = credentials.Certificate(str(path))
    except (ValueError, OSError) as e:
        raise ConfigurationError(
            message=f"Invalid Firebase credential file: {path}",
            context={"error": str(e)},
        ) from e

    firebase_app = firebase_admin.initialize_app(certificate)
    client = firestore_async.client(app=firebase_app)
    logger.info("Firestore client ready for project %s", certificate.project_id)
    return FirestoreDocumentStore(client, firebase_app=firebase_app)


def build_document_store(app_settings: Settings) -> DocumentStore:
    """Return the DocumentStore selected by `document_store_backend`."""
    if app_settings.document_store_backend == "memory":
        logger.warning("Using in-memory document store; data is lost on restart")
        return InMemoryDocumentStore()
    return build_firestore_store(app_settings.firebase_credentials_path)
