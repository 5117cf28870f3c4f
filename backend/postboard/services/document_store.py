"""
Postboard Backend — Document Store Interface and Implementations
==================================================================

What:  Abstract contract for a schema-less document store plus two backends.
How:   PostService talks only to DocumentStore; the lifespan decides which
       concrete class to build (see database.build_document_store).
Who:   Called by PostService; built once per process.

Implementations:
    - FirestoreDocumentStore: Google Cloud Firestore through the async client
      that firebase_admin hands out. Ids are Firestore auto-ids.
    - InMemoryDocumentStore: dict-backed store with Firestore-shaped ids, used
      by the test suite and by DOCUMENT_STORE_BACKEND=memory for local runs.

Semantics shared by both:
    create   → store assigns a new id
    replace  → overwrite the whole document; creates it when the id is absent
    delete   → removing a missing id is not an error
    list_all → (id, fields) pairs in store order, no ordering guarantee
"""

import copy
import inspect
import logging
import secrets
import string
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import firebase_admin

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

# Firestore auto-ids: 20 characters drawn from [A-Za-z0-9]
AUTO_ID_ALPHABET = string.ascii_letters + string.digits
AUTO_ID_LENGTH = 20


class DocumentStore(ABC):
    """
    Abstract interface over a collection-oriented document database.

    Contract:
        - Documents are open string-keyed mappings of JSON-compatible values
        - Ids are opaque strings owned by the store
        - Implementations raise their native exceptions; PostService wraps them
    """

    @abstractmethod
    async def list_all(self, collection: str) -> List[Tuple[str, Document]]:
        """Return every document of `collection` as (id, fields) pairs."""
        ...

    @abstractmethod
    async def create(self, collection: str, fields: Document) -> str:
        """Store `fields` as a new document and return the assigned id."""
        ...

    @abstractmethod
    async def replace(self, collection: str, doc_id: str, fields: Document) -> None:
        """Overwrite the document at `doc_id` with exactly `fields`."""
        ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Remove the document at `doc_id`, if any."""
        ...

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the fields stored at `doc_id`, or None when it does not exist."""
        ...

    async def close(self) -> None:
        """Release client resources. Called once during shutdown."""
        return None


# ══════════════════════════════════════════════════════════════════════════
# Firestore
# ══════════════════════════════════════════════════════════════════════════

class FirestoreDocumentStore(DocumentStore):
    """
    DocumentStore backed by `google.cloud.firestore.AsyncClient`.

    Each method issues exactly one Firestore call:
        list_all → collection.stream()
        create   → collection.add(fields)
        replace  → document(id).set(fields)     (no merge)
        delete   → document(id).delete()
        get      → document(id).get()
    """

    def __init__(self, client: Any, firebase_app: Optional[firebase_admin.App] = None):
        """
        Args:
            client: An async Firestore client (firebase_admin.firestore_async.client()).
            firebase_app: The firebase_admin App owning the client; deleted on close().
        """
        self.client = client
        self.firebase_app = firebase_app
        self._closed = False

    async def list_all(self, collection: str) -> List[Tuple[str, Document]]:
        documents = []
        async for snapshot in self.client.collection(collection).stream():
            documents.append((snapshot.id, snapshot.to_dict() or {}))
        return documents

    async def create(self, collection: str, fields: Document) -> str:
        _, doc_ref = await self.client.collection(collection).add(fields)
        return doc_ref.id

    async def replace(self, collection: str, doc_id: str, fields: Document) -> None:
        await self.client.collection(collection).document(doc_id).set(fields)

    async def delete(self, collection: str, doc_id: str) -> None:
        await self.client.collection(collection).document(doc_id).delete()

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        snapshot = await self.client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def close(self) -> None:
        """Close the Firestore client's channel, then delete the firebase_admin App."""
        if self._closed:
            return
        self._closed = True

        # close() is a coroutine on newer google-cloud-firestore releases
        client_close = getattr(self.client, "close", None)
        if client_close is not None:
            result = client_close()
            if inspect.isawaitable(result):
                await result
            logger.info("Firestore client closed")

        if self.firebase_app is not None:
            firebase_admin.delete_app(self.firebase_app)
            self.firebase_app = None
            logger.info("Firebase app released")


# ══════════════════════════════════════════════════════════════════════════
# In-memory
# ══════════════════════════════════════════════════════════════════════════

class InMemoryDocumentStore(DocumentStore):
    """
    Process-local DocumentStore with the same observable semantics as Firestore.

    Documents are deep-copied on the way in and out, so callers never share
    mutable state with the store. Not safe across processes; within one event
    loop every method runs to completion without awaiting, so no lock is needed.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Document]] = {}

    def _collection(self, collection: str) -> Dict[str, Document]:
        return self._collections.setdefault(collection, {})

    def _new_id(self, collection: str) -> str:
        existing = self._collection(collection)
        while True:
            doc_id = "".join(secrets.choice(AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))
            if doc_id not in existing:
                return doc_id

    async def list_all(self, collection: str) -> List[Tuple[str, Document]]:
        return [
            (doc_id, copy.deepcopy(fields))
            for doc_id, fields in self._collection(collection).items()
        ]

    async def create(self, collection: str, fields: Document) -> str:
        doc_id = self._new_id(collection)
        self._collection(collection)[doc_id] = copy.deepcopy(fields)
        return doc_id

    async def replace(self, collection: str, doc_id: str, fields: Document) -> None:
        self._collection(collection)[doc_id] = copy.deepcopy(fields)

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        fields = self._collection(collection).get(doc_id)
        return copy.deepcopy(fields) if fields is not None else None
