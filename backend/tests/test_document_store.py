"""
Postboard Backend — Document Store Tests
==========================================

What:  Store semantics shared by every backend, plus the Firestore adapter.
How:   InMemoryDocumentStore is exercised directly. FirestoreDocumentStore
       runs against a MagicMock shaped like the async Firestore client, so
       the tests check which Firestore call each operation makes.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from postboard.services.document_store import (
    AUTO_ID_ALPHABET,
    AUTO_ID_LENGTH,
    FirestoreDocumentStore,
    InMemoryDocumentStore,
)


class TestInMemoryDocumentStore:

    def setup_method(self):
        self.store = InMemoryDocumentStore()

    @pytest.mark.asyncio
    async def test_create_assigns_firestore_shaped_ids(self):
        doc_id = await self.store.create("posts", {"title": "T"})

        assert len(doc_id) == AUTO_ID_LENGTH
        assert set(doc_id) <= set(AUTO_ID_ALPHABET)
        assert await self.store.get("posts", doc_id) == {"title": "T"}

    @pytest.mark.asyncio
    async def test_ids_are_unique(self):
        ids = {await self.store.create("posts", {}) for _ in range(200)}
        assert len(ids) == 200

    @pytest.mark.asyncio
    async def test_replace_is_not_a_merge(self):
        doc_id = await self.store.create("posts", {"title": "T", "content": "C"})

        await self.store.replace("posts", doc_id, {"title": "a"})

        assert await self.store.get("posts", doc_id) == {"title": "a"}

    @pytest.mark.asyncio
    async def test_delete_missing_id_is_silent(self):
        await self.store.delete("posts", "nope")
        assert await self.store.get("posts", "nope") is None

    @pytest.mark.asyncio
    async def test_collections_are_isolated(self):
        await self.store.create("posts", {"title": "T"})
        assert await self.store.list_all("drafts") == []

    @pytest.mark.asyncio
    async def test_stored_documents_are_copies(self):
        body = {"tags": ["a"]}
        doc_id = await self.store.create("posts", body)
        body["tags"].append("mutated")

        listed = await self.store.list_all("posts")
        listed[0][1]["tags"].append("also mutated")

        assert await self.store.get("posts", doc_id) == {"tags": ["a"]}


def snapshot(doc_id, data, exists=True):
    snap = MagicMock()
    snap.id = doc_id
    snap.exists = exists
    snap.to_dict.return_value = data
    return snap


class TestFirestoreDocumentStore:

    def setup_method(self):
        self.client = MagicMock()
        self.collection = self.client.collection.return_value
        self.document = self.collection.document.return_value
        self.store = FirestoreDocumentStore(self.client)

    @pytest.mark.asyncio
    async def test_list_all_streams_collection(self):
        async def stream():
            yield snapshot("a1", {"title": "T"})
            yield snapshot("b2", None)

        self.collection.stream = MagicMock(return_value=stream())

        documents = await self.store.list_all("posts")

        self.client.collection.assert_called_with("posts")
        assert documents == [("a1", {"title": "T"}), ("b2", {})]

    @pytest.mark.asyncio
    async def test_create_uses_add(self):
        doc_ref = MagicMock()
        doc_ref.id = "x" * 20
        self.collection.add = AsyncMock(return_value=(MagicMock(), doc_ref))

        doc_id = await self.store.create("posts", {"title": "T"})

        self.collection.add.assert_awaited_once_with({"title": "T"})
        assert doc_id == "x" * 20

    @pytest.mark.asyncio
    async def test_replace_uses_set_without_merge(self):
        self.document.set = AsyncMock()

        await self.store.replace("posts", "a1", {"title": "a"})

        self.collection.document.assert_called_with("a1")
        self.document.set.assert_awaited_once_with({"title": "a"})

    @pytest.mark.asyncio
    async def test_delete_uses_document_delete(self):
        self.document.delete = AsyncMock()

        await self.store.delete("posts", "a1")

        self.collection.document.assert_called_with("a1")
        self.document.delete.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_get_missing_document_returns_none(self):
        self.document.get = AsyncMock(return_value=snapshot("a1", None, exists=False))
        assert await self.store.get("posts", "a1") is None

    @pytest.mark.asyncio
    async def test_get_existing_document(self):
        self.document.get = AsyncMock(return_value=snapshot("a1", {"title": "T"}))
        assert await self.store.get("posts", "a1") == {"title": "T"}

    @pytest.mark.asyncio
    async def test_close_deletes_firebase_app_once(self):
        firebase_app = MagicMock()
        store = FirestoreDocumentStore(self.client, firebase_app=firebase_app)

        with patch("postboard.services.document_store.firebase_admin") as mock_admin:
            await store.close()
            await store.close()

        mock_admin.delete_app.assert_called_once_with(firebase_app)

    @pytest.mark.asyncio
    async def test_close_awaits_async_client_close_once(self):
        self.client.close = AsyncMock()

        await self.store.close()
        await self.store.close()

        self.client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_calls_sync_client_close(self):
        self.client.close = MagicMock(return_value=None)

        await self.store.close()

        self.client.close.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_close_releases_client_before_firebase_app(self):
        calls = []
        self.client.close = AsyncMock(side_effect=lambda: calls.append("client"))
        store = FirestoreDocumentStore(self.client, firebase_app=MagicMock())

        with patch("postboard.services.document_store.firebase_admin") as mock_admin:
            mock_admin.delete_app.side_effect = lambda app: calls.append("app")
            await store.close()

        assert calls == ["client", "app"]
