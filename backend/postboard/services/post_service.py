"""
Postboard Backend — Post Service
==================================

What:  The four post operations the routes expose, on top of a DocumentStore.
How:   One store call per method. Any exception from the store is logged with
       its traceback and re-raised as DocumentStoreError carrying the fixed
       message of the operation that failed.
Who:   Built once per app (see main.create_app); injected into route handlers.

Error messages:
    list_posts   → "Erro ao obter posts."
    create_post  → "Erro ao criar post."
    replace_post → "Erro ao atualizar post."
    delete_post  → "Erro ao apagar post."
"""

import logging
from typing import Any, Dict, List

from postboard.exceptions import DocumentStoreError
from postboard.schemas.post import Post
from postboard.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class PostService:
    """
    Business logic layer for the posts collection.

    The service never inspects document contents: bodies go to the store as
    received and come back as received, plus their id.
    """

    def __init__(self, store: DocumentStore, collection: str = "posts"):
        self.store = store
        self.collection = collection

    async def list_posts(self) -> List[Post]:
        """
        Fetch every post in the collection.

        Returns:
            Posts in store order. An empty collection yields an empty list.

        Raises:
            DocumentStoreError: the store call failed (→ 500)
        """
        try:
            documents = await self.store.list_all(self.collection)
        except Exception as e:
            logger.error("Erro ao obter posts: %s", e, exc_info=True)
            raise DocumentStoreError(
                message="Erro ao obter posts.",
                context={"error_type": type(e).__name__},
            ) from e

        # The store id wins over any "id" key saved inside the document
        return [Post.model_validate({**fields, "id": doc_id}) for doc_id, fields in documents]

    async def create_post(self, fields: Dict[str, Any]) -> str:
        """
        Store a new post and return the id the store assigned to it.

        Raises:
            DocumentStoreError: the store call failed (→ 500)
        """
        logger.info("Dados do post recebidos: %s", fields)
        try:
            post_id = await self.store.create(self.collection, fields)
        except Exception as e:
            logger.error("Erro ao criar post: %s", e, exc_info=True)
            raise DocumentStoreError(
                message="Erro ao criar post.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("ID do post criado: %s", post_id)
        return post_id

    async def replace_post(self, post_id: str, fields: Dict[str, Any]) -> None:
        """
        Overwrite the post at `post_id` with `fields`.

        Fields missing from `fields` are removed. A missing id is created.
        """
        try:
            await self.store.replace(self.collection, post_id, fields)
        except Exception as e:
            logger.error("Erro ao atualizar post %s: %s", post_id, e, exc_info=True)
            raise DocumentStoreError(
                message="Erro ao atualizar post.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            ) from e

    async def delete_post(self, post_id: str) -> None:
        """Delete the post at `post_id`. Deleting a missing id succeeds."""
        try:
            await self.store.delete(self.collection, post_id)
        except Exception as e:
            logger.error("Erro ao apagar post %s: %s", post_id, e, exc_info=True)
            raise DocumentStoreError(
                message="Erro ao apagar post.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            ) from e
