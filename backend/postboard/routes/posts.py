"""
Postboard Backend — Post Route Handlers
=========================================

What:  CRUD over the posts collection.
How:   Each handler performs one PostService call. Store failures raise
       DocumentStoreError, answered as plain-text 500 by the global handler.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from postboard.dependencies import get_post_service, read_document_body
from postboard.schemas.post import Post
from postboard.services.post_service import PostService

router = APIRouter(tags=["Posts"])

_ERROR_RESPONSE = {"description": "Store failure (plain text message)"}


@router.get(
    "/posts",
    response_model=List[Post],
    responses={500: _ERROR_RESPONSE},
    summary="List every post",
)
async def list_posts(service: PostService = Depends(get_post_service)) -> List[Post]:
    """Order is whatever the store returns; an empty collection gives []."""
    return await service.list_posts()


@router.post(
    "/posts",
    response_class=PlainTextResponse,
    responses={500: _ERROR_RESPONSE},
    summary="Create a post",
)
async def create_post(
    body: Dict[str, Any] = Depends(read_document_body),
    service: PostService = Depends(get_post_service),
) -> PlainTextResponse:
    """
    Store the body as a new document.

    Any keys are accepted. The response text carries the store-assigned id:
    "Post criado com o id <id>".
    """
    post_id = await service.create_post(body)
    return PlainTextResponse(f"Post criado com o id {post_id}")


@router.put(
    "/posts/{post_id}",
    status_code=204,
    response_class=Response,
    responses={500: _ERROR_RESPONSE},
    summary="Replace a post",
)
async def replace_post(
    post_id: str,
    body: Dict[str, Any] = Depends(read_document_body),
    service: PostService = Depends(get_post_service),
) -> Response:
    """
    Overwrite the whole document (no merge).

    Fields absent from the body are dropped. An unknown id is created, so
    there is no 404 here.
    """
    await service.replace_post(post_id, body)
    return Response(status_code=204)


@router.delete(
    "/posts/{post_id}",
    response_class=PlainTextResponse,
    responses={500: _ERROR_RESPONSE},
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
) -> PlainTextResponse:
    await service.delete_post(post_id)
    return PlainTextResponse("Post apagado com sucesso")
