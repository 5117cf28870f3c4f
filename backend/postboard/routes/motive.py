"""
Postboard Backend — Motivational Statement Route
==================================================

What:  GET /motive relays one statement from the affirmation API.
How:   The upstream JSON body is forwarded as-is with status 200. Upstream
       failures raise UpstreamServiceError (plain-text 500).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from postboard.dependencies import get_quote_service
from postboard.services.quote_service import QuoteService

router = APIRouter(tags=["Motivational"])


@router.get(
    "/motive",
    responses={500: {"description": "Upstream failure (plain text message)"}},
    summary="Get a motivational statement from an external API",
)
async def get_motive(service: QuoteService = Depends(get_quote_service)) -> JSONResponse:
    statement = await service.fetch_statement()
    return JSONResponse(content=statement)
