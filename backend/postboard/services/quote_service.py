"""
Postboard Backend — Motivational Quote Service
================================================

What:  Pass-through client for the third-party affirmation API.
How:   One GET per call through a shared httpx.AsyncClient. The JSON body is
       returned untouched. Any transport error, non-2xx status, or non-JSON
       body becomes UpstreamServiceError.
Who:   Called by GET /motive.

No retry, no circuit breaker, no caching: the upstream is best-effort and a
failure is reported to the caller immediately. The httpx default timeout
applies.
"""

import logging
from typing import Any, Optional

import httpx

from postboard.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class QuoteService:
    """Fetches a single motivational statement from the upstream API."""

    def __init__(self, url: str, client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            url: Upstream endpoint answering GET with a JSON body.
            client: Optional preconfigured client (tests pass one with a MockTransport).
        """
        self.url = url
        self._client = client or httpx.AsyncClient(follow_redirects=True)

    async def fetch_statement(self) -> Any:
        """
        Return the upstream JSON body as decoded by httpx.

        Raises:
            UpstreamServiceError: network failure, HTTP error status, or invalid JSON
        """
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Erro ao obter dados da API: %s", e)
            raise UpstreamServiceError(
                context={"url": self.url, "error_type": type(e).__name__},
            ) from e

    async def close(self) -> None:
        await self._client.aclose()
