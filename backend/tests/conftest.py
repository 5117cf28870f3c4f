"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The app is built with create_app() and injected doubles: an
       InMemoryDocumentStore and a QuoteService whose httpx client uses a
       MockTransport. No Firestore project and no network are needed.

Fixture Hierarchy (all function-scoped):
    ├── memory_store: fresh InMemoryDocumentStore
    ├── upstream_payload / upstream_status: what the fake quote API answers
    ├── quote_service: QuoteService wired to the fake quote API
    ├── app: FastAPI instance using the two doubles
    └── test_client: HTTPX AsyncClient talking to `app` over ASGI
"""

import os

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep the import-time settings singleton away from real credentials
os.environ["DOCUMENT_STORE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from postboard.config import Settings  # noqa: E402
from postboard.main import create_app  # noqa: E402
from postboard.services.document_store import InMemoryDocumentStore  # noqa: E402
from postboard.services.quote_service import QuoteService  # noqa: E402

QUOTE_API_URL = "https://affirmations.test/"


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        document_store_backend="memory",
        quote_api_url=QUOTE_API_URL,
        log_level="WARNING",
    )


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def upstream_payload():
    """Body the fake affirmation API returns."""
    return {"affirmation": "You are doing great"}


@pytest.fixture
def upstream_status():
    return 200


@pytest.fixture
def upstream_requests():
    """Requests received by the fake affirmation API, in order."""
    return []


@pytest_asyncio.fixture
async def quote_service(upstream_payload, upstream_status, upstream_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return httpx.Response(upstream_status, json=upstream_payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    service = QuoteService(QUOTE_API_URL, client=client)
    yield service
    await service.close()


@pytest.fixture
def app(memory_store, quote_service, test_settings):
    return create_app(
        document_store=memory_store,
        quote_service=quote_service,
        app_settings=test_settings,
    )


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/posts")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
