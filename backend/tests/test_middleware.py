"""
Tests for the middleware layer.

Covers:
- Request id log filter and the log format built on it
- One access line per request on postboard.access; none from route modules
"""

import logging

import pytest

from postboard.main import LOG_FORMAT
from postboard.middleware.request_id import RequestIDLogFilter, request_id_var
from postboard.routes import health, motive, posts


def make_record(message="stored"):
    return logging.LogRecord("postboard.test", logging.INFO, __file__, 1, message, None, None)


class TestRequestIDLogFilter:

    def test_record_gets_current_request_id(self):
        token = request_id_var.set("trace-7")
        try:
            record = make_record()
            assert RequestIDLogFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "trace-7"

    def test_outside_a_request_uses_dash(self):
        record = make_record()
        RequestIDLogFilter().filter(record)
        assert record.request_id == "-"

    def test_log_format_renders_request_id(self):
        token = request_id_var.set("abc12345")
        try:
            record = make_record("Post criado")
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)

        line = logging.Formatter(LOG_FORMAT).format(record)

        assert "[abc12345]: Post criado" in line
        assert "postboard.test" in line


class TestRequestLogging:

    @pytest.mark.asyncio
    async def test_access_line_per_request(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="postboard.access"):
            await test_client.get("/posts")

        lines = [r for r in caplog.records if r.name == "postboard.access"]
        assert len(lines) == 1
        assert lines[0].levelno == logging.INFO
        assert lines[0].getMessage().startswith("GET /posts 200 ")

    @pytest.mark.asyncio
    async def test_unhandled_error_is_logged_with_traceback(self, app, test_client, caplog):
        app.state.post_service.list_posts = _raise_key_error

        with caplog.at_level(logging.INFO, logger="postboard.access"):
            response = await test_client.get("/posts")

        assert response.status_code == 500
        (record,) = [r for r in caplog.records if r.name == "postboard.access"]
        assert record.levelno == logging.ERROR
        assert "unhandled KeyError" in record.getMessage()
        assert record.exc_info is not None

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="postboard.access"):
            await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "postboard.access"]

    def test_route_modules_leave_logging_to_services(self):
        for module in (posts, motive, health):
            assert not hasattr(module, "logger")


async def _raise_key_error():
    raise KeyError("title")
