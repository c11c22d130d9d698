"""Unit tests for middleware."""
from unittest.mock import Mock

import pytest

from volunteerhub.middleware.logging import LoggingMiddleware


def make_request(headers=None):
    request = Mock()
    request.state = Mock()
    request.method = "POST"
    request.url = Mock()
    request.url.path = "/api/v1/volunteers/1/check-in"
    request.client = Mock()
    request.client.host = "127.0.0.1"
    request.query_params = {}
    request.headers = headers or {}
    return request


def make_response(status_code=200):
    response = Mock()
    response.headers = {}
    response.status_code = status_code
    return response


@pytest.mark.unit
class TestLoggingMiddleware:

    @pytest.mark.asyncio
    async def test_request_id_set_on_state_and_response(self):
        request = make_request()
        response = make_response()

        async def call_next(req):
            assert isinstance(req.state.request_id, str)
            return response

        result = await LoggingMiddleware(Mock()).dispatch(request, call_next)

        assert result.headers["X-Request-ID"] == request.state.request_id

    @pytest.mark.asyncio
    async def test_incoming_request_id_is_kept(self):
        request = make_request(headers={"X-Request-ID": "abc-123"})
        response = make_response()

        async def call_next(req):
            return response

        result = await LoggingMiddleware(Mock()).dispatch(request, call_next)

        assert result.headers["X-Request-ID"] == "abc-123"

    @pytest.mark.asyncio
    async def test_exceptions_propagate(self):
        async def call_next(req):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await LoggingMiddleware(Mock()).dispatch(make_request(), call_next)
