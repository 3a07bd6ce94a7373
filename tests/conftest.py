"""
Pytest configuration and core fixtures.

Every test talks to a mocked ``httpx.AsyncClient``: ``mock_http.request`` is an
AsyncMock returning real ``httpx.Response`` objects built with
``make_response`` / ``make_page``, so the transport, normalization and
pagination code run unmodified.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from stripe_rest.client import StripeClient
from stripe_rest.core.config import Settings


def make_response(
    status_code: int = 200,
    json: Any = None,
    *,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build an httpx.Response as the Stripe API would return it."""
    request = httpx.Request("GET", "https://api.stripe.com/v1/test")
    if content is not None:
        return httpx.Response(
            status_code, content=content, headers=headers, request=request
        )
    return httpx.Response(status_code, json=json, headers=headers, request=request)


def make_error_response(
    status_code: int,
    message: str,
    *,
    code: str | None = None,
    error_type: str = "invalid_request_error",
    request_id: str = "req_test123",
    **extra: Any,
) -> httpx.Response:
    """Build a Stripe error envelope response."""
    error: dict[str, Any] = {"message": message, "type": error_type}
    if code is not None:
        error["code"] = code
    error.update(extra)
    return make_response(
        status_code, {"error": error}, headers={"Request-Id": request_id}
    )


def make_page(
    prefix: str, start: int, size: int, has_more: bool, url: str = "/v1/orders"
) -> httpx.Response:
    """Build one list page whose object IDs are ``{prefix}_{start}`` onward."""
    return make_response(
        200,
        {
            "object": "list",
            "url": url,
            "has_more": has_more,
            "data": [
                {"id": f"{prefix}_{i}", "object": "order"}
                for i in range(start, start + size)
            ],
        },
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a default key and no retries."""
    return Settings(
        STRIPE_API_KEY="sk_test_default",
        STRIPE_API_BASE_URL="https://api.stripe.com",
        STRIPE_MAX_ATTEMPTS=1,
        STRIPE_BACKOFF_BASE=0.0,
    )


@pytest.fixture
def mock_http() -> MagicMock:
    """Stand-in for httpx.AsyncClient."""
    http = MagicMock(spec=httpx.AsyncClient)
    http.request = AsyncMock(return_value=make_response(200, {}))
    http.aclose = AsyncMock()
    return http


@pytest.fixture
async def client(test_settings: Settings, mock_http: MagicMock):
    """StripeClient wired to the mocked HTTP client."""
    stripe_client = StripeClient(test_settings, http_client=mock_http)
    yield stripe_client
    await stripe_client.aclose()


def sent_request(mock_http: MagicMock, index: int = -1) -> dict[str, Any]:
    """Return method, path and keyword arguments of a recorded request."""
    call = mock_http.request.call_args_list[index]
    method, path = call.args
    return {"method": method, "path": path, **call.kwargs}


def basic_auth_header(auth: httpx.BasicAuth) -> str:
    """Authorization header an httpx.BasicAuth would send."""
    flow = auth.auth_flow(httpx.Request("GET", "https://api.stripe.com/v1/test"))
    return next(flow).headers["Authorization"]
