"""
Tests for StripeClient: credential resolution and error normalization.

Run tests:
    pytest tests/test_client.py -v
"""

import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from stripe_rest.client import StripeClient
from stripe_rest.core.config import Settings, stripe_logger
from stripe_rest.core.enums import HTTPMethod, StripeErrorKind
from stripe_rest.core.exceptions.types import (
    StripeConfigurationException,
    StripeDecodeException,
    StripeTransportException,
)
from stripe_rest.core.logger import setup_logger
from stripe_rest.core.services.stripe.result import Err, Ok
from stripe_rest.resources import Coupons, Customers, Orders, Products
from tests.conftest import make_response


class TestStripeClientInit:

    def test_resources_are_attached(self, client):
        assert isinstance(client.orders, Orders)
        assert isinstance(client.coupons, Coupons)
        assert isinstance(client.customers, Customers)
        assert isinstance(client.products, Products)
        assert client.orders.client is client

    def test_api_key_argument_overrides_settings(self, test_settings):
        stripe_client = StripeClient(test_settings, api_key="sk_test_other")

        assert stripe_client.resolve_api_key() == "sk_test_other"
        assert test_settings.STRIPE_API_KEY == "sk_test_default"

    def test_default_settings_come_from_environment(self, monkeypatch):
        monkeypatch.setenv("STRIPE_API_KEY", "sk_test_env")
        monkeypatch.setenv("STRIPE_API_VERSION", "2020-08-27")

        stripe_client = StripeClient(Settings())

        assert stripe_client.resolve_api_key() == "sk_test_env"
        assert stripe_client.settings.STRIPE_API_VERSION == "2020-08-27"


class TestCredentialResolution:

    def test_default_key(self, client):
        assert client.resolve_api_key() == "sk_test_default"

    def test_explicit_key_wins(self, client):
        assert client.resolve_api_key("sk_test_connected") == "sk_test_connected"

    @pytest.mark.parametrize("key", ["", "   "])
    def test_missing_key_raises(self, test_settings, key):
        stripe_client = StripeClient(test_settings, api_key=key)

        with pytest.raises(StripeConfigurationException):
            stripe_client.resolve_api_key()

    @pytest.mark.asyncio
    async def test_one_argument_form_forwards_default_key(self, client):
        """Test that omitting the key sends the configured default."""
        with patch.object(
            client._transport,
            "request",
            new=AsyncMock(return_value=make_response(200, {"id": "or_1"})),
        ) as mock_request:
            await client.orders.get("or_1")

        mock_request.assert_awaited_once_with(
            "GET", "orders/or_1", "sk_test_default", params=None, headers=None
        )

    @pytest.mark.asyncio
    async def test_two_argument_form_forwards_explicit_key(self, client):
        """Test that an explicit key reaches the transport unchanged."""
        with patch.object(
            client._transport,
            "request",
            new=AsyncMock(return_value=make_response(200, {"id": "or_1"})),
        ) as mock_request:
            await client.orders.get("or_1", "sk_test_connected")

        assert mock_request.await_args.args[2] == "sk_test_connected"


class TestStripeClientRequest:

    @pytest.mark.asyncio
    async def test_missing_key_is_error_result(self, test_settings, mock_http):
        """Test that no request is sent without a key."""
        stripe_client = StripeClient(test_settings, api_key="", http_client=mock_http)

        result = await stripe_client.orders.create({"currency": "usd"})

        assert isinstance(result, Err)
        assert result.error.kind == StripeErrorKind.CONFIGURATION
        mock_http.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_fault_is_error_result(self, client, mock_http):
        """Test that a network failure comes back as Err."""
        mock_http.request = AsyncMock(side_effect=httpx.ConnectError("unreachable"))

        result = await client.coupons.get("FALL25OFF")

        assert isinstance(result, Err)
        assert result.error.kind == StripeErrorKind.TRANSPORT
        with pytest.raises(StripeTransportException):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_accepts_plain_string_method(self, client, mock_http):
        mock_http.request = AsyncMock(return_value=make_response(200, {"ok": True}))

        result = await client.request("get", "balance")

        assert result == Ok({"ok": True})
        assert mock_http.request.call_args.args == ("GET", "/v1/balance")

    @pytest.mark.asyncio
    async def test_accepts_enum_method(self, client, mock_http):
        mock_http.request = AsyncMock(return_value=make_response(200, {}))

        await client.request(HTTPMethod.DELETE, "coupons/X")

        assert mock_http.request.call_args.args == ("DELETE", "/v1/coupons/X")

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, test_settings, mock_http):
        async with StripeClient(test_settings, http_client=mock_http) as stripe_client:
            assert stripe_client.resolve_api_key() == "sk_test_default"

        mock_http.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_content_decoding_failure_is_error_result(self, client, mock_http):
        """Test that a corrupt Content-Encoding comes back as a decode Err."""
        mock_http.request = AsyncMock(side_effect=httpx.DecodingError("bad gzip"))

        result = await client.orders.get("or_1")

        assert isinstance(result, Err)
        assert result.error.kind == StripeErrorKind.DECODE
        with pytest.raises(StripeDecodeException):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_redirect_loop_is_error_result(self, client, mock_http):
        mock_http.request = AsyncMock(
            side_effect=httpx.TooManyRedirects("Exceeded maximum allowed redirects.")
        )

        result = await client.orders.create({"currency": "usd"})

        assert isinstance(result, Err)
        assert result.error.kind == StripeErrorKind.TRANSPORT


@pytest.fixture
def restore_stripe_logger():
    """Put stripe_logger back to console-only INFO after a test reconfigures it."""
    yield stripe_logger
    for handler in list(stripe_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            handler.close()
            stripe_logger.removeHandler(handler)
    setup_logger("stripe_logger")


class TestStripeClientLogging:

    def test_settings_log_level_is_applied(self, test_settings, restore_stripe_logger):
        StripeClient(test_settings.model_copy(update={"LOG_LEVEL": "DEBUG"}))

        assert stripe_logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in stripe_logger.handlers)

    def test_settings_log_file_is_applied(
        self, test_settings, tmp_path, restore_stripe_logger
    ):
        log_file = tmp_path / "logs" / "stripe.log"

        StripeClient(test_settings.model_copy(update={"LOG_FILE": str(log_file)}))

        file_handlers = [
            h for h in stripe_logger.handlers if isinstance(h, RotatingFileHandler)
        ]
        assert [h.baseFilename for h in file_handlers] == [str(log_file)]
