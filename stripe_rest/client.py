from typing import Any
import logging

import httpx

from stripe_rest.core.config import Settings, get_settings, stripe_logger
from stripe_rest.core.enums import HTTPMethod, StripeErrorKind
from stripe_rest.core.exceptions.types import (
    StripeConfigurationException,
    StripeDecodeException,
    StripeTransportException,
)
from stripe_rest.core.logger import setup_logger
from stripe_rest.core.services.stripe.result import Err, StripeError, StripeResult
from stripe_rest.core.services.stripe.transport import StripeTransport
from stripe_rest.core.services.stripe.util import handle_stripe_response
from stripe_rest.resources import Coupons, Customers, Orders, Products


class StripeClient:
    """
    Entry point for the Stripe REST resources.

    The client owns its configuration and HTTP transport; nothing is read from
    or written to module-level state after construction. Each resource is
    available as an attribute:

        async with StripeClient(Settings(STRIPE_API_KEY="sk_test_...")) as client:
            result = await client.orders.get("or_123")
            # Acting for a connected account
            result = await client.orders.get("or_456", "sk_test_connected")

    Parameters
    ----------
    settings : Settings | None, optional
        Configuration to use. Defaults to the cached settings built from the
        environment / .env file.
        Its LOG_LEVEL and LOG_FILE are applied to the shared ``stripe_logger``
        on construction.
    api_key : str | None, optional
        Default key for calls without an explicit key. Overrides
        ``settings.STRIPE_API_KEY``.
    http_client : httpx.AsyncClient | None, optional
        Pre-built HTTP client (custom transport, proxies, tests). It must be
        configured with the Stripe base URL.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        setup_logger(
            "stripe_logger",
            self.settings.LOG_FILE,
            level=logging.getLevelName(self.settings.LOG_LEVEL),
        )
        self._api_key = api_key if api_key is not None else self.settings.STRIPE_API_KEY
        self._transport = StripeTransport(self.settings, http_client=http_client)

        self.orders = Orders(self)
        self.coupons = Coupons(self)
        self.customers = Customers(self)
        self.products = Products(self)

    def resolve_api_key(self, api_key: str | None = None) -> str:
        """
        Pick the key for one call: the explicit one if given, else the default.

        Raises
        ------
        StripeConfigurationException
            If neither key is set.
        """
        key = api_key if api_key is not None else self._api_key
        if not key or not key.strip():
            raise StripeConfigurationException()
        return key

    async def request(
        self,
        method: HTTPMethod | str,
        endpoint: str,
        api_key: str | None = None,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> StripeResult[Any]:
        """
        Perform one Stripe call and normalize the outcome.

        Never raises for API errors, undecodable bodies, network failures or a
        missing key; all of them come back as ``Err``.

        Parameters
        ----------
        method : HTTPMethod | str
            HTTP verb.
        endpoint : str
            Resource path without the ``/v1`` prefix (e.g. "orders/or_123/pay").
        api_key : str | None, optional
            Explicit key; defaults to the client's key.
        params : dict[str, Any] | None, optional
            Parameter set, encoded by the transport.
        headers : dict[str, str] | None, optional
            Extra request headers.
        """
        verb = method.value if isinstance(method, HTTPMethod) else method.upper()

        try:
            key = self.resolve_api_key(api_key)
        except StripeConfigurationException as exc:
            stripe_logger.error(f"Stripe {verb} {endpoint} skipped: {exc.message}")
            return Err(
                StripeError(message=exc.message, kind=StripeErrorKind.CONFIGURATION)
            )

        try:
            response = await self._transport.request(
                verb, endpoint, key, params=params, headers=headers
            )
        except StripeTransportException as exc:
            return Err(
                StripeError(
                    message=exc.message,
                    kind=StripeErrorKind.TRANSPORT,
                    body=exc.details,
                )
            )
        except StripeDecodeException as exc:
            return Err(
                StripeError(
                    message=exc.message,
                    kind=StripeErrorKind.DECODE,
                    body=exc.details,
                )
            )

        return handle_stripe_response(response)

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "StripeClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
