import asyncio
import random
from typing import Any
from uuid import uuid4

import httpx

from stripe_rest.core.config import Settings, stripe_logger
from stripe_rest.core.exceptions.types import (
    StripeDecodeException,
    StripeTransportException,
)


class StripeTransport:
    """HTTP layer for the Stripe REST API.

    Owns a lazily created ``httpx.AsyncClient``, encodes parameter sets in
    Stripe's bracket notation and retries server errors, rate limiting and
    network faults with bounded exponential backoff. It never interprets
    response bodies; that is left to ``handle_stripe_response``.
    """

    API_PREFIX: str = "/v1"

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = settings.STRIPE_API_BASE_URL
        self._api_version = settings.STRIPE_API_VERSION
        self._timeout = settings.STRIPE_TIMEOUT
        self._max_attempts = settings.STRIPE_MAX_ATTEMPTS

        # Bounded retries + backoff
        self._backoff_base = settings.STRIPE_BACKOFF_BASE
        self._backoff_max = settings.STRIPE_BACKOFF_MAX
        self._jitter = settings.STRIPE_JITTER

        self._client = http_client

    @staticmethod
    def _flatten_to_payload(
        payload: dict[str, Any],
        prefix: str,
        data: dict[str, Any],
        *,
        max_depth: int = 5,
        _current_depth: int = 0,
    ) -> None:
        """
        Flatten a nested dict into Stripe's form-encoded format.

        Recursively converts nested dictionaries into bracket notation keys
        that Stripe's API expects for form-encoded requests.

        Example:
            data = {"metadata": {"order_ref": "123"}}
            prefix = "items[0]"
            Result: payload["items[0][metadata][order_ref]"] = "123"

        Parameters
        ----------
        payload : dict[str, Any]
            The payload dict to add flattened keys to.
        prefix : str
            The base key prefix (e.g., "metadata", "items[0]").
        data : dict[str, Any]
            The dict to flatten.
        max_depth : int, optional
            Maximum nesting depth to prevent infinite recursion. Defaults to 5.
        _current_depth : int
            Internal counter for recursion depth. Do not set manually.
        """
        if _current_depth >= max_depth:
            # Safety limit reached, convert remaining value to string
            for key, value in data.items():
                payload[f"{prefix}[{key}]"] = StripeTransport._encode_scalar(value)
            return

        for key, value in data.items():
            full_key = f"{prefix}[{key}]"
            StripeTransport._flatten_value(
                payload,
                full_key,
                value,
                max_depth=max_depth,
                _current_depth=_current_depth + 1,
            )

    @staticmethod
    def _flatten_value(
        payload: dict[str, Any],
        key: str,
        value: Any,
        *,
        max_depth: int,
        _current_depth: int,
    ) -> None:
        if isinstance(value, dict):
            StripeTransport._flatten_to_payload(
                payload,
                key,
                value,
                max_depth=max_depth,
                _current_depth=_current_depth,
            )
        elif isinstance(value, (list, tuple)):
            # Handle lists (e.g., order items)
            for idx, item in enumerate(value):
                StripeTransport._flatten_value(
                    payload,
                    f"{key}[{idx}]",
                    item,
                    max_depth=max_depth,
                    _current_depth=_current_depth,
                )
        else:
            payload[key] = StripeTransport._encode_scalar(value)

    @staticmethod
    def _encode_scalar(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    @classmethod
    def encode_params(cls, params: dict[str, Any] | None) -> dict[str, str]:
        """
        Encode a whole parameter set into flat form/query fields.

        Top-level keys keep their names; nested dicts and lists are expanded
        with bracket notation. Falsy values such as ``0`` are kept.

        Example:
            {"currency": "usd", "items": [{"type": "sku", "parent": "sku_1"}]}
            -> {"currency": "usd",
                "items[0][type]": "sku",
                "items[0][parent]": "sku_1"}
        """
        payload: dict[str, str] = {}
        for key, value in (params or {}).items():
            cls._flatten_value(payload, key, value, max_depth=5, _current_depth=0)
        return payload

    def _init_client(self) -> httpx.AsyncClient:
        """Initialize the asynchronous HTTP client used to communicate with Stripe.

        The client is created once with the configured base URL and timeout.
        Credentials are not bound to the client; every request carries its own
        key so one client can act for many connected accounts.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
            )
            stripe_logger.info("Stripe HTTP client initialized")
        return self._client

    def _compute_backoff(self, attempt: int) -> float:
        """
        Compute the backoff time with jitter for a given retry attempt.

        Parameters
        ----------
            attempt : int
                The current retry attempt number (1-based).

        Returns
        -------
            float
                The computed backoff time in seconds.
        """
        base = min(self._backoff_base * (2 ** (attempt - 1)), self._backoff_max)
        jitter = random.uniform(1 - self._jitter, 1 + self._jitter)
        return base * jitter

    def _build_headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        request_headers: dict[str, str] = {}
        if self._api_version:
            request_headers["Stripe-Version"] = self._api_version
        if headers:
            request_headers.update(headers)
        return request_headers

    async def request(
        self,
        method: str,
        endpoint: str,
        api_key: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Send one logical request to the Stripe API with retry logic.

        - Retries 5xx errors (server errors) with exponential backoff
        - Retries 429 (rate limiting) with exponential backoff
        - Does NOT retry other 4xx errors
        - Retries timeouts and connection errors
        - POSTs without a caller supplied Idempotency-Key get a generated one,
          reused by every retry of the same logical request

        Parameters
        ----------
            method : str
                The HTTP method to use ('GET', 'POST', 'DELETE').
            endpoint : str
                Resource path without the API prefix (e.g. "orders/or_123").
            api_key : str
                Secret key sent as the basic-auth username.
            params : dict[str, Any] | None, optional
                Parameter set. Sent as the form body for POST and as the query
                string otherwise.
            headers : dict[str, str] | None, optional
                Additional headers (e.g. Idempotency-Key).

        Returns
        -------
            httpx.Response
                The last response received. Error statuses are returned, not
                raised, once retries are exhausted.

        Raises
        ------
            StripeTransportException
                When no response could be obtained after all attempts.
            StripeDecodeException
                When the response body cannot be content-decoded.
        """
        client = self._init_client()
        path = f"{self.API_PREFIX}/{endpoint.lstrip('/')}"
        encoded = self.encode_params(params)
        request_headers = self._build_headers(headers)
        if method.upper() == "POST" and "Idempotency-Key" not in request_headers:
            request_headers["Idempotency-Key"] = str(uuid4())
        request_kwargs: dict[str, Any] = {
            "headers": request_headers,
            "auth": httpx.BasicAuth(api_key, ""),
        }
        if method.upper() == "POST":
            request_kwargs["data"] = encoded
        elif encoded:
            request_kwargs["params"] = encoded

        for attempt in range(1, self._max_attempts + 1):
            try:
                resp: httpx.Response = await client.request(
                    method, path, **request_kwargs
                )
            except httpx.DecodingError as exc:
                stripe_logger.error(f"Undecodable Stripe response body: {exc}")
                raise StripeDecodeException(
                    details={"error": str(exc), "type": "content_decoding_error"},
                ) from exc
            except httpx.TransportError as exc:
                # Network/connectivity errors - retry with exponential backoff
                if attempt < self._max_attempts:
                    wait = self._compute_backoff(attempt)
                    stripe_logger.warning(
                        f"Network error; attempt {attempt}/{self._max_attempts}; "
                        f"wait={wait:.1f}s; error={exc.__class__.__name__}: {exc}"
                    )
                    await asyncio.sleep(wait)
                    continue

                stripe_logger.error(
                    f"Network error after {self._max_attempts} attempts: {exc}"
                )
                raise StripeTransportException(
                    details={"error": str(exc), "type": "network_error"},
                ) from exc
            except httpx.RequestError as exc:
                # Redirect loops and other non-transient request failures
                stripe_logger.error(
                    f"Stripe {method} {path} failed: {exc.__class__.__name__}: {exc}"
                )
                raise StripeTransportException(
                    details={"error": str(exc), "type": exc.__class__.__name__},
                ) from exc

            status = resp.status_code
            request_id = resp.headers.get("Request-Id")
            retryable = status >= 500 or status == httpx.codes.TOO_MANY_REQUESTS
            if retryable and attempt < self._max_attempts:
                wait = self._compute_backoff(attempt)
                stripe_logger.warning(
                    f"{status} from Stripe; attempt {attempt}/{self._max_attempts}; "
                    f"wait={wait:.1f}s; Request-Id={request_id}"
                )
                await asyncio.sleep(wait)
                continue

            if resp.is_success:
                stripe_logger.info(
                    f"Stripe {method} {path} succeeded (Request-Id: {request_id or 'N/A'})"
                )
            return resp

        # This should never be reached due to the logic above
        raise StripeTransportException(
            message="Unexpected error in Stripe request loop",
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            stripe_logger.info("Stripe HTTP client closed")
