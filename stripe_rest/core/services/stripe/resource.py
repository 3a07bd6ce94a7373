from __future__ import annotations

from typing import TYPE_CHECKING, Any, AsyncIterator, Generic, Type, TypeVar

from pydantic import BaseModel

from stripe_rest.core.enums import HTTPMethod
from stripe_rest.core.exceptions.types import StripeBulkListingException
from stripe_rest.core.services.stripe import util
from stripe_rest.core.services.stripe.result import Err, StripeResult
from stripe_rest.core.services.stripe.types import Page

if TYPE_CHECKING:
    from stripe_rest.client import StripeClient

T = TypeVar("T", bound=BaseModel)


class StripeResource(Generic[T]):
    """
    Generic client for one Stripe list/CRUD resource.

    Subclasses only set ``endpoint`` and ``model`` and add the calls that are
    specific to their resource. Every call takes an optional ``api_key``;
    when omitted the client's configured key is used, otherwise the given key
    is forwarded unchanged (Stripe Connect).

    Example usage:
        class Orders(StripeResource[Order]):
            endpoint = "orders"
            model = Order

        result = await Orders(client).get("or_123")
    """

    endpoint: str
    model: Type[T]

    def __init__(self, client: "StripeClient"):
        self.client = client

    def _path(self, *parts: str) -> str:
        return util.object_path(self.endpoint, *parts)

    def _idempotency_headers(self, idempotency_key: str | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if idempotency_key is not None:
            headers["Idempotency-Key"] = idempotency_key
        return headers

    def parse(self, value: dict[str, Any]) -> T:
        """Validate a decoded Stripe object into this resource's model."""
        return self.model.model_validate(value)

    async def create(
        self,
        params: dict[str, Any] | None = None,
        api_key: str | None = None,
        *,
        idempotency_key: str | None = None,
    ) -> StripeResult[dict[str, Any]]:
        """Create an object with the given parameters (POST /v1/<endpoint>)."""
        return await self.client.request(
            HTTPMethod.POST,
            self._path(),
            api_key,
            params=params,
            headers=self._idempotency_headers(idempotency_key),
        )

    async def get(
        self, id: str, api_key: str | None = None
    ) -> StripeResult[dict[str, Any]]:
        """Retrieve an object by ID. An unknown ID is an ``Err``, not an exception."""
        if invalid := util.check_object_id(id):
            return invalid
        return await self.client.request(HTTPMethod.GET, self._path(id), api_key)

    async def update(
        self,
        id: str,
        params: dict[str, Any] | None = None,
        api_key: str | None = None,
        *,
        idempotency_key: str | None = None,
    ) -> StripeResult[dict[str, Any]]:
        """Update an object; only the given parameters change."""
        if invalid := util.check_object_id(id):
            return invalid
        return await self.client.request(
            HTTPMethod.POST,
            self._path(id),
            api_key,
            params=params,
            headers=self._idempotency_headers(idempotency_key),
        )

    async def delete(
        self, id: str, api_key: str | None = None
    ) -> StripeResult[dict[str, Any]]:
        if invalid := util.check_object_id(id):
            return invalid
        return await self.client.request(HTTPMethod.DELETE, self._path(id), api_key)

    async def list(
        self,
        starting_after: str | None = "",
        limit: int = 10,
        api_key: str | None = None,
    ) -> StripeResult[Page]:
        """
        Fetch one page of objects, newest first.

        Parameters
        ----------
        starting_after : str | None
            Cursor: ID of the last object of the previous page. Empty starts
            from the newest object.
        limit : int
            Page size, forwarded without validation. Defaults to 10.
        api_key : str | None
            Explicit key; defaults to the client's key.
        """
        return await util.list_page(
            self.client, self.endpoint, api_key, limit, starting_after
        )

    async def list_raw(
        self,
        starting_after: str | None = "",
        limit: int = 10,
        api_key: str | None = None,
    ) -> StripeResult[Any]:
        return await util.list_raw(
            self.client, self.endpoint, api_key, limit, starting_after
        )

    def iter_pages(self, api_key: str | None = None) -> AsyncIterator[Page]:
        """Lazily walk every page; raises ``StripeBulkListingException`` on failure."""
        return util.iter_pages(self.client, self.endpoint, api_key)

    async def all(self, api_key: str | None = None) -> StripeResult[list[dict[str, Any]]]:
        """
        List every object of this resource.

        Returns
        -------
        StripeResult[list[dict[str, Any]]]
            ``Ok`` with all objects, newest first. Each page is appended after
            the ones fetched before it, so the first page's objects come first.

        Raises
        ------
        StripeBulkListingException
            If any page cannot be fetched. No partial list is returned.
        """
        result = await util.fetch_all(self.client, self.endpoint, api_key)
        if isinstance(result, Err):
            raise StripeBulkListingException(self.endpoint, result.error)
        return result

    async def count(self, api_key: str | None = None) -> StripeResult[int]:
        """Count objects by paging through all of them."""
        return await util.count(self.client, self.endpoint, api_key)

    async def delete_all(self, api_key: str | None = None) -> list[StripeResult[Any]]:
        """
        Delete every object of this resource with the same credential.

        Raises ``StripeBulkListingException`` if listing fails; individual
        delete failures are returned, not raised.
        """
        return await util.delete_all(self.client, self.endpoint, api_key)
