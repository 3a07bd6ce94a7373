"""
Stripe Orders (https://stripe.com/docs/api/orders).

Example usage:
    result = await client.orders.create(
        {
            "currency": "usd",
            "email": "buyer@example.com",
            "metadata": {"app_order_id": "ABC123"},
            "items": [{"type": "sku", "parent": "sku_8rFqplprEgXbUJ"}],
        }
    )
    if result.ok:
        await client.orders.pay(result.value["id"], {"source": "tok_visa"})
"""

from typing import Any

from stripe_rest.core.enums import HTTPMethod
from stripe_rest.core.services.stripe import util
from stripe_rest.core.services.stripe.resource import StripeResource
from stripe_rest.core.services.stripe.result import StripeResult
from stripe_rest.core.services.stripe.types import Order


class Orders(StripeResource[Order]):
    endpoint = "orders"
    model = Order

    async def pay(
        self,
        id: str,
        params: dict[str, Any] | None = None,
        api_key: str | None = None,
        *,
        idempotency_key: str | None = None,
    ) -> StripeResult[dict[str, Any]]:
        """
        Pay an order (POST /v1/orders/{id}/pay).

        Parameters
        ----------
        id : str
            The order ID.
        params : dict[str, Any] | None, optional
            Payment parameters such as ``source``, ``customer`` or ``email``.
        api_key : str | None, optional
            Explicit key; defaults to the client's key.
        idempotency_key : str | None, optional
            Sent as the Idempotency-Key header so the payment is safe to retry.

        Returns
        -------
        StripeResult[dict[str, Any]]
            The paid order, or the error Stripe reported (e.g. a card decline).
        """
        if invalid := util.check_object_id(id):
            return invalid
        return await self.client.request(
            HTTPMethod.POST,
            self._path(id, "pay"),
            api_key,
            params=params,
            headers=self._idempotency_headers(idempotency_key),
        )


__all__ = ["Orders"]
