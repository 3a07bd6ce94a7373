"""
Stripe Coupons (https://stripe.com/docs/api/coupons).

Example usage:
    await client.coupons.create(
        {"id": "FALL25OFF", "duration": "once", "amount_off": 2500, "currency": "usd"}
    )
    result = await client.coupons.retrieve("FALL25OFF")
"""

from typing import Any

from stripe_rest.core.services.stripe.resource import StripeResource
from stripe_rest.core.services.stripe.result import StripeResult
from stripe_rest.core.services.stripe.types import Coupon


class Coupons(StripeResource[Coupon]):
    endpoint = "coupons"
    model = Coupon

    async def retrieve(
        self, id: str, api_key: str | None = None
    ) -> StripeResult[dict[str, Any]]:
        """Retrieve a coupon by its code. Same as ``get``."""
        return await self.get(id, api_key)


__all__ = ["Coupons"]
