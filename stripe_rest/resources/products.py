from stripe_rest.core.services.stripe.resource import StripeResource
from stripe_rest.core.services.stripe.types import Product


class Products(StripeResource[Product]):
    """Stripe Products (https://stripe.com/docs/api/products)."""

    endpoint = "products"
    model = Product


__all__ = ["Products"]
