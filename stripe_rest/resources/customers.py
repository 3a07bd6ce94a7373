from stripe_rest.core.services.stripe.resource import StripeResource
from stripe_rest.core.services.stripe.types import Customer


class Customers(StripeResource[Customer]):
    """Stripe Customers (https://stripe.com/docs/api/customers)."""

    endpoint = "customers"
    model = Customer


__all__ = ["Customers"]
