from stripe_rest.core.services.stripe.resource import StripeResource
from stripe_rest.core.services.stripe.result import Err, Ok, StripeError, StripeResult
from stripe_rest.core.services.stripe.transport import StripeTransport
from stripe_rest.core.services.stripe.types import (
    Coupon,
    Customer,
    DeleteResponse,
    Order,
    OrderItem,
    Page,
    Product,
    StripeObject,
)

__all__ = [
    "Coupon",
    "Customer",
    "DeleteResponse",
    "Err",
    "Ok",
    "Order",
    "OrderItem",
    "Page",
    "Product",
    "StripeError",
    "StripeObject",
    "StripeResource",
    "StripeResult",
    "StripeTransport",
]
