from stripe_rest.client import StripeClient
from stripe_rest.core.config import Settings, get_settings
from stripe_rest.core.enums import StripeErrorKind
from stripe_rest.core.exceptions.types import (
    AppException,
    IdempotencyException,
    RateLimitException,
    StripeAPIException,
    StripeBulkListingException,
    StripeCardException,
    StripeConfigurationException,
    StripeDecodeException,
    StripeTransportException,
)
from stripe_rest.core.services.stripe import (
    Coupon,
    Customer,
    DeleteResponse,
    Err,
    Ok,
    Order,
    Page,
    Product,
    StripeError,
    StripeResource,
    StripeResult,
)
from stripe_rest.resources import Coupons, Customers, Orders, Products

__all__ = [
    "AppException",
    "Coupon",
    "Coupons",
    "Customer",
    "Customers",
    "DeleteResponse",
    "Err",
    "IdempotencyException",
    "Ok",
    "Order",
    "Orders",
    "Page",
    "Product",
    "Products",
    "RateLimitException",
    "Settings",
    "StripeAPIException",
    "StripeBulkListingException",
    "StripeCardException",
    "StripeClient",
    "StripeConfigurationException",
    "StripeDecodeException",
    "StripeError",
    "StripeErrorKind",
    "StripeResource",
    "StripeResult",
    "StripeTransportException",
    "get_settings",
]
