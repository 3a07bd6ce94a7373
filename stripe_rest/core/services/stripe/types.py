from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def coerce_timestamp_to_datetime(ts: int) -> datetime:
    """Converts a Unix timestamp (in seconds) to a datetime object."""
    if isinstance(ts, int):
        return datetime.fromtimestamp(ts)
    return ts


Timestamp = Annotated[datetime, BeforeValidator(coerce_timestamp_to_datetime)]


class StripeObject(BaseModel):
    """Base for Stripe resources; unknown fields are kept as extras."""

    model_config = ConfigDict(extra="allow")

    id: str
    object: str | None = None


class Page(BaseModel):
    """One batch of a cursor-paginated list response."""

    object: str = "list"
    data: list[dict[str, Any]]
    has_more: bool
    url: str | None = None

    @property
    def cursor(self) -> str | None:
        """ID of the last item, used as ``starting_after`` for the next page."""
        if not self.data:
            return None
        return self.data[-1].get("id") or None


class DeleteResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    object: str | None = None
    deleted: bool


class OrderItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str  # sku, tax, shipping or discount
    parent: str | None = None
    amount: int | None = None
    currency: str | None = None
    description: str | None = None
    quantity: int | None = None


class Order(StripeObject):
    """Simplified Stripe Order object."""

    object: Literal["order"] = "order"  # type: ignore[assignment]
    amount: int | None = None
    currency: str
    customer: str | None = None
    email: str | None = None
    charge: str | None = None
    status: Annotated[
        str | None,
        Field(description="One of created, paid, canceled, fulfilled or returned."),
    ] = None
    items: list[OrderItem] = []
    metadata: dict[str, Any] = {}
    livemode: bool = False
    created: Timestamp | None = None
    updated: Timestamp | None = None


class Coupon(StripeObject):
    """Simplified Stripe Coupon object."""

    object: Literal["coupon"] = "coupon"  # type: ignore[assignment]
    name: str | None = None
    duration: Literal["once", "repeating", "forever"]
    duration_in_months: int | None = None
    amount_off: int | None = None
    percent_off: float | None = None
    currency: str | None = None
    max_redemptions: int | None = None
    times_redeemed: int = 0
    redeem_by: Timestamp | None = None
    valid: bool = True
    metadata: dict[str, Any] = {}
    livemode: bool = False
    created: Timestamp | None = None


class Customer(StripeObject):
    """Simplified Stripe Customer object."""

    object: Literal["customer"] = "customer"  # type: ignore[assignment]
    email: str | None = None
    name: str | None = None
    description: str | None = None
    metadata: dict[str, Any] = {}
    livemode: bool = False
    created: Timestamp | None = None


class Product(StripeObject):
    """Simplified Stripe Product object."""

    object: Literal["product"] = "product"  # type: ignore[assignment]
    name: str
    description: str | None = None
    active: bool = True
    default_price: str | None = None
    metadata: dict[str, Any] = {}
    tax_code: str | None = None
    created: Timestamp | None = None
    updated: Timestamp | None = None
