"""
Tagged outcomes returned by every Stripe operation.

A call either succeeds with the decoded JSON body (``Ok``) or fails with a
normalized ``StripeError`` (``Err``). Callers branch on ``result.ok`` or use
structural pattern matching:

    match await client.orders.get("or_123"):
        case Ok(value=order):
            ...
        case Err(error=error):
            ...
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeAlias, TypeVar

from httpx import codes

from stripe_rest.core.enums import StripeErrorKind
from stripe_rest.core.exceptions.types import (
    AppException,
    IdempotencyException,
    RateLimitException,
    StripeAPIException,
    StripeCardException,
    StripeConfigurationException,
    StripeDecodeException,
    StripeTransportException,
)

T = TypeVar("T")


@dataclass(frozen=True)
class StripeError:
    """
    Normalized failure of a Stripe call.

    Attributes:
        message: Human-readable error message.
        kind: Which layer produced the failure.
        code: Machine-readable Stripe error code (e.g. "resource_missing").
        type: Stripe error type (e.g. "invalid_request_error", "card_error").
        param: Parameter the error relates to, if any.
        decline_code: Card decline code for card errors.
        status_code: HTTP status of the response, if one was received.
        request_id: Stripe Request-Id header, for support lookups.
        body: The decoded error payload (or raw text for decode failures).
    """

    message: str
    kind: StripeErrorKind = StripeErrorKind.API
    code: str | None = None
    type: str | None = None
    param: str | None = None
    decline_code: str | None = None
    status_code: int | None = None
    request_id: str | None = None
    body: Any = field(default=None, compare=False)

    def to_exception(self) -> AppException:
        """Map this error to the matching exception type."""
        if self.kind == StripeErrorKind.TRANSPORT:
            return StripeTransportException(
                message=self.message, details={"type": "network_error"}
            )
        if self.kind == StripeErrorKind.CONFIGURATION:
            return StripeConfigurationException(self.message)
        if self.kind == StripeErrorKind.INVALID_REQUEST:
            return StripeAPIException(
                message=self.message,
                status_code=codes.BAD_REQUEST,
                error_type="invalid_request_error",
                param=self.param,
            )
        if self.kind == StripeErrorKind.DECODE:
            return StripeDecodeException(
                message=self.message,
                status_code=self.status_code,
                details={"body": self.body},
            )

        details = self.body if isinstance(self.body, dict) else None
        if self.status_code == codes.CONFLICT or self.type == "idempotency_error":
            return IdempotencyException(
                message=self.message,
                request_id=self.request_id,
                details=details,
            )
        if self.type == "card_error":
            return StripeCardException(
                message=self.message,
                stripe_code=self.code,
                decline_code=self.decline_code,
                param=self.param,
                request_id=self.request_id,
                details=details,
            )
        if self.status_code == codes.TOO_MANY_REQUESTS:
            return RateLimitException(message=self.message, details=details)
        return StripeAPIException(
            message=self.message,
            status_code=self.status_code or codes.BAD_GATEWAY,
            stripe_code=self.code,
            error_type=self.type or "api_error",
            param=self.param,
            request_id=self.request_id,
            details=details,
        )


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call wrapping the decoded value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed call wrapping the normalized error."""

    error: StripeError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Raise the exception matching the wrapped error."""
        raise self.error.to_exception()


StripeResult: TypeAlias = Ok[T] | Err


__all__ = [
    "Err",
    "Ok",
    "StripeError",
    "StripeResult",
]
