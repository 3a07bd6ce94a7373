from typing import TYPE_CHECKING

from httpx import codes

if TYPE_CHECKING:
    from stripe_rest.core.services.stripe.result import StripeError


class AppException(Exception):
    """Base library exception."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        self.message = message
        self.status_code = status_code or codes.INTERNAL_SERVER_ERROR
        self.details = details
        super().__init__(message)


class StripeAPIException(AppException):
    """Exception raised for Stripe API errors."""

    def __init__(
        self,
        message: str = "A Stripe API error occurred.",
        status_code: int = codes.BAD_GATEWAY,
        stripe_code: str | None = None,
        error_type: str = "api_error",
        param: str | None = None,
        request_id: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, status_code, details)
        self.stripe_code = stripe_code
        self.error_type = error_type
        self.param = param
        self.request_id = request_id


class StripeCardException(AppException):
    """Exception raised for Stripe card errors (declined, invalid, etc.)."""

    def __init__(
        self,
        message: str = "Card was declined.",
        stripe_code: str | None = None,
        decline_code: str | None = None,
        param: str | None = None,
        request_id: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, codes.PAYMENT_REQUIRED, details)
        self.stripe_code = stripe_code
        self.decline_code = decline_code
        self.param = param
        self.request_id = request_id


class IdempotencyException(AppException):
    """Exception raised for Stripe idempotency errors."""

    def __init__(
        self,
        message: str = "Idempotency key was used with different parameters.",
        request_id: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, codes.CONFLICT, details)
        self.request_id = request_id


class RateLimitException(AppException):
    """Exception raised when Stripe rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Stripe rate limit exceeded. Please try again later.",
        details: dict | None = None,
    ):
        super().__init__(message, codes.TOO_MANY_REQUESTS, details)


class StripeDecodeException(AppException):
    """Exception raised when a Stripe response body cannot be decoded."""

    def __init__(
        self,
        message: str = "Unable to decode Stripe response.",
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, status_code or codes.BAD_GATEWAY, details)


class StripeTransportException(AppException):
    """Exception raised when Stripe cannot be reached (timeouts, connection errors)."""

    def __init__(
        self,
        message: str = "Unable to connect to Stripe. Please try again later.",
        details: dict | None = None,
    ):
        super().__init__(message, codes.SERVICE_UNAVAILABLE, details)


class StripeConfigurationException(AppException):
    """Exception raised when no Stripe API key is available for a call."""

    def __init__(
        self,
        message: str = "Stripe API key is not set. Please set STRIPE_API_KEY in the environment variables or .env file.",
    ):
        super().__init__(message, codes.INTERNAL_SERVER_ERROR)


class StripeBulkListingException(AppException):
    """Exception raised when a bulk operation cannot list its resources.

    Raised by ``all``, ``iter_pages`` and ``delete_all`` so a failed page
    aborts the whole batch instead of returning partial data.
    """

    def __init__(self, endpoint: str, error: "StripeError"):
        super().__init__(
            f"Listing {endpoint} failed: {error.message}",
            error.status_code or codes.BAD_GATEWAY,
            {"endpoint": endpoint, "kind": error.kind.value, "code": error.code},
        )
        self.endpoint = endpoint
        self.error = error
