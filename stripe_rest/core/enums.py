from enum import Enum


class StripeErrorKind(str, Enum):
    """Category of a failed Stripe call."""

    API = "api_error"  # Stripe answered with a non-2xx error envelope
    DECODE = "decode_error"  # Body was not JSON or not the expected shape
    TRANSPORT = "transport_error"  # Request never got a response
    CONFIGURATION = "configuration_error"  # No API key could be resolved
    INVALID_REQUEST = "invalid_request"  # Rejected before sending, e.g. blank ID


class HTTPMethod(str, Enum):
    """HTTP verbs used against the Stripe API."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
