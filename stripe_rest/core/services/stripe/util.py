"""
Helpers shared by every Stripe resource.

- ``handle_stripe_response`` turns a raw ``httpx.Response`` into a
  ``StripeResult``.
- ``list_raw`` / ``list_page`` fetch a single page of a list endpoint.
- ``iter_pages``, ``fetch_all``, ``count`` and ``delete_all`` walk a list
  endpoint to completion, ``MAX_FETCH_SIZE`` objects at a time.
"""

from typing import TYPE_CHECKING, Any, AsyncIterator
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from stripe_rest.core.config import stripe_logger
from stripe_rest.core.enums import HTTPMethod, StripeErrorKind
from stripe_rest.core.exceptions.types import StripeBulkListingException
from stripe_rest.core.services.stripe.result import Err, Ok, StripeError, StripeResult
from stripe_rest.core.services.stripe.types import Page

if TYPE_CHECKING:
    from stripe_rest.client import StripeClient


MAX_FETCH_SIZE: int = 100


def handle_stripe_response(response: httpx.Response) -> StripeResult[Any]:
    """
    Normalize a Stripe HTTP response into a result.

    Parameters
    ----------
    response : httpx.Response
        The response returned by the transport.

    Returns
    -------
    StripeResult[Any]
        ``Ok`` with the decoded body for 2xx responses. ``Err`` with
        kind ``api_error`` for non-2xx responses carrying a Stripe error
        envelope ({"error": {"type", "code", "message", "param", ...}}), and
        kind ``decode_error`` when the body is not JSON or not an error
        envelope.
    """
    status = response.status_code
    request_id = response.headers.get("Request-Id")

    try:
        body = response.json()
    except ValueError:
        stripe_logger.error(
            f"Undecodable Stripe response: {status} | Request-Id: {request_id or 'N/A'}"
        )
        return Err(
            StripeError(
                message=f"Unable to decode Stripe response (status {status})",
                kind=StripeErrorKind.DECODE,
                status_code=status,
                request_id=request_id,
                body=response.text,
            )
        )

    if response.is_success:
        return Ok(body)

    error_data = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error_data, dict):
        stripe_logger.error(
            f"Stripe error without error envelope: {status} | Request-Id: {request_id or 'N/A'}"
        )
        return Err(
            StripeError(
                message=f"Unexpected Stripe error body (status {status})",
                kind=StripeErrorKind.DECODE,
                status_code=status,
                request_id=request_id,
                body=body,
            )
        )

    error = StripeError(
        message=error_data.get("message") or f"Stripe API error {status}",
        kind=StripeErrorKind.API,
        code=error_data.get("code"),
        type=error_data.get("type"),
        param=error_data.get("param"),
        decline_code=error_data.get("decline_code"),
        status_code=status,
        request_id=request_id,
        body=body,
    )

    # Log with Request-Id for Stripe support debugging
    stripe_logger.error(
        f"Stripe error: {status} {error.type or 'unknown'} | "
        f"Code: {error.code or 'N/A'} | Request-Id: {request_id or 'N/A'} | "
        f"Message: {error.message}"
    )
    return Err(error)


def object_path(endpoint: str, *parts: str) -> str:
    """Join ``endpoint`` and object IDs, each ID percent-encoded as one segment."""
    return "/".join((endpoint, *(quote(part, safe="") for part in parts)))


def check_object_id(object_id: Any) -> Err | None:
    """
    Reject a blank object ID before any request is sent.

    An empty ID would address the list endpoint instead of one object.
    """
    if isinstance(object_id, str) and object_id.strip():
        return None
    return Err(
        StripeError(
            message=f"Invalid object ID: {object_id!r}",
            kind=StripeErrorKind.INVALID_REQUEST,
            param="id",
        )
    )


def _list_params(limit: int, starting_after: str | None) -> dict[str, Any]:
    params: dict[str, Any] = {"limit": limit}
    if starting_after:
        params["starting_after"] = starting_after
    return params


async def list_raw(
    client: "StripeClient",
    endpoint: str,
    api_key: str | None = None,
    limit: int = 10,
    starting_after: str | None = "",
) -> StripeResult[Any]:
    """
    Fetch one page of ``endpoint`` and return the decoded envelope untouched.

    ``limit`` is forwarded as-is; Stripe decides what to do with values
    outside 1..100. An empty ``starting_after`` starts from the newest object.
    """
    return await client.request(
        HTTPMethod.GET,
        endpoint,
        api_key,
        params=_list_params(limit, starting_after),
    )


async def list_page(
    client: "StripeClient",
    endpoint: str,
    api_key: str | None = None,
    limit: int = 10,
    starting_after: str | None = "",
) -> StripeResult[Page]:
    """Fetch one page of ``endpoint`` validated as a ``Page``."""
    result = await list_raw(client, endpoint, api_key, limit, starting_after)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Page.model_validate(result.value))
    except ValidationError as exc:
        stripe_logger.error(f"Malformed list response from {endpoint}: {exc}")
        return Err(
            StripeError(
                message=f"Malformed list response from {endpoint}",
                kind=StripeErrorKind.DECODE,
                body=result.value,
            )
        )


async def iter_pages(
    client: "StripeClient",
    endpoint: str,
    api_key: str | None = None,
    page_size: int = MAX_FETCH_SIZE,
) -> AsyncIterator[Page]:
    """
    Yield every page of ``endpoint``, newest first.

    The cursor starts empty and advances to the ID of the last object of each
    page while Stripe reports ``has_more``.

    Raises
    ------
    StripeBulkListingException
        As soon as one page fails. Pages already yielded are not retried.
    """
    starting_after: str | None = ""
    while True:
        result = await list_page(client, endpoint, api_key, page_size, starting_after)
        if isinstance(result, Err):
            raise StripeBulkListingException(endpoint, result.error)

        page = result.value
        yield page

        if not page.has_more:
            return
        if not page.data:
            stripe_logger.warning(
                f"{endpoint} reported has_more on an empty page; stopping"
            )
            return
        if page.cursor is None:
            stripe_logger.warning(
                f"Last object on a {endpoint} page has no id to continue from; stopping"
            )
            return
        starting_after = page.cursor


async def fetch_all(
    client: "StripeClient",
    endpoint: str,
    api_key: str | None = None,
) -> StripeResult[list[dict[str, Any]]]:
    """
    Collect every object of ``endpoint`` into one list.

    Pages are appended in the order they are fetched, so the list keeps
    Stripe's newest-first order across page boundaries.

    Returns ``Err`` with the failing page's error instead of partial data.
    """
    items: list[dict[str, Any]] = []
    try:
        async for page in iter_pages(client, endpoint, api_key):
            items.extend(page.data)
    except StripeBulkListingException as exc:
        return Err(exc.error)
    return Ok(items)


async def count(
    client: "StripeClient",
    endpoint: str,
    api_key: str | None = None,
) -> StripeResult[int]:
    """
    Count the objects of ``endpoint``.

    Stripe has no count endpoint, so this pages through the whole list;
    the cost grows with the number of objects.
    """
    result = await fetch_all(client, endpoint, api_key)
    if isinstance(result, Err):
        return result
    return Ok(len(result.value))


async def delete_all(
    client: "StripeClient",
    endpoint: str,
    api_key: str | None = None,
) -> list[StripeResult[Any]]:
    """
    Delete every object of ``endpoint``, one request at a time.

    Failed deletes are logged and collected but do not stop the loop, so a
    partial deletion is possible; inspect the returned results.

    Returns
    -------
    list[StripeResult[Any]]
        One result per listed object with an ID, in listing order. Objects
        without an ID are logged and skipped.

    Raises
    ------
    StripeBulkListingException
        If the objects cannot be listed.
    """
    listing = await fetch_all(client, endpoint, api_key)
    if isinstance(listing, Err):
        raise StripeBulkListingException(endpoint, listing.error)

    results: list[StripeResult[Any]] = []
    for item in listing.value:
        object_id = item.get("id")
        if check_object_id(object_id) is not None:
            stripe_logger.warning(f"Skipping {endpoint} object without an id: {item}")
            continue
        result = await client.request(
            HTTPMethod.DELETE, object_path(endpoint, object_id), api_key
        )
        if isinstance(result, Err):
            stripe_logger.warning(
                f"Failed to delete {endpoint}/{object_id}: {result.error.message}"
            )
        results.append(result)

    stripe_logger.info(
        f"Deleted {sum(1 for r in results if r.ok)}/{len(results)} objects from {endpoint}"
    )
    return results
