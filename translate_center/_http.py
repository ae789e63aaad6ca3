"""Internal HTTP handling utilities for the Translate Center client.

This module provides the pieces of the transport layer that do not depend
on authentication state:
- Mapping error responses to the exception hierarchy
- Translating httpx network failures
- Merging default request options with caller options

This is an internal module and should not be imported directly by users.
"""

from collections.abc import Mapping
from typing import Any, Literal

import httpx

from translate_center.exceptions import (
    APIError,
    AuthenticationExpiredError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    TransportError,
    ValidationError,
)


# HTTP methods supported by the client
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Headers sent with every authenticated request (Authorization is added per call)
JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _error_field(loc: Any) -> str:
    """Return the field name of a validation error location.

    ``loc`` is normally a list like ``["body", "name"]`` but servers also
    send an empty list, a bare string, or nothing.
    """
    if isinstance(loc, (list, tuple)):
        return str(loc[-1]) if loc else "unknown"
    if loc is None or loc == "":
        return "unknown"
    return str(loc)


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Parse an error response to extract message, type, and details.

    Attempts to parse the response body as JSON and extract structured
    error information. Falls back to the raw response text if parsing fails.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return text, None, None
        return f"HTTP {response.status_code} error", None, None

    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str):
            return detail, body.get("type"), body.get("details")
        elif isinstance(detail, list):
            # Validation errors come as a list
            messages = [
                f"{_error_field(err.get('loc'))}: {err.get('msg', 'invalid')}"
                for err in detail
                if isinstance(err, dict)
            ]
            return "; ".join(messages), "validation_error", {"errors": detail}
        elif isinstance(detail, dict):
            return detail.get("message", str(detail)), detail.get("type"), detail

        if "message" in body:
            return str(body["message"]), body.get("type"), body.get("details")
        if "error" in body:
            return str(body["error"]), body.get("type"), body.get("details")

    return str(body), None, None


def error_message(response: httpx.Response) -> str:
    """Return the human-readable message of an error response."""
    message, _, _ = _parse_error_response(response)
    return message


def raise_for_status(response: httpx.Response) -> None:
    """Raise an appropriate exception for error status codes.

    Informational, success and redirect responses pass through.

    Args:
        response: The HTTP response to check.

    Raises:
        AuthenticationExpiredError: For HTTP 401 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ValidationError: For HTTP 422 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if not response.is_error:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    common = {
        "details": details,
        "response_body": response_body,
        "response": response,
    }
    if status_code == 401:
        raise AuthenticationExpiredError(message=message, **common)
    elif status_code == 404:
        raise NotFoundError(message=message, **common)
    elif status_code == 409:
        raise ConflictError(message=message, **common)
    elif status_code == 422:
        raise ValidationError(message=message, **common)
    elif status_code >= 500:
        raise ServerError(message=message, status_code=status_code, **common)
    else:
        raise APIError(
            message=message,
            status_code=status_code,
            error_type=error_type,
            **common,
        )


def translate_transport_error(
    error: httpx.RequestError,
    url: str,
    timeout: float | None = None,
) -> TransportError:
    """Map an httpx transport failure to the client's exception types.

    Args:
        error: The exception raised by httpx.
        url: The URL of the failed request, for the error message.
        timeout: The configured timeout, reported on TimeoutError.

    Returns:
        The exception to raise in its place (the caller chains it).
    """
    if isinstance(error, httpx.TimeoutException):
        return TimeoutError(
            message=f"Request to {url} timed out",
            timeout=timeout,
            url=url,
        )
    if isinstance(error, (httpx.ConnectError, httpx.NetworkError)):
        return ConnectionError(
            message=f"Failed to connect to {url}",
            url=url,
            cause=error,
        )
    return TransportError(f"Transport failure for {url}: {error}")


def _merge_headers(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any]
) -> dict[str, Any]:
    """Merge two header mappings, comparing names case-insensitively.

    Caller values replace defaults with the same name; the caller's
    spelling of the name is kept.
    """
    merged = dict(defaults)
    for name, value in overrides.items():
        for existing in [k for k in merged if k.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value
    return merged


def merge_options(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any]
) -> dict[str, Any]:
    """Deep-merge caller request options on top of default options.

    - Nested mappings are merged key by key.
    - Lists are concatenated (defaults first).
    - Any other value from ``overrides`` replaces the default.
    - ``headers`` are merged with case-insensitive names.

    Neither argument is modified.

    Args:
        defaults: Options built by the client.
        overrides: Options supplied by the caller.

    Returns:
        A new options dict.
    """
    merged: dict[str, Any] = dict(defaults)
    for key, value in overrides.items():
        current = merged.get(key)
        if key == "headers" and isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge_headers(current, value)
        elif isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_options(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = [*current, *value]
        else:
            merged[key] = value
    return merged
