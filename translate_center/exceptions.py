"""Exception hierarchy for the Translate Center API client.

Exception Hierarchy:
    TranslateClientError (base)
    ├── InvalidConfigurationError - Missing or invalid client options
    ├── UnknownAliasError - Alias lookup or template resolution failed
    ├── AuthenticationError - Login call failed
    └── TransportError - Any network or HTTP failure
        ├── ConnectionError - Network/connection failures
        ├── TimeoutError - Request timeout
        └── APIError - Server returned an error response
            ├── AuthenticationExpiredError (HTTP 401)
            ├── NotFoundError (HTTP 404)
            ├── ConflictError (HTTP 409)
            ├── ValidationError (HTTP 422)
            └── ServerError (HTTP 5xx)

Only AuthenticationExpiredError is recovered by the client itself (by
logging in again and retrying). Everything else reaches the caller.

Example:
    Catching all API errors::

        try:
            client.request("GET", "projects")
        except APIError as e:
            print(f"API error {e.status_code}: {e.message}")
"""

from typing import Any

import httpx


class TranslateClientError(Exception):
    """Base exception for all Translate Center client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class InvalidConfigurationError(TranslateClientError):
    """Client options are missing or invalid.

    Raised at construction time; never retried.
    """


class UnknownAliasError(TranslateClientError):
    """One or more aliases are not present in the alias store.

    Attributes:
        names: The alias names that could not be found.
    """

    def __init__(self, names: list[str] | str, message: str | None = None) -> None:
        if isinstance(names, str):
            names = [names]
        self.names = list(names)
        if message is None:
            message = f"Unknown alias: {', '.join(self.names)}"
        super().__init__(message)


class AuthenticationError(TranslateClientError):
    """Login failed.

    Raised when the login call cannot be performed, the server rejects the
    credentials, or the response does not carry a token and user id.

    Attributes:
        status_code: HTTP status of the login response, if one was received.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"[HTTP {self.status_code}] {self.message}"
        return self.message


class TransportError(TranslateClientError):
    """Base class for network and HTTP failures of a dispatched request."""


class ConnectionError(TransportError):
    """Failed to connect to the API server.

    Attributes:
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(TransportError):
    """Request timed out.

    Attributes:
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(TransportError):
    """Server returned an error response.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        error_type: Error type/code from the response body (if available).
        details: Additional error details from the response (if available).
        response_body: Parsed (or raw text) response body for debugging.
        response: The original httpx response, when available.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
        response: httpx.Response | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class AuthenticationExpiredError(APIError):
    """The server rejected the bearer token (HTTP 401).

    The client reacts by logging in again and retrying the request, up to
    the configured maximum number of attempts.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_type="authentication_expired",
            details=details,
            response_body=response_body,
            response=response,
        )


class NotFoundError(APIError):
    """Resource not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_type="not_found",
            details=details,
            response_body=response_body,
            response=response,
        )


class ConflictError(APIError):
    """State conflict (HTTP 409)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_type="conflict",
            details=details,
            response_body=response_body,
            response=response,
        )


class ValidationError(APIError):
    """Request validation failed (HTTP 422).

    The details attribute typically contains field-level validation errors.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=422,
            error_type="validation_error",
            details=details,
            response_body=response_body,
            response=response,
        )


class ServerError(APIError):
    """Server-side error (HTTP 5xx)."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type="server_error",
            details=details,
            response_body=response_body,
            response=response,
        )
