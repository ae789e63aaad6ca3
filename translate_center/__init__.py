"""Translate Center API client library.

A self-authenticating HTTP client: it logs in with the configured
credentials, sends the resulting token with every request, logs in again
when the token expires, and resolves ``{alias}`` placeholders in URIs and
headers.

Example:
    Synchronous usage::

        from translate_center import ApiClient

        with ApiClient({"login": "me", "password": "secret"}) as client:
            projects = client.request("GET", "users/{userUuid}/projects").json()

    Asynchronous usage::

        async with ApiClient(ClientConfig.from_env()) as client:
            response = await client.request_async("GET", "projects")

Exports:
    ApiClient: The authenticated client.
    AliasStore: Named values and ``{alias}`` template resolution.
    ClientConfig: Client configuration.

    Exceptions:
        TranslateClientError: Base exception for all client errors.
        InvalidConfigurationError: Missing or invalid options.
        UnknownAliasError: Alias lookup or resolution failed.
        AuthenticationError: Login failed.
        TransportError: Network or HTTP failure.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        AuthenticationExpiredError: Token rejected (HTTP 401).
        NotFoundError: Resource not found (HTTP 404).
        ConflictError: State conflict (HTTP 409).
        ValidationError: Request validation failed (HTTP 422).
        ServerError: Server-side error (HTTP 5xx).
"""

from translate_center.aliases import AliasStore
from translate_center.client import (
    AUTH_TOKEN_ALIAS,
    DEFAULT_API_URL,
    USER_UUID_ALIAS,
    ApiClient,
)
from translate_center.config import ClientConfig
from translate_center.exceptions import (
    APIError,
    AuthenticationError,
    AuthenticationExpiredError,
    ConflictError,
    ConnectionError,
    InvalidConfigurationError,
    NotFoundError,
    ServerError,
    TimeoutError,
    TransportError,
    TranslateClientError,
    UnknownAliasError,
    ValidationError,
)
from translate_center.models import LoginRequest, LoginResponse

__all__ = [
    # Client
    "ApiClient",
    "AliasStore",
    "ClientConfig",
    "AUTH_TOKEN_ALIAS",
    "USER_UUID_ALIAS",
    "DEFAULT_API_URL",
    # Models
    "LoginRequest",
    "LoginResponse",
    # Exceptions
    "TranslateClientError",
    "InvalidConfigurationError",
    "UnknownAliasError",
    "AuthenticationError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "AuthenticationExpiredError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "ServerError",
]
