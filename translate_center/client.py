"""Self-authenticating client for the Translate Center REST API.

``ApiClient`` logs in with the configured credentials on first use, stores
the returned token and user id in an AliasStore, sends the token with every
request, and logs in again when the server reports the token expired.

Example:
    Synchronous usage::

        from translate_center import ApiClient

        with ApiClient({"login": "me", "password": "secret"}) as client:
            response = client.request("GET", "users/{userUuid}/projects")
            projects = response.json()

    Asynchronous usage::

        async with ApiClient(config) as client:
            response = await client.request_async("GET", "projects")
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from translate_center._http import (
    JSON_HEADERS,
    HttpMethod,
    error_message,
    merge_options,
    raise_for_status,
    translate_transport_error,
)
from translate_center.aliases import AliasStore
from translate_center.config import DEFAULT_API_URL, ClientConfig
from translate_center.exceptions import AuthenticationError, AuthenticationExpiredError
from translate_center.models import LoginRequest, LoginResponse


logger = logging.getLogger(__name__)

__all__ = [
    "AUTH_TOKEN_ALIAS",
    "DEFAULT_API_URL",
    "LOGIN_URI",
    "USER_UUID_ALIAS",
    "ApiClient",
]

AUTH_TOKEN_ALIAS = "authToken"
USER_UUID_ALIAS = "userUuid"

# Relative to the configured API base URL
LOGIN_URI = "login"


class ApiClient:
    """HTTP client that authenticates itself against the Translate Center API.

    Authentication state lives in the alias store: the client counts as
    authenticated while both ``authToken`` and ``userUuid`` are stored. The
    store is injected so several clients (or tests) can share or replace it.

    The httpx clients are created lazily on first use and reused afterwards.

    Attributes:
        config: The immutable client configuration.
        aliases: The alias store holding the token and user id.
    """

    def __init__(
        self,
        options: ClientConfig | Mapping[str, Any],
        aliases: AliasStore | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        No network call is made here.

        Args:
            options: A ClientConfig, or a mapping accepted by
                ClientConfig.from_options (``login``, ``password``, ``api``,
                ``maxAttempts``, ``timeout``, ``headers``, ``http``).
            aliases: Alias store to read and write the token from. A new,
                empty store is created when omitted.
            transport: Custom httpx transport for the sync client
                (e.g., httpx.MockTransport for testing).
            async_transport: Custom httpx transport for the async client.

        Raises:
            InvalidConfigurationError: If login or password is missing, or
                any option is invalid.
        """
        if isinstance(options, ClientConfig):
            self.config = options
        else:
            self.config = ClientConfig.from_options(options)
        self.aliases = aliases if aliases is not None else AliasStore()

        self._transport = transport
        self._async_transport = async_transport
        self._http_client: httpx.Client | None = None
        self._async_http_client: httpx.AsyncClient | None = None
        self._client_lock = threading.Lock()

    # Transport access

    def http_client(self) -> httpx.Client:
        """Return the shared sync httpx client, creating it on first use."""
        with self._client_lock:
            if self._http_client is None:
                options = self.config.client_options()
                if self._transport is not None:
                    options["transport"] = self._transport
                self._http_client = httpx.Client(**options)
            return self._http_client

    def async_http_client(self) -> httpx.AsyncClient:
        """Return the shared async httpx client, creating it on first use."""
        with self._client_lock:
            if self._async_http_client is None:
                options = self.config.client_options()
                if self._async_transport is not None:
                    options["transport"] = self._async_transport
                self._async_http_client = httpx.AsyncClient(**options)
            return self._async_http_client

    # Lifecycle

    def close(self) -> None:
        """Close the sync httpx client, if one was created."""
        with self._client_lock:
            client, self._http_client = self._http_client, None
        if client is not None:
            client.close()

    async def aclose(self) -> None:
        """Close both httpx clients, if they were created."""
        with self._client_lock:
            client, self._async_http_client = self._async_http_client, None
        if client is not None:
            await client.aclose()
        self.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    # Authentication

    @property
    def is_authenticated(self) -> bool:
        """Whether both the token and the user id are stored.

        This says nothing about whether the server still accepts the token.
        """
        return self.aliases.has_aliases(AUTH_TOKEN_ALIAS, USER_UUID_ALIAS)

    @property
    def user_uuid(self) -> str:
        """The stored user id.

        Raises:
            UnknownAliasError: If the client has not logged in yet.
        """
        return self.aliases.get_alias(USER_UUID_ALIAS)

    def _login_body(self) -> dict[str, str]:
        return LoginRequest(login=self.config.login, password=self.config.password).model_dump()

    def _store_login(self, response: httpx.Response) -> None:
        """Validate a login response and store the token and user id.

        Raises:
            AuthenticationError: If the response is an error or lacks the
                required fields.
        """
        if response.is_error:
            message = error_message(response)
            raise AuthenticationError(
                f"Login rejected: {message}",
                status_code=response.status_code,
            )

        try:
            data = LoginResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            raise AuthenticationError(
                "Login response does not contain authToken and userUuid",
                status_code=response.status_code,
                cause=e,
            ) from e

        self.aliases.set_aliases(
            {
                AUTH_TOKEN_ALIAS: data.auth_token,
                USER_UUID_ALIAS: data.user_uuid,
            }
        )
        logger.info(f"Logged in as {self.config.login} (user {data.user_uuid})")

    def login(self, force: bool = False) -> None:
        """Log in unless a token and user id are already stored.

        The login call itself is unauthenticated and never retried.

        Args:
            force: Log in even if both aliases are present.

        Raises:
            AuthenticationError: If the login call fails or its response
                cannot be parsed.
        """
        if not force and self.is_authenticated:
            return

        logger.debug(f"Sending login request for {self.config.login}")
        try:
            response = self.http_client().post(LOGIN_URI, json=self._login_body())
        except httpx.RequestError as e:
            raise AuthenticationError(f"Login request failed: {e}", cause=e) from e
        self._store_login(response)

    async def alogin(self, force: bool = False) -> None:
        """Async counterpart of login()."""
        if not force and self.is_authenticated:
            return

        logger.debug(f"Sending login request for {self.config.login}")
        try:
            response = await self.async_http_client().post(LOGIN_URI, json=self._login_body())
        except httpx.RequestError as e:
            raise AuthenticationError(f"Login request failed: {e}", cause=e) from e
        self._store_login(response)

    def reauthenticate(self) -> "ApiClient":
        """Log in again unconditionally, overwriting the stored token."""
        logger.info("Reauthenticating")
        self.login(force=True)
        return self

    async def areauthenticate(self) -> "ApiClient":
        """Async counterpart of reauthenticate()."""
        logger.info("Reauthenticating")
        await self.alogin(force=True)
        return self

    # Requests

    def _prepare(self, uri: str, options: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
        """Resolve aliases in the URI and merge the authenticated defaults.

        Returns:
            The resolved URI and the keyword arguments for httpx.
        """
        url = self.aliases.resolve(uri)
        defaults = {
            "headers": {
                "Authorization": self.aliases.resolve("{" + AUTH_TOKEN_ALIAS + "}"),
                **JSON_HEADERS,
            }
        }

        options = dict(options)
        headers = options.get("headers")
        if headers is not None:
            if not isinstance(headers, Mapping):
                # httpx also takes a sequence of (name, value) pairs
                headers = dict(httpx.Headers(headers).multi_items())
            options["headers"] = {
                name: self.aliases.resolve(value) if isinstance(value, str) else value
                for name, value in headers.items()
            }
        return url, merge_options(defaults, options)

    def _retry_allowed(self, method: str, url: str, attempt: int) -> bool:
        if attempt >= self.config.max_attempts:
            logger.error(
                f"{method} {url} still unauthorized after {attempt} attempt(s), giving up"
            )
            return False
        logger.warning(
            f"{method} {url} returned 401 (attempt {attempt}/{self.config.max_attempts}), "
            f"reauthenticating"
        )
        return True

    def _send(self, method: str, url: str, kwargs: dict[str, Any]) -> httpx.Response:
        try:
            return self.http_client().request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise translate_transport_error(e, url, self.config.timeout) from e

    async def _send_async(
        self, method: str, url: str, kwargs: dict[str, Any]
    ) -> httpx.Response:
        try:
            return await self.async_http_client().request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise translate_transport_error(e, url, self.config.timeout) from e

    def request(self, method: HttpMethod | str, uri: str, **options: Any) -> httpx.Response:
        """Send an authenticated request.

        Logs in first if needed. A 401 answer triggers a fresh login and a
        retry, up to ``config.max_attempts`` dispatches in total.

        Args:
            method: The HTTP method.
            uri: URI relative to the API base URL; may contain ``{alias}``
                placeholders.
            **options: httpx request options (``json``, ``params``,
                ``headers``, ...), merged on top of the defaults.

        Returns:
            The successful httpx response.

        Raises:
            AuthenticationError: If logging in fails.
            AuthenticationExpiredError: If every attempt got a 401.
            UnknownAliasError: If the URI or a header references an unknown alias.
            TransportError: For any other network or HTTP failure.
        """
        return self._request(method, uri, options, attempt=1)

    def _request(
        self,
        method: str,
        uri: str,
        options: Mapping[str, Any],
        attempt: int,
    ) -> httpx.Response:
        self.login()
        url, kwargs = self._prepare(uri, options)

        logger.debug(f"{method} {url} (attempt {attempt})")
        response = self._send(method, url, kwargs)
        try:
            raise_for_status(response)
        except AuthenticationExpiredError:
            if not self._retry_allowed(method, url, attempt):
                raise
        else:
            return response

        self.reauthenticate()
        return self._request(method, uri, options, attempt + 1)

    async def request_async(
        self, method: HttpMethod | str, uri: str, **options: Any
    ) -> httpx.Response:
        """Async counterpart of request(), with the same retry policy."""
        return await self._request_async(method, uri, options, attempt=1)

    async def _request_async(
        self,
        method: str,
        uri: str,
        options: Mapping[str, Any],
        attempt: int,
    ) -> httpx.Response:
        await self.alogin()
        url, kwargs = self._prepare(uri, options)

        logger.debug(f"{method} {url} (attempt {attempt})")
        response = await self._send_async(method, url, kwargs)
        try:
            raise_for_status(response)
        except AuthenticationExpiredError:
            if not self._retry_allowed(method, url, attempt):
                raise
        else:
            return response

        await self.areauthenticate()
        return await self._request_async(method, uri, options, attempt + 1)

    def raw_request(self, method: HttpMethod | str, uri: str, **options: Any) -> httpx.Response:
        """Send a request exactly as given.

        No login, no alias resolution, no default headers and no status
        checks: the httpx response is returned whatever its status.
        Network failures are still raised as ConnectionError/TimeoutError.
        """
        return self._send(method, uri, dict(options))

    async def raw_request_async(
        self, method: HttpMethod | str, uri: str, **options: Any
    ) -> httpx.Response:
        """Async counterpart of raw_request()."""
        return await self._send_async(method, uri, dict(options))
