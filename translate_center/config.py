"""Client configuration.

``ClientConfig`` holds everything the client needs that does not change
during its lifetime: the credentials, the API base URL, the retry budget
for expired tokens, and options passed through to the httpx transport.
"""

import os
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from translate_center.exceptions import InvalidConfigurationError


DEFAULT_API_URL = "http://dev-api.translate.center/api/v1/"
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT = 30.0


class ClientConfig(BaseModel):
    """Immutable settings for an ApiClient.

    Attributes:
        login: Account login sent to the login endpoint.
        password: Account password sent to the login endpoint.
        api: Base URL every request URI is relative to.
        max_attempts: Maximum dispatches per request when the token expires.
        timeout: Transport timeout in seconds.
        headers: Base headers sent with every request, including raw ones.
        http: Further keyword arguments for the httpx client, passed as is.
    """

    model_config = ConfigDict(frozen=True)

    login: str = Field(..., min_length=1, description="Account login")
    password: str = Field(..., min_length=1, repr=False, description="Account password")
    api: str = Field(default=DEFAULT_API_URL, description="API base URL")
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)
    http: dict[str, Any] = Field(default_factory=dict)

    @field_validator("api")
    @classmethod
    def validate_api(cls, v: str) -> str:
        """Ensure the base URL is absolute and ends with a slash.

        httpx appends relative request URIs to the base path, so
        ``login`` against ``.../api/v1/`` targets ``.../api/v1/login``.
        """
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("api must be an http(s) URL")
        if not v.endswith("/"):
            v += "/"
        return v

    @field_validator("http")
    @classmethod
    def validate_http(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Reject transport options that have a dedicated field.

        ``timeout`` and ``base_url`` must come from the ``timeout`` and
        ``api`` fields so errors report the values actually in effect.
        """
        for key in ("timeout", "base_url"):
            if key in v:
                raise ValueError(f"set {key!r} through its own option, not http")
        return v

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ClientConfig":
        """Build a config from a plain options mapping.

        Accepts both ``maxAttempts`` and ``max_attempts``. A missing login or
        password, or any invalid value, raises InvalidConfigurationError.
        """
        if not options.get("login"):
            raise InvalidConfigurationError("Login is required!")
        if not options.get("password"):
            raise InvalidConfigurationError("Password is required!")

        data = dict(options)
        if "maxAttempts" in data:
            data["max_attempts"] = data.pop("maxAttempts")
        for key in [k for k, v in data.items() if v is None]:
            del data[key]

        try:
            return cls(**data)
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid client options: {e}") from e

    @classmethod
    def from_env(
        cls,
        prefix: str = "TRANSLATE_",
        dotenv_path: str | os.PathLike[str] | None = None,
    ) -> "ClientConfig":
        """Build a config from environment variables.

        A ``.env`` file is loaded first (existing variables win). Reads
        ``<prefix>LOGIN``, ``PASSWORD``, ``API``, ``MAX_ATTEMPTS`` and
        ``TIMEOUT``.
        """
        load_dotenv(dotenv_path)
        return cls.from_options(
            {
                "login": os.environ.get(f"{prefix}LOGIN"),
                "password": os.environ.get(f"{prefix}PASSWORD"),
                "api": os.environ.get(f"{prefix}API"),
                "max_attempts": os.environ.get(f"{prefix}MAX_ATTEMPTS"),
                "timeout": os.environ.get(f"{prefix}TIMEOUT"),
            }
        )

    def client_options(self) -> dict[str, Any]:
        """Return keyword arguments for constructing an httpx client."""
        options: dict[str, Any] = {"timeout": self.timeout}
        options.update(self.http)
        if self.headers:
            options["headers"] = {**dict(self.http.get("headers") or {}), **self.headers}
        options["base_url"] = self.api
        return options
