from typing import Protocol

import httpx

from .exceptions import ConfigurationError
from .log_config import logger


class AuthStrategy(Protocol):
    """Protocol defining the interface for various authentication strategies.

    Concrete implementations of this protocol handle the specifics of adding
    authentication information (e.g., headers, tokens) to an HTTP request.
    """

    async def async_authenticate(self, request: httpx.Request) -> None:
        """
        Asynchronously modifies the request to add authentication information.

        Args:
            request: The httpx.Request object to modify.

        Raises:
            AuthError: If authentication cannot be applied.
        """
        ...

    async def async_close(self) -> None:
        """
        Asynchronously closes any underlying resources used by the auth strategy.
        This method should be idempotent.
        """
        ...


class NoAuth:
    """Implements the AuthStrategy protocol for anonymous requests.

    GitHub serves public data without credentials, at a much lower rate limit.
    """

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Does nothing as no authentication is needed."""
        logger.trace("Using NoAuth strategy, no authentication applied.")

    async def async_close(self) -> None:
        """No resources to close for NoAuth, this method is a no-op."""


class TokenAuth:
    """Implements AuthStrategy using a personal access token.

    The token is sent as a Bearer credential in the `Authorization` header.

    Attributes:
        _token: The personal access token.
    """

    def __init__(self, token: str | None):
        """Initializes TokenAuth with the provided token.

        Args:
            token: The personal access token.

        Raises:
            ConfigurationError: If the token is None or empty.
        """
        if not token:
            raise ConfigurationError("TokenAuth requires a non-empty 'token'.")
        self._token: str = token
        logger.debug("TokenAuth initialized.")

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Adds the 'Authorization: Bearer <token>' header to the request."""
        logger.trace("Authenticating request using TokenAuth.")
        request.headers["Authorization"] = f"Bearer {self._token}"

    async def async_close(self) -> None:
        """No resources to close for TokenAuth, this method is a no-op."""

    def __repr__(self) -> str:
        return "TokenAuth(token='***')"


class BasicAuth:
    """Implements AuthStrategy using HTTP Basic authentication.

    GitHub no longer accepts account passwords here; pass a personal access
    token as the password.
    """

    def __init__(self, username: str | None, password: str | None):
        if not username or not password:
            raise ConfigurationError("BasicAuth requires 'username' and 'password'.")
        self._username: str = username
        self._auth = httpx.BasicAuth(username=username, password=password)
        logger.debug(f"BasicAuth initialized for user {username}.")

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Adds an 'Authorization: Basic ...' header to the request."""
        logger.trace("Authenticating request using BasicAuth.")
        next(self._auth.sync_auth_flow(request))

    async def async_close(self) -> None:
        """No resources to close for BasicAuth, this method is a no-op."""

    def __repr__(self) -> str:
        return f"BasicAuth(username={self._username!r}, password='***')"


class OAuthAppAuth:
    """Implements AuthStrategy for an OAuth2 application.

    GitHub authenticates OAuth apps (for the app-level rate limit) with the
    app's client ID and secret sent as HTTP Basic credentials.

    Attributes:
        _client_id: The OAuth app client ID.
        _auth: httpx.BasicAuth carrying the client ID and secret.
    """

    def __init__(self, client_id: str | None, client_secret: str | None):
        if not all([client_id, client_secret]):
            raise ConfigurationError(
                "OAuthAppAuth requires 'client_id' and 'client_secret'."
            )
        assert client_id is not None
        assert client_secret is not None
        self._client_id: str = client_id
        self._auth = httpx.BasicAuth(username=client_id, password=client_secret)
        logger.debug("OAuthAppAuth initialized.")

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Adds the app credentials as a Basic 'Authorization' header."""
        logger.trace("Authenticating request using OAuthAppAuth.")
        next(self._auth.sync_auth_flow(request))

    async def async_close(self) -> None:
        """No resources to close for OAuthAppAuth, this method is a no-op."""

    def __repr__(self) -> str:
        return f"OAuthAppAuth(client_id={self._client_id!r}, client_secret='***')"
