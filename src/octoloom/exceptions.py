"""Custom exception classes for the octoloom library."""

from datetime import datetime
from typing import Any

import httpx


class OctoloomError(Exception):
    """Base exception class for all octoloom errors."""

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        request: httpx.Request | None = None,
    ):
        """Initializes the base exception.

        Args:
            message: The error message.
            response: Optional httpx.Response object associated with the error.
            request: Optional httpx.Request object associated with the error.
        """
        super().__init__(message)
        self.message = message
        self.response = response
        self.request = request

    def __str__(self) -> str:
        if self.response is not None:
            url_info = getattr(getattr(self.response, "request", None), "url", "N/A")
            return (
                f"{self.message} (Status: {self.response.status_code}, URL: {url_info})"
            )
        if isinstance(self.request, httpx.Request):
            return f"{self.message} (URL: {self.request.url})"
        return self.message


class APIError(OctoloomError):
    """An error status (4xx/5xx) returned by the GitHub API.

    Attributes:
        status_code: The HTTP status code of the response.
        api_message: The ``message`` field of GitHub's error body, if any.
        documentation_url: The ``documentation_url`` field of the error body, if any.
        errors: The ``errors`` list GitHub attaches to validation failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        api_message: str | None = None,
        documentation_url: str | None = None,
        errors: list[Any] | None = None,
        response: httpx.Response | None = None,
        request: httpx.Request | None = None,
    ):
        super().__init__(message, response=response, request=request)
        self.status_code = status_code
        self.api_message = api_message
        self.documentation_url = documentation_url
        self.errors = errors or []


class ClientError(APIError):
    """A 4xx response: the request itself was at fault."""


class AuthenticationError(ClientError):
    """401 Unauthorized: credentials are missing or invalid."""


class ForbiddenError(ClientError):
    """403 Forbidden: credentials are valid but lack permission."""


class NotFoundError(ClientError):
    """404 Not Found.

    GitHub also answers 404 for private resources the caller cannot see.
    """


class UnprocessableEntityError(ClientError):
    """422 Unprocessable Entity: GitHub rejected the request body."""


class RateLimitError(ClientError):
    """The rate limit for the current credentials is exhausted.

    Raised for 429 responses and for 403 responses with
    ``X-RateLimit-Remaining: 0``. octoloom never waits on its own; callers
    decide whether to sleep until ``reset_at`` or for ``retry_after`` seconds.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        reset_at: datetime | None = None,
        retry_after: float | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, status_code=status_code, **kwargs)
        self.reset_at = reset_at
        self.retry_after = retry_after


class ServerError(APIError):
    """A 5xx response: GitHub failed to handle a valid request."""


class ParseError(OctoloomError):
    """The response body could not be interpreted as JSON or as the expected model."""


class EmptyResponseError(ParseError):
    """A response that should carry content had an empty body."""


class ValidationError(OctoloomError):
    """Invalid arguments detected client-side, before a request is sent."""


class TimeoutError(OctoloomError):
    """Represents a request timeout error.

    This error is raised when an HTTP request does not complete within the configured timeout.
    """

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class NetworkError(OctoloomError):
    """Represents a network connection error (e.g., DNS resolution failure, connection refused)."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class OctoloomRequestError(OctoloomError):
    """Any other failure of the HTTP transport not covered by TimeoutError or NetworkError."""


class ConfigurationError(OctoloomError):
    """Represents an error in the library's configuration."""

    def __init__(self, message: str):
        super().__init__(message, response=None)


class AuthError(OctoloomError):
    """Raised when credentials cannot be applied to a request."""
