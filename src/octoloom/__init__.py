"""octoloom: an asynchronous Python client for the GitHub REST API.

Each call builds a request, attaches credentials, sends it, checks the status
and parses the JSON body, returning the result or raising a typed error that
carries GitHub's own error message.
"""

from .auth import AuthStrategy, BasicAuth, NoAuth, OAuthAppAuth, TokenAuth
from .client import GitHubClient
from .config import GitHubSettings, get_pat, get_settings
from .constants import OCTOLOOM_VERSION as __version__
from .exceptions import (
    APIError,
    AuthenticationError,
    AuthError,
    ClientError,
    ConfigurationError,
    EmptyResponseError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    OctoloomError,
    OctoloomRequestError,
    ParseError,
    RateLimitError,
    ServerError,
    TimeoutError,
    UnprocessableEntityError,
    ValidationError,
)
from .log_config import configure_logging
from .models import (
    ApiResponse,
    Issue,
    Label,
    RateLimit,
    RateLimitOverview,
    Repository,
    SimpleUser,
    User,
)

__all__ = [
    "__version__",
    # Client and configuration
    "GitHubClient",
    "GitHubSettings",
    "get_pat",
    "get_settings",
    "configure_logging",
    # Authentication
    "AuthStrategy",
    "BasicAuth",
    "NoAuth",
    "OAuthAppAuth",
    "TokenAuth",
    # Exceptions
    "OctoloomError",
    "APIError",
    "ClientError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "UnprocessableEntityError",
    "RateLimitError",
    "ServerError",
    "ParseError",
    "EmptyResponseError",
    "ValidationError",
    "TimeoutError",
    "NetworkError",
    "OctoloomRequestError",
    "ConfigurationError",
    "AuthError",
    # Models
    "ApiResponse",
    "Issue",
    "Label",
    "RateLimit",
    "RateLimitOverview",
    "Repository",
    "SimpleUser",
    "User",
]
