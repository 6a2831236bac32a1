# octoloom/config.py
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_PER_PAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    GITHUB_API_BASE_URL,
    GITHUB_API_VERSION,
    GITHUB_MEDIA_TYPE,
    MAX_PER_PAGE,
    PAT_ENV_VAR,
)
from .exceptions import ConfigurationError
from .log_config import logger
from .types import PostRequestHook, PreRequestHook


class GitHubSettings(BaseSettings):
    """
    Manages user-configurable settings for the GitHub client,
    loaded from environment variables (prefixed with 'GITHUB_') or a .env file.

    The personal access token is read from ``GITHUB_PAT``. Keeping it in a
    dotfile outside version control, rather than in code, is the expected setup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "secrets.env"),
        env_file_encoding="utf-8",
        env_prefix="GITHUB_",
        extra="ignore",
        case_sensitive=False,
        arbitrary_types_allowed=True,  # hook callables
    )

    # --- Authentication ---
    pat: str | None = Field(
        default=None, description="GitHub personal access token (optional)"
    )
    username: str | None = Field(
        default=None, description="Username for HTTP Basic authentication"
    )
    password: str | None = Field(
        default=None,
        description="Password or personal access token for HTTP Basic authentication",
    )
    client_id: str | None = Field(
        default=None, description="OAuth app client ID (sent as Basic auth)"
    )
    client_secret: str | None = Field(
        default=None, description="OAuth app client secret (sent as Basic auth)"
    )

    # --- Client Behavior Settings ---
    base_url: str = Field(
        default=GITHUB_API_BASE_URL,
        description="API root; override for GitHub Enterprise Server",
    )
    api_version: str = Field(
        default=GITHUB_API_VERSION,
        description="Value of the X-GitHub-Api-Version header",
    )
    media_type: str = Field(
        default=GITHUB_MEDIA_TYPE,
        description="Default Accept header used for content negotiation",
    )
    request_timeout: float = Field(
        default=DEFAULT_TIMEOUT, description="Default request timeout in seconds"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header for requests (GitHub rejects requests without one)",
    )
    per_page: int = Field(
        default=DEFAULT_PER_PAGE,
        ge=1,
        le=MAX_PER_PAGE,
        description="Default page size for paginated listings",
    )

    # --- Hook Settings ---
    pre_request_hooks: list[PreRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call before a request is made.",
    )
    post_request_hooks: list[PostRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call after a response is received and parsed.",
    )


@lru_cache
def get_settings() -> GitHubSettings:
    """
    Provides access to the client settings.

    Settings are loaded from environment variables (prefixed with 'GITHUB_')
    or .env/secrets.env files. The instance is cached for performance.

    Returns:
        GitHubSettings: The settings instance.
    """
    return GitHubSettings()


def get_pat(env_var: str = PAT_ENV_VAR, env_file: str | Path | None = None) -> str:
    """Read a personal access token from the environment.

    Args:
        env_var: Name of the environment variable holding the token. Packages
            may choose their own name instead of ``GITHUB_PAT``.
        env_file: Optional dotfile to load first. Variables already present in
            the environment are not overridden.

    Returns:
        str: The token.

    Raises:
        ConfigurationError: If the dotfile does not exist, or the variable is
            unset or empty.
    """
    if env_file is not None:
        path = Path(env_file).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Environment file '{path}' does not exist.")
        load_dotenv(path, override=False)
        logger.debug(f"Loaded environment file {path}")

    token = os.environ.get(env_var, "").strip()
    if not token:
        raise ConfigurationError(
            f"Please set env var {env_var} to your GitHub personal access token."
        )
    return token
