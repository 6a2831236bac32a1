"""Constants used throughout the octoloom library.

GitHub base URL, header names, the default media type used for content
negotiation, and paging limits.
"""

OCTOLOOM_VERSION: str = "0.1.0"
DEFAULT_USER_AGENT: str = (
    f"octoloom/{OCTOLOOM_VERSION} (+https://github.com/octoloom/octoloom)"
)

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_MEDIA_TYPE = "application/vnd.github+json"
PAT_ENV_VAR = "GITHUB_PAT"

DEFAULT_TIMEOUT: float = 30.0
DEFAULT_PER_PAGE: int = 30
MAX_PER_PAGE: int = 100

API_VERSION_HEADER = "X-GitHub-Api-Version"
RATE_LIMIT_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_USED_HEADER = "X-RateLimit-Used"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"
RATE_LIMIT_RESOURCE_HEADER = "X-RateLimit-Resource"

# Endpoint paths
RATE_LIMIT = "rate_limit"
USER = "user"
USERS = "users"
REPOS = "repos"
USER_REPOS = "user/repos"
SEARCH_REPOSITORIES = "search/repositories"

ISSUE_STATES = frozenset({"open", "closed", "all"})
SORT_ORDERS = frozenset({"asc", "desc"})
