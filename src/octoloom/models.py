# octoloom/models.py
"""Pydantic models for GitHub API responses.

This module defines the response wrapper returned by every client call, the
shape of GitHub's error bodies and rate-limit information, and a small set of
entity models (users, repositories, issues). Entity models allow extra fields
so that data GitHub returns beyond what is modelled here is kept.
"""

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    RATE_LIMIT_LIMIT_HEADER,
    RATE_LIMIT_REMAINING_HEADER,
    RATE_LIMIT_RESET_HEADER,
    RATE_LIMIT_RESOURCE_HEADER,
    RATE_LIMIT_USED_HEADER,
)


class ApiResponse(BaseModel):
    """The result of one successful API call.

    Attributes:
        content: The decoded JSON body, a parsed model if one was requested,
            or None for 204 No Content.
        path: The path (or URL) that was requested.
        status_code: The HTTP status code.
        headers: Response headers.
        response: The raw `httpx.Response`, excluded from serialization.
    """

    content: Any = None
    path: str
    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    response: httpx.Response | None = Field(default=None, exclude=True, repr=False)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __str__(self) -> str:
        content = self.content
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")
        elif isinstance(content, list):
            content = [
                item.model_dump(mode="json") if isinstance(item, BaseModel) else item
                for item in content
            ]
        body = json.dumps(content, indent=2, default=str)
        return f"<GitHub {self.path}>\n{body}"


class ErrorBody(BaseModel):
    """GitHub's JSON error body.

    Attributes:
        message: Human-readable error message.
        documentation_url: Link to the relevant API documentation.
        errors: Field-level details, present on 422 responses.
    """

    message: str | None = None
    documentation_url: str | None = None
    errors: list[Any] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class RateLimit(BaseModel):
    """A rate-limit window as reported by GitHub.

    Attributes:
        limit: Maximum requests allowed in the window.
        remaining: Requests left in the current window.
        used: Requests already made in the current window.
        reset: When the window resets (UTC).
        resource: The rate-limit bucket (``core``, ``search``, ``graphql``...).
    """

    limit: int
    remaining: int
    used: int | None = None
    reset: datetime
    resource: str | None = None

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimit | None":
        """Build a snapshot from ``X-RateLimit-*`` headers.

        Returns None unless limit, remaining and reset are all present and numeric.
        """
        limit = headers.get(RATE_LIMIT_LIMIT_HEADER)
        remaining = headers.get(RATE_LIMIT_REMAINING_HEADER)
        reset = headers.get(RATE_LIMIT_RESET_HEADER)
        if not (limit and remaining and reset):
            return None
        if not (limit.isdigit() and remaining.isdigit() and reset.isdigit()):
            return None
        used = headers.get(RATE_LIMIT_USED_HEADER)
        return cls(
            limit=int(limit),
            remaining=int(remaining),
            used=int(used) if used and used.isdigit() else None,
            reset=datetime.fromtimestamp(int(reset), tz=UTC),
            resource=headers.get(RATE_LIMIT_RESOURCE_HEADER),
        )

    def seconds_until_reset(self, now: datetime | None = None) -> float:
        """Seconds until the window resets; 0 if it already has."""
        now = now or datetime.now(UTC)
        return max(0.0, (self.reset - now).total_seconds())


class RateLimitOverview(BaseModel):
    """Body of ``GET /rate_limit``."""

    resources: dict[str, RateLimit] = Field(default_factory=dict)
    rate: RateLimit | None = None

    model_config = ConfigDict(extra="allow")


class GitHubEntity(BaseModel):
    """Fields shared by GitHub resources that carry an id and API URL."""

    id: int
    node_id: str | None = None
    url: str | None = None
    html_url: str | None = None

    model_config = ConfigDict(extra="allow")


class SimpleUser(GitHubEntity):
    """The abbreviated user object nested in repositories and issues."""

    login: str
    avatar_url: str | None = None
    type: str | None = None
    site_admin: bool = False


class User(SimpleUser):
    """A full user profile from ``/users/{username}`` or ``/user``."""

    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None
    public_repos: int | None = None
    public_gists: int | None = None
    followers: int | None = None
    following: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Repository(GitHubEntity):
    name: str
    full_name: str
    owner: SimpleUser
    private: bool = False
    description: str | None = None
    fork: bool = False
    language: str | None = None
    default_branch: str | None = None
    stargazers_count: int | None = None
    forks_count: int | None = None
    open_issues_count: int | None = None
    topics: list[str] = Field(default_factory=list)
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None


class Label(BaseModel):
    id: int | None = None
    name: str
    color: str | None = None
    description: str | None = None

    model_config = ConfigDict(extra="allow")


class Issue(GitHubEntity):
    """An issue. GitHub also returns pull requests from the issues endpoints;
    those carry a ``pull_request`` field."""

    number: int
    title: str
    state: str
    body: str | None = None
    user: SimpleUser | None = None
    labels: list[Label] = Field(default_factory=list)
    assignees: list[SimpleUser] = Field(default_factory=list)
    comments: int = 0
    locked: bool = False
    pull_request: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None
