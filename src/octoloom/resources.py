"""Resource clients for areas of the GitHub API.

Each resource client holds a reference to the GitHubClient and turns a
method call into a path, query and body for `GitHubClient.request` or
`GitHubClient.paginate`. Validation of arguments happens here, before any
request is sent.
"""

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from .constants import (
    ISSUE_STATES,
    REPOS,
    SEARCH_REPOSITORIES,
    SORT_ORDERS,
    USER,
    USER_REPOS,
    USERS,
)
from .exceptions import ValidationError
from .log_config import logger
from .models import Issue, Repository, User

if TYPE_CHECKING:
    from .client import GitHubClient


def _require(**values: str | None) -> None:
    for name, value in values.items():
        if not value or not value.strip():
            raise ValidationError(f"'{name}' must be a non-empty string")


class BaseResourceClient:
    """Base class for all resource clients.

    Attributes:
        _api_client: The `GitHubClient` used for making HTTP requests.
    """

    def __init__(self, api_client: "GitHubClient"):
        self._api_client = api_client
        logger.debug(f"{self.__class__.__name__} initialized")


class UsersClient(BaseResourceClient):
    """Client for ``/users`` and ``/user``."""

    async def get(self, username: str) -> User:
        """Fetch the public profile of `username`.

        Raises:
            NotFoundError: If no such user exists.
        """
        _require(username=username)
        response = await self._api_client.get(
            f"{USERS}/{username}", expected_model=User
        )
        return response.content

    async def me(self) -> User:
        """Fetch the authenticated user.

        Raises:
            AuthenticationError: If the client has no valid credentials.
        """
        response = await self._api_client.get(USER, expected_model=User)
        return response.content

    async def iterate_repos(
        self,
        username: str,
        type: str = "owner",
        sort: str | None = None,
        per_page: int | None = None,
    ) -> AsyncIterator[Repository]:
        """Iterate over the public repositories of `username`.

        Args:
            username: Account login.
            type: ``all``, ``owner`` or ``member``.
            sort: ``created``, ``updated``, ``pushed`` or ``full_name``.
            per_page: Page size for the underlying requests.
        """
        _require(username=username)
        if type not in {"all", "owner", "member"}:
            raise ValidationError(f"Invalid repository type: {type}")
        params: dict[str, Any] = {"type": type}
        if sort:
            params["sort"] = sort
        async for repo in self._api_client.paginate(
            f"{USERS}/{username}/repos",
            params=params,
            per_page=per_page,
            expected_model=Repository,
        ):
            yield repo


class ReposClient(BaseResourceClient):
    """Client for ``/repos`` and ``/user/repos``."""

    async def get(self, owner: str, repo: str) -> Repository:
        _require(owner=owner, repo=repo)
        response = await self._api_client.get(
            f"{REPOS}/{owner}/{repo}", expected_model=Repository
        )
        return response.content

    async def iterate_for_authenticated_user(
        self, visibility: str = "all", per_page: int | None = None
    ) -> AsyncIterator[Repository]:
        if visibility not in {"all", "public", "private"}:
            raise ValidationError(f"Invalid visibility: {visibility}")
        async for repo in self._api_client.paginate(
            USER_REPOS,
            params={"visibility": visibility},
            per_page=per_page,
            expected_model=Repository,
        ):
            yield repo


class IssuesClient(BaseResourceClient):
    """Client for ``/repos/{owner}/{repo}/issues``.

    GitHub lists pull requests through these endpoints as well; check
    `Issue.is_pull_request` to tell them apart.
    """

    def _path(self, owner: str, repo: str) -> str:
        _require(owner=owner, repo=repo)
        return f"{REPOS}/{owner}/{repo}/issues"

    async def get(self, owner: str, repo: str, number: int) -> Issue:
        response = await self._api_client.get(
            f"{self._path(owner, repo)}/{number}", expected_model=Issue
        )
        return response.content

    async def iterate(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        labels: list[str] | None = None,
        per_page: int | None = None,
    ) -> AsyncIterator[Issue]:
        """Iterate over the issues of a repository.

        Args:
            owner: Repository owner.
            repo: Repository name.
            state: ``open``, ``closed`` or ``all``.
            labels: Only issues carrying every one of these labels.
            per_page: Page size for the underlying requests.

        Raises:
            ValidationError: If `state` is not a known issue state.
        """
        if state not in ISSUE_STATES:
            raise ValidationError(f"Invalid issue state: {state}")
        params: dict[str, Any] = {"state": state}
        if labels:
            params["labels"] = ",".join(labels)
        async for issue in self._api_client.paginate(
            self._path(owner, repo),
            params=params,
            per_page=per_page,
            expected_model=Issue,
        ):
            yield issue

    async def create(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> Issue:
        """Open a new issue. Requires credentials with write access.

        Raises:
            ValidationError: If `title` is empty.
            UnprocessableEntityError: If GitHub rejects the fields.
        """
        _require(title=title)
        payload: dict[str, Any] = {"title": title}
        if body is not None:
            payload["body"] = body
        if labels:
            payload["labels"] = labels
        if assignees:
            payload["assignees"] = assignees
        logger.info(f"Creating issue in {owner}/{repo}: {title!r}")
        response = await self._api_client.post(
            self._path(owner, repo), json=payload, expected_model=Issue
        )
        return response.content

    async def update(self, owner: str, repo: str, number: int, **fields: Any) -> Issue:
        """Edit an issue; `fields` are sent as the PATCH body (title, body, state...)."""
        if not fields:
            raise ValidationError("update() needs at least one field to change")
        state = fields.get("state")
        if state is not None and state not in {"open", "closed"}:
            raise ValidationError(f"Invalid issue state: {state}")
        response = await self._api_client.patch(
            f"{self._path(owner, repo)}/{number}", json=fields, expected_model=Issue
        )
        return response.content


class SearchClient(BaseResourceClient):
    """Client for ``/search``."""

    async def repositories(
        self,
        query: str,
        sort: str | None = None,
        order: str = "desc",
        per_page: int | None = None,
        max_pages: int | None = None,
    ) -> AsyncIterator[Repository]:
        """Iterate over repositories matching a search query.

        Args:
            query: GitHub search syntax, e.g. ``"httpx language:python"``.
            sort: ``stars``, ``forks``, ``help-wanted-issues`` or ``updated``.
            order: ``asc`` or ``desc``; only used together with `sort`.
            per_page: Page size for the underlying requests.
            max_pages: Stop after this many pages.
        """
        _require(query=query)
        if order not in SORT_ORDERS:
            raise ValidationError(f"Invalid sort order: {order}")
        params: dict[str, Any] = {"q": query}
        if sort:
            params["sort"] = sort
            params["order"] = order
        async for repo in self._api_client.paginate(
            SEARCH_REPOSITORIES,
            params=params,
            per_page=per_page,
            max_pages=max_pages,
            expected_model=Repository,
        ):
            yield repo
