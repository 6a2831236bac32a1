"""Tests for the resource clients, driven through GitHubClient with mocked HTTP."""

import json

import pytest

from octoloom.client import GitHubClient
from octoloom.exceptions import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from octoloom.models import Issue, Repository, User

API = "https://api.github.com"

OCTOCAT = {"login": "octocat", "id": 1, "type": "User"}
HELLO_WORLD = {
    "id": 1296269,
    "name": "Hello-World",
    "full_name": "octocat/Hello-World",
    "owner": OCTOCAT,
    "private": False,
}


def _issue(number: int, title: str = "An issue", state: str = "open") -> dict:
    return {"id": 1000 + number, "number": number, "title": title, "state": state, "user": OCTOCAT}


# --- Users ---


@pytest.mark.asyncio
async def test_users_get(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        url=f"{API}/users/octocat", json={**OCTOCAT, "public_repos": 8}
    )

    user = await client.users.get("octocat")

    assert isinstance(user, User)
    assert user.public_repos == 8


@pytest.mark.asyncio
async def test_users_get_not_found(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        url=f"{API}/users/ghost-nobody",
        status_code=404,
        json={"message": "Not Found", "documentation_url": "https://docs.github.com"},
    )

    with pytest.raises(NotFoundError):
        await client.users.get("ghost-nobody")


@pytest.mark.asyncio
async def test_users_get_requires_username(client: GitHubClient):
    with pytest.raises(ValidationError, match="username"):
        await client.users.get("  ")


@pytest.mark.asyncio
async def test_users_me_bad_credentials(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        url=f"{API}/user", status_code=401, json={"message": "Bad credentials"}
    )

    with pytest.raises(AuthenticationError, match="Bad credentials"):
        await client.users.me()


@pytest.mark.asyncio
async def test_users_iterate_repos(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        url=f"{API}/users/octocat/repos?type=owner&sort=updated&per_page=30",
        json=[HELLO_WORLD],
    )

    repos = [r async for r in client.users.iterate_repos("octocat", sort="updated")]

    assert [r.full_name for r in repos] == ["octocat/Hello-World"]


@pytest.mark.asyncio
async def test_users_iterate_repos_invalid_type(client: GitHubClient):
    with pytest.raises(ValidationError, match="Invalid repository type"):
        async for _ in client.users.iterate_repos("octocat", type="forks"):
            pass


# --- Repos ---


@pytest.mark.asyncio
async def test_repos_get(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(url=f"{API}/repos/octocat/Hello-World", json=HELLO_WORLD)

    repo = await client.repos.get("octocat", "Hello-World")

    assert isinstance(repo, Repository)
    assert repo.owner.login == "octocat"


@pytest.mark.asyncio
async def test_repos_iterate_for_authenticated_user(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        url=f"{API}/user/repos?visibility=private&per_page=100", json=[HELLO_WORLD]
    )

    repos = [
        r
        async for r in client.repos.iterate_for_authenticated_user(
            visibility="private", per_page=100
        )
    ]

    assert len(repos) == 1


@pytest.mark.asyncio
async def test_repos_invalid_visibility(client: GitHubClient):
    with pytest.raises(ValidationError):
        async for _ in client.repos.iterate_for_authenticated_user(visibility="secret"):
            pass


# --- Issues ---


@pytest.mark.asyncio
async def test_issues_get(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        url=f"{API}/repos/octocat/Hello-World/issues/1347", json=_issue(1347)
    )

    issue = await client.issues.get("octocat", "Hello-World", 1347)

    assert isinstance(issue, Issue)
    assert issue.number == 1347


@pytest.mark.asyncio
async def test_issues_iterate_across_pages(client: GitHubClient, httpx_mock):
    page2 = f"{API}/repositories/1296269/issues?state=all&labels=bug%2Cui&per_page=2&page=2"
    httpx_mock.add_response(
        url=f"{API}/repos/octocat/Hello-World/issues?state=all&labels=bug,ui&per_page=2",
        json=[_issue(1), _issue(2)],
        headers={"Link": f'<{page2}>; rel="next"'},
    )
    httpx_mock.add_response(url=page2, json=[_issue(3, state="closed")])

    issues = [
        i
        async for i in client.issues.iterate(
            "octocat", "Hello-World", state="all", labels=["bug", "ui"], per_page=2
        )
    ]

    assert [i.number for i in issues] == [1, 2, 3]
    assert issues[-1].state == "closed"


@pytest.mark.asyncio
async def test_issues_iterate_invalid_state(client: GitHubClient):
    with pytest.raises(ValidationError, match="Invalid issue state"):
        async for _ in client.issues.iterate("octocat", "Hello-World", state="merged"):
            pass


@pytest.mark.asyncio
async def test_issues_create(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        method="POST",
        url=f"{API}/repos/octocat/Hello-World/issues",
        status_code=201,
        json=_issue(1348, title="Found a bug"),
    )

    issue = await client.issues.create(
        "octocat", "Hello-World", "Found a bug", body="Steps...", labels=["bug"]
    )

    assert issue.title == "Found a bug"
    sent = json.loads(httpx_mock.get_request().read())
    assert sent == {"title": "Found a bug", "body": "Steps...", "labels": ["bug"]}


@pytest.mark.asyncio
async def test_issues_create_requires_title(client: GitHubClient):
    with pytest.raises(ValidationError, match="title"):
        await client.issues.create("octocat", "Hello-World", "")


@pytest.mark.asyncio
async def test_issues_update(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        method="PATCH",
        url=f"{API}/repos/octocat/Hello-World/issues/1347",
        json=_issue(1347, state="closed"),
    )

    issue = await client.issues.update("octocat", "Hello-World", 1347, state="closed")

    assert issue.state == "closed"
    assert json.loads(httpx_mock.get_request().read()) == {"state": "closed"}


@pytest.mark.asyncio
async def test_issues_update_validation(client: GitHubClient):
    with pytest.raises(ValidationError, match="at least one field"):
        await client.issues.update("octocat", "Hello-World", 1347)
    with pytest.raises(ValidationError, match="Invalid issue state"):
        await client.issues.update("octocat", "Hello-World", 1347, state="all")


# --- Search ---


@pytest.mark.asyncio
async def test_search_repositories(client: GitHubClient, httpx_mock):
    httpx_mock.add_response(
        url=f"{API}/search/repositories?q=hello+language%3Apython&sort=stars&order=desc&per_page=30",
        json={"total_count": 1, "incomplete_results": False, "items": [HELLO_WORLD]},
    )

    repos = [
        r async for r in client.search.repositories("hello language:python", sort="stars")
    ]

    assert [r.name for r in repos] == ["Hello-World"]


@pytest.mark.asyncio
async def test_search_repositories_invalid_order(client: GitHubClient):
    with pytest.raises(ValidationError, match="Invalid sort order"):
        async for _ in client.search.repositories("hello", order="sideways"):
            pass
