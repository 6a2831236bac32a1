# tests/conftest.py
import pytest
import pytest_asyncio

from octoloom.auth import TokenAuth
from octoloom.client import GitHubClient
from octoloom.config import GitHubSettings, get_settings

API = "https://api.github.com"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep real GITHUB_* variables and cached settings out of the tests."""
    for name in (
        "GITHUB_PAT",
        "GITHUB_USERNAME",
        "GITHUB_PASSWORD",
        "GITHUB_CLIENT_ID",
        "GITHUB_CLIENT_SECRET",
        "GITHUB_BASE_URL",
        "GITHUB_PER_PAGE",
        "GITHUB_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> GitHubSettings:
    """Settings that ignore any .env file in the working directory."""
    return GitHubSettings(_env_file=None)


@pytest_asyncio.fixture
async def client(settings):
    """A GitHubClient authenticated with a dummy token."""
    async with GitHubClient(
        settings=settings, auth_strategy=TokenAuth(token="test-token")
    ) as gh:
        yield gh
