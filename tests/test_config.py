import os

import pytest

from octoloom.config import GitHubSettings, get_pat, get_settings
from octoloom.constants import (
    DEFAULT_USER_AGENT,
    GITHUB_API_BASE_URL,
    GITHUB_API_VERSION,
    GITHUB_MEDIA_TYPE,
)
from octoloom.exceptions import ConfigurationError


def test_settings_defaults():
    settings = GitHubSettings(_env_file=None)
    assert settings.pat is None
    assert settings.base_url == GITHUB_API_BASE_URL
    assert settings.api_version == GITHUB_API_VERSION
    assert settings.media_type == GITHUB_MEDIA_TYPE
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.request_timeout == 30.0
    assert settings.per_page == 30
    assert settings.pre_request_hooks == []
    assert settings.post_request_hooks == []


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_PAT", "ghp_from_env")
    monkeypatch.setenv("GITHUB_BASE_URL", "https://github.example.com/api/v3")
    monkeypatch.setenv("GITHUB_REQUEST_TIMEOUT", "12.5")

    settings = GitHubSettings(_env_file=None)

    assert settings.pat == "ghp_from_env"
    assert settings.base_url == "https://github.example.com/api/v3"
    assert settings.request_timeout == 12.5


def test_settings_read_dotfile(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GITHUB_PAT=ghp_from_file\nGITHUB_PER_PAGE=50\n")

    settings = GitHubSettings(_env_file=env_file)

    assert settings.pat == "ghp_from_file"
    assert settings.per_page == 50


def test_settings_reject_out_of_range_page_size():
    with pytest.raises(ValueError):
        GitHubSettings(_env_file=None, per_page=101)


def test_get_settings_is_cached(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert get_settings() is get_settings()


def test_get_pat_from_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_PAT", " ghp_abc \n")
    assert get_pat() == "ghp_abc"


def test_get_pat_custom_variable(monkeypatch):
    monkeypatch.setenv("MYPKG_GITHUB_TOKEN", "ghp_custom")
    assert get_pat("MYPKG_GITHUB_TOKEN") == "ghp_custom"


def test_get_pat_missing_names_the_variable():
    with pytest.raises(
        ConfigurationError, match="Please set env var GITHUB_PAT"
    ):
        get_pat()


def test_get_pat_empty_value_is_missing(monkeypatch):
    monkeypatch.setenv("GITHUB_PAT", "")
    with pytest.raises(ConfigurationError):
        get_pat()


def test_get_pat_loads_dotfile(monkeypatch, tmp_path):
    monkeypatch.delenv("DOTFILE_TOKEN", raising=False)
    dotfile = tmp_path / ".tokens"
    dotfile.write_text("DOTFILE_TOKEN=ghp_dotfile\n")

    try:
        assert get_pat("DOTFILE_TOKEN", env_file=dotfile) == "ghp_dotfile"
    finally:
        os.environ.pop("DOTFILE_TOKEN", None)


def test_get_pat_dotfile_does_not_override_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("DOTFILE_TOKEN", "ghp_env_wins")
    dotfile = tmp_path / ".tokens"
    dotfile.write_text("DOTFILE_TOKEN=ghp_dotfile\n")

    assert get_pat("DOTFILE_TOKEN", env_file=dotfile) == "ghp_env_wins"


def test_get_pat_missing_dotfile(tmp_path):
    with pytest.raises(ConfigurationError, match="does not exist"):
        get_pat(env_file=tmp_path / "nope.env")
