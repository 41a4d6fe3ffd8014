from __future__ import annotations

from pathlib import Path

import pytest

from relclean.core.config import Settings
from relclean.git.repository import Commit, MockRepository
from relclean.github.client import GitHubClient
from relclean.github.http import MockHttpClient
from relclean.output.console import MockConsole

API = "https://api.test"


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def http() -> MockHttpClient:
    return MockHttpClient()


@pytest.fixture
def client(http: MockHttpClient) -> GitHubClient:
    return GitHubClient(http, api_url=API, owner="electron", authenticated=True)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url=API, token="t")


@pytest.fixture
def repo(tmp_path: Path) -> MockRepository:
    bump = Commit(hash="0123456789abcdef0123456789abcdef01234567", message="Bump v2.0.0")
    return MockRepository(tmp_path, branch="main", commit=bump)
