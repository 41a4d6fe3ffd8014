from __future__ import annotations

from relclean.core.config import Settings
from relclean.core.result import Err, Ok
from relclean.git.repository import GitError, MockRepository
from relclean.github.client import GitHubClient
from relclean.github.http import MockHttpClient
from relclean.output.console import MockConsole
from relclean.services.cleanup.model import CleanupOptions
from relclean.services.cleanup.service import clean_release_artifacts

API = "https://api.test"
NIGHTLY_TAG = "v3.0.0-nightly.20180601"


def release_url(repo: str, release_id: int) -> str:
    return f"{API}/repos/electron/{repo}/releases/{release_id}"


def tag_url(repo: str, tag: str) -> str:
    return f"{API}/repos/electron/{repo}/git/refs/tags/{tag}"


def add_release(http: MockHttpClient, repo: str, release_id: int, *, draft: bool) -> None:
    http.set_json(
        release_url(repo, release_id),
        {"id": release_id, "tag_name": "v", "draft": draft},
    )
    http.set_delete(release_url(repo, release_id))


def allow_tag_deletes(http: MockHttpClient, tag: str) -> None:
    for repo in ("electron", "nightlies"):
        http.set_delete(tag_url(repo, tag))


class TestCleanupOptions:
    def test_empty_release_id_is_none(self) -> None:
        options = CleanupOptions.from_args(tag="v1.0.0", release_id="")
        assert options.release_id is None

    def test_release_id_kept(self) -> None:
        assert CleanupOptions.from_args(tag="v1.0.0", release_id=" 42 ").release_id == "42"

    def test_is_nightly(self) -> None:
        assert CleanupOptions(tag=NIGHTLY_TAG).is_nightly is True
        assert CleanupOptions(tag="v2.0.0-beta.1").is_nightly is False


def test_nightly_deletes_tag_in_both_repos(
    http: MockHttpClient,
    client: GitHubClient,
    settings: Settings,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    add_release(http, "nightlies", 5, draft=True)
    allow_tag_deletes(http, NIGHTLY_TAG)

    result = clean_release_artifacts(
        options=CleanupOptions(tag=NIGHTLY_TAG, release_id="5"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Ok)
    assert result.value.draft_deleted is True
    assert result.value.tags_deleted == ("electron", "nightlies")
    # Draft lookup only happens in the nightly repo.
    assert http.urls("GET") == [release_url("nightlies", 5)]
    assert sorted(http.urls("DELETE")) == sorted(
        [
            release_url("nightlies", 5),
            tag_url("electron", NIGHTLY_TAG),
            tag_url("nightlies", NIGHTLY_TAG),
        ]
    )
    assert "push" in repo.call_names()
    assert console.messages[-1].endswith("failed release artifact cleanup complete")


def test_stable_deletes_tag_only_in_main_repo(
    http: MockHttpClient,
    client: GitHubClient,
    settings: Settings,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    add_release(http, "electron", 5, draft=True)
    allow_tag_deletes(http, "v2.0.0")

    result = clean_release_artifacts(
        options=CleanupOptions(tag="v2.0.0", release_id="5"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Ok)
    assert result.value.tags_deleted == ("electron",)
    assert http.urls("DELETE") == [release_url("electron", 5), tag_url("electron", "v2.0.0")]


def test_published_release_keeps_tag(
    http: MockHttpClient,
    client: GitHubClient,
    settings: Settings,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    add_release(http, "electron", 5, draft=False)
    allow_tag_deletes(http, "v2.0.0")

    result = clean_release_artifacts(
        options=CleanupOptions(tag="v2.0.0", release_id="5"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Ok)
    assert result.value.draft_deleted is False
    assert result.value.tags_deleted == ()
    assert http.urls("DELETE") == []
    # The revert still happens.
    assert repo.call_names() == ["current_branch", "find_last_commit", "revert", "push"]


def test_failed_nightly_draft_keeps_tags(
    http: MockHttpClient,
    client: GitHubClient,
    settings: Settings,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    allow_tag_deletes(http, NIGHTLY_TAG)

    result = clean_release_artifacts(
        options=CleanupOptions(tag=NIGHTLY_TAG, release_id="404"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Ok)
    assert result.value.draft_deleted is False
    assert http.urls("DELETE") == []
    assert "push" in repo.call_names()


def test_unparseable_release_id_still_reverts(
    http: MockHttpClient,
    client: GitHubClient,
    settings: Settings,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    result = clean_release_artifacts(
        options=CleanupOptions(tag="v2.0.0", release_id="²"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Ok)
    assert result.value.draft_deleted is False
    assert http.calls == []
    assert console.find("couldn't delete draft with id ² from electron")
    assert repo.call_names() == ["current_branch", "find_last_commit", "revert", "push"]


def test_without_release_id_only_reverts(
    http: MockHttpClient,
    client: GitHubClient,
    settings: Settings,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    result = clean_release_artifacts(
        options=CleanupOptions.from_args(tag="v2.0.0"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Ok)
    assert result.value.draft_deleted is None
    assert http.calls == []
    assert repo.call_names() == ["current_branch", "find_last_commit", "revert", "push"]


def test_custom_repositories(
    http: MockHttpClient,
    client: GitHubClient,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    settings = Settings(main_repo="app", nightly_repo="app-nightly", api_url=API, token="t")
    add_release(http, "app-nightly", 1, draft=True)
    http.set_delete(tag_url("app", NIGHTLY_TAG))
    http.set_delete(tag_url("app-nightly", NIGHTLY_TAG))

    result = clean_release_artifacts(
        options=CleanupOptions(tag=NIGHTLY_TAG, release_id="1"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Ok)
    assert result.value.tags_deleted == ("app", "app-nightly")


def test_revert_failure_is_returned_after_deletions(
    http: MockHttpClient,
    client: GitHubClient,
    settings: Settings,
    repo: MockRepository,
    console: MockConsole,
) -> None:
    add_release(http, "electron", 5, draft=True)
    allow_tag_deletes(http, "v2.0.0")
    repo.push_result = Err(GitError(command="push", message="fatal: Authentication failed"))

    result = clean_release_artifacts(
        options=CleanupOptions(tag="v2.0.0", release_id="5"),
        settings=settings,
        client=client,
        repo=repo,
        console=console,
    )

    assert isinstance(result, Err)
    assert result.error.kind == "push_failed"
    assert len(http.urls("DELETE")) == 2
    assert not console.find("cleanup complete")
