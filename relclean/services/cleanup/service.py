"""Failed-release cleanup orchestration.

Order matters:
1. If a release id was given, delete the draft from the channel's repo.
2. Only if the draft is gone, delete the tag (nightly: main and nightly repo).
3. Always revert the bump commit and push, whatever happened above.
"""

from __future__ import annotations

from relclean.core.config import Settings
from relclean.core.result import Err, Ok, Result
from relclean.git.repository import Repository
from relclean.github.client import GitHubClient
from relclean.output.console import ConsoleProtocol
from relclean.services.cleanup.drafts import delete_draft
from relclean.services.cleanup.errors import RevertError
from relclean.services.cleanup.model import CleanupOptions, CleanupReport
from relclean.services.cleanup.revert import revert_bump_commit
from relclean.services.cleanup.tags import delete_tag, delete_tags


def _delete_release_artifacts(
    *,
    options: CleanupOptions,
    release_id: str,
    settings: Settings,
    client: GitHubClient,
    console: ConsoleProtocol,
) -> tuple[bool, tuple[str, ...]]:
    if options.is_nightly:
        deleted = delete_draft(
            client=client, release_id=release_id, repo=settings.nightly_repo, console=console
        )
        if not deleted:
            return (False, ())
        tags = delete_tags(
            client=client,
            tag=options.tag,
            repos=(settings.main_repo, settings.nightly_repo),
            console=console,
        )
        return (True, tags)

    deleted = delete_draft(
        client=client, release_id=release_id, repo=settings.main_repo, console=console
    )
    if not deleted:
        return (False, ())
    ok = delete_tag(client=client, tag=options.tag, repo=settings.main_repo, console=console)
    return (True, (settings.main_repo,) if ok else ())


def clean_release_artifacts(
    *,
    options: CleanupOptions,
    settings: Settings,
    client: GitHubClient,
    repo: Repository,
    console: ConsoleProtocol,
) -> Result[CleanupReport, RevertError]:
    draft_deleted: bool | None = None
    tags_deleted: tuple[str, ...] = ()

    if options.release_id is not None:
        draft_deleted, tags_deleted = _delete_release_artifacts(
            options=options,
            release_id=options.release_id,
            settings=settings,
            client=client,
            console=console,
        )

    reverted = revert_bump_commit(repo=repo, tag=options.tag, console=console)
    if isinstance(reverted, Err):
        return reverted

    console.success("failed release artifact cleanup complete")
    return Ok(
        CleanupReport(
            draft_deleted=draft_deleted,
            tags_deleted=tags_deleted,
            reverted=reverted.value,
        )
    )
