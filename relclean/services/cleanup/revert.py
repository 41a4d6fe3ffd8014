"""Revert of the version-bump commit.

Every failure on this path is fatal for the run: the error is returned and
the CLI exits non-zero. Nothing is reverted if the branch cannot be
resolved, and nothing is pushed if the revert did not apply.
"""

from __future__ import annotations

from relclean.core.result import Err, Ok, Result
from relclean.git.repository import Commit, Repository
from relclean.output.console import ConsoleProtocol, Style
from relclean.services.cleanup.errors import RevertError

REMOTE = "origin"


def bump_message(tag: str) -> str:
    return f"Bump {tag}"


def revert_bump_commit(
    *,
    repo: Repository,
    tag: str,
    console: ConsoleProtocol,
) -> Result[Commit, RevertError]:
    branch = repo.current_branch()
    if isinstance(branch, Err):
        return Err(
            RevertError(
                kind="branch_lookup",
                message="couldn't get current branch",
                hint=branch.error.message,
            )
        )

    found = repo.find_last_commit(bump_message(tag))
    if isinstance(found, Err):
        return Err(
            RevertError(
                kind="bump_commit_missing",
                message=f"couldn't search history for '{bump_message(tag)}'",
                hint=found.error.message,
            )
        )
    commit = found.value
    if commit is None:
        return Err(
            RevertError(
                kind="bump_commit_missing",
                message=f"no commit matching '{bump_message(tag)}' on {branch.value}",
            )
        )

    console.print(f"reverting {commit.short_hash} {commit.message}", Style.DIM)
    reverted = repo.revert(commit.hash)
    if isinstance(reverted, Err):
        return Err(
            RevertError(
                kind="revert_failed",
                message=f"could not revert {commit.short_hash}",
                hint=reverted.error.message,
            )
        )

    pushed = repo.push(remote=REMOTE, refspec=f"HEAD:{branch.value}", follow_tags=True)
    if isinstance(pushed, Err):
        return Err(
            RevertError(
                kind="push_failed",
                message="could not push release commit",
                hint=pushed.error.message,
            )
        )

    console.success("successfully reverted release commit.")
    return Ok(commit)
