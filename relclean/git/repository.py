"""Git repository abstraction.

This module provides the Repository class for the handful of git operations
a release cleanup needs: resolve the branch, find a commit by message,
revert it and push. All operations return Result types.

Usage:
    repo = Repository(Path("/path/to/checkout"))

    match repo.find_last_commit("Bump v1.2.3"):
        case Ok(None):
            print("no such commit")
        case Ok(commit):
            repo.revert(commit.hash)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relclean.core.result import Err, Ok, Result
from relclean.platform.process import ProcessError, error_summary
from relclean.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# Separates hash and subject in `git log` output; cannot appear in either.
_FIELD_SEP = "\x00"

__all__ = [
    "Commit",
    "GitError",
    "MockRepository",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit found in history.

    Attributes:
        hash: Full commit hash
        message: Subject line
    """

    hash: str
    message: str

    @property
    def short_hash(self) -> str:
        return self.hash[:10]


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the checkout (any directory inside the work tree)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def toplevel(self) -> Result[Path, GitError]:
        """Resolve the root of the work tree containing ``path``."""
        result = self._run(["rev-parse", "--show-toplevel"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse --show-toplevel", e, "not a git repository"))
            case Ok(stdout):
                return Ok(Path(stdout.strip()))

    def current_branch(self) -> Result[str, GitError]:
        """Get current branch name.

        A detached HEAD is an error: there is no branch to push to.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse --abbrev-ref HEAD", e, "rev-parse failed"))
            case Ok(stdout):
                branch = stdout.strip()
                if not branch or branch == "HEAD":
                    return Err(
                        GitError(
                            command="rev-parse --abbrev-ref HEAD",
                            message="HEAD is detached",
                        )
                    )
                return Ok(branch)

    def find_last_commit(self, message: str) -> Result[Commit | None, GitError]:
        """Find the most recent commit whose message contains ``message``.

        The text is matched literally, so dots in version tags are not wildcards.

        Returns:
            Ok(Commit) if found, Ok(None) if no commit matches, Err on git failure
        """
        result = self._run(
            [
                "log",
                "-n1",
                "--fixed-strings",
                f"--grep={message}",
                f"--format=%H{_FIELD_SEP}%s",
            ]
        )
        match result:
            case Err(e):
                return Err(self._error("log", e, "git log failed"))
            case Ok(stdout):
                return Ok(self._parse_commit(stdout))

    def revert(self, commit_hash: str) -> Result[str, GitError]:
        """Revert a commit, committing with the default message."""
        result = self._run(["revert", "--no-edit", commit_hash])
        match result:
            case Err(e):
                return Err(self._error("revert", e, "revert failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def push(
        self,
        *,
        remote: str,
        refspec: str,
        follow_tags: bool = False,
    ) -> Result[str, GitError]:
        """Push a refspec to a remote.

        Returns:
            Ok(output) on success (git reports progress on stderr, not captured here)
            Err(GitError) on failure (rejected, no network, no credentials)
        """
        args = ["push", remote, refspec]
        if follow_tags:
            args.append("--follow-tags")

        result = self._run(args)
        match result:
            case Err(e):
                return Err(self._error(f"push {remote} {refspec}", e, "push failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    def _error(self, command: str, error: ProcessError, fallback: str) -> GitError:
        message = error_summary(error) if (error.stderr.strip() or error.stdout.strip()) else fallback
        return GitError(command=command, message=message, returncode=error.returncode)

    def _parse_commit(self, output: str) -> Commit | None:
        """Parse one ``<hash>\\0<subject>`` line."""
        line = output.strip()
        if not line:
            return None

        commit_hash, sep, subject = line.partition(_FIELD_SEP)
        if not sep or not commit_hash:
            return None
        return Commit(hash=commit_hash.strip(), message=subject.strip())


class MockRepository(Repository):
    """Repository double for testing.

    Each operation returns a preset Result and records the call, so tests
    can assert which git steps ran and in what order.

    Usage:
        repo = MockRepository(Path("."))
        repo.push_result = Err(GitError(command="push", message="rejected"))
        ...
        assert repo.call_names() == ["current_branch", "find_last_commit", "revert", "push"]
    """

    def __init__(self, path: Path, *, branch: str = "main", commit: Commit | None = None) -> None:
        super().__init__(path)
        self.branch: Result[str, GitError] = Ok(branch)
        self.commit: Result[Commit | None, GitError] = Ok(commit)
        self.revert_result: Result[str, GitError] = Ok("")
        self.push_result: Result[str, GitError] = Ok("")
        self.calls: list[tuple[str, ...]] = []

    def current_branch(self) -> Result[str, GitError]:
        self.calls.append(("current_branch",))
        return self.branch

    def find_last_commit(self, message: str) -> Result[Commit | None, GitError]:
        self.calls.append(("find_last_commit", message))
        return self.commit

    def revert(self, commit_hash: str) -> Result[str, GitError]:
        self.calls.append(("revert", commit_hash))
        return self.revert_result

    def push(
        self,
        *,
        remote: str,
        refspec: str,
        follow_tags: bool = False,
    ) -> Result[str, GitError]:
        self.calls.append(("push", remote, refspec, "--follow-tags" if follow_tags else ""))
        return self.push_result

    # Test helper methods

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]
