"""Git operations module.

    from relclean.git import Repository

    repo = Repository(Path("/path/to/checkout"))
    branch = repo.current_branch()
    if branch.is_ok():
        print(f"Branch: {branch.unwrap()}")
"""

from relclean.git.repository import (
    Commit,
    GitError,
    MockRepository,
    Repository,
)

__all__ = [
    "Commit",
    "GitError",
    "MockRepository",
    "Repository",
]
