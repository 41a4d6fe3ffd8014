"""Process exit codes.

Values are part of the CLI contract and must stay stable:
- 0: Success (draft or tag deletion may still have soft-failed)
- 1: Fatal failure on the revert path (branch, bump commit, revert, push)
- 2: Environment error (invalid configuration)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the relclean command."""

    OK = 0
    FATAL = 1
    ENV_ERROR = 2

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
