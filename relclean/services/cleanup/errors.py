from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relclean.github.errors import ApiError


@dataclass(frozen=True, slots=True)
class NotDraftError:
    """The release exists but is already published."""

    release_id: int
    repo: str

    @property
    def message(self) -> str:
        return "published releases cannot be deleted."


DraftError = NotDraftError | ApiError


RevertErrorKind = Literal[
    "branch_lookup",
    "bump_commit_missing",
    "revert_failed",
    "push_failed",
]


@dataclass(frozen=True, slots=True)
class RevertError:
    kind: RevertErrorKind
    message: str
    hint: str | None = None
