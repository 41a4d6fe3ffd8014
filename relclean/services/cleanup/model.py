from __future__ import annotations

from dataclasses import dataclass

from relclean.git.repository import Commit

NIGHTLY_MARKER = "nightly"


@dataclass(frozen=True, slots=True)
class CleanupOptions:
    tag: str
    release_id: str | None = None

    @classmethod
    def from_args(cls, *, tag: str, release_id: str = "") -> CleanupOptions:
        """Normalise raw CLI values; an empty release id means "no draft to delete"."""
        rid = release_id.strip()
        return cls(tag=tag.strip(), release_id=rid or None)

    @property
    def is_nightly(self) -> bool:
        return NIGHTLY_MARKER in self.tag


@dataclass(frozen=True, slots=True)
class CleanupReport:
    """What a cleanup run did.

    Attributes:
        draft_deleted: None when no release id was given
        tags_deleted: Repositories the tag was removed from
        reverted: The bump commit that was reverted and pushed
    """

    draft_deleted: bool | None
    tags_deleted: tuple[str, ...]
    reverted: Commit
