from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReleaseRef:
    """Addresses one release by numeric id."""

    owner: str
    repo: str
    release_id: int

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class TagRef:
    """Addresses one tag reference by name."""

    owner: str
    repo: str
    tag: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def ref(self) -> str:
        # Path used by the git refs API (no "refs/" prefix).
        return f"tags/{self.tag}"


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    tag_name: str
    draft: bool
    name: str | None = None
    html_url: str | None = None

    def describe(self) -> str:
        state = "draft" if self.draft else "published"
        parts = [f"release {self.id}", self.tag_name or "<no tag>", state]
        if self.html_url:
            parts.append(self.html_url)
        return " | ".join(parts)
