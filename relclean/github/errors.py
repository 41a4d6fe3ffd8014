from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ApiError:
    """A GitHub request failed or answered something unusable.

    Attributes:
        message: What went wrong
        status: HTTP status code (0 for network, payload or local errors)
        hint: Extra detail for the user (usually the URL)
    """

    message: str
    status: int = 0
    hint: str | None = None

    def __str__(self) -> str:
        if self.status:
            return f"{self.message} (HTTP {self.status})"
        return self.message
