"""Typed client for the three release endpoints the cleanup touches.

The client is constructed once by the caller and passed to every operation;
nothing here keeps module-level state.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from relclean.core.config import Settings
from relclean.core.result import Err, Ok, Result
from relclean.core.structured import get_bool, get_int, get_str
from relclean.github.errors import ApiError
from relclean.github.http import HttpClient, HttpError, RealHttpClient
from relclean.github.model import Release, ReleaseRef, TagRef

__all__ = ["GitHubClient"]


def _api_error(message: str, error: HttpError) -> ApiError:
    return ApiError(message=f"{message}: {error.message}", status=error.status, hint=error.url)


def parse_release(data: dict[str, Any]) -> Release | None:
    """Build a Release from a releases API payload, None if required fields are missing."""
    release_id = get_int(data, "id")
    draft = get_bool(data, "draft")
    if release_id is None or draft is None:
        return None

    return Release(
        id=release_id,
        tag_name=get_str(data, "tag_name") or "",
        draft=draft,
        name=get_str(data, "name"),
        html_url=get_str(data, "html_url"),
    )


class GitHubClient:
    """GitHub REST client bound to one API base URL.

    Attributes:
        api_url: Base URL without trailing slash
        owner: Account owning the release repositories
        authenticated: True if requests carry a token
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        api_url: str,
        owner: str,
        authenticated: bool,
    ) -> None:
        self.http = http
        self.api_url = api_url.rstrip("/")
        self.owner = owner
        self.authenticated = authenticated

    @classmethod
    def from_settings(cls, settings: Settings) -> GitHubClient:
        http = RealHttpClient(token=settings.token, timeout=settings.timeout)
        return cls(
            http,
            api_url=settings.api_url,
            owner=settings.owner,
            authenticated=settings.has_token,
        )

    def release_ref(self, repo: str, release_id: int) -> ReleaseRef:
        return ReleaseRef(owner=self.owner, repo=repo, release_id=release_id)

    def tag_ref(self, repo: str, tag: str) -> TagRef:
        return TagRef(owner=self.owner, repo=repo, tag=tag)

    def release_url(self, ref: ReleaseRef) -> str:
        return f"{self.api_url}/repos/{ref.owner}/{ref.repo}/releases/{ref.release_id}"

    def tag_ref_url(self, ref: TagRef) -> str:
        return f"{self.api_url}/repos/{ref.owner}/{ref.repo}/git/refs/{quote(ref.ref, safe='/')}"

    def get_release(self, ref: ReleaseRef) -> Result[Release, ApiError]:
        url = self.release_url(ref)
        result = self.http.get_json(url)
        if isinstance(result, Err):
            return Err(_api_error(f"failed to fetch release {ref.release_id}", result.error))

        release = parse_release(result.value)
        if release is None:
            return Err(
                ApiError(
                    message=f"unexpected release payload for {ref.release_id} in {ref.slug}",
                    hint=url,
                )
            )
        return Ok(release)

    def delete_release(self, ref: ReleaseRef) -> Result[None, ApiError]:
        result = self.http.delete(self.release_url(ref))
        if isinstance(result, Err):
            return Err(_api_error(f"failed to delete release {ref.release_id}", result.error))
        return Ok(None)

    def delete_tag(self, ref: TagRef) -> Result[None, ApiError]:
        result = self.http.delete(self.tag_ref_url(ref))
        if isinstance(result, Err):
            return Err(_api_error(f"failed to delete tag {ref.tag}", result.error))
        return Ok(None)
