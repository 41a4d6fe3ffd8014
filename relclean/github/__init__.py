"""GitHub REST API access."""

from relclean.github.client import GitHubClient
from relclean.github.errors import ApiError
from relclean.github.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from relclean.github.model import Release, ReleaseRef, TagRef

__all__ = [
    "ApiError",
    "GitHubClient",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "Release",
    "ReleaseRef",
    "TagRef",
]
