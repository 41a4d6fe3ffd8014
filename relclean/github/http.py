"""HTTP transport for the GitHub REST API.

This module provides:
- HttpClient: Protocol for the requests the cleanup makes (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from relclean import __version__
from relclean.core.result import Err, Ok, Result
from relclean.core.structured import as_str_dict

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]

_GITHUB_ACCEPT = "application/vnd.github+json"
_GITHUB_API_VERSION = "2022-11-28"


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
        method: HTTP method of the failed request
    """

    url: str
    status: int
    message: str
    method: str = "GET"

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.method} {self.url})"
        return f"{self.message} ({self.method} {self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse the body as a JSON object.

        Args:
            url: URL to fetch

        Returns:
            Ok with parsed JSON dict, or Err with HttpError
        """
        ...

    def delete(self, url: str) -> Result[None, HttpError]:
        """Send a DELETE request.

        Args:
            url: URL of the resource to delete

        Returns:
            Ok(None) on any 2xx response, or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - GitHub API headers and bearer token
    - JSON parsing
    - Timeout handling
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        user_agent: str = f"relclean/{__version__}",
    ) -> None:
        """Initialize HTTP client.

        Args:
            token: API token sent as a bearer credential (anonymous if None)
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": _GITHUB_ACCEPT,
            "X-GitHub-Api-Version": _GITHUB_API_VERSION,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, url: str) -> Result[bytes, HttpError]:
        """Make an HTTP request and return the raw body."""
        try:
            req = urllib.request.Request(url, method=method, headers=self._headers())
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(
                HttpError(url=url, status=e.code, message=_error_message(e), method=method)
            )
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason), method=method))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out", method=method))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e), method=method))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e), method=method))

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse as JSON."""
        result = self._request("GET", url)
        if isinstance(result, Err):
            return result

        try:
            data_obj: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        # Values are dynamic; preserve as Any for callers.
        return Ok(cast(dict[str, Any], data))

    def delete(self, url: str) -> Result[None, HttpError]:
        """Send a DELETE request; GitHub answers 204 with an empty body."""
        result = self._request("DELETE", url)
        if isinstance(result, Err):
            return result
        return Ok(None)


def _error_message(error: urllib.error.HTTPError) -> str:
    """Prefer the ``message`` field GitHub puts in error bodies over the reason phrase."""
    try:
        body = error.read()
    except OSError:
        body = b""

    if body:
        try:
            data = as_str_dict(json.loads(body.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = None
        if data is not None:
            message = data.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()

    return str(error.reason)


class MockHttpClient:
    """Mock HTTP client for testing.

    Allows setting predefined responses for specific URLs. Unknown URLs
    answer 404, like the API does for missing releases and refs.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.example.com/release", {"id": 1})
        client.set_delete("https://api.example.com/release")
        result = client.delete("https://api.example.com/release")
        assert result == Ok(None)
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self._delete_responses: dict[str, HttpError | None] = {}
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        """Set JSON response for URL."""
        self._json_responses[url] = response

    def set_delete(self, url: str, error: HttpError | None = None) -> None:
        """Allow DELETE on URL, optionally failing with error."""
        self._delete_responses[url] = error

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Get mocked JSON response."""
        self.calls.append(("GET", url))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not Found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def delete(self, url: str) -> Result[None, HttpError]:
        """Get mocked DELETE outcome."""
        self.calls.append(("DELETE", url))

        if url not in self._delete_responses:
            return Err(
                HttpError(url=url, status=404, message="Not Found (mock)", method="DELETE")
            )

        error = self._delete_responses[url]
        if error is not None:
            return Err(error)
        return Ok(None)

    # Test helper methods

    def urls(self, method: str) -> list[str]:
        """URLs requested with the given method, in call order."""
        return [url for m, url in self.calls if m == method]
