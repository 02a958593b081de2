"""HTTP transport for archive downloads.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib, with optional proxy
- MockHttpClient: In-memory implementation for testing

Proxy decisions are made by the caller (see ``rti.install.proxy``) and passed
per request; the transport never reads proxy environment variables itself.
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from rti import __version__
from rti.core.result import Err, Ok, Result
from rti.install.proxy import ProxyConfig

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "DEFAULT_CHECK_TIMEOUT",
]

type Progress = Callable[[int, int], None]

# HEAD checks are advisory, keep them short
DEFAULT_CHECK_TIMEOUT = 10.0


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def download(
        self,
        url: str,
        dest: Path,
        *,
        proxy: ProxyConfig | None = None,
        progress: Progress | None = None,
    ) -> Result[Path, HttpError]:
        """Stream ``url`` into ``dest``.

        Returns:
            Ok with dest path, or Err with HttpError
        """
        ...

    def head(
        self,
        url: str,
        *,
        proxy: ProxyConfig | None = None,
        timeout: float = DEFAULT_CHECK_TIMEOUT,
    ) -> Result[int, HttpError]:
        """Send a HEAD request.

        Returns:
            Ok with the HTTP status, or Err with HttpError
        """
        ...


def _error_from(url: str, exc: Exception) -> HttpError:
    if isinstance(exc, urllib.error.HTTPError):
        return HttpError(url=url, status=exc.code, message=str(exc.reason))
    if isinstance(exc, urllib.error.URLError):
        return HttpError(url=url, status=0, message=str(exc.reason))
    if isinstance(exc, TimeoutError):
        return HttpError(url=url, status=0, message="Request timed out")
    return HttpError(url=url, status=0, message=str(exc))


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - HTTP/HTTPS proxies (with basic credentials)
    - Streaming download with progress callback
    - Timeout handling
    """

    def __init__(
        self,
        timeout: float = 60.0,
        user_agent: str = f"tiny-runtime-injector/{__version__}",
        chunk_size: int = 64 * 1024,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Socket timeout in seconds for downloads
            user_agent: User-Agent header value
            chunk_size: Bytes read per streaming iteration
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.chunk_size = chunk_size
        self._ssl_context = ssl.create_default_context()

    def _opener(self, proxy: ProxyConfig | None) -> urllib.request.OpenerDirector:
        # An empty mapping disables urllib's own environment lookup
        proxies = {"http": proxy.url, "https": proxy.url} if proxy is not None else {}
        return urllib.request.build_opener(
            urllib.request.ProxyHandler(proxies),
            urllib.request.HTTPSHandler(context=self._ssl_context),
        )

    def download(
        self,
        url: str,
        dest: Path,
        *,
        proxy: ProxyConfig | None = None,
        progress: Progress | None = None,
    ) -> Result[Path, HttpError]:
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        try:
            with self._opener(proxy).open(req, timeout=self.timeout) as response:
                total = int(response.headers.get("Content-Length") or 0)
                downloaded = 0
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    while chunk := response.read(self.chunk_size):
                        f.write(chunk)
                        downloaded += len(chunk)
                        if progress:
                            progress(downloaded, total)
            return Ok(dest)
        except (urllib.error.URLError, TimeoutError, ValueError, OSError) as e:
            dest.unlink(missing_ok=True)
            return Err(_error_from(url, e))

    def head(
        self,
        url: str,
        *,
        proxy: ProxyConfig | None = None,
        timeout: float = DEFAULT_CHECK_TIMEOUT,
    ) -> Result[int, HttpError]:
        req = urllib.request.Request(url, method="HEAD", headers={"User-Agent": self.user_agent})
        try:
            with self._opener(proxy).open(req, timeout=timeout) as response:
                return Ok(int(response.status))
        except (urllib.error.URLError, TimeoutError, ValueError, OSError) as e:
            return Err(_error_from(url, e))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_download("https://example.com/a.tar.gz", archive_bytes)
        result = client.download("https://example.com/a.tar.gz", tmp / "a.tar.gz")
    """

    def __init__(self) -> None:
        self._downloads: dict[str, bytes | HttpError] = {}
        self._heads: dict[str, int | HttpError] = {}
        self.calls: list[tuple[str, str]] = []
        self.proxies: list[ProxyConfig | None] = []

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._downloads[url] = response

    def set_head(self, url: str, response: int | HttpError) -> None:
        self._heads[url] = response

    def download_count(self) -> int:
        return sum(1 for method, _ in self.calls if method == "download")

    def download(
        self,
        url: str,
        dest: Path,
        *,
        proxy: ProxyConfig | None = None,
        progress: Progress | None = None,
    ) -> Result[Path, HttpError]:
        self.calls.append(("download", url))
        self.proxies.append(proxy)

        response = self._downloads.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        if progress:
            progress(len(response), len(response))
        return Ok(dest)

    def head(
        self,
        url: str,
        *,
        proxy: ProxyConfig | None = None,
        timeout: float = DEFAULT_CHECK_TIMEOUT,
    ) -> Result[int, HttpError]:
        self.calls.append(("head", url))
        self.proxies.append(proxy)

        response = self._heads.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
