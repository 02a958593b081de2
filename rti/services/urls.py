"""Download URL reachability checks.

Diagnostic tooling: computes the download URL of every supported
(os, arch) combination of a runtime and sends a HEAD request with a short
timeout. Combinations a runtime does not support are reported, not fatal.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from rti.core.result import Err
from rti.install.http import DEFAULT_CHECK_TIMEOUT, HttpClient
from rti.install.proxy import ProxyOptions, resolve_proxy
from rti.output.console import ConsoleProtocol, Style
from rti.platform.detection import PlatformSpec
from rti.runtimes import Runtime

__all__ = ["UrlCheck", "UrlCheckService"]


@dataclass(frozen=True, slots=True)
class UrlCheck:
    kind: str
    platform: PlatformSpec
    url: str | None
    status: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not None and 200 <= self.status < 400


class UrlCheckService:
    def __init__(
        self,
        *,
        http: HttpClient,
        console: ConsoleProtocol,
        proxy: ProxyOptions | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_CHECK_TIMEOUT,
    ) -> None:
        self._http = http
        self._console = console
        self._proxy = proxy or ProxyOptions()
        self._env = env
        self._timeout = timeout

    def check_one(self, runtime: Runtime, version: str, platform: PlatformSpec) -> UrlCheck:
        kind = str(runtime.kind)
        url = runtime.download_url(version, platform)
        if isinstance(url, Err):
            return UrlCheck(kind=kind, platform=platform, url=None, error=url.error.message)

        proxy = resolve_proxy(url.value, self._proxy, self._env)
        if isinstance(proxy, Err):
            return UrlCheck(kind=kind, platform=platform, url=url.value, error=proxy.error.message)

        status = self._http.head(url.value, proxy=proxy.value, timeout=self._timeout)
        if isinstance(status, Err):
            return UrlCheck(
                kind=kind,
                platform=platform,
                url=url.value,
                status=status.error.status or None,
                error=status.error.message,
            )
        return UrlCheck(kind=kind, platform=platform, url=url.value, status=status.value)

    def check(
        self,
        runtimes: Iterable[Runtime],
        *,
        version: str | None = None,
        platforms: list[PlatformSpec] | None = None,
    ) -> list[UrlCheck]:
        """Check every runtime over ``platforms`` (default: its supported matrix)."""
        checks: list[UrlCheck] = []
        for runtime in runtimes:
            self._console.header(runtime.spec.name)
            for platform in platforms or runtime.supported_platforms():
                check = self.check_one(runtime, version or runtime.spec.default_version, platform)
                self._report(check)
                checks.append(check)
        return checks

    def _report(self, check: UrlCheck) -> None:
        if check.ok:
            self._console.success(f"{check.platform}: {check.url}")
        elif check.url is None:
            self._console.print(f"{check.platform}: {check.error}", Style.DIM)
        else:
            self._console.error(f"{check.platform}: {check.url} ({check.error})")
