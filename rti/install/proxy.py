"""Proxy resolution for outbound requests.

A proxy decision is made per request URL:

1. Explicit options (``http_proxy`` / ``https_proxy`` / ``no_proxy``) win over
   the environment (``HTTP_PROXY``/``http_proxy``, ``HTTPS_PROXY``/``https_proxy``,
   ``NO_PROXY``/``no_proxy``; first non-empty value wins).
2. If the target host matches the no-proxy list, connect directly.
3. Otherwise the proxy for the target URL's scheme is used. A bare
   ``host:port`` proxy inherits the target's scheme.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from rti.core.errors import ErrorKind, InjectError
from rti.core.result import Err, Ok, Result

__all__ = [
    "ProxyAuth",
    "ProxyConfig",
    "ProxyOptions",
    "is_no_proxy_match",
    "normalize_proxy_url",
    "resolve_proxy",
]

HTTP_PROXY_ENV = ("HTTP_PROXY", "http_proxy")
HTTPS_PROXY_ENV = ("HTTPS_PROXY", "https_proxy")
NO_PROXY_ENV = ("NO_PROXY", "no_proxy")

_DEFAULT_PORTS = {"http": 80, "https": 443}
_ENTRY_SEPARATORS = re.compile(r"[,\s]+")


@dataclass(frozen=True, slots=True)
class ProxyOptions:
    """Explicit proxy overrides; None defers to the environment."""

    http_proxy: str | None = None
    https_proxy: str | None = None
    no_proxy: str | None = None


@dataclass(frozen=True, slots=True)
class ProxyAuth:
    username: str
    password: str


@dataclass(frozen=True, slots=True)
class ProxyConfig:
    """A resolved proxy.

    Attributes:
        protocol: ``"http:"`` or ``"https:"``
        host: Proxy host name or address (IPv6 without brackets)
        port: Proxy port
        auth: Credentials from the proxy URL, if any
    """

    protocol: str
    host: str
    port: int
    auth: ProxyAuth | None = None

    @property
    def scheme(self) -> str:
        return self.protocol.rstrip(":")

    @property
    def url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        userinfo = ""
        if self.auth is not None:
            userinfo = f"{quote(self.auth.username, safe='')}:{quote(self.auth.password, safe='')}@"
        return f"{self.scheme}://{userinfo}{host}:{self.port}"

    def __str__(self) -> str:
        # Never print credentials
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}"


def _first_env(names: tuple[str, ...], env: Mapping[str, str]) -> str | None:
    for name in names:
        value = env.get(name, "").strip()
        if value:
            return value
    return None


def _split_entry(entry: str) -> tuple[str, int | None]:
    """Split a no-proxy entry into (host, port)."""
    if entry.startswith("["):
        close = entry.find("]")
        if close == -1:
            return entry, None
        host, rest = entry[1:close], entry[close + 1 :]
        port = rest[1:] if rest.startswith(":") else ""
        return host, int(port) if port.isdigit() else None
    if entry.count(":") == 1:
        host, port = entry.split(":")
        return host, int(port) if port.isdigit() else None
    # Plain host, or an unbracketed IPv6 address
    return entry, None


def is_no_proxy_match(url: str, no_proxy: str) -> bool:
    """Check whether ``url`` should bypass the proxy.

    Supported entries (comma or whitespace separated):
    - ``*``: bypass everything
    - ``host`` / ``host:port``: exact host (and port, when given)
    - ``[::1]`` / ``[::1]:8080``: bracketed IPv6
    - ``.example.com`` / ``*.example.com``: any host ending in ``.example.com``
    """
    target = urlsplit(url)
    host = (target.hostname or "").lower()
    if not host:
        return False
    try:
        port = target.port
    except ValueError:
        port = None
    if port is None:
        port = _DEFAULT_PORTS.get(target.scheme.lower())

    for raw in _ENTRY_SEPARATORS.split(no_proxy.strip()):
        if not raw:
            continue
        if raw == "*":
            return True
        entry_host, entry_port = _split_entry(raw.lower())
        if entry_port is not None and entry_port != port:
            continue
        if entry_host.startswith(("*", ".")):
            # "*example.com", "*.example.com" and ".example.com" all mean subdomains
            suffix = "." + entry_host.lstrip("*").lstrip(".")
            if suffix != "." and host.endswith(suffix):
                return True
        elif entry_host == host:
            return True
    return False


def normalize_proxy_url(proxy: str, target_scheme: str) -> Result[ProxyConfig, InjectError]:
    """Parse a proxy URL; a bare ``host:port`` gets ``target_scheme``."""
    value = proxy.strip()
    if "://" not in value:
        value = f"{target_scheme}://{value}"

    try:
        parts = urlsplit(value)
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        return Err(
            InjectError(kind=ErrorKind.INVALID_PROXY_URL, message=f"Invalid proxy URL {proxy!r}: {e}")
        )
    if not host:
        return Err(InjectError(kind=ErrorKind.INVALID_PROXY_URL, message=f"Invalid proxy URL {proxy!r}"))

    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        return Err(
            InjectError(
                kind=ErrorKind.UNSUPPORTED_PROXY_PROTOCOL,
                message=f"Unsupported proxy protocol {scheme!r} in {proxy!r}",
                hint="Use an http:// or https:// proxy",
            )
        )

    auth = None
    if parts.username:
        auth = ProxyAuth(unquote(parts.username), unquote(parts.password or ""))

    return Ok(
        ProxyConfig(
            protocol=f"{scheme}:",
            host=host,
            port=port if port is not None else _DEFAULT_PORTS[scheme],
            auth=auth,
        )
    )


def resolve_proxy(
    url: str,
    options: ProxyOptions | None = None,
    env: Mapping[str, str] | None = None,
) -> Result[ProxyConfig | None, InjectError]:
    """Decide how to reach ``url``: Ok(ProxyConfig), or Ok(None) for direct."""
    options = options or ProxyOptions()
    env = os.environ if env is None else env

    no_proxy = options.no_proxy or _first_env(NO_PROXY_ENV, env)
    if no_proxy and is_no_proxy_match(url, no_proxy):
        return Ok(None)

    scheme = urlsplit(url).scheme.lower()
    match scheme:
        case "https":
            raw = options.https_proxy or _first_env(HTTPS_PROXY_ENV, env)
        case "http":
            raw = options.http_proxy or _first_env(HTTP_PROXY_ENV, env)
        case _:
            raw = None

    if not raw:
        return Ok(None)
    return normalize_proxy_url(raw, scheme)
