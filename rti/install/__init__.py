"""Fetching, extracting and laying out runtime archives.

This package provides:
- Proxy resolution per request URL (proxy.py)
- HTTP transport (http.py)
- Archive extraction (extract.py)
- Layout helpers used by runtime normalization (layout.py)
- Install marker and installed-version probe (marker.py, probe.py)
- Best-effort cleanup of non-essential files (cleanup.py)
"""

from rti.install.cleanup import CleanupConfig, CleanupReport, CleanupRule, cleanup
from rti.install.extract import Extractor, ExtractError, ExtractResult
from rti.install.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from rti.install.marker import marker_name, read_marker, write_marker
from rti.install.probe import ProbeResult, is_installed, probe_installed
from rti.install.proxy import (
    ProxyConfig,
    ProxyOptions,
    is_no_proxy_match,
    normalize_proxy_url,
    resolve_proxy,
)

__all__ = [
    # Cleanup
    "CleanupConfig",
    "CleanupReport",
    "CleanupRule",
    "cleanup",
    # Extraction
    "Extractor",
    "ExtractError",
    "ExtractResult",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # Marker / probe
    "marker_name",
    "read_marker",
    "write_marker",
    "ProbeResult",
    "is_installed",
    "probe_installed",
    # Proxy
    "ProxyConfig",
    "ProxyOptions",
    "is_no_proxy_match",
    "normalize_proxy_url",
    "resolve_proxy",
]
