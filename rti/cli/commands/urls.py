from __future__ import annotations

import typer

from rti.cli.commands._helpers import exit_on_error
from rti.cli.context import build_context
from rti.core.errors import ErrorCode
from rti.install.http import DEFAULT_CHECK_TIMEOUT, RealHttpClient
from rti.install.proxy import ProxyOptions
from rti.platform.detection import PlatformSpec, detect_arch, detect_os
from rti.services.urls import UrlCheckService


def urls(
    kind: str | None = typer.Option(None, "--type", "-t", help="Runtime kind (default: all)."),
    version: str | None = typer.Option(None, "--runtime-version", "-r", help="Version to check."),
    os_name: str | None = typer.Option(None, "--platform", "-p", help="Only this OS (arch defaults to the host)."),
    arch: str | None = typer.Option(None, "--arch", "-a", help="Only this architecture (OS defaults to the host)."),
    timeout: float = typer.Option(DEFAULT_CHECK_TIMEOUT, "--timeout", help="Seconds per HEAD request."),
    http_proxy: str | None = typer.Option(None, "--http-proxy"),
    https_proxy: str | None = typer.Option(None, "--https-proxy"),
    no_proxy: str | None = typer.Option(None, "--no-proxy"),
) -> None:
    """Check that download URLs are reachable (HEAD requests)."""
    ctx = build_context()

    runtimes = ctx.registry.all()
    if kind is not None:
        runtimes = (exit_on_error(ctx.registry.lookup(kind), ctx),)

    platforms = None
    if os_name is not None or arch is not None:
        # A lone --platform or --arch is completed from the host
        platforms = [PlatformSpec.of(os_name or detect_os(), arch or detect_arch())]

    service = UrlCheckService(
        http=RealHttpClient(),
        console=ctx.console,
        proxy=ProxyOptions(http_proxy=http_proxy, https_proxy=https_proxy, no_proxy=no_proxy),
        timeout=timeout,
    )
    checks = service.check(runtimes, version=version, platforms=platforms)

    failed = [c for c in checks if c.url is not None and not c.ok]
    ctx.console.print("")
    ctx.console.print(f"{len(checks) - len(failed)}/{len(checks)} checks passed")
    if failed:
        raise typer.Exit(code=int(ErrorCode.NETWORK_ERROR))
