from __future__ import annotations

from rti.cli.context import build_context


def list_runtimes() -> None:
    """List supported runtimes and their default versions."""
    ctx = build_context()
    for runtime in ctx.registry.all():
        spec = runtime.spec
        platforms = ", ".join(str(p) for p in runtime.supported_platforms())
        ctx.console.header(f"{spec.kind}  ({spec.name})")
        ctx.console.print(f"  default version: {spec.default_version}")
        ctx.console.print(f"  upstream: {spec.homepage}")
        ctx.console.print(f"  platforms: {platforms}")
