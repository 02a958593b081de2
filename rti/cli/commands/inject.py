from __future__ import annotations

import json
from pathlib import Path

import typer

from rti.cli.commands._helpers import exit_on_error, fail
from rti.cli.context import build_context
from rti.core.config import CONFIG_KEYS, load_config
from rti.core.errors import ErrorKind, InjectError
from rti.core.result import Err
from rti.core.structured import StrDict
from rti.install.cleanup import CleanupConfig, CleanupRule
from rti.output.console import Style
from rti.services.injector import RuntimeInjector
from rti.services.options import InjectOptions, parse_custom_rules


def _cleanup_flags(
    *,
    cleanup: bool,
    docs: bool,
    dev: bool,
    sourcemaps: bool,
    custom_rules: str | None,
) -> CleanupConfig | bool | None | InjectError:
    """Explicit cleanup setting from flags, or None to defer to the config file."""
    if not cleanup:
        return False
    if docs and dev and sourcemaps and custom_rules is None:
        return None

    rules: tuple[CleanupRule, ...] = ()
    if custom_rules is not None:
        try:
            raw: object = json.loads(custom_rules)
        except json.JSONDecodeError as e:
            return InjectError(kind=ErrorKind.INVALID_CONFIG, message=f"--custom-rules: {e}")
        parsed = parse_custom_rules(raw)
        if isinstance(parsed, Err):
            return parsed.error
        rules = parsed.value

    return CleanupConfig(
        remove_docs=docs,
        remove_dev_files=dev,
        remove_source_maps=sourcemaps,
        custom_rules=rules,
    )


def inject(
    kind: str | None = typer.Option(
        None, "--type", "-t", help="Runtime kind (node, bun, uv, ripgrep, python)."
    ),
    version: str | None = typer.Option(
        None,
        "--runtime-version",
        "-r",
        help="Runtime version (e.g. v24.12.0 for node, 0.9.18 for uv, 3.12.12+20251014 for python).",
    ),
    target_dir: Path | None = typer.Option(
        None, "--dir", "-d", help="Target directory (default: ./runtime/<type>)."
    ),
    os_name: str | None = typer.Option(None, "--platform", "-p", help="Target OS (darwin, linux, win32)."),
    arch: str | None = typer.Option(None, "--arch", "-a", help="Target architecture (x64, arm64, x64-musl ...)."),
    config: Path | None = typer.Option(None, "--config", "-c", help="JSON config file."),
    cleanup: bool = typer.Option(True, "--cleanup/--no-cleanup", help="Remove non-essential files (node only)."),
    docs: bool = typer.Option(True, "--docs/--no-docs", help="Remove documentation files (node only)."),
    dev: bool = typer.Option(True, "--dev/--no-dev", help="Remove headers and sources (node only)."),
    sourcemaps: bool = typer.Option(
        True, "--sourcemaps/--no-sourcemaps", help="Remove source maps (node only)."
    ),
    custom_rules: str | None = typer.Option(
        None, "--custom-rules", help='Extra cleanup rules as JSON: [{"pattern": "**/*.txt"}].'
    ),
    http_proxy: str | None = typer.Option(None, "--http-proxy", help="Proxy for http:// downloads."),
    https_proxy: str | None = typer.Option(None, "--https-proxy", help="Proxy for https:// downloads."),
    no_proxy: str | None = typer.Option(None, "--no-proxy", help="Hosts that bypass the proxy."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print warnings and errors."),
) -> None:
    """Download and install a runtime into a target directory."""
    ctx = build_context(quiet=quiet)

    file_data: StrDict = {}
    if config is not None:
        file_data = exit_on_error(load_config(config.expanduser().resolve()), ctx)
        for key in sorted(set(file_data) - CONFIG_KEYS):
            ctx.console.warning(f"Ignoring unknown config key {key!r}")

    cleanup_setting = _cleanup_flags(
        cleanup=cleanup,
        docs=docs,
        dev=dev,
        sourcemaps=sourcemaps,
        custom_rules=custom_rules,
    )
    if isinstance(cleanup_setting, InjectError):
        fail(cleanup_setting, ctx)

    if target_dir is None and "targetDir" not in file_data:
        kind_name = kind or str(file_data.get("type") or "node")
        target_dir = Path("runtime") / kind_name.strip().lower()

    options = exit_on_error(
        InjectOptions.from_sources(
            file_data,
            kind=kind,
            version=version,
            os=os_name,
            arch=arch,
            target_dir=target_dir,
            cleanup=cleanup_setting,
            http_proxy=http_proxy,
            https_proxy=https_proxy,
            no_proxy=no_proxy,
        ),
        ctx,
    )

    injector = RuntimeInjector(options, registry=ctx.registry, console=ctx.console)
    result = injector.inject()
    if isinstance(result, Err):
        if result.error.hint:
            ctx.console.print(f"hint: {result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(result.error.exit_code))

    runtime = ctx.registry.get(options.kind)
    for path in runtime.executables(result.value.target_dir, options.platform):
        if path.exists():
            ctx.console.print(f"{path.name}: {path}")
