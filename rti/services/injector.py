"""Fetch-extract-normalize pipeline.

``RuntimeInjector.inject()`` installs one runtime into one target directory:

1. Resolve the runtime rules, download URL and proxy (configuration errors
   surface here, before any I/O).
2. Probe the target directory; a working copy of the requested version
   short-circuits the whole run.
3. Download into an isolated temp directory, empty the target directory,
   extract, normalize the layout, fix executable bits, write the marker.
4. Optionally clean up non-essential files.

Calls for different target directories are independent. Calls sharing a
target directory must be serialized by the caller: step 3 empties it.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from rti.core.errors import ErrorKind, InjectError
from rti.core.result import Err, Ok, Result
from rti.install.cleanup import CleanupConfig, CleanupReport, cleanup
from rti.install.extract import Extractor
from rti.install.http import HttpClient, RealHttpClient
from rti.install.marker import remove_marker, write_marker
from rti.install.probe import probe_installed
from rti.install.proxy import ProxyConfig, resolve_proxy
from rti.output.console import ConsoleProtocol, RichConsole, Style
from rti.platform.files import empty_dir, make_executable
from rti.platform.process import Runner, run
from rti.runtimes import DEFAULT_REGISTRY, Runtime, RuntimeRegistry
from rti.services.options import InjectOptions

__all__ = ["InjectPlan", "InjectResult", "RuntimeInjector"]


@dataclass(frozen=True, slots=True)
class InjectPlan:
    """Everything resolved before touching the network or the filesystem."""

    runtime: Runtime
    version: str
    url: str
    archive_name: str
    proxy: ProxyConfig | None


@dataclass(frozen=True, slots=True)
class InjectResult:
    """Outcome of a successful injection.

    Attributes:
        kind: Runtime kind name
        version: Installed version
        target_dir: Install root
        executable: Path to the primary executable
        skipped: True if the probe found the version already installed
        url: Download URL (None when skipped)
        cleanup: Cleanup report, if cleanup ran
    """

    kind: str
    version: str
    target_dir: Path
    executable: Path
    skipped: bool
    url: str | None = None
    cleanup: CleanupReport | None = None


def _io_error(action: str, exc: OSError) -> Err[InjectError]:
    return Err(InjectError(kind=ErrorKind.IO_FAILURE, message=f"{action}: {exc}"))


class RuntimeInjector:
    """Installs a runtime according to ``InjectOptions``.

    Usage:
        injector = RuntimeInjector(options, console=RichConsole())
        match injector.inject():
            case Ok(result):
                print(result.executable)
            case Err(error):
                print(error)
    """

    def __init__(
        self,
        options: InjectOptions,
        *,
        registry: RuntimeRegistry = DEFAULT_REGISTRY,
        http: HttpClient | None = None,
        console: ConsoleProtocol | None = None,
        runner: Runner = run,
        extractor: Extractor | None = None,
        env: Mapping[str, str] | None = None,
        temp_root: Path | None = None,
    ) -> None:
        self._options = options
        self._registry = registry
        self._http = http if http is not None else RealHttpClient()
        self._console = console if console is not None else RichConsole()
        self._runner = runner
        self._extractor = extractor if extractor is not None else Extractor()
        self._env = env
        self._temp_root = temp_root

    @property
    def options(self) -> InjectOptions:
        return self._options

    def plan(self) -> Result[InjectPlan, InjectError]:
        """Resolve runtime, version, URL and proxy without any I/O."""
        runtime_result = self._registry.lookup(self._options.kind)
        if isinstance(runtime_result, Err):
            return runtime_result
        runtime = runtime_result.value

        platform = self._options.platform
        version = self._options.version or runtime.spec.default_version

        url = runtime.download_url(version, platform)
        if isinstance(url, Err):
            return url
        archive_name = runtime.archive_name(version, platform)
        if isinstance(archive_name, Err):
            return archive_name

        proxy = resolve_proxy(url.value, self._options.proxy, self._env)
        if isinstance(proxy, Err):
            return proxy

        return Ok(
            InjectPlan(
                runtime=runtime,
                version=version,
                url=url.value,
                archive_name=archive_name.value,
                proxy=proxy.value,
            )
        )

    def inject(self) -> Result[InjectResult, InjectError]:
        plan_result = self.plan()
        if isinstance(plan_result, Err):
            self._console.error(plan_result.error.message)
            return plan_result
        plan = plan_result.value

        runtime = plan.runtime
        platform = self._options.platform
        target_dir = self._options.target_dir
        executable = runtime.executable_path(target_dir, platform)

        self._console.header(f"{runtime.spec.name} {plan.version} for {platform}")
        warning = runtime.platform_warning(platform)
        if warning:
            self._console.warning(warning)

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return _io_error(f"Cannot create {target_dir}", e)

        probe = probe_installed(runtime, plan.version, platform, target_dir, runner=self._runner)
        if probe.installed:
            self._console.success(f"{probe.reason}, skipping download")
            return Ok(
                InjectResult(
                    kind=str(runtime.kind),
                    version=plan.version,
                    target_dir=target_dir,
                    executable=executable,
                    skipped=True,
                )
            )
        self._console.print(f"not installed: {probe.reason}", Style.DIM)

        try:
            remove_marker(target_dir, runtime.kind, platform)
            temp_dir = Path(tempfile.mkdtemp(prefix=f"rti-{runtime.kind}-", dir=self._temp_root))
        except OSError as e:
            return _io_error("Cannot prepare install", e)

        try:
            result = self._install(plan, temp_dir)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

        if isinstance(result, Err):
            self._console.error(result.error.message)
            return result

        self._console.success(f"{runtime.spec.name} {plan.version} installed to {target_dir}")
        return result

    def _install(self, plan: InjectPlan, temp_dir: Path) -> Result[InjectResult, InjectError]:
        runtime = plan.runtime
        platform = self._options.platform
        target_dir = self._options.target_dir

        archive = temp_dir / plan.archive_name
        via = f" via proxy {plan.proxy}" if plan.proxy else ""
        self._console.print(f"download {plan.url}{via}", Style.DIM)
        downloaded = self._http.download(plan.url, archive, proxy=plan.proxy)
        if isinstance(downloaded, Err):
            return Err(
                InjectError(
                    kind=ErrorKind.DOWNLOAD_FAILURE,
                    message=f"Download failed: {downloaded.error}",
                    hint="Check the version and network/proxy settings",
                )
            )

        try:
            empty_dir(target_dir)
        except OSError as e:
            return _io_error(f"Cannot empty {target_dir}", e)

        extracted_dir = temp_dir / "extracted"
        self._console.print(f"extract {archive.name}", Style.DIM)
        extracted = self._extractor.extract(archive, extracted_dir)
        if isinstance(extracted, Err):
            return Err(
                InjectError(kind=ErrorKind.EXTRACTION_FAILURE, message=str(extracted.error))
            )

        normalized = runtime.normalize(extracted_dir, target_dir, plan.version, platform)
        if isinstance(normalized, Err):
            return normalized

        try:
            if not platform.is_windows:
                for path in runtime.executables(target_dir, platform):
                    if path.is_file():
                        make_executable(path)
            write_marker(target_dir, runtime.kind, platform, plan.version)
        except OSError as e:
            return _io_error("Cannot finalize install", e)

        report = self._cleanup(runtime)

        return Ok(
            InjectResult(
                kind=str(runtime.kind),
                version=plan.version,
                target_dir=target_dir,
                executable=runtime.executable_path(target_dir, platform),
                skipped=False,
                url=plan.url,
                cleanup=report,
            )
        )

    def _cleanup(self, runtime: Runtime) -> CleanupReport | None:
        config = CleanupConfig.from_setting(self._options.cleanup)
        if config is None or not runtime.spec.supports_cleanup:
            return None

        report = cleanup(self._options.target_dir, config, self._options.platform)
        self._console.print(f"cleanup removed {len(report.removed)} paths", Style.DIM)
        for failure in report.failures:
            self._console.warning(f"cleanup {failure}")
        return report
