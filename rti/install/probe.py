"""Installed-version probe.

Decides whether a target directory already holds a working copy of the
requested version, so a repeated injection can skip the network entirely.
The probe never fails: any problem simply means "not installed".
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rti.core.result import Err
from rti.install.marker import marker_name, read_marker
from rti.platform.detection import PlatformSpec
from rti.platform.process import Runner, run
from rti.runtimes.base import Runtime

__all__ = ["ProbeResult", "probe_installed", "is_installed"]


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of a probe.

    Attributes:
        installed: True if the requested version is present and runs
        reason: Why the probe decided what it decided
    """

    installed: bool
    reason: str


def probe_installed(
    runtime: Runtime,
    version: str,
    platform: PlatformSpec,
    target_dir: Path,
    *,
    runner: Runner = run,
) -> ProbeResult:
    """Check marker, executable presence, then the executable's own version output."""
    marker = marker_name(runtime.kind, platform)
    try:
        recorded = read_marker(target_dir, runtime.kind, platform)
    except OSError as e:
        return ProbeResult(False, f"cannot read marker {marker}: {e}")
    if recorded is None:
        return ProbeResult(False, f"no marker {marker}")
    if recorded != version:
        return ProbeResult(False, f"marker records {recorded}, requested {version}")

    executable = runtime.executable_path(target_dir, platform)
    if not executable.exists():
        return ProbeResult(False, f"executable missing: {executable}")

    result = runner(runtime.version_command(target_dir, platform))
    if isinstance(result, Err):
        return ProbeResult(False, f"execution test failed: {result.error}")

    output = result.value.strip()
    if not runtime.version_matches(output, version):
        return ProbeResult(False, f"executable reports {output!r}, expected {version}")

    return ProbeResult(True, f"{runtime.spec.name} {version} already installed")


def is_installed(
    runtime: Runtime,
    version: str,
    platform: PlatformSpec,
    target_dir: Path,
    *,
    runner: Runner = run,
) -> bool:
    return probe_installed(runtime, version, platform, target_dir, runner=runner).installed
