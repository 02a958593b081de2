"""Cleanup of non-essential files after installation.

Two strategies, chosen by the target operating system:

- macOS/Linux: remove the ``share/`` and ``include/`` directories. The
  CleanupConfig categories and custom rules are not consulted.
- Windows: build glob patterns from the enabled categories plus custom
  rules and delete every match.

Cleanup is best-effort. Each pattern (or directory) is an independent step;
failures are collected in the CleanupReport and never abort the remaining
steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PureWindowsPath

from rti.platform.detection import PlatformSpec
from rti.platform.files import remove_path

__all__ = [
    "CleanupConfig",
    "CleanupFailure",
    "CleanupReport",
    "CleanupRule",
    "cleanup",
    "DOC_PATTERNS",
    "DEV_PATTERNS",
    "SOURCE_MAP_PATTERNS",
    "UNIX_REMOVED_DIRS",
]

DOC_PATTERNS = ("**/*.md", "**/docs/**", "**/doc/**", "**/man/**")
DEV_PATTERNS = ("**/*.h", "**/*.cc", "**/*.cpp", "**/*.c")
SOURCE_MAP_PATTERNS = ("**/*.map",)
UNIX_REMOVED_DIRS = ("share", "include")


@dataclass(frozen=True, slots=True)
class CleanupRule:
    """User-supplied glob pattern, relative to the target directory."""

    pattern: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class CleanupConfig:
    """Which categories of files to remove."""

    remove_docs: bool = True
    remove_dev_files: bool = True
    remove_source_maps: bool = True
    custom_rules: tuple[CleanupRule, ...] = ()

    @classmethod
    def from_setting(cls, setting: bool | CleanupConfig) -> CleanupConfig | None:
        """``True`` means every category, ``False`` means no cleanup."""
        if isinstance(setting, CleanupConfig):
            return setting
        return cls() if setting else None

    def patterns(self) -> list[str]:
        patterns: list[str] = []
        if self.remove_docs:
            patterns.extend(DOC_PATTERNS)
        if self.remove_dev_files:
            patterns.extend(DEV_PATTERNS)
        if self.remove_source_maps:
            patterns.extend(SOURCE_MAP_PATTERNS)
        patterns.extend(rule.pattern for rule in self.custom_rules)
        return patterns


@dataclass(frozen=True, slots=True)
class CleanupFailure:
    step: str
    message: str

    def __str__(self) -> str:
        return f"{self.step}: {self.message}"


def _empty_paths() -> list[Path]:
    return []


def _empty_failures() -> list[CleanupFailure]:
    return []


@dataclass
class CleanupReport:
    """What a cleanup run removed and which steps failed."""

    removed: list[Path] = field(default_factory=_empty_paths)
    failures: list[CleanupFailure] = field(default_factory=_empty_failures)

    @property
    def ok(self) -> bool:
        return not self.failures


def _cleanup_unix(target_dir: Path, report: CleanupReport) -> None:
    for name in UNIX_REMOVED_DIRS:
        path = target_dir / name
        if not path.exists():
            continue
        try:
            remove_path(path)
            report.removed.append(path)
        except OSError as e:
            report.failures.append(CleanupFailure(step=name, message=str(e)))


def _outside_target(pattern: str) -> bool:
    path = PureWindowsPath(pattern)
    return bool(path.anchor) or ".." in path.parts


def _cleanup_patterns(target_dir: Path, patterns: list[str], report: CleanupReport) -> None:
    for pattern in patterns:
        if _outside_target(pattern):
            report.failures.append(
                CleanupFailure(step=pattern, message="pattern must be relative to the install root")
            )
            continue
        try:
            # Shallow paths first, so removing a directory makes its children vanish
            matches = sorted(target_dir.glob(pattern), key=lambda p: len(p.parts))
            for path in matches:
                if path == target_dir or not (path.exists() or path.is_symlink()):
                    continue
                remove_path(path)
                report.removed.append(path)
        except (OSError, ValueError, NotImplementedError) as e:
            report.failures.append(CleanupFailure(step=pattern, message=str(e)))


def cleanup(target_dir: Path, config: CleanupConfig, platform: PlatformSpec) -> CleanupReport:
    """Remove non-essential files from an installed runtime."""
    report = CleanupReport()
    if platform.is_windows:
        _cleanup_patterns(target_dir, config.patterns(), report)
    else:
        _cleanup_unix(target_dir, report)
    return report
