"""Injection options.

``InjectOptions`` is the complete, validated input of one injection. It is
built from up to three layers, highest priority first: explicit values
(command-line flags or keyword arguments), a JSON config file, defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from rti.core.errors import ErrorKind, InjectError
from rti.core.result import Err, Ok, Result
from rti.core.structured import as_str_dict, get_bool, get_list, get_str
from rti.install.cleanup import CleanupConfig, CleanupRule
from rti.install.proxy import ProxyOptions
from rti.platform.detection import PlatformSpec, detect, detect_arch, detect_os
from rti.runtimes.base import RuntimeKind

__all__ = ["InjectOptions", "parse_cleanup", "parse_custom_rules"]


def _invalid(message: str) -> Err[InjectError]:
    return Err(InjectError(kind=ErrorKind.INVALID_CONFIG, message=message))


def parse_custom_rules(raw: object) -> Result[tuple[CleanupRule, ...], InjectError]:
    """Parse ``[{"pattern": ..., "description": ...}]`` (bare strings allowed)."""
    items = raw if isinstance(raw, list) else None
    if items is None:
        return _invalid("customRules must be a list")
    rules: list[CleanupRule] = []
    for item in items:
        if isinstance(item, str) and item.strip():
            rules.append(CleanupRule(pattern=item.strip()))
            continue
        table = as_str_dict(item)
        pattern = get_str(table, "pattern") if table is not None else None
        if table is None or pattern is None:
            return _invalid(f"Invalid cleanup rule: {item!r}")
        rules.append(CleanupRule(pattern=pattern, description=get_str(table, "description")))
    return Ok(tuple(rules))


def parse_cleanup(raw: object) -> Result[bool | CleanupConfig, InjectError]:
    """Parse the ``cleanup`` setting: a bool or a structured object."""
    if isinstance(raw, bool):
        return Ok(raw)
    table = as_str_dict(raw)
    if table is None:
        return _invalid("cleanup must be a boolean or an object")

    rules: tuple[CleanupRule, ...] = ()
    raw_rules = get_list(table, "customRules")
    if raw_rules is not None:
        parsed = parse_custom_rules(raw_rules)
        if isinstance(parsed, Err):
            return parsed
        rules = parsed.value

    return Ok(
        CleanupConfig(
            remove_docs=_bool_or(get_bool(table, "removeDocs"), True),
            remove_dev_files=_bool_or(get_bool(table, "removeDevFiles"), True),
            remove_source_maps=_bool_or(get_bool(table, "removeSourceMaps"), True),
            custom_rules=rules,
        )
    )


def _bool_or(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def _pick(explicit: str | None, file_data: Mapping[str, object], key: str) -> str | None:
    if explicit is not None and explicit.strip():
        return explicit.strip()
    return get_str(file_data, key)


@dataclass(frozen=True, slots=True)
class InjectOptions:
    """Everything one injection needs.

    Attributes:
        target_dir: Install root (required)
        kind: Runtime to install
        version: Requested version; None means the runtime's default
        platform: Target platform (defaults to the host)
        cleanup: True, False, or a structured CleanupConfig
        proxy: Explicit proxy overrides
    """

    target_dir: Path
    kind: RuntimeKind = RuntimeKind.NODE
    version: str | None = None
    platform: PlatformSpec = field(default_factory=detect)
    cleanup: bool | CleanupConfig = True
    proxy: ProxyOptions = field(default_factory=ProxyOptions)

    @classmethod
    def from_sources(
        cls,
        file_data: Mapping[str, object] | None = None,
        *,
        kind: str | None = None,
        version: str | None = None,
        os: str | None = None,
        arch: str | None = None,
        target_dir: Path | None = None,
        cleanup: bool | CleanupConfig | None = None,
        http_proxy: str | None = None,
        https_proxy: str | None = None,
        no_proxy: str | None = None,
    ) -> Result[InjectOptions, InjectError]:
        """Merge explicit values over ``file_data`` over defaults."""
        data: Mapping[str, object] = file_data or {}

        kind_name = _pick(kind, data, "type") or str(RuntimeKind.NODE)
        parsed_kind = RuntimeKind.parse(kind_name)
        if isinstance(parsed_kind, Err):
            return parsed_kind

        target = target_dir
        if target is None:
            file_target = get_str(data, "targetDir")
            if file_target is None:
                return _invalid("A target directory is required")
            target = Path(file_target)

        cleanup_setting: bool | CleanupConfig = True
        if cleanup is not None:
            cleanup_setting = cleanup
        elif "cleanup" in data:
            parsed_cleanup = parse_cleanup(data["cleanup"])
            if isinstance(parsed_cleanup, Err):
                return parsed_cleanup
            cleanup_setting = parsed_cleanup.value

        platform = PlatformSpec.of(
            _pick(os, data, "platform") or detect_os(),
            _pick(arch, data, "arch") or detect_arch(),
        )

        return Ok(
            cls(
                target_dir=target,
                kind=parsed_kind.value,
                version=_pick(version, data, "version"),
                platform=platform,
                cleanup=cleanup_setting,
                proxy=ProxyOptions(
                    http_proxy=_pick(http_proxy, data, "httpProxy"),
                    https_proxy=_pick(https_proxy, data, "httpsProxy"),
                    no_proxy=_pick(no_proxy, data, "noProxy"),
                ),
            )
        )
