"""Configuration file loading.

Injection options can be kept in a JSON file whose values sit underneath
explicit command-line flags. This module only reads and shape-checks the
file; interpreting the keys is done by ``rti.services.options``.
"""

from __future__ import annotations

import json
from pathlib import Path

from .errors import ErrorKind, InjectError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict

__all__ = ["load_config", "CONFIG_KEYS"]

# Keys understood in a config file (camelCase)
CONFIG_KEYS = frozenset(
    {
        "type",
        "version",
        "platform",
        "arch",
        "targetDir",
        "cleanup",
        "httpProxy",
        "httpsProxy",
        "noProxy",
    }
)


def _config_error(message: str, path: Path) -> Err[InjectError]:
    return Err(
        InjectError(kind=ErrorKind.INVALID_CONFIG, message=message, hint=f"Config file: {path}")
    )


def load_config(path: Path) -> Result[StrDict, InjectError]:
    """Load a JSON config file.

    Args:
        path: Path to the JSON file

    Returns:
        Ok(mapping) on success, Err(InjectError) if the file is missing,
        unreadable, not JSON, or not a JSON object
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return _config_error(f"Config file not found: {path}", path)
    except PermissionError:
        return _config_error(f"Permission denied reading: {path}", path)
    except (OSError, UnicodeDecodeError) as e:
        return _config_error(f"Error reading config: {e}", path)

    try:
        data_obj: object = json.loads(content)
    except json.JSONDecodeError as e:
        return _config_error(f"Invalid JSON: {e}", path)

    data = as_str_dict(data_obj)
    if data is None:
        return _config_error("Config root must be a JSON object", path)
    return Ok(data)
