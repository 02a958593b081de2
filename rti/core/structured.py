"""Helpers for narrowing untyped JSON data.

Configuration files are parsed into plain ``object`` trees; these helpers
check shapes at the boundary so the rest of the code sees typed values.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a stripped, non-empty string value, or None."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    """Get a boolean value, or None if missing or not a bool."""
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return None


def get_list(table: Mapping[str, object], key: str) -> ObjList | None:
    return as_obj_list(table.get(key))
