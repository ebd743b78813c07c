"""Typed accessors for untyped data parsed from JSON manifests and TOML config."""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict keyed by strings."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a stripped, non-empty string value, else None."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_str_tuple(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Get a list of strings as a tuple.

    Returns None when the key is missing or any item is not a string.
    """
    value = table.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    if not all(isinstance(item, str) for item in items):
        return None
    return tuple(cast(list[str], items))


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table from a mapping."""
    return as_str_dict(table.get(key))
