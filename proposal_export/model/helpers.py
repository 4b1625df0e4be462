"""Coercion helpers shared by the document loader."""

from __future__ import annotations

import typing as typ


def _as_text(value: object | None, default: str = "") -> str:
    """Return ``value`` as a string, or ``default`` for missing/structured values."""
    match value:
        case None:
            return default
        case bool():
            return str(value).lower()
        case str():
            return value
        case int() | float():
            return str(value)
        case _:
            return default


def _as_text_list(value: object | None) -> list[str]:
    """Return a list of strings; non-list input yields an empty list."""
    if not isinstance(value, list | tuple):
        return []
    return [_as_text(item) for item in value]


def _as_rows(value: object | None) -> list[list[str]]:
    """Return table rows, dropping entries that are not sequences.

    Row lengths are preserved exactly so ragged tables pass through.
    """
    if not isinstance(value, list | tuple):
        return []
    return [_as_text_list(row) for row in value if isinstance(row, list | tuple)]


def _as_mapping(value: object | None) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` when it is a mapping, otherwise an empty mapping."""
    if isinstance(value, dict):
        return typ.cast("dict[str, typ.Any]", value)
    return {}


def _as_order(value: object | None, fallback: int) -> int:
    """Return an integer order value, using ``fallback`` for anything else."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return fallback


__all__ = ["_as_mapping", "_as_order", "_as_rows", "_as_text", "_as_text_list"]
