"""Helpers for reading loosely-typed upstream records."""
from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def safe_number(value: Any) -> float:
    """Convert ``value`` to a finite float, falling back to ``0.0``.

    Strings are parsed by their leading numeric prefix, so ``"12 kg"`` gives
    ``12.0`` and ``"n/a"`` gives ``0.0``. Booleans are not treated as numbers.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.strip())
        if match is None:
            return 0.0
        number = float(match.group(0))
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def get_field(record: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` from a mapping or, failing that, an attribute."""

    if isinstance(record, Mapping):
        return record.get(key, default)
    return getattr(record, key, default)


def first_present(record: Any, keys: Iterable[str], default: Any = None) -> Any:
    """Return the first value under ``keys`` that is not ``None``."""

    for key in keys:
        value = get_field(record, key)
        if value is not None:
            return value
    return default


def first_text(record: Any, keys: Iterable[str], default: str = "") -> str:
    """Return the first value under ``keys`` that is non-empty once trimmed."""

    for key in keys:
        value = get_field(record, key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return default


def record_id(record: Any, keys: Iterable[str]) -> str | int | None:
    """Return the first id under ``keys`` as an int or a string.

    Integral numbers stay ints; any other shape (floats, ``{"$oid": ...}``
    mappings) is stringified.
    """

    value = first_present(record, keys)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping) and value.get("$oid") is not None:
        value = value["$oid"]
    text = str(value).strip()
    return text or None


def as_records(value: Any) -> list[Any]:
    """Return ``value`` as a list of records, or an empty list."""

    if isinstance(value, (list, tuple)):
        return list(value)
    return []


__all__ = ["as_records", "first_present", "first_text", "get_field", "record_id", "safe_number"]
