"""Loose value normalization for comparing against stored record properties.

The analytics platform may hand back booleans as ``True``, ``1``, ``"true"`` or
``"1"`` (and the matching false forms), and absent values as ``None``, ``""`` or
``"null"``. Every comparison in the planner goes through :func:`values_match`.
"""

from __future__ import annotations

from typing import Final

_TRUE_STRINGS: Final[frozenset[str]] = frozenset({"true", "1"})
_FALSE_STRINGS: Final[frozenset[str]] = frozenset({"false", "0"})
_ABSENT_STRINGS: Final[frozenset[str]] = frozenset({"", "null", "none"})


def normalize_value(value: object) -> object:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        if value == 1:
            return True
        if value == 0:
            return False
        return value
    if isinstance(value, str):
        stripped = value.strip()
        lowered = stripped.lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        if lowered in _ABSENT_STRINGS:
            return None
        return stripped
    return value


def is_truthy(value: object) -> bool:
    return normalize_value(value) is True


def is_falsy(value: object) -> bool:
    return normalize_value(value) is False


def is_present(value: object) -> bool:
    return normalize_value(value) is not None


def values_match(computed: object, stored: object) -> bool:
    return normalize_value(computed) == normalize_value(stored)
