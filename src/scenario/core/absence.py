"""
Absence sentinels and the defensive-copy primitive.

Python has one built-in "no value" marker, ``None``. Code that needs to tell
"explicitly nothing" apart from "never assigned" usually reaches for a
module-level sentinel object. This module provides that second marker as
``UNSET`` and defines absence as "either of the two", so every constructor in
the package classifies them identically.

It also owns the package's single clone strategy. Every accessor that hands
a wrapped value to caller code goes through ``clone()``.

Manifesto:
    - **Two markers, one meaning:** ``None`` and ``UNSET`` both mean absent
    - **Falsy is not absent:** ``0``, ``""``, ``False``, ``[]`` are values
    - **One clone strategy:** ``copy.deepcopy``, nothing bespoke per type

Examples:
    >>> from scenario.core.absence import UNSET, is_absent, clone
    >>> is_absent(None), is_absent(UNSET), is_absent(0), is_absent("")
    (True, True, False, False)
    >>> data = {"items": [1, 2]}
    >>> copied = clone(data)
    >>> copied["items"].append(3)
    >>> data
    {'items': [1, 2]}

Guardrails:
    ❌ DON'T: Test absence with truthiness (``if not value``)
    ✅ DO: Use ``is_absent(value)``

Tags:
    sentinel, absence, deep-copy, scenario-core
"""

from __future__ import annotations

import copy
from typing import Any, Final, TypeVar

T = TypeVar("T")


class Unset:
    """Type of the ``UNSET`` singleton."""

    __slots__ = ()

    _instance: Unset | None = None

    def __new__(cls) -> Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Unset:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Unset:
        return self

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Final = Unset()


def is_absent(value: Any) -> bool:
    """True iff ``value`` is one of the absence sentinels (``None`` or ``UNSET``)."""
    return value is None or value is UNSET


def clone(value: T) -> T:
    """Return an independent structural copy of ``value``."""
    return copy.deepcopy(value)


__all__ = [
    "UNSET",
    "Unset",
    "is_absent",
    "clone",
]
