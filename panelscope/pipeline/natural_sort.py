"""
Natural alphanumeric ordering for page file names.

Names compare character by character, case-insensitively, except that a run
of digits compares as one number, so ``page2.jpg`` sorts before
``page10.jpg``.  A digit run ranks against ordinary characters the way a
digit would, which keeps ``a.jpg`` before ``a1.jpg`` and ``ch/01.jpg``
before ``ch1/01.jpg``.  Names that are equal under that rule (e.g.
``Page1.png`` vs ``page1.png`` or ``p01`` vs ``p1``) fall back to the raw
string so the ordering is total and does not depend on input order.
"""

from __future__ import annotations

import re
from typing import Iterable

_DIGIT_RUNS = re.compile(r"(\d+)")

# Rank shared by every digit run; no text character can take this code point
_DIGIT_RANK = ord("0")


def natural_key(name: str) -> tuple[tuple[tuple[int, int], ...], str]:
    """Sort key for ``sorted(..., key=natural_key)``."""
    # re.split with a capture group yields text at even positions and digit
    # runs at odd positions.  Each text character becomes (code point, 0) and
    # each digit run becomes (ord("0"), value).
    elements: list[tuple[int, int]] = []
    for i, part in enumerate(_DIGIT_RUNS.split(name)):
        if i % 2:
            elements.append((_DIGIT_RANK, int(part)))
        else:
            elements.extend((ord(ch), 0) for ch in part.casefold())
    return tuple(elements), name


def natural_compare(a: str, b: str) -> int:
    """Comparator form: negative, zero or positive like ``cmp``."""
    key_a, key_b = natural_key(a), natural_key(b)
    return (key_a > key_b) - (key_a < key_b)


def natural_sorted(names: Iterable[str]) -> list[str]:
    return sorted(names, key=natural_key)
