from __future__ import annotations

import re
from collections.abc import Iterable

_SEPARATORS = re.compile(r"[_-]+")
_NON_WORD = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str | None) -> list[str]:
    """Lowercase word tokens; `_`/`-` split words and single characters are dropped."""
    normalized = _SEPARATORS.sub(" ", (text or "").lower())
    normalized = _NON_WORD.sub(" ", normalized)
    return [token for token in normalized.split() if len(token) > 1]


def jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    left = set(a)
    right = set(b)
    if not left or not right:
        return 0.0
    return len(left & right) / len(left | right)


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))
