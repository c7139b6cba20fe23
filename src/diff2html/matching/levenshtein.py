"""Levenshtein edit distance and normalized string distance."""

from __future__ import annotations

from typing import Callable, TypeVar

T = TypeVar("T")


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character edits turning *a* into *b*.

    Counts code points, so a multi-byte character is one unit.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(a) + 1))
    curr = [0] * (len(a) + 1)
    for i, b_char in enumerate(b):
        curr[0] = i + 1
        for j, a_char in enumerate(a):
            cost = 0 if a_char == b_char else 1
            curr[j + 1] = min(prev[j + 1] + 1, curr[j] + 1, prev[j] + cost)
        prev, curr = curr, prev
    return prev[len(a)]


def string_distance(a: str, b: str) -> float:
    """Edit distance of the trimmed strings over their combined length.

    0.0 means identical; two blank strings are identical.
    """
    a, b = a.strip(), b.strip()
    total = len(a) + len(b)
    if total == 0:
        return 0.0
    return levenshtein(a, b) / total


def new_distance_fn(str_fn: Callable[[T], str]) -> Callable[[T, T], float]:
    """Build a distance over arbitrary items from a string extractor."""

    def distance(x: T, y: T) -> float:
        return string_distance(str_fn(x), str_fn(y))

    return distance
