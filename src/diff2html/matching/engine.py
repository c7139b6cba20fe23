"""Recursive best-pair line matcher.

Pairs deleted and inserted lines that look alike so renderers can show them
side by side with inline highlighting. The best pair across ``a × b`` splits
both sequences in two, and each half is matched again on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

DistanceFn = Callable[[T, T], float]
MatchGroup = Tuple[List[T], List[T]]


@dataclass(frozen=True)
class BestMatch:
    index_a: int
    index_b: int
    score: float


@dataclass(frozen=True)
class MatchConfig:
    """Limits past which matching is skipped and the input returned whole."""

    max_comparisons: int = 2500
    max_line_size: int = 200


def find_best_match(
    a: Sequence[T],
    b: Sequence[T],
    distance: DistanceFn,
    cache: Optional[Dict[Tuple[int, int], float]] = None,
) -> Optional[BestMatch]:
    """Return the lowest-distance pair; ties keep the first in row-major order."""
    if cache is None:
        cache = {}
    best: Optional[BestMatch] = None
    best_dist = float("inf")
    for i, item_a in enumerate(a):
        for j, item_b in enumerate(b):
            key = (i, j)
            if key not in cache:
                cache[key] = distance(item_a, item_b)
            d = cache[key]
            if d < best_dist:
                best_dist = d
                best = BestMatch(index_a=i, index_b=j, score=d)
    return best


def match_lines(a: Sequence[T], b: Sequence[T], distance: DistanceFn) -> List[MatchGroup]:
    """Group *a* and *b* into aligned ``(old, new)`` chunks.

    Concatenating the old halves gives back *a* and the new halves give
    back *b*, in order. Empty input yields a single ``([], [])`` group.
    """
    a, b = list(a), list(b)
    best = find_best_match(a, b, distance, {})
    if best is None or len(a) + len(b) < 3:
        return [(a, b)]

    a1, a2 = a[: best.index_a], a[best.index_a + 1:]
    b1, b2 = b[: best.index_b], b[best.index_b + 1:]

    groups: List[MatchGroup] = []
    if a1 or b1:
        groups.extend(match_lines(a1, b1, distance))
    groups.append(([a[best.index_a]], [b[best.index_b]]))
    if a2 or b2:
        groups.extend(match_lines(a2, b2, distance))
    return groups


def match_lines_with_config(
    a: Sequence[T],
    b: Sequence[T],
    distance: DistanceFn,
    config: Optional[MatchConfig] = None,
    get_content: Callable[[T], str] = str,
) -> List[MatchGroup]:
    """Like :func:`match_lines`, but gives up on inputs past *config* limits."""
    config = config or MatchConfig()
    if len(a) * len(b) > config.max_comparisons:
        return [(list(a), list(b))]
    if any(len(get_content(item)) > config.max_line_size for item in (*a, *b)):
        return [(list(a), list(b))]
    return match_lines(a, b, distance)
