"""Line matching: Levenshtein distance and best-pair grouping."""

from diff2html.matching.engine import (
    BestMatch,
    MatchConfig,
    match_lines,
    match_lines_with_config,
)
from diff2html.matching.levenshtein import levenshtein, new_distance_fn, string_distance

__all__ = [
    "BestMatch",
    "MatchConfig",
    "levenshtein",
    "match_lines",
    "match_lines_with_config",
    "new_distance_fn",
    "string_distance",
]
