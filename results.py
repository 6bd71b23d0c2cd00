# results.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from grid import Pos, manhattan


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search run, as reported to collaborators."""
    algorithm: str
    path_found: bool
    path_length: int            # nodes in the start..end chain, 0 if not found
    nodes_visited: int
    elapsed_seconds: float      # whole run, animation included
    efficiency_percent: float   # 0 if not found
    path: List[Pos] = field(default_factory=list)
    cancelled: bool = False


def efficiency_percent(start: Pos, end: Pos, path_length: int, path_found: bool) -> float:
    """
    100 * manhattan(start, end) / path_length, clamped to [0, 100].

    With diagonal moves a path can hold fewer nodes than the Manhattan
    distance, hence the upper clamp.
    """
    if not path_found or path_length <= 0:
        return 0.0
    value = 100.0 * manhattan(start, end) / path_length
    return max(0.0, min(100.0, value))
