# pathfinding/dijkstra.py
from __future__ import annotations

from math import inf
from typing import List

from grid import Node
from .base import GridSearch, SearchStatus, StepResult


class DijkstraSearch(GridSearch):
    """
    Dijkstra's algorithm over the weighted grid (1 orthogonal, sqrt(2) diagonal).

    Keeps every non-wall node in an unvisited list (row-major order) and
    selects the closest one with a linear scan each step. Ties go to the
    node that comes first in row-major order.
    """
    name = "dijkstra"
    label = "Dijkstra"

    def _setup(self) -> None:
        self.start.distance = 0
        self._unvisited: List[Node] = [n for n in self.grid if not n.is_wall]

    def _advance(self) -> StepResult:
        if not self._unvisited:
            return StepResult(SearchStatus.EXHAUSTED)

        best = 0
        for i in range(1, len(self._unvisited)):
            if self._unvisited[i].distance < self._unvisited[best].distance:
                best = i
        cur = self._unvisited[best]

        # everything left is unreachable
        if cur.distance == inf:
            return StepResult(SearchStatus.EXHAUSTED)

        del self._unvisited[best]
        cur.visited = True
        changed: List[Node] = []
        self._finalize(cur, changed)

        if cur is self.end:
            return StepResult(SearchStatus.FOUND, cur, changed)

        for nb in self._neighbors(cur):
            if nb.visited:
                continue
            candidate = cur.distance + nb.weight
            if candidate < nb.distance:
                nb.distance = candidate
                nb.parent = cur.pos

        return StepResult(SearchStatus.RUNNING, cur, changed)


ALGORITHM = DijkstraSearch()
