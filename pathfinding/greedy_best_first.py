# pathfinding/greedy_best_first.py
from __future__ import annotations

from typing import List, Set

from grid import Node, NodeKind, Pos
from priority_queue import PriorityQueue
from .base import GridSearch, SearchStatus, StepResult


class GreedyBestFirstSearch(GridSearch):
    """
    Greedy Best-First Search (GBFS).

    Uses only the heuristic value h(n) (Manhattan distance to the end)
    to order the frontier:

        f(n) = h(n)

    A membership set keeps a node from being queued twice while it is
    pending, and a popped node that was already visited is skipped.
    Newly queued nodes are painted FRONTIER, so each step may report
    several changed nodes. Not optimal.
    """
    name = "greedy-bfs"
    label = "Greedy Best-First Search"

    def _setup(self) -> None:
        self._open: PriorityQueue[Node] = PriorityQueue(
            lambda a, b: a.heuristic < b.heuristic
        )
        self._pending: Set[Pos] = set()

        s = self.start
        s.heuristic = self._heuristic(s)
        self._open.push(s)
        self._pending.add(s.pos)

    def _advance(self) -> StepResult:
        while self._open:
            cur = self._open.pop()
            self._pending.discard(cur.pos)
            if cur.visited:
                continue

            cur.visited = True
            changed: List[Node] = []
            self._finalize(cur, changed)

            if cur is self.end:
                return StepResult(SearchStatus.FOUND, cur, changed)

            for nb in self._neighbors(cur):
                if nb.visited:
                    continue
                nb.parent = cur.pos
                nb.heuristic = self._heuristic(nb)
                if nb.pos not in self._pending:
                    self._open.push(nb)
                    self._pending.add(nb.pos)
                    self._paint(nb, NodeKind.FRONTIER, changed)

            return StepResult(SearchStatus.RUNNING, cur, changed)

        return StepResult(SearchStatus.EXHAUSTED)


ALGORITHM = GreedyBestFirstSearch()
