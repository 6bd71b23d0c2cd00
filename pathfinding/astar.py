# pathfinding/astar.py
from __future__ import annotations

from typing import List, Set, Tuple

from grid import Node, Pos
from priority_queue import PriorityQueue
from .base import GridSearch, SearchStatus, StepResult


class AStarSearch(GridSearch):
    """
    A* search with the Manhattan heuristic.

    The open set is a PriorityQueue of (f, node) snapshots. When a node's g
    improves we push a fresh snapshot instead of re-keying the old one; the
    stale entry is skipped once the node is closed.

    Known limitation: Manhattan distance overestimates the remaining cost
    once sqrt(2) diagonal steps are allowed, so with diagonal=True the path
    is not guaranteed to be optimal. With diagonal=False the heuristic is
    admissible and the path is a shortest one.
    """
    name = "astar"
    label = "A*"

    def _setup(self) -> None:
        self._open: PriorityQueue[Tuple[float, Node]] = PriorityQueue(
            lambda a, b: a[0] < b[0]
        )
        self._open_members: Set[Pos] = set()
        self._closed: Set[Pos] = set()

        s = self.start
        s.g_score = 0
        s.f_score = self._heuristic(s)
        self._open.push((s.f_score, s))
        self._open_members.add(s.pos)

    def _advance(self) -> StepResult:
        while self._open:
            _, cur = self._open.pop()
            if cur.pos in self._closed:
                continue  # stale snapshot

            self._open_members.discard(cur.pos)
            self._closed.add(cur.pos)
            cur.visited = True
            changed: List[Node] = []
            self._finalize(cur, changed)

            if cur is self.end:
                return StepResult(SearchStatus.FOUND, cur, changed)

            for nb in self._neighbors(cur):
                if nb.pos in self._closed:
                    continue
                tentative = cur.g_score + nb.weight
                if nb.pos not in self._open_members:
                    self._open_members.add(nb.pos)
                elif tentative >= nb.g_score:
                    continue

                nb.parent = cur.pos
                nb.g_score = tentative
                nb.f_score = tentative + self._heuristic(nb)
                self._open.push((nb.f_score, nb))

            return StepResult(SearchStatus.RUNNING, cur, changed)

        return StepResult(SearchStatus.EXHAUSTED)


ALGORITHM = AStarSearch()
