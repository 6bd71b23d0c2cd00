# pathfinding/bfs.py
from collections import deque
from typing import Deque, List

from grid import Node
from .base import GridSearch, SearchStatus, StepResult


class BreadthFirstSearch(GridSearch):
    """
    Unweighted BFS. Nodes are flagged visited the moment they are
    discovered (so each is enqueued once) and painted when dequeued.
    Shortest in edge count under the active adjacency policy.
    """
    name = "bfs"
    label = "Breadth-First Search"

    def _setup(self) -> None:
        self.start.visited = True
        self._queue: Deque[Node] = deque([self.start])

    def _advance(self) -> StepResult:
        if not self._queue:
            return StepResult(SearchStatus.EXHAUSTED)

        cur = self._queue.popleft()
        changed: List[Node] = []
        self._finalize(cur, changed)

        if cur is self.end:
            return StepResult(SearchStatus.FOUND, cur, changed)

        for nb in self._neighbors(cur):
            if nb.visited:
                continue
            nb.visited = True
            nb.parent = cur.pos
            self._queue.append(nb)

        return StepResult(SearchStatus.RUNNING, cur, changed)


ALGORITHM = BreadthFirstSearch()
