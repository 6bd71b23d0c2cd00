# pathfinding/dfs.py
from typing import List

from grid import Node
from .base import GridSearch, SearchStatus, StepResult


class DepthFirstSearch(GridSearch):
    """
    Stack-based DFS. Visitation is marked at pop time, so a node can sit
    on the stack more than once; repeats are skipped when popped.
    No shortest-path guarantee.
    """
    name = "dfs"
    label = "Depth-First Search"

    def _setup(self) -> None:
        self._stack: List[Node] = [self.start]

    def _advance(self) -> StepResult:
        while self._stack:
            cur = self._stack.pop()
            if cur.visited:
                continue

            cur.visited = True
            changed: List[Node] = []
            self._finalize(cur, changed)

            if cur is self.end:
                return StepResult(SearchStatus.FOUND, cur, changed)

            for nb in self._neighbors(cur):
                if not nb.visited:
                    nb.parent = cur.pos
                    self._stack.append(nb)

            return StepResult(SearchStatus.RUNNING, cur, changed)

        return StepResult(SearchStatus.EXHAUSTED)


ALGORITHM = DepthFirstSearch()
