# pathfinding/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import List, Optional, Protocol

from errors import InvalidConfiguration
from grid import ENDPOINT_KINDS, Grid, Node, NodeKind, manhattan


class SearchStatus(Enum):
    RUNNING = "running"
    FOUND = "found"          # end node popped / dequeued
    EXHAUSTED = "exhausted"  # frontier empty, end never reached

    @property
    def terminal(self) -> bool:
        return self is not SearchStatus.RUNNING


@dataclass
class StepResult:
    status: SearchStatus
    current: Optional[Node] = None
    # nodes whose kind changed during this step, in order (never start/end)
    changed: List[Node] = field(default_factory=list)


class SearchAlgorithm(Protocol):
    name: str
    label: str
    visited_count: int
    # Optional timing stats (per algorithm implementation)
    total_runtime: float
    call_count: int
    last_runtime: float

    def begin(self, grid: Grid, diagonal: bool = True) -> None:
        ...

    def step(self) -> StepResult:
        ...

    def path(self) -> List[Node]:
        ...

    def reset_stats(self) -> None:
        ...


class GridSearch(SearchAlgorithm):
    """
    Shared plumbing for the step-driven grid searches.

    Subclasses implement _setup() (seed the frontier) and _advance()
    (finalize exactly one node and report what changed). step() wraps
    _advance() with the terminal-state latch and timing stats.
    """

    name = ""
    label = ""

    def __init__(self) -> None:
        self.grid: Optional[Grid] = None
        self.diagonal: bool = True
        self.status: SearchStatus = SearchStatus.RUNNING
        self.visited_count: int = 0

        # timing stats
        self.total_runtime: float = 0.0
        self.call_count: int = 0
        self.last_runtime: float = 0.0

    # ---- stats API ----

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime += dt
        self.total_runtime += dt

    # ---- run API ----

    def begin(self, grid: Grid, diagonal: bool = True) -> None:
        if grid.start is None or grid.end is None:
            raise InvalidConfiguration("Both start and end must be set before searching.")
        self.grid = grid
        self.diagonal = diagonal
        self.status = SearchStatus.RUNNING
        self.visited_count = 0
        self.last_runtime = 0.0
        self.call_count += 1
        self._setup()

    def step(self) -> StepResult:
        if self.grid is None:
            raise RuntimeError(f"{type(self).__name__}.begin() must be called before step()")
        if self.status.terminal:
            return StepResult(self.status)

        t0 = perf_counter()
        result = self._advance()
        self._update_stats(perf_counter() - t0)
        self.status = result.status
        return result

    def run(self) -> SearchStatus:
        """Step until FOUND or EXHAUSTED (no animation)."""
        while not self.step().status.terminal:
            pass
        return self.status

    def path(self) -> List[Node]:
        if self.status is not SearchStatus.FOUND or self.grid is None:
            return []
        return self.grid.path_to(self.grid.end_node)

    # ---- helpers for subclasses ----

    @property
    def start(self) -> Node:
        return self.grid.start_node

    @property
    def end(self) -> Node:
        return self.grid.end_node

    def _neighbors(self, node: Node) -> List[Node]:
        return self.grid.neighbors(node, self.diagonal)

    def _heuristic(self, node: Node) -> int:
        return manhattan(node.pos, self.grid.end)

    def _finalize(self, node: Node, changed: List[Node]) -> None:
        """Count node as visited and paint it, unless it is an endpoint."""
        self.visited_count += 1
        self._paint(node, NodeKind.VISITED, changed)

    @staticmethod
    def _paint(node: Node, kind: NodeKind, changed: List[Node]) -> None:
        if node.kind in ENDPOINT_KINDS:
            return
        node.kind = kind
        changed.append(node)

    def _setup(self) -> None:
        raise NotImplementedError

    def _advance(self) -> StepResult:
        raise NotImplementedError
