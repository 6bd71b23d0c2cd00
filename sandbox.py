# sandbox.py
from __future__ import annotations

import asyncio
import random
from typing import Any, Callable, List, Optional, Tuple, Type

from config import Config
from errors import AlreadyRunning
from events import EventBus, MazeGenerated, NodeStateChanged
from grid import Grid, Node, Pos
from maze import generate_maze
from results import SearchResult
from scheduler import RunState, SearchScheduler


def default_endpoints(rows: int, cols: int) -> Tuple[Pos, Pos]:
    """
    Start near the top-left, end mirrored near the bottom-right.
    On the default 30x40 grid this is (5, 5) and (24, 34).
    """
    sr, sc = min(5, rows // 4), min(5, cols // 4)
    return (sr, sc), (rows - 1 - sr, cols - 1 - sc)


class Sandbox:
    """
    Public face of the pathfinding sandbox.

    Owns the grid, the scheduler and the event bus. Rendering, audio and
    stats collaborators only ever subscribe to events; they never reach
    into the grid while a run is active.

    Typical async use:

        sandbox = Sandbox(Config(rows=20, cols=30))
        sandbox.set_algorithm("astar")
        sandbox.generate_maze()
        result = await sandbox.start()
    """

    def __init__(self, cfg: Optional[Config] = None) -> None:
        self.cfg = cfg or Config()
        self.bus = EventBus()
        self.rng = random.Random(self.cfg.seed)
        self.grid: Grid
        self.scheduler: SearchScheduler
        self.configure(self.cfg.rows, self.cfg.cols)

    # ------------------------------------------------------------------ #
    # Setup                                                              #
    # ------------------------------------------------------------------ #
    def configure(self, rows: int, cols: int) -> None:
        """(Re)build the grid with default endpoints. Dimensions must be >= 2."""
        previous = getattr(self, "scheduler", None)
        if previous is not None and previous.active:
            raise AlreadyRunning("Cannot resize the grid while a search is running.")

        grid = Grid(rows, cols)
        start, end = default_endpoints(rows, cols)
        grid.set_start(*start)
        grid.set_end(*end)

        self.grid = grid
        self.cfg.rows, self.cfg.cols = rows, cols
        self.scheduler = SearchScheduler(
            grid=grid,
            cfg=self.cfg,
            bus=self.bus,
            algorithm_name=previous.algorithm_name if previous else self.cfg.algorithm,
            speed=previous.speed if previous else self.cfg.speed,
            diagonal=self.cfg.diagonal,
            log_events=self.cfg.log_events,
        )

    def subscribe(self, event_type: Type[Any], callback: Callable[[Any], None]) -> Callable[[], None]:
        return self.bus.subscribe(event_type, callback)

    @property
    def state(self) -> RunState:
        return self.scheduler.state

    @property
    def last_result(self) -> Optional[SearchResult]:
        return self.scheduler.last_result

    @property
    def algorithm(self) -> str:
        return self.scheduler.algorithm_name

    # ------------------------------------------------------------------ #
    # Grid editing (only between runs)                                   #
    # ------------------------------------------------------------------ #
    def _require_idle(self, action: str) -> None:
        if self.scheduler.active:
            raise AlreadyRunning(f"Cannot {action} while a search is running.")

    def _publish(self, nodes: List[Node]) -> None:
        for node in nodes:
            self.bus.emit(NodeStateChanged(node.pos, node.kind))

    def set_start(self, row: int, col: int) -> bool:
        self._require_idle("move the start")
        changed = self.grid.set_start(row, col)
        self._publish(changed)
        return bool(changed)

    def set_end(self, row: int, col: int) -> bool:
        self._require_idle("move the end")
        changed = self.grid.set_end(row, col)
        self._publish(changed)
        return bool(changed)

    def _edit_cell(self, action: str, edit: Callable[[int, int], bool], row: int, col: int) -> bool:
        self._require_idle(action)
        if edit(row, col):
            self._publish([self.grid.node((row, col))])
            return True
        return False

    def toggle_wall(self, row: int, col: int) -> bool:
        return self._edit_cell("edit walls", self.grid.toggle_wall, row, col)

    def place_wall(self, row: int, col: int) -> bool:
        return self._edit_cell("edit walls", self.grid.place_wall, row, col)

    def erase_wall(self, row: int, col: int) -> bool:
        return self._edit_cell("edit walls", self.grid.erase_wall, row, col)

    def clear_path(self) -> None:
        self._require_idle("clear the path")
        self._publish(self.grid.clear_run_state())

    def clear_walls(self) -> None:
        self._require_idle("clear walls")
        self._publish(self.grid.clear_walls())

    def generate_maze(self, seed: Optional[int] = None) -> int:
        """Random walls with a guaranteed start -> end route. Returns walls added."""
        self._require_idle("generate a maze")
        rng = random.Random(seed) if seed is not None else self.rng
        before = {n.pos: n.kind for n in self.grid}

        walls_added = generate_maze(self.grid, rng, self.cfg.wall_density)

        self._publish([n for n in self.grid if before[n.pos] is not n.kind])
        self.bus.emit(MazeGenerated(walls_added, len(self.grid.walls())))
        return walls_added

    # ------------------------------------------------------------------ #
    # Run control                                                        #
    # ------------------------------------------------------------------ #
    def set_algorithm(self, name: str) -> None:
        self.scheduler.set_algorithm(name)

    def set_speed(self, level: int) -> None:
        self.scheduler.set_speed(level)

    def start(self) -> "asyncio.Task[SearchResult]":
        return self.scheduler.start()

    def solve(self) -> SearchResult:
        return self.scheduler.solve()

    def pause(self) -> bool:
        return self.scheduler.pause()

    def resume(self) -> bool:
        return self.scheduler.resume()

    def reset(self) -> None:
        """Cancel any run, then clear walls and every trace of past runs."""
        self.scheduler.cancel()
        changed = self.grid.clear_walls() + self.grid.clear_run_state()
        self._publish(changed)
        self.scheduler.state = RunState.IDLE
