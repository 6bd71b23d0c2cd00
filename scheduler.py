# scheduler.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import Optional

from config import Config
from errors import AlreadyRunning, InvalidConfiguration
from events import EventBus, NodeStateChanged, PathStepAnimated, RunCancelled, RunCompleted
from grid import ENDPOINT_KINDS, Grid, Node, NodeKind
from pathfinding import SearchAlgorithm, SearchStatus, StepResult, create_algorithm
from results import SearchResult, efficiency_percent


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def step_delay(speed: int, cfg: Optional[Config] = None) -> float:
    """Per-node animation delay in seconds: max(10ms, 200ms - speed * 20ms)."""
    cfg = cfg or Config()
    ms = max(cfg.min_step_delay_ms, cfg.base_step_delay_ms - speed * cfg.speed_step_ms)
    return ms / 1000.0


class CancelToken:
    """
    Per-run cancellation flag. Sleeping on the token returns early as soon
    as it is cancelled, so cancellation never waits out a delay.
    """

    def __init__(self) -> None:
        self.cancelled = False
        self.result: Optional[SearchResult] = None
        self._event: Optional[asyncio.Event] = None

    def cancel(self, result: Optional[SearchResult] = None) -> None:
        self.cancelled = True
        self.result = result
        if self._event is not None:
            self._event.set()

    async def sleep(self, delay: float) -> None:
        if self.cancelled:
            return
        if delay <= 0:
            await asyncio.sleep(0)
            return
        if self._event is None:
            self._event = asyncio.Event()
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass


@dataclass
class SearchScheduler:
    """
    Drives one search algorithm a node at a time.

    Two ways to run:
      - start(): returns an asyncio.Task; steps are spaced by the animation
        delay, honour pause()/resume(), and stop at once on cancel().
      - prepare() / step_once() / finish(): the caller owns timing.
        solve() is the no-delay shortcut built on these.
    Either way the same events reach the bus.
    """
    grid: Grid
    cfg: Config = field(default_factory=Config)
    bus: EventBus = field(default_factory=EventBus)
    algorithm_name: str = "dijkstra"
    speed: int = 5
    diagonal: bool = True

    # control terminal logging
    log_events: bool = False

    state: RunState = RunState.IDLE
    last_result: Optional[SearchResult] = None

    def __post_init__(self) -> None:
        self.algo: SearchAlgorithm = create_algorithm(self.algorithm_name)
        self._check_speed(self.speed)
        self._token: Optional[CancelToken] = None
        self._resume: Optional[asyncio.Event] = None
        self._t0 = 0.0
        self._log(f"[INIT] Scheduler with algorithm={self.algorithm_name}, speed={self.speed}")

    # ---------- logging helper ---------- #

    def _log(self, msg: str) -> None:
        if self.log_events:
            print(msg)

    # ---------------- settings ---------------- #

    @property
    def active(self) -> bool:
        return self.state in (RunState.RUNNING, RunState.PAUSED)

    def set_algorithm(self, name: str) -> None:
        if self.active:
            raise AlreadyRunning("Cannot switch algorithm while a search is running.")
        # create_algorithm raises InvalidSelection before anything changes
        self.algo = create_algorithm(name)
        self.algorithm_name = name
        self._log(f"[CONF] algorithm -> {name}")

    @staticmethod
    def _check_speed(level: int) -> None:
        if isinstance(level, bool) or not isinstance(level, int) or level < 1:
            raise InvalidConfiguration(f"Speed must be a positive integer, got {level!r}.")

    def set_speed(self, level: int) -> None:
        # allowed mid-run: the next delay picks it up
        self._check_speed(level)
        self.speed = level

    def current_step_delay(self) -> float:
        return step_delay(self.speed, self.cfg) if self.cfg.animate else 0.0

    def current_path_delay(self) -> float:
        return self.cfg.path_step_delay_ms / 1000.0 if self.cfg.animate else 0.0

    # ---------------- run control ---------------- #

    def _check_ready(self) -> None:
        if self.active:
            raise AlreadyRunning("A search is already running.")
        if self.grid.start is None or self.grid.end is None:
            raise InvalidConfiguration("Please set both start and end points.")

    def prepare(self) -> None:
        """Validate, wipe the previous run and seed the algorithm."""
        self._check_ready()

        for node in self.grid.clear_run_state():
            self._announce(node)

        self.algo.begin(self.grid, self.diagonal)
        self._token = CancelToken()
        self._t0 = perf_counter()
        self.state = RunState.RUNNING
        self._log(
            f"[RUN] {self.algo.label} from {self.grid.start} to {self.grid.end} "
            f"on {self.grid.rows}x{self.grid.cols} (diagonal={self.diagonal})"
        )

    def start(self) -> "asyncio.Task[SearchResult]":
        """
        Begin an animated run. Errors (missing endpoints, overlapping run)
        are raised here, before any task exists.
        """
        self._check_ready()
        loop = asyncio.get_running_loop()
        self.prepare()
        self._resume = asyncio.Event()
        self._resume.set()
        return loop.create_task(self._drive(self._token, self._resume))

    def pause(self) -> bool:
        if self.state is not RunState.RUNNING:
            return False
        self.state = RunState.PAUSED
        if self._resume is not None:
            self._resume.clear()
        self._log("[RUN] paused")
        return True

    def resume(self) -> bool:
        if self.state is not RunState.PAUSED:
            return False
        self.state = RunState.RUNNING
        if self._resume is not None:
            self._resume.set()
        self._log("[RUN] resumed")
        return True

    def cancel(self) -> bool:
        """Stop the active run; the in-flight task resolves with cancelled=True."""
        if not self.active or self._token is None:
            return False
        result = self._build_result(cancelled=True)
        self._token.cancel(result)
        if self._resume is not None:
            self._resume.set()  # wake a paused loop so it can exit
        self.state = RunState.CANCELLED
        self.last_result = result
        self._log(f"[RUN] cancelled after {result.nodes_visited} visited nodes")
        self.bus.emit(RunCancelled(result.algorithm, result.nodes_visited))
        return True

    # ---------------- stepping ---------------- #

    def _announce(self, node: Node) -> None:
        self.bus.emit(NodeStateChanged(node.pos, node.kind))

    def step_once(self) -> StepResult:
        """
        Advance the algorithm by one finalized node and publish its changes.
        For callers that drive timing themselves.
        """
        if self.state is not RunState.RUNNING:
            raise RuntimeError(f"Cannot step while the scheduler is {self.state.value}.")
        return self._advance()

    @property
    def cancelled(self) -> bool:
        return self._token is not None and self._token.cancelled

    def _advance(self) -> StepResult:
        result = self.algo.step()
        for node in result.changed:
            # a listener may have cancelled or reset the run
            if self.cancelled:
                break
            self._announce(node)
        return result

    def mark_path(self) -> int:
        """Paint the found path in one go (no delays). Returns nodes painted."""
        painted = 0
        for i, node in enumerate(self.algo.path()):
            if self.cancelled:
                break
            if node.kind in ENDPOINT_KINDS:
                continue
            node.kind = NodeKind.PATH
            self.bus.emit(PathStepAnimated(node.pos, node.kind, i))
            painted += 1
        return painted

    def finish(self) -> SearchResult:
        """Report the terminal state of the current run."""
        if self.cancelled:
            return self._token.result
        if not self.algo.status.terminal:
            raise RuntimeError("finish() called before the search reached a terminal state.")

        result = self._build_result()
        self.state = RunState.COMPLETED
        self.last_result = result
        self._log(
            f"[DONE] {result.algorithm}: found={result.path_found}, "
            f"path={result.path_length}, visited={result.nodes_visited}, "
            f"time={result.elapsed_seconds:.3f}s, efficiency={result.efficiency_percent:.1f}%"
        )
        self.bus.emit(RunCompleted(result))
        return result

    def solve(self) -> SearchResult:
        """
        Run to completion synchronously, without animation delays.

        Listeners may cancel() or reset the sandbox mid-solve; the cancelled
        result is returned. There is nowhere to wait here, so pause() has
        no effect until the run ends.
        """
        self.prepare()
        while True:
            res = self._advance()
            if self.cancelled:
                return self._token.result
            if res.status.terminal:
                break
        if res.status is SearchStatus.FOUND:
            self.mark_path()
        return self.finish()

    async def _checkpoint(self, token: CancelToken, resume: asyncio.Event) -> None:
        while self.state is RunState.PAUSED and not token.cancelled:
            await resume.wait()

    async def _drive(self, token: CancelToken, resume: asyncio.Event) -> SearchResult:
        while True:
            await self._checkpoint(token, resume)
            if token.cancelled:
                return token.result

            res = self.algo.step()
            for node in res.changed:
                self._announce(node)
                await token.sleep(self.current_step_delay())
                if token.cancelled:
                    return token.result

            if res.status.terminal:
                break

        if res.status is SearchStatus.FOUND:
            for i, node in enumerate(self.algo.path()):
                await self._checkpoint(token, resume)
                if token.cancelled:
                    return token.result
                if node.kind in ENDPOINT_KINDS:
                    continue
                node.kind = NodeKind.PATH
                self.bus.emit(PathStepAnimated(node.pos, node.kind, i))
                await token.sleep(self.current_path_delay())

        if token.cancelled:
            return token.result
        return self.finish()

    def _build_result(self, cancelled: bool = False) -> SearchResult:
        found = not cancelled and self.algo.status is SearchStatus.FOUND
        path = [n.pos for n in self.algo.path()] if found else []
        return SearchResult(
            algorithm=self.algo.name,
            path_found=found,
            path_length=len(path),
            nodes_visited=self.algo.visited_count,
            elapsed_seconds=perf_counter() - self._t0,
            efficiency_percent=efficiency_percent(
                self.grid.start, self.grid.end, len(path), found
            ),
            path=path,
            cancelled=cancelled,
        )
