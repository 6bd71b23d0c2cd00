# events.py
from __future__ import annotations

import asyncio
import traceback
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, List, Type

from grid import NodeKind, Pos
from results import SearchResult


@dataclass(frozen=True)
class NodeStateChanged:
    pos: Pos
    kind: NodeKind


@dataclass(frozen=True)
class PathStepAnimated:
    pos: Pos
    kind: NodeKind
    index: int  # position along the start..end path


@dataclass(frozen=True)
class RunCompleted:
    result: SearchResult


@dataclass(frozen=True)
class RunCancelled:
    algorithm: str
    nodes_visited: int


@dataclass(frozen=True)
class MazeGenerated:
    walls_added: int
    wall_count: int


Listener = Callable[[Any], None]


class EventBus:
    """
    Fire-and-forget event delivery to collaborators (rendering, audio, stats).

    Inside a running event loop every delivery is queued with ``call_soon``,
    so a slow listener costs loop time between steps instead of stalling the
    step that emitted. With no loop running (``solve()``, edits from plain
    code) listeners run inline. Either way delivery keeps subscription order,
    and a listener that raises is reported and counted, but never interrupts
    the core or the other listeners.
    """

    def __init__(self, log_errors: bool = True) -> None:
        self._listeners: DefaultDict[type, List[Listener]] = defaultdict(list)
        self._catch_all: List[Listener] = []
        self.log_errors = log_errors
        self.failures = 0

    def subscribe(self, event_type: Type[Any], callback: Listener) -> Callable[[], None]:
        self._listeners[event_type].append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners[event_type]:
                self._listeners[event_type].remove(callback)

        return unsubscribe

    def subscribe_all(self, callback: Listener) -> Callable[[], None]:
        self._catch_all.append(callback)

        def unsubscribe() -> None:
            if callback in self._catch_all:
                self._catch_all.remove(callback)

        return unsubscribe

    def emit(self, event: Any) -> None:
        # copy: a listener may unsubscribe while we iterate
        targets = list(self._listeners.get(type(event), ())) + list(self._catch_all)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        for cb in targets:
            if loop is None:
                self._deliver(cb, event)
            else:
                loop.call_soon(self._deliver, cb, event)

    def _deliver(self, cb: Listener, event: Any) -> None:
        try:
            cb(event)
        except Exception as e:
            self.failures += 1
            if self.log_errors:
                print(f"[EVENT] listener {cb!r} failed on {type(event).__name__}: {e}")
                traceback.print_exc()
