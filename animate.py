# animate.py
from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation

from events import EventBus, NodeStateChanged, PathStepAnimated
from grid import Grid, NodeKind, Pos
from viz import grid_figure, grid_kinds, kinds_to_image


class EventRecorder:
    """
    Collaborator that remembers every cell repaint published on the bus.

    attach() snapshots the grid, then each NodeStateChanged /
    PathStepAnimated event is appended to `changes` in arrival order.
    """

    def __init__(self) -> None:
        self.initial: np.ndarray | None = None
        self.changes: List[Tuple[Pos, NodeKind]] = []
        self._unsubscribe = []

    def attach(self, grid: Grid, bus: EventBus) -> "EventRecorder":
        self.initial = grid_kinds(grid)
        self.changes = []
        self._unsubscribe = [
            bus.subscribe(NodeStateChanged, self._on_change),
            bus.subscribe(PathStepAnimated, self._on_change),
        ]
        return self

    def detach(self) -> None:
        for unsub in self._unsubscribe:
            unsub()
        self._unsubscribe = []

    def _on_change(self, event) -> None:
        self.changes.append((event.pos, event.kind))

    def frames(self, changes_per_frame: int = 1) -> List[np.ndarray]:
        """Kind snapshots after every `changes_per_frame` repaints (first frame = initial)."""
        if self.initial is None:
            return []
        step = max(1, changes_per_frame)
        kinds = self.initial.copy()
        out = [kinds.copy()]
        for i, ((r, c), kind) in enumerate(self.changes, start=1):
            kinds[r, c] = kind.value
            if i % step == 0 or i == len(self.changes):
                out.append(kinds.copy())
        return out


def animate_run(
    recorder: EventRecorder,
    out_path: str | Path,
    fps: int = 20,
    changes_per_frame: int = 4,
    title: str = "Pathfinding sandbox (animation)",
) -> Path | None:
    """
    Build a GIF replaying the recorded search: visited cells spreading out,
    then the path being traced.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    frames = recorder.frames(changes_per_frame)
    if len(frames) <= 1:
        print("No recorded changes to animate; skipping GIF.")
        return None

    rows, cols = frames[0].shape
    fig, ax = grid_figure(rows, cols, title, title_size=14)
    im = ax.imshow(kinds_to_image(frames[0]), origin="upper", animated=True)

    def init():
        im.set_array(kinds_to_image(frames[0]))
        return (im,)

    def update(frame: int):
        im.set_array(kinds_to_image(frames[frame]))
        return (im,)

    ani = animation.FuncAnimation(
        fig, update, frames=len(frames), init_func=init, interval=1000 / fps, blit=True
    )
    ani.save(out_path, writer=animation.PillowWriter(fps=fps))
    plt.close(fig)
    print(f"[GIF] {len(frames)} frames -> {out_path}")
    return out_path
