from __future__ import annotations
from pathlib import Path
from typing import Dict

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from grid import Grid, NodeKind

# one RGB colour (0-1) per cell kind
KIND_COLORS: Dict[NodeKind, np.ndarray] = {
    NodeKind.EMPTY:    np.array([0.96, 0.96, 0.96]),  # light gray background
    NodeKind.WALL:     np.array([0.20, 0.20, 0.20]),  # dark gray
    NodeKind.START:    np.array([0.30, 0.69, 0.31]),  # green
    NodeKind.END:      np.array([0.96, 0.26, 0.21]),  # red
    NodeKind.VISITED:  np.array([0.61, 0.15, 0.69]),  # purple
    NodeKind.PATH:     np.array([1.00, 0.92, 0.23]),  # yellow
    NodeKind.FRONTIER: np.array([1.00, 0.60, 0.00]),  # orange
}


def kinds_to_image(kinds: np.ndarray) -> np.ndarray:
    """Map a (rows, cols) array of NodeKind values to an RGB image."""
    img = np.zeros(kinds.shape + (3,), dtype=float)
    for kind, color in KIND_COLORS.items():
        img[kinds == kind.value] = color
    return img


def grid_kinds(grid: Grid) -> np.ndarray:
    """Snapshot of every node's kind as a (rows, cols) array of strings."""
    return np.array([[n.kind.value for n in row] for row in grid.nodes], dtype=object)


def legend_handles() -> list:
    return [
        Patch(facecolor=color, edgecolor="black", label=kind.value)
        for kind, color in KIND_COLORS.items()
    ]


def grid_figure(rows: int, cols: int, title: str, title_size: int = 16):
    """
    Figure sized to the grid with the title and a one-row colour legend
    above the axes. Shared by the PNG snapshots and the GIF replay.
    """
    fig, ax = plt.subplots(figsize=(max(4.0, cols / 3.0), max(3.0, rows / 3.0)))
    ax.set_xticks([])
    ax.set_yticks([])

    fig.suptitle(title, fontsize=title_size, y=0.98)
    handles = legend_handles()
    fig.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, 0.93),
        ncol=len(handles),
        fontsize=8,
        frameon=False,
    )
    fig.tight_layout(rect=[0.0, 0.0, 1.0, 0.88])
    return fig, ax


def draw_grid(grid: Grid, out_path: str | Path, title: str = "Pathfinding sandbox") -> Path:
    """PNG snapshot of the grid, one coloured square per cell."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = grid_figure(grid.rows, grid.cols, title)
    ax.imshow(kinds_to_image(grid_kinds(grid)), origin="upper")

    # thin cell borders
    ax.set_xticks(np.arange(-0.5, grid.cols, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, grid.rows, 1), minor=True)
    ax.grid(which="minor", color="0.85", linestyle="-", linewidth=0.4)
    ax.tick_params(which="both", length=0)

    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path
