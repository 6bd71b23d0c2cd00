# io_utils.py
from dataclasses import asdict
from pathlib import Path
from datetime import datetime
import json
from typing import Any, Optional
import uuid

from config import Config
from grid import NodeKind
from results import SearchResult


def make_run_dir(
    cfg: Config,
    base: str = "outputs",
    algorithm: Optional[str] = None,
) -> Path:
    """
    New, empty output folder for one sandbox run, created under `base`.

    The name reads run_R<rows>x<cols>_<algorithm>_seed<seed>_<time>-<uid>,
    e.g. outputs/run_R30x40_astar_seed1_20251216-213012-ab12cd34/.
    `algorithm` overrides cfg.algorithm; an unseeded maze shows as seedNone.
    The 8-hex uid keeps two runs started in the same second apart.
    """
    root = Path(base)
    root.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    name = (
        f"run_R{cfg.rows}x{cfg.cols}_{algorithm or cfg.algorithm}_seed{cfg.seed}"
        f"_{stamp}-{uuid.uuid4().hex[:8]}"
    )
    run_dir = root / name
    run_dir.mkdir(exist_ok=False)
    return run_dir


def _write_json(data: dict[str, Any], path: Path) -> Path:
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def save_config(cfg: Config, run_dir: Path, filename: str = "config.json") -> Path:
    """Config fields as JSON, so a run can be repeated exactly."""
    return _write_json(asdict(cfg), run_dir / filename)


def save_summary(summary: dict[str, Any], run_dir: Path, filename: str = "summary.json") -> Path:
    # nested sections; batch_run flattens the same dict to dotted CSV columns
    return _write_json(summary, run_dir / filename)


def build_summary(
    cfg: Config,
    result: SearchResult,
    grid=None,
    walls_added: Optional[int] = None,
    algo=None,
) -> dict[str, Any]:
    """
    Nested summary dict for one run.

    grid, walls_added and algo are optional: when given they add the maze
    and pure compute-time sections.
    """
    summary: dict[str, Any] = {
        "grid": {
            "rows": cfg.rows,
            "cols": cfg.cols,
            "diagonal": cfg.diagonal,
        },
        "search": {
            "algorithm": result.algorithm,
            "path_found": result.path_found,
            "path_length": result.path_length,
            "nodes_visited": result.nodes_visited,
            "elapsed_seconds": result.elapsed_seconds,
            "efficiency_percent": result.efficiency_percent,
            "cancelled": result.cancelled,
        },
    }

    if grid is not None:
        counts = grid.kind_counts()
        summary["grid"]["start"] = list(grid.start) if grid.start else None
        summary["grid"]["end"] = list(grid.end) if grid.end else None
        summary["maze"] = {
            "seed": cfg.seed,
            "density": cfg.wall_density,
            "walls": counts[NodeKind.WALL],
            "walls_added": walls_added,
            "wall_fraction": counts[NodeKind.WALL] / len(grid),
        }

    if algo is not None:
        summary["timing"] = {
            "compute_runtime": algo.last_runtime,
            "total_runtime": algo.total_runtime,
            "call_count": algo.call_count,
        }

    return summary
