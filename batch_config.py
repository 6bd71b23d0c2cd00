# batch_config.py
from __future__ import annotations

from typing import Dict, List, Any

# Worker processes for batch_run.py; None -> one per CPU core.
# A worker owns whole mazes; a single search never spans processes.
CPU_COUNT: int | None = None

# Every maze in the sweep is solved by each of these, in this order.
ALGORITHMS: List[str] = ["dijkstra", "astar", "bfs", "dfs", "greedy-bfs"]

# One maze per combination (Cartesian product of the lists below).
# The job count is prod(len(v) for v in PARAM_GRID.values()), and each job
# runs len(ALGORITHMS) searches, so keep the lists short.
PARAM_GRID: Dict[str, List[Any]] = {
    "purpose": ["algorithm_comparison"],  # copied verbatim into the CSV

    "rows": [30],
    "cols": [40],
    "wall_density": [0.3],        # fraction of all cells the maze generator tries to wall
    "diagonal": [True, False],    # 8-connected (sqrt(2) diagonals) vs 4-connected

    "seed": list(range(10)),      # maze seeds
}
