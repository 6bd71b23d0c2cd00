#!/usr/bin/env python3
"""
Offline algorithm comparison.

Every parameter combination in batch_config.PARAM_GRID describes one maze
(size, wall density, seed) and one adjacency policy. A worker process
generates that maze once, solves it with each name in
batch_config.ALGORITHMS, and returns one CSV row per algorithm, so every
algorithm in a row group saw exactly the same walls.

Nothing is drawn and no animation delays apply; the sandbox is driven
through its synchronous solve().

Rows are appended to <out_dir>/batch_results.csv as workers finish. An
existing CSV keeps its header and simply grows.

    python batch_run.py          # then: python plot_utils.py
"""

import csv
import itertools
import multiprocessing as mp
import traceback
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from batch_config import ALGORITHMS, CPU_COUNT, PARAM_GRID
from config import Config
from io_utils import build_summary
from sandbox import Sandbox

CSV_NAME = "batch_results.csv"


def iter_param_combinations(grid: Dict[str, List[Any]]) -> Iterator[Dict[str, Any]]:
    """Cartesian product of the grid's value lists, one dict per combination."""
    for values in itertools.product(*grid.values()):
        yield dict(zip(grid, values))


def flatten_dict(d: Dict[str, Any], prefix: str = "", sep: str = ".") -> Dict[str, Any]:
    """{"search": {"path_length": 9}} -> {"search.path_length": 9}"""
    flat: Dict[str, Any] = {}
    for key, value in d.items():
        name = f"{prefix}{sep}{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_dict(value, name, sep))
        else:
            flat[name] = value
    return flat


def compare_on_maze(
    purpose: str,                # free-text label, only copied into the CSV
    rows: int,
    cols: int,
    wall_density: float,
    diagonal: bool,
    seed: int,
    algorithms: Sequence[str] = ALGORITHMS,
) -> List[Dict[str, Any]]:
    """Build one seeded maze and solve it with each algorithm in turn."""
    cfg = Config(
        rows=rows,
        cols=cols,
        diagonal=diagonal,
        wall_density=wall_density,
        seed=seed,
        animate=False,
    )
    sandbox = Sandbox(cfg)
    walls_added = sandbox.generate_maze(seed=seed)

    out: List[Dict[str, Any]] = []
    for name in algorithms:
        sandbox.set_algorithm(name)
        cfg.algorithm = name
        result = sandbox.solve()  # solve() wipes the previous run's marks first
        summary = build_summary(
            cfg,
            result,
            grid=sandbox.grid,
            walls_added=walls_added,
            algo=sandbox.scheduler.algo,
        )
        out.append({"purpose": purpose, **flatten_dict(summary)})
    return out


def run_one(params: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Pool worker. A failed maze is logged and contributes no rows."""
    try:
        return compare_on_maze(**params)
    except Exception as e:
        print(f"[ERROR] maze {params} failed: {e}")
        traceback.print_exc()
        return []


def _existing_columns(csv_path: Path) -> Optional[List[str]]:
    if not csv_path.exists():
        return None
    with csv_path.open("r", newline="") as f:
        header = next(csv.reader(f), None)
    return header or None


def _column_order(row: Dict[str, Any]) -> List[str]:
    # label first, then the dotted metric columns alphabetically
    return ["purpose"] + sorted(k for k in row if k != "purpose")


def main_batch(
    out_dir: Path = Path("outputs_batch"),
    param_grid: Optional[Dict[str, List[Any]]] = None,
) -> Path:
    jobs = list(iter_param_combinations(param_grid or PARAM_GRID))
    out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = out_dir / CSV_NAME

    if not jobs:
        print("PARAM_GRID is empty; nothing to run.")
        return csv_path
    print(f"{len(jobs)} mazes x {len(ALGORITHMS)} algorithms")

    columns = _existing_columns(csv_path)
    if columns is None:
        # header comes from the first maze that solves cleanly
        first: List[Dict[str, Any]] = []
        while not first and jobs:
            first = run_one(jobs.pop(0))
        if not first:
            print("Every maze failed; no CSV written.")
            return csv_path
        columns = _column_order(first[0])
        with csv_path.open("w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(first)
        print(f"[CSV] new file {csv_path} ({len(columns)} columns)")
    else:
        print(f"[CSV] appending to {csv_path}")

    if not jobs:
        return csv_path

    n_procs = min(CPU_COUNT or mp.cpu_count(), mp.cpu_count(), len(jobs))
    print(f"[POOL] {len(jobs)} remaining mazes on {n_procs} processes")

    finished = 0
    with csv_path.open("a", newline="") as f, mp.Pool(processes=n_procs) as pool:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        for rows in pool.imap_unordered(run_one, jobs):
            finished += 1
            writer.writerows(rows)
            f.flush()
            if finished % 10 == 0 or finished == len(jobs):
                print(f"[POOL] {finished}/{len(jobs)} mazes done")

    print(f"Results in {csv_path}")
    return csv_path


if __name__ == "__main__":
    main_batch()
