#!/usr/bin/env python3
"""
Box plots over the CSV written by batch_run.py, one figure per metric with
the algorithms side by side.

    from plot_utils import plot_algorithm_comparison

    plot_algorithm_comparison(
        "outputs_batch/batch_results.csv",
        metrics=["search.nodes_visited", "search.path_length"],
        split_by="grid.diagonal",          # hue: 8- vs 4-connected
        output_dir="outputs_batch/plots",
    )

Running the module directly plots the DEFAULT_* settings at the bottom.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

from pathfinding import PATHFINDING_ALGOS


PathLike = Union[str, Path]

ALGORITHM_COLUMN = "search.algorithm"
FOUND_COLUMN = "search.path_found"


def algorithm_label(name: str) -> str:
    """Display name for a registered algorithm; unknown names pass through."""
    algo = PATHFINDING_ALGOS.get(name)
    return algo.label if algo is not None and algo.label else name


def load_results(csv_path: PathLike, metrics: Sequence[str]) -> pd.DataFrame:
    """Batch CSV as a DataFrame; fails early if a requested column is missing."""
    path = Path(csv_path)
    if not path.is_file():
        raise FileNotFoundError(f"no batch results at {path}")

    df = pd.read_csv(path)
    missing = [c for c in (ALGORITHM_COLUMN, *metrics) if c not in df.columns]
    if missing:
        raise ValueError(
            f"missing column(s) {missing}; the CSV has {sorted(df.columns)}"
        )
    return df


def summarize(df: pd.DataFrame, metric: str) -> pd.DataFrame:
    """Run count, median and quartiles of one metric for each algorithm."""
    grouped = df.groupby(ALGORITHM_COLUMN)[metric]
    return pd.DataFrame({
        "n": grouped.count(),
        "q1": grouped.quantile(0.25),
        "median": grouped.median(),
        "q3": grouped.quantile(0.75),
    }).sort_index()


def _box(df: pd.DataFrame, metric: str, split_by: Optional[str], palette: str, ylabel: str):
    order = sorted(df[ALGORITHM_COLUMN].unique())
    fig, ax = plt.subplots(figsize=(max(6.0, 1.6 * len(order)), 5))
    sns.boxplot(
        data=df,
        x=ALGORITHM_COLUMN,
        y=metric,
        hue=split_by or ALGORITHM_COLUMN,
        order=order,
        palette=palette,
        ax=ax,
    )
    ax.set_xticks(range(len(order)))
    ax.set_xticklabels([algorithm_label(name) for name in order])
    ax.set_title(f"{ylabel} by algorithm", fontsize=16)
    ax.set_xlabel("algorithm", fontsize=13)
    ax.set_ylabel(ylabel, fontsize=13)
    if split_by is None and ax.get_legend() is not None:
        ax.get_legend().remove()
    fig.tight_layout()
    return fig


def plot_algorithm_comparison(
    csv_path: PathLike,
    metrics: Sequence[str],
    split_by: Optional[str] = None,
    output_dir: Optional[PathLike] = None,
    show: bool = False,
    found_only: bool = True,
    y_axis_labels: Optional[Dict[str, str]] = None,
    palette_name: str = "colorblind",
) -> List[Path]:
    """
    One box plot per metric.

    found_only drops runs that never reached the end cell, whose path
    metrics are all zero. Returns the PDF paths written (none without
    output_dir).
    """
    df = load_results(csv_path, metrics)
    if found_only and FOUND_COLUMN in df.columns:
        df = df[df[FOUND_COLUMN].astype(str) == "True"]

    out_dir = Path(output_dir) if output_dir is not None else None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    labels = y_axis_labels or {}
    sns.set_style("whitegrid")
    sns.set_context("paper", font_scale=1.2)

    written: List[Path] = []
    for metric in metrics:
        data = df.dropna(subset=[metric])
        if data.empty:
            print(f"[PLOT] '{metric}' has no rows, skipped")
            continue

        print(f"\n[STATS] {metric}")
        print(summarize(data, metric).to_string(float_format=lambda x: f"{x:.4g}"))

        fig = _box(data, metric, split_by, palette_name, labels.get(metric, metric))
        if out_dir is not None:
            target = out_dir / f"box_{metric.replace('.', '_')}.pdf"
            fig.savefig(target, dpi=150, bbox_inches="tight")
            written.append(target)
            print(f"[PLOT] {target}")

        if show:
            plt.show()
        else:
            plt.close(fig)

    return written


DEFAULT_CSV = "outputs_batch/batch_results.csv"
DEFAULT_METRICS = [
    "search.nodes_visited",
    "search.path_length",
    "search.efficiency_percent",
    "timing.compute_runtime",
]
DEFAULT_SPLIT_BY = "grid.diagonal"
DEFAULT_OUTPUT_DIR = "outputs_batch/plots"
DEFAULT_LABELS = {
    "search.nodes_visited": "Nodes visited",
    "search.path_length": "Path length (nodes)",
    "search.efficiency_percent": "Efficiency (%)",
    "timing.compute_runtime": "Compute time (s)",
}


if __name__ == "__main__":
    plot_algorithm_comparison(
        DEFAULT_CSV,
        DEFAULT_METRICS,
        split_by=DEFAULT_SPLIT_BY,
        output_dir=DEFAULT_OUTPUT_DIR,
        y_axis_labels=DEFAULT_LABELS,
    )
