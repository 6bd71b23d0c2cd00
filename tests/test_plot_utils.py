# tests/test_plot_utils.py
import matplotlib.pyplot as plt
import pandas as pd
import pytest

from plot_utils import _box, algorithm_label, load_results, plot_algorithm_comparison, summarize


def _write_csv(path):
    rows = []
    for algo, visited in [("astar", [10, 12, 14]), ("bfs", [30, 32, 34])]:
        for i, v in enumerate(visited):
            rows.append({
                "purpose": "t",
                "search.algorithm": algo,
                "search.nodes_visited": v,
                "search.path_found": i < 2,
                "grid.diagonal": bool(i % 2),
            })
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def test_load_results_checks_columns(tmp_path):
    csv_path = _write_csv(tmp_path / "r.csv")
    assert len(load_results(csv_path, ["search.nodes_visited"])) == 6
    with pytest.raises(ValueError):
        load_results(csv_path, ["search.path_length"])
    with pytest.raises(FileNotFoundError):
        load_results(tmp_path / "missing.csv", [])


def test_summarize_per_algorithm(tmp_path):
    df = load_results(_write_csv(tmp_path / "r.csv"), ["search.nodes_visited"])
    table = summarize(df, "search.nodes_visited")
    assert list(table.index) == ["astar", "bfs"]
    assert table.loc["astar", "median"] == 12
    assert table.loc["bfs", "n"] == 3


def test_plot_writes_one_pdf_per_metric(tmp_path):
    csv_path = _write_csv(tmp_path / "r.csv")
    written = plot_algorithm_comparison(
        csv_path,
        ["search.nodes_visited"],
        split_by="grid.diagonal",
        output_dir=tmp_path / "plots",
    )
    assert [p.name for p in written] == ["box_search_nodes_visited.pdf"]
    assert written[0].exists()


def test_plot_without_output_dir_returns_nothing(tmp_path):
    csv_path = _write_csv(tmp_path / "r.csv")
    assert plot_algorithm_comparison(csv_path, ["search.nodes_visited"], found_only=False) == []


def test_algorithm_label_falls_back_to_the_name():
    assert algorithm_label("bfs") == "Breadth-First Search"
    assert algorithm_label("custom-search") == "custom-search"


def test_box_plot_ticks_use_algorithm_labels(tmp_path):
    df = load_results(_write_csv(tmp_path / "r.csv"), ["search.nodes_visited"])
    fig = _box(df, "search.nodes_visited", None, "colorblind", "Nodes visited")
    ticks = [t.get_text() for t in fig.axes[0].get_xticklabels()]
    plt.close(fig)
    assert ticks == ["A*", "Breadth-First Search"]
