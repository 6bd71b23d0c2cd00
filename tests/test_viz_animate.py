# tests/test_viz_animate.py
import numpy as np

from animate import EventRecorder, animate_run
from config import Config
from grid import NodeKind
from sandbox import Sandbox
from viz import KIND_COLORS, draw_grid, grid_kinds, kinds_to_image


def _small_run(rows=6, cols=6):
    sb = Sandbox(Config(rows=rows, cols=cols, animate=False, seed=0))
    sb.generate_maze()
    recorder = EventRecorder().attach(sb.grid, sb.bus)
    result = sb.solve()
    recorder.detach()
    return sb, recorder, result


def test_kinds_to_image_uses_palette():
    kinds = np.array([["empty", "wall"], ["start", "end"]], dtype=object)
    img = kinds_to_image(kinds)
    assert img.shape == (2, 2, 3)
    assert np.allclose(img[0, 1], KIND_COLORS[NodeKind.WALL])
    assert np.allclose(img[1, 0], KIND_COLORS[NodeKind.START])


def test_draw_grid_writes_png(tmp_path):
    sb, _, _ = _small_run()
    out = draw_grid(sb.grid, tmp_path / "nested" / "grid.png", title="test")
    assert out.exists()
    assert out.stat().st_size > 0


def test_recorder_replays_to_the_final_grid():
    sb, recorder, result = _small_run()

    frames = recorder.frames(changes_per_frame=3)

    assert result.path_found
    assert len(frames) >= 2
    assert (frames[-1] == grid_kinds(sb.grid)).all()


def test_detached_recorder_ignores_later_events():
    sb, recorder, _ = _small_run()
    n = len(recorder.changes)
    sb.reset()
    assert len(recorder.changes) == n


def test_animate_run_writes_gif(tmp_path):
    _, recorder, _ = _small_run(4, 4)
    out = animate_run(recorder, tmp_path / "run.gif", fps=10, changes_per_frame=2)
    assert out is not None and out.exists()


def test_animate_run_skips_when_nothing_recorded(tmp_path):
    recorder = EventRecorder()
    assert animate_run(recorder, tmp_path / "none.gif") is None
