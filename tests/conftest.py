# tests/conftest.py
import os
import sys

import matplotlib

matplotlib.use("Agg")  # headless: viz/animate tests only write files

# Ensure project root (where grid.py lives) is on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest  # noqa: E402

from grid import Grid  # noqa: E402


def build_grid(rows, cols, start, end, walls=()):
    grid = Grid(rows, cols)
    grid.set_start(*start)
    grid.set_end(*end)
    for r, c in walls:
        grid.toggle_wall(r, c)
    return grid


@pytest.fixture
def make_grid():
    return build_grid
