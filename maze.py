# maze.py
from __future__ import annotations

import random
from collections import deque
from typing import Deque, Dict, List, Optional

from errors import InvalidConfiguration
from grid import Grid, Node, NodeKind, Pos


def find_route(grid: Grid) -> List[Node]:
    """
    Any start -> end route over 4-connected non-wall cells (BFS).
    Returns [start, ..., end], or [] when end is unreachable.
    """
    start, end = grid.start_node, grid.end_node
    if start is None or end is None:
        return []

    came_from: Dict[Pos, Optional[Pos]] = {start.pos: None}
    q: Deque[Node] = deque([start])
    while q:
        cur = q.popleft()
        if cur is end:
            route: List[Node] = []
            p: Optional[Pos] = cur.pos
            while p is not None:
                route.append(grid.node(p))
                p = came_from[p]
            route.reverse()
            return route
        for nb in grid.neighbors4(cur):
            if nb.pos in came_from:
                continue
            came_from[nb.pos] = cur.pos
            q.append(nb)
    return []


def path_exists(grid: Grid) -> bool:
    """Connectivity check: can start reach end through 4-connected non-wall cells?"""
    start, end = grid.start_node, grid.end_node
    if start is None or end is None:
        return False

    seen = {start.pos}
    q: Deque[Node] = deque([start])
    while q:
        cur = q.popleft()
        if cur is end:
            return True
        for nb in grid.neighbors4(cur):
            if nb.pos not in seen:
                seen.add(nb.pos)
                q.append(nb)
    return False


def generate_maze(
    grid: Grid,
    rng: Optional[random.Random] = None,
    density: float = 0.30,
) -> int:
    """
    Fill the grid with random walls while keeping start and end connected.

      1) wipe walls and run state, then protect one BFS route start -> end
      2) shuffle every other empty cell and try walling it; keep the wall
         only if a full connectivity check still passes
      3) stop at density * rows * cols walls or when candidates run out

    Returns the number of walls added. Never leaves the grid disconnected;
    in the worst case it adds no walls at all.
    """
    if grid.start is None or grid.end is None:
        raise InvalidConfiguration("Set start and end before generating a maze.")
    rng = rng or random.Random()

    grid.clear_run_state()
    grid.clear_walls()

    target_walls = int(grid.rows * grid.cols * density)
    walls_added = 0

    try:
        for node in find_route(grid):
            node.protected = True

        candidates = [n for n in grid if n.kind is NodeKind.EMPTY and not n.protected]
        rng.shuffle(candidates)  # Fisher-Yates

        for node in candidates:
            if walls_added >= target_walls:
                break
            node.kind = NodeKind.WALL
            if path_exists(grid):
                walls_added += 1
            else:
                node.kind = NodeKind.EMPTY
    finally:
        for node in grid:
            node.protected = False

    return walls_added
