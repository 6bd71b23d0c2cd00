# grid.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import inf, sqrt
from typing import Dict, Iterator, List, Optional, Tuple

from errors import InvalidConfiguration

Pos = Tuple[int, int]  # (row, col)

DIAGONAL_WEIGHT = sqrt(2)

CARDINAL_DIRS: Tuple[Pos, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_DIRS: Tuple[Pos, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class NodeKind(Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"
    VISITED = "visited"
    PATH = "path"
    FRONTIER = "frontier"


# kinds written by a search run; wiped by clear_run_state()
RUN_KINDS = frozenset({NodeKind.VISITED, NodeKind.PATH, NodeKind.FRONTIER})
ENDPOINT_KINDS = frozenset({NodeKind.START, NodeKind.END})


def manhattan(a: Pos, b: Pos) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(eq=False)
class Node:
    """One grid cell: fixed (row, col) identity plus search/maze scratch state."""
    row: int
    col: int
    kind: NodeKind = NodeKind.EMPTY

    # Dijkstra / A* scratch
    distance: float = inf
    g_score: float = inf
    f_score: float = inf
    heuristic: float = 0.0

    # (row, col) of the predecessor, always pointing back toward the start
    parent: Optional[Pos] = None

    # cost of the last step INTO this node, set by Grid.neighbors()
    weight: float = 1.0

    visited: bool = False
    protected: bool = False  # maze generation only

    @property
    def pos(self) -> Pos:
        return (self.row, self.col)

    @property
    def is_wall(self) -> bool:
        return self.kind is NodeKind.WALL

    def reset_run_state(self) -> bool:
        """Clear scratch fields. Returns True if the kind was reverted."""
        self.distance = inf
        self.g_score = inf
        self.f_score = inf
        self.heuristic = 0.0
        self.parent = None
        self.weight = 1.0
        self.visited = False
        if self.kind in RUN_KINDS:
            self.kind = NodeKind.EMPTY
            return True
        return False


class Grid:
    """
    Fixed rows x cols collection of Nodes (row-major).

    The grid owns every Node. Parent links are stored as positions, so a
    chain is always resolved through the grid (see path_to()).
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 2 or cols < 2:
            raise InvalidConfiguration(
                f"Grid needs at least 2 rows and 2 cols, got {rows}x{cols}."
            )
        self.rows = rows
        self.cols = cols
        self.nodes: List[List[Node]] = [
            [Node(r, c) for c in range(cols)] for r in range(rows)
        ]
        self.start: Optional[Pos] = None
        self.end: Optional[Pos] = None

    # ------------------------------------------------------------------ #
    # Basic queries                                                      #
    # ------------------------------------------------------------------ #
    def in_bounds(self, p: Pos) -> bool:
        r, c = p
        return 0 <= r < self.rows and 0 <= c < self.cols

    def node(self, p: Pos) -> Node:
        if not self.in_bounds(p):
            raise InvalidConfiguration(
                f"Cell {p} is outside the {self.rows}x{self.cols} grid."
            )
        return self.nodes[p[0]][p[1]]

    def __getitem__(self, p: Pos) -> Node:
        return self.node(p)

    def __iter__(self) -> Iterator[Node]:
        for row in self.nodes:
            yield from row

    def __len__(self) -> int:
        return self.rows * self.cols

    @property
    def start_node(self) -> Optional[Node]:
        return self.node(self.start) if self.start is not None else None

    @property
    def end_node(self) -> Optional[Node]:
        return self.node(self.end) if self.end is not None else None

    def walls(self) -> List[Pos]:
        return [n.pos for n in self if n.is_wall]

    def kind_counts(self) -> Dict[NodeKind, int]:
        counts = {k: 0 for k in NodeKind}
        for n in self:
            counts[n.kind] += 1
        return counts

    # ------------------------------------------------------------------ #
    # Neighbours                                                         #
    # ------------------------------------------------------------------ #
    def neighbors(self, node: Node, diagonal: bool = True) -> List[Node]:
        """
        In-bounds, non-wall neighbours of node.

        With diagonal=True, the four cardinal directions are followed by the
        four diagonals; each returned neighbour gets weight 1 or sqrt(2)
        for this query.
        """
        dirs = CARDINAL_DIRS + DIAGONAL_DIRS if diagonal else CARDINAL_DIRS
        out: List[Node] = []
        for dr, dc in dirs:
            r, c = node.row + dr, node.col + dc
            if not (0 <= r < self.rows and 0 <= c < self.cols):
                continue
            nb = self.nodes[r][c]
            if nb.is_wall:
                continue
            nb.weight = DIAGONAL_WEIGHT if dr and dc else 1.0
            out.append(nb)
        return out

    def neighbors4(self, node: Node) -> List[Node]:
        """4-connected, non-wall neighbours (maze connectivity policy)."""
        return self.neighbors(node, diagonal=False)

    def path_to(self, node: Node) -> List[Node]:
        """Follow parent links back to the start; returns start..node."""
        path: List[Node] = []
        cur: Optional[Node] = node
        while cur is not None:
            path.append(cur)
            cur = self.node(cur.parent) if cur.parent is not None else None
        path.reverse()
        return path

    # ------------------------------------------------------------------ #
    # Editing                                                            #
    # ------------------------------------------------------------------ #
    def set_start(self, row: int, col: int) -> List[Node]:
        """
        Move the start marker. No-op if (row, col) holds the end marker.
        Returns the nodes whose kind changed (old start first).
        """
        return self._move_endpoint((row, col), NodeKind.START)

    def set_end(self, row: int, col: int) -> List[Node]:
        return self._move_endpoint((row, col), NodeKind.END)

    def _move_endpoint(self, p: Pos, kind: NodeKind) -> List[Node]:
        target = self.node(p)
        other = NodeKind.END if kind is NodeKind.START else NodeKind.START
        if target.kind is other:
            return []
        if target.kind is kind:
            return []

        changed: List[Node] = []
        current = self.start if kind is NodeKind.START else self.end
        if current is not None:
            old = self.node(current)
            old.kind = NodeKind.EMPTY
            changed.append(old)

        target.kind = kind
        changed.append(target)
        if kind is NodeKind.START:
            self.start = p
        else:
            self.end = p
        return changed

    def toggle_wall(self, row: int, col: int) -> bool:
        n = self.node((row, col))
        if n.kind is NodeKind.EMPTY:
            n.kind = NodeKind.WALL
            return True
        if n.kind is NodeKind.WALL:
            n.kind = NodeKind.EMPTY
            return True
        return False

    def place_wall(self, row: int, col: int) -> bool:
        n = self.node((row, col))
        if n.kind is NodeKind.EMPTY:
            n.kind = NodeKind.WALL
            return True
        return False

    def erase_wall(self, row: int, col: int) -> bool:
        n = self.node((row, col))
        if n.kind is NodeKind.WALL:
            n.kind = NodeKind.EMPTY
            return True
        return False

    def clear_run_state(self) -> List[Node]:
        """Reset scratch state; walls and endpoints stay where they are."""
        return [n for n in self if n.reset_run_state()]

    def clear_walls(self) -> List[Node]:
        changed: List[Node] = []
        for n in self:
            if n.is_wall:
                n.kind = NodeKind.EMPTY
                changed.append(n)
        return changed
