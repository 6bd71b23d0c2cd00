from dataclasses import dataclass
from typing import Optional

@dataclass
class Config:
    rows: int = 30
    cols: int = 40

    # one of: dijkstra, astar, bfs, dfs, greedy-bfs
    algorithm: str = "dijkstra"
    speed: int = 5            # slider level, higher = faster
    diagonal: bool = True     # 8-connected search (diagonal weight sqrt(2))

    # animation timing: delay = max(min, base - speed * step)
    animate: bool = True
    base_step_delay_ms: int = 200
    speed_step_ms: int = 20
    min_step_delay_ms: int = 10
    path_step_delay_ms: int = 50

    # maze generation
    wall_density: float = 0.30   # fraction of ALL cells turned into walls
    seed: Optional[int] = None   # None -> fresh randomness every maze

    log_events: bool = False
