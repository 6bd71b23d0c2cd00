import asyncio

from config import Config
from sandbox import Sandbox
from viz import draw_grid
from animate import EventRecorder, animate_run
from io_utils import make_run_dir, save_config, save_summary, build_summary


def main() -> None:
    """
    Single-run entry point for the pathfinding sandbox.

    Typical usage:
      1. Open config.py and edit the Config defaults
         (grid size, algorithm, speed, wall density, seed, ...).
      2. Run:
             python main.py
      3. Inspect the output folder under outputs/ (PNGs, GIF, summary.json).
    """

    # ------------------------------------------------------------------
    # 1) Configuration and output directory
    # ------------------------------------------------------------------
    cfg = Config()

    run_dir = make_run_dir(cfg, base="outputs")
    save_config(cfg, run_dir)

    # ------------------------------------------------------------------
    # 2) Build the sandbox and a maze with a guaranteed route
    # ------------------------------------------------------------------
    sandbox = Sandbox(cfg)
    sandbox.set_algorithm(cfg.algorithm)
    walls_added = sandbox.generate_maze()

    draw_grid(sandbox.grid, run_dir / "grid_initial.png", title=f"Maze ({walls_added} walls)")

    # Record every repaint so the run can be replayed as a GIF.
    recorder = EventRecorder().attach(sandbox.grid, sandbox.bus)

    # ------------------------------------------------------------------
    # 3) Run the search
    # ------------------------------------------------------------------
    # With cfg.animate the run goes through the asyncio scheduler with the
    # real per-step delays (slow on big grids); otherwise it is solved in
    # one synchronous sweep with the same events.
    if cfg.animate:
        async def _animated():
            return await sandbox.start()

        result = asyncio.run(_animated())
    else:
        result = sandbox.solve()

    recorder.detach()
    label = sandbox.scheduler.algo.label
    draw_grid(sandbox.grid, run_dir / "grid_final.png", title=f"{label} result")

    # ------------------------------------------------------------------
    # 4) Summary + animation
    # ------------------------------------------------------------------
    summary = build_summary(
        cfg,
        result,
        grid=sandbox.grid,
        walls_added=walls_added,
        algo=sandbox.scheduler.algo,
    )
    save_summary(summary, run_dir)

    gif_path = animate_run(recorder, run_dir / "animation.gif", fps=20)

    print(f"Run directory: {run_dir}")
    if gif_path is not None:
        print(f"Animation saved to: {gif_path}")
    if result.path_found:
        print(
            f"Path found: {result.path_length} nodes, {result.nodes_visited} visited, "
            f"efficiency {result.efficiency_percent:.1f}%"
        )
    else:
        print(f"No path found after visiting {result.nodes_visited} nodes.")


if __name__ == "__main__":
    main()
