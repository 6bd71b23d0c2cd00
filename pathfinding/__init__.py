# pathfinding/__init__.py
import importlib
import pkgutil
from typing import Dict

from errors import InvalidSelection
from .base import GridSearch, SearchAlgorithm, SearchStatus, StepResult

PATHFINDING_ALGOS: Dict[str, SearchAlgorithm] = {}


def load_algorithms() -> None:
    global PATHFINDING_ALGOS
    PATHFINDING_ALGOS = {}
    package = __name__
    for info in pkgutil.iter_modules(__path__):
        name = info.name
        if name in {"base", "__init__"}:
            continue
        module = importlib.import_module(f"{package}.{name}")
        algo = getattr(module, "ALGORITHM", None)
        if algo is None:
            continue
        if algo.name in PATHFINDING_ALGOS:
            raise ValueError(f"Duplicate pathfinding name: {algo.name}")
        PATHFINDING_ALGOS[algo.name] = algo


def create_algorithm(name: str) -> SearchAlgorithm:
    """Fresh instance of a registered algorithm, so runs never share state."""
    proto = PATHFINDING_ALGOS.get(name)
    if proto is None:
        raise InvalidSelection(
            f"Unknown algorithm {name!r}; choose one of {sorted(PATHFINDING_ALGOS)}"
        )
    return type(proto)()


load_algorithms()
