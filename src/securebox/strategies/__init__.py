from securebox.strategies.base import NoPlanError, Strategy
from securebox.strategies.cross_cover import CrossCover
from securebox.strategies.linear_algebra_full import (
    DEFAULT_MAX_CELLS,
    LinearAlgebraFull,
)
from securebox.strategies.linear_algebra_reduced import LinearAlgebraReduced


def make_strategy(name: str, params: dict | None = None) -> Strategy:
    name = name.lower()
    if name == "reduced":
        return LinearAlgebraReduced()
    if name == "full":
        return LinearAlgebraFull(
            max_cells=(params or {}).get("max_cells", DEFAULT_MAX_CELLS)
        )
    if name == "cross_cover":
        return CrossCover()
    raise ValueError(f"Unknown strategy: {name}")


STRATEGIES = ("reduced", "full", "cross_cover")
