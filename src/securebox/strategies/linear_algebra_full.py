from __future__ import annotations

from typing import Optional

import numpy as np

from ..algebra import build_toggle_matrix, gf2_solve
from .base import NoPlanError, Strategy, plan_from_presses

DEFAULT_MAX_CELLS = 400


class LinearAlgebraFull(Strategy):
    """Solve the full cell-by-pivot system (y*x unknowns) upfront."""

    def __init__(self, max_cells: int = DEFAULT_MAX_CELLS):
        self.max_cells = max_cells
        self.y: Optional[int] = None
        self.x: Optional[int] = None
        self.A: Optional[np.ndarray] = None

    def reset(self, y: int, x: int, params: dict | None = None) -> None:
        self.y = int(y)
        self.x = int(x)
        if params is not None and "max_cells" in params:
            self.max_cells = int(params["max_cells"])
        if self.y * self.x > self.max_cells:
            raise ValueError(
                f"LinearAlgebraFull: {self.y}x{self.x} box exceeds "
                f"max_cells={self.max_cells}"
            )
        # Build the toggle matrix once for this box size
        self.A = build_toggle_matrix(self.y, self.x)

    def compute_plan(self, state: np.ndarray) -> list[tuple[int, int]]:
        assert self.A is not None, "LinearAlgebraFull: call reset() first"
        state = np.asarray(state, dtype=bool)
        if state.shape != (self.y, self.x):
            raise ValueError(
                f"Expected state of shape {(self.y, self.x)}, got {state.shape}"
            )
        target = state.reshape(-1).astype(np.uint8)
        if target.sum() == 0:
            return []

        solution, is_valid = gf2_solve(self.A, target)
        if not is_valid or solution is None:
            raise NoPlanError("No valid linear algebra solution for this box.")
        return plan_from_presses(solution.reshape(self.y, self.x))
