from __future__ import annotations

from typing import Optional

import numpy as np

from ..algebra import build_reduced_system, gf2_solve, presses_from_parities
from .base import NoPlanError, Strategy, plan_from_presses


class LinearAlgebraReduced(Strategy):
    """
    Solve for the row and column pivot parities (y + x unknowns) and rebuild
    the full pivot matrix from them. Works for any box shape.
    """

    def __init__(self):
        self.y: Optional[int] = None
        self.x: Optional[int] = None

    def reset(self, y: int, x: int, params: dict | None = None) -> None:
        self.y = int(y)
        self.x = int(x)

    def solve_presses(self, state: np.ndarray) -> np.ndarray:
        assert (
            self.y is not None and self.x is not None
        ), "LinearAlgebraReduced: call reset() first"
        state = np.asarray(state, dtype=bool)
        if state.shape != (self.y, self.x):
            raise ValueError(
                f"Expected state of shape {(self.y, self.x)}, got {state.shape}"
            )
        if not state.any():
            return np.zeros_like(state)

        A, b = build_reduced_system(state)
        parities, is_valid = gf2_solve(A, b)
        if not is_valid or parities is None:
            raise NoPlanError(
                "LinearAlgebraReduced: row/column parity system is inconsistent."
            )
        return presses_from_parities(state, parities)

    def compute_plan(self, state: np.ndarray) -> list[tuple[int, int]]:
        return plan_from_presses(self.solve_presses(state))
