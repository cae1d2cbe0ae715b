from __future__ import annotations

from typing import Optional

import numpy as np

from .base import NoPlanError, Strategy, plan_from_presses


def _cover_presses(state: np.ndarray) -> np.ndarray:
    """XOR of the crosses through every locked cell.

    With both sides even, pivoting at every cell of the cross through (a, b)
    flips (a, b) y + x - 1 times, the rest of row a x times, the rest of
    column b y times and every other cell twice, so only (a, b) changes.
    """
    s = np.asarray(state, dtype=np.uint8)
    row_par = s.sum(axis=1) % 2
    col_par = s.sum(axis=0) % 2
    return (row_par[:, None] ^ col_par[None, :] ^ s).astype(bool)


class CrossCover(Strategy):
    """Closed-form plan for boxes whose height and width are both even."""

    def __init__(self):
        self.y: Optional[int] = None
        self.x: Optional[int] = None

    def reset(self, y: int, x: int, params: dict | None = None) -> None:
        self.y = int(y)
        self.x = int(x)

    def compute_plan(self, state: np.ndarray) -> list[tuple[int, int]]:
        assert (
            self.y is not None and self.x is not None
        ), "Strategy not initialized properly."
        state = np.asarray(state, dtype=bool)
        if state.shape != (self.y, self.x):
            raise ValueError(
                f"Expected state of shape {(self.y, self.x)}, got {state.shape}"
            )
        if not state.any():
            return []
        if self.y % 2 or self.x % 2:
            raise NoPlanError(
                f"Cross cover needs even dimensions, got {self.y}x{self.x}."
            )
        return plan_from_presses(_cover_presses(state))
