from __future__ import annotations

from typing import Protocol

import numpy as np


class NoPlanError(Exception):
    """Raised by a strategy when no valid plan exists for the given state."""

    pass


class Strategy(Protocol):
    def reset(self, y: int, x: int, params: dict | None = None): ...
    def compute_plan(self, state: np.ndarray) -> list[tuple[int, int]]: ...


def plan_from_presses(presses: np.ndarray) -> list[tuple[int, int]]:
    """Row-major list of pivots set in a boolean press matrix."""
    return [(int(r), int(c)) for r, c in np.argwhere(presses)]
