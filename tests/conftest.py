import numpy as np
import pytest

from securebox.algebra import effect_of_presses


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240917)


def reachable_state(rng: np.random.Generator, y: int, x: int) -> np.ndarray:
    """A lock pattern produced by some set of toggles."""
    presses = rng.random((y, x)) < 0.5
    return effect_of_presses(presses)


def simulate(state, plan):
    """Apply a plan cell by cell: pivot, then its row, then its column."""
    grid = [list(map(bool, row)) for row in state]
    for r, c in plan:
        grid[r][c] = not grid[r][c]
        for j in range(len(grid[r])):
            grid[r][j] = not grid[r][j]
        for i in range(len(grid)):
            grid[i][c] = not grid[i][c]
    return grid
