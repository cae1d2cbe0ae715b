from __future__ import annotations

import numpy as np

from .box import SecureBox
from .strategies import NoPlanError, Strategy, make_strategy


def run(box: SecureBox, strategy: Strategy) -> tuple[bool, list[tuple[int, int]]]:
    """Compute a plan from one snapshot and apply it blindly.

    Toggles act linearly over GF(2), so the whole plan can be derived from the
    initial state and applied without looking at the box again. Returns the
    final lock verdict together with the applied plan.
    """
    state = box.get_state()
    try:
        plan = strategy.compute_plan(state)
    except NoPlanError:
        # Nothing applied; the box keeps whatever state it had.
        plan = []
    for r, c in plan:
        box.toggle(r, c)
    return box.is_locked(), plan


def unlock(box: SecureBox, strategy: Strategy) -> bool:
    """Return True if the box is still locked after the plan, False if opened."""
    return run(box, strategy)[0]


def open_box(
    y: int,
    x: int,
    strategy: str | Strategy = "reduced",
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    params: dict | None = None,
    shuffle_iterations: int | None = None,
) -> bool:
    """Create a shuffled ``y x x`` box and try to open it.

    Returns True if the box remains locked (failure), False on success.
    """
    box = SecureBox(y, x, rng=rng, seed=seed, shuffle_iterations=shuffle_iterations)
    if isinstance(strategy, str):
        strategy = make_strategy(strategy, params=params)
    strategy.reset(y, x, params=params)
    return unlock(box, strategy)
