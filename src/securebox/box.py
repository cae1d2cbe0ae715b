from __future__ import annotations

import numpy as np

MAX_SHUFFLE_ITERATIONS = 1000


class SecureBox:
    """Locked box over a ``y_size x x_size`` boolean grid (True = locked).

    ``toggle(r, c)`` flips the pivot, then all of row ``r``, then all of
    column ``c``. The pivot is flipped three times, so every cell of the
    cross through ``(r, c)`` ends up flipped exactly once.
    """

    def __init__(
        self,
        y: int,
        x: int,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        shuffle_iterations: int | None = None,
    ):
        if y < 0 or x < 0:
            raise ValueError(f"Box dimensions must be non-negative, got {(y, x)}")
        self.y_size = int(y)
        self.x_size = int(x)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.shuffle_iterations = shuffle_iterations
        self._box = np.zeros((self.y_size, self.x_size), dtype=bool)
        self.shuffle()

    @classmethod
    def from_state(cls, state: np.ndarray) -> "SecureBox":
        """Build a box holding ``state`` as is (no shuffle)."""
        state = np.asarray(state, dtype=bool)
        if state.ndim != 2:
            raise ValueError(f"Expected a 2-D state, got shape {state.shape}")
        box = cls(*state.shape, shuffle_iterations=0)
        box._box = state.copy()
        return box

    def toggle(self, y: int, x: int) -> None:
        if not (0 <= y < self.y_size and 0 <= x < self.x_size):
            raise IndexError(
                f"Toggle ({y}, {x}) outside {self.y_size}x{self.x_size} box"
            )
        self._box[y, x] ^= True
        self._box[y, :] ^= True
        self._box[:, x] ^= True

    def is_locked(self) -> bool:
        return bool(self._box.any())

    def get_state(self) -> np.ndarray:
        return self._box.copy()

    def count_locked(self) -> int:
        return int(self._box.sum())

    def shuffle(self) -> None:
        """Randomly toggle cells to create an initial locked state."""
        if self._box.size == 0:
            return
        if self.shuffle_iterations is None:
            t = int(self.rng.integers(0, MAX_SHUFFLE_ITERATIONS))
        else:
            t = int(self.shuffle_iterations)
        for _ in range(t):
            self.toggle(
                int(self.rng.integers(self.y_size)),
                int(self.rng.integers(self.x_size)),
            )

    def __repr__(self):
        return (
            f"SecureBox(y={self.y_size}, x={self.x_size}, "
            f"locked={self.count_locked()})"
        )

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self._box
        )
