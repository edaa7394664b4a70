from __future__ import annotations

import numpy as np

from .base import check_dimensions


class SecureBox:
    """
    Locked container with the row/column toggle rule.
    Only toggle(), is_locked() and get_state() are meant to be used by solvers.
    """

    SHUFFLE_LIMIT = 1000

    def __init__(
        self,
        y: int,
        x: int,
        rng: np.random.Generator | None = None,
        state: np.ndarray | None = None,
    ):
        self.y, self.x = check_dimensions(y, x)
        self.rng = rng or np.random.default_rng()
        if state is None:
            self._grid = np.zeros((self.y, self.x), dtype=bool)
            self._shuffle()
        else:
            state = np.asarray(state)
            if state.shape != (self.y, self.x):
                raise ValueError(
                    f"Expected state of shape {(self.y, self.x)}, got {state.shape}"
                )
            self._grid = state.astype(bool, copy=True)

    def toggle(self, row: int, col: int) -> None:
        """Flip (row, col), then the whole row, then the whole column."""
        if not (0 <= row < self.y and 0 <= col < self.x):
            raise IndexError(
                f"toggle({row}, {col}) outside a {self.y}x{self.x} box"
            )
        self._grid[row, col] ^= True
        self._grid[row, :] ^= True
        self._grid[:, col] ^= True

    def is_locked(self) -> bool:
        return bool(self._grid.any())

    def get_state(self) -> np.ndarray:
        return self._grid.copy()

    def _shuffle(self) -> None:
        for _ in range(int(self.rng.integers(self.SHUFFLE_LIMIT))):
            self.toggle(
                int(self.rng.integers(self.y)), int(self.rng.integers(self.x))
            )

    def __repr__(self):
        return f"SecureBox(y={self.y}, x={self.x}, locked={int(self._grid.sum())})"
