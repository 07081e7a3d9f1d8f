from __future__ import annotations

import numpy as np

from .grid import GridState

MAX_SHUFFLE_TOGGLES = 1000


class SecureBox:
    """Locked rows x columns grid of booleans.

    ``toggle(row, col)`` flips the cell and every other cell in its row and
    column. The box starts from a random sequence of toggles, so it is
    always unlockable, but callers should not rely on that.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        rng: np.random.Generator | None = None,
        state: np.ndarray | None = None,
    ):
        if rows <= 0 or columns <= 0:
            raise ValueError(
                f"SecureBox needs positive dimensions, got {rows}x{columns}"
            )
        self.rows = int(rows)
        self.columns = int(columns)
        self.rng = rng or np.random.default_rng()
        self._grid = GridState(self.rows, self.columns, state)
        if state is None:
            self._shuffle()

    def _shuffle(self) -> None:
        for _ in range(int(self.rng.integers(MAX_SHUFFLE_TOGGLES))):
            self.toggle(
                int(self.rng.integers(self.rows)),
                int(self.rng.integers(self.columns)),
            )

    def toggle(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise IndexError(
                f"toggle({row}, {col}) outside {self.rows}x{self.columns} box"
            )
        grid = self._grid.cells
        grid[row, :] ^= True
        grid[:, col] ^= True
        # the crossing cell was flipped twice above
        grid[row, col] ^= True

    def is_locked(self) -> bool:
        return self._grid.count_on() > 0

    def get_state(self) -> np.ndarray:
        return self._grid.copy().cells

    def __repr__(self):
        return f"SecureBox({self.rows}x{self.columns}, on={self._grid.count_on()})"

    def __str__(self) -> str:
        return str(self._grid)
