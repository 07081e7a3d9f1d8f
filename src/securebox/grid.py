from __future__ import annotations

from typing import Tuple

import numpy as np


def coord_to_index(row: int, col: int, columns: int) -> int:
    return row * columns + col


def index_to_coord(i: int, columns: int) -> Tuple[int, int]:
    r, c = divmod(int(i), columns)
    return r, c


def sample_state(snapshot) -> np.ndarray:
    """Flatten a rows x columns boolean snapshot into a 0/1 vector.
    Cell (row, col) lands at index row * columns + col.
    """
    grid = np.asarray(snapshot, dtype=bool)
    return grid.reshape(-1).astype(np.uint8)


class GridState:
    """Boolean cells of a rows x columns box, validated against its shape."""

    def __init__(self, rows: int, columns: int, state=None):
        self.rows = rows
        self.columns = columns
        if state is None:
            self.cells = np.zeros((rows, columns), dtype=bool)
        else:
            state = np.asarray(state)
            if state.shape != (rows, columns):
                raise ValueError(
                    f"Expected a {rows}x{columns} snapshot, got shape {state.shape}"
                )
            self.cells = state.astype(bool, copy=True)

    def copy(self) -> "GridState":
        return GridState(self.rows, self.columns, self.cells)

    def to_flat(self) -> np.ndarray:
        return sample_state(self.cells)

    def count_on(self) -> int:
        return int(self.cells.sum())

    def __str__(self) -> str:
        return "\n".join(
            "".join("#" if cell else "." for cell in row) for row in self.cells
        )
