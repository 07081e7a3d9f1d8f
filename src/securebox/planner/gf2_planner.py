from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..algebra import build_influence_matrix, gf2_solve
from ..grid import GridState, index_to_coord
from .base import Grid, UnsolvableError, VerificationFailedError

logger = logging.getLogger(__name__)


class TogglePlanner:
    """Solve the box as a linear system over GF(2) and toggle each cell of
    the solution once. Toggles commute, so the plan order is irrelevant.
    """

    def __init__(self):
        self.rows: Optional[int] = None
        self.columns: Optional[int] = None
        self.A: Optional[NDArray[np.uint8]] = None
        self.last_plan: list[tuple[int, int]] = []

    def reset(self, rows: int, columns: int) -> None:
        self.rows = int(rows)
        self.columns = int(columns)
        # cached per (rows, columns)
        self.A = build_influence_matrix(self.rows, self.columns)
        self.last_plan = []

    def plan(self, snapshot) -> list[tuple[int, int]]:
        """Return the (row, col) toggles that clear ``snapshot``."""
        if self.A is None or self.rows is None or self.columns is None:
            raise ValueError(
                "TogglePlanner.plan called before reset with box dimensions."
            )

        # rejects transposed snapshots as well as wrong cell counts
        target_state = GridState(self.rows, self.columns, snapshot).to_flat()

        solution, is_valid = gf2_solve(self.A, target_state)
        if not is_valid or solution is None:
            raise UnsolvableError(
                f"No toggle combination clears this {self.rows}x{self.columns} box."
            )
        return [index_to_coord(i, self.columns) for i in np.flatnonzero(solution)]

    @staticmethod
    def apply(grid: Grid, plan: list[tuple[int, int]]) -> bool:
        """Toggle every planned cell once; return whether the grid is still locked."""
        for r, c in plan:
            grid.toggle(r, c)
        return grid.is_locked()

    def solve(self, grid: Grid) -> list[tuple[int, int]]:
        """Sample, plan, apply and verify. Returns the applied plan."""
        plan = self.plan(grid.get_state())
        self.last_plan = plan
        logger.debug(
            "applying %d toggles to %sx%s box", len(plan), self.rows, self.columns
        )
        if self.apply(grid, plan):
            remaining = GridState(self.rows, self.columns, grid.get_state())
            raise VerificationFailedError(
                f"Box still locked after {len(plan)} toggles:\n{remaining}", plan
            )
        return plan
