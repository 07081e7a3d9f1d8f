from __future__ import annotations

import enum
import logging

import numpy as np

from .box import SecureBox
from .planner import (
    Grid,
    TogglePlanner,
    UnsolvableError,
    VerificationFailedError,
)

logger = logging.getLogger(__name__)


class SolveOutcome(enum.Enum):
    UNLOCKED = "unlocked"
    UNSOLVABLE = "unsolvable"
    VERIFICATION_FAILED = "verification_failed"

    @property
    def locked(self) -> bool:
        return self is not SolveOutcome.UNLOCKED


def solve_box(
    grid: Grid, rows: int, columns: int, planner: TogglePlanner | None = None
) -> SolveOutcome:
    """Run sample -> build -> eliminate -> apply -> verify against ``grid``.

    Both failure kinds end up as a locked outcome. An unsolvable state is
    detected before any toggle is issued; a verification failure means the
    toggle model disagrees with the grid and is logged as an error.
    """
    planner = planner or TogglePlanner()
    planner.reset(rows, columns)
    try:
        planner.solve(grid)
    except UnsolvableError as e:
        logger.warning("%s", e)
        return SolveOutcome.UNSOLVABLE
    except VerificationFailedError as e:
        logger.error("%s plan=%s", e, e.plan)
        return SolveOutcome.VERIFICATION_FAILED
    return SolveOutcome.UNLOCKED


def open_box(
    rows: int, columns: int, rng: np.random.Generator | None = None
) -> bool:
    """Unlock a freshly shuffled rows x columns SecureBox.

    Returns True if the box remains locked, False if it was opened.
    """
    box = SecureBox(rows, columns, rng=rng)
    return solve_box(box, rows, columns).locked
