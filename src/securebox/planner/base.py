from __future__ import annotations
from typing import Protocol

import numpy as np


class NoPlanError(Exception):
    """Raised by a planner when no valid toggle plan clears the grid."""

    pass


class UnsolvableError(NoPlanError):
    """[A|b] is inconsistent: no toggle combination clears this state."""

    pass


class VerificationFailedError(NoPlanError):
    """Every planned toggle was applied but the grid still reports set cells."""

    def __init__(self, message: str, plan: list[tuple[int, int]]):
        super().__init__(message)
        self.plan = plan


class Grid(Protocol):
    def toggle(self, row: int, col: int) -> None: ...
    def is_locked(self) -> bool: ...
    def get_state(self) -> np.ndarray: ...
