from securebox.planner.base import (
    Grid,
    NoPlanError,
    UnsolvableError,
    VerificationFailedError,
)
from securebox.planner.gf2_planner import TogglePlanner
