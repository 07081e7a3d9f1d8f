from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def build_influence_matrix(rows: int, columns: int) -> np.ndarray:
    """Return the NxN influence matrix A over GF(2), N = rows * columns.

    A[i, j] = 1 iff toggling cell i flips cell j, i.e. the two cells share a
    row or a column. A only depends on the dimensions, so results are cached
    and handed out read-only.
    """
    if rows <= 0 or columns <= 0:
        raise ValueError(f"Expected positive dimensions, got {rows}x{columns}")
    N = rows * columns
    r, c = np.divmod(np.arange(N), columns)
    A = ((r[:, None] == r[None, :]) | (c[:, None] == c[None, :])).astype(
        np.uint8
    )
    A.setflags(write=False)
    return A


def gf2_rref_augmented(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, list[int]]:
    """Gauss-Jordan eliminate [A|b] over GF(2) on a fresh copy.

    Each pivot column is cleared in every other row, above and below, with
    the right-hand side carried along. Returns the reduced augmented matrix
    (m, n+1) and the pivot columns; row k of the result holds pivot k.
    """
    A = np.asarray(A)
    b = np.asarray(b).reshape(-1)
    if A.ndim != 2 or A.shape[0] != b.shape[0]:
        raise ValueError(
            f"Incompatible shapes for [A|b]: A {A.shape}, b {b.shape}"
        )
    m, n = A.shape
    M = np.concatenate(
        [(A % 2).astype(np.uint8), (b % 2).astype(np.uint8).reshape(-1, 1)],
        axis=1,
    )  # shape (m, n+1)

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        if row == m:
            break
        # first 1 in/under current row
        below = np.flatnonzero(M[row:, col])
        if below.size == 0:
            continue
        pivot = row + int(below[0])
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        # eliminate ALL other rows, right-hand side included
        targets = np.flatnonzero(M[:, col])
        targets = targets[targets != row]
        if targets.size:
            M[targets] ^= M[row]
        pivcols.append(col)
        row += 1
    return M, pivcols


def gf2_solve(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], bool]:
    """Solve A x = b over GF(2).

    Returns:
        x: one particular solution (length n, uint8, free variables 0),
           or None if the system is inconsistent
        solvable: bool
    """
    R, pivcols = gf2_rref_augmented(A, b)
    n = R.shape[1] - 1
    rank = len(pivcols)

    # rows without a pivot are all-zero on the left: 0...0 | 1 is a contradiction
    if np.any(R[rank:, n] == 1):
        logger.debug("inconsistent system: n=%d rank=%d", n, rank)
        return None, False

    if rank < n:
        logger.debug(
            "rank-deficient but consistent: n=%d rank=%d free=%d",
            n,
            rank,
            n - rank,
        )

    x = np.zeros((n,), dtype=np.uint8)
    for ri in reversed(range(rank)):
        pc = pivcols[ri]
        # x_pc = r_ri ^ sum_{j>pc} R[ri, j] * x_j
        rhs = int(R[ri, n])
        if pc + 1 < n:
            rhs ^= int(np.bitwise_and(R[ri, pc + 1 : n], x[pc + 1 :]).sum() % 2)
        x[pc] = rhs
    return x, True


def gf2_matvec(A: np.ndarray, x: np.ndarray) -> np.ndarray:
    """A @ x reduced mod 2."""
    prod = np.asarray(A, dtype=np.int64) @ np.asarray(x, dtype=np.int64)
    return (prod % 2).astype(np.uint8)


def gf2_rank(A: np.ndarray) -> int:
    A = np.asarray(A)
    _, pivcols = gf2_rref_augmented(A, np.zeros(A.shape[0], dtype=np.uint8))
    return len(pivcols)
