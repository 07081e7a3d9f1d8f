"""
Tests for the influence matrix and the GF(2) solver
"""

import numpy as np
import pytest

from securebox.algebra import (
    build_influence_matrix,
    gf2_matvec,
    gf2_rank,
    gf2_rref_augmented,
    gf2_solve,
)
from securebox.box import SecureBox
from securebox.grid import coord_to_index, sample_state

SIZES = [(1, 1), (1, 2), (1, 3), (2, 2), (2, 3), (3, 3), (3, 4), (4, 4), (2, 5)]


class TestInfluenceMatrix:
    def test_2x2(self):
        A = build_influence_matrix(2, 2)
        expected = np.array(
            [
                [1, 1, 1, 0],
                [1, 1, 0, 1],
                [1, 0, 1, 1],
                [0, 1, 1, 1],
            ],
            dtype=np.uint8,
        )
        assert np.array_equal(A, expected)

    @pytest.mark.parametrize("rows,columns", SIZES)
    def test_symmetric_with_unit_diagonal(self, rows, columns):
        A = build_influence_matrix(rows, columns)
        assert A.shape == (rows * columns, rows * columns)
        assert np.array_equal(A, A.T)
        assert np.all(np.diag(A) == 1)

    @pytest.mark.parametrize("rows,columns", [(2, 3), (3, 3), (4, 2)])
    def test_rows_match_box_toggle(self, rows, columns):
        A = build_influence_matrix(rows, columns)
        for r in range(rows):
            for c in range(columns):
                box = SecureBox(
                    rows, columns, state=np.zeros((rows, columns), dtype=bool)
                )
                box.toggle(r, c)
                i = coord_to_index(r, c, columns)
                assert np.array_equal(A[i], sample_state(box.get_state()))

    def test_cached_and_read_only(self):
        A = build_influence_matrix(3, 4)
        assert build_influence_matrix(3, 4) is A
        with pytest.raises(ValueError):
            A[0, 0] = 0

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            build_influence_matrix(0, 2)


class TestGF2Solver:
    @pytest.mark.parametrize("rows,columns", SIZES)
    def test_solution_satisfies_system(self, rows, columns):
        rng = np.random.default_rng(rows * 31 + columns)
        A = build_influence_matrix(rows, columns)
        N = rows * columns
        for _ in range(10):
            x0 = rng.integers(0, 2, size=N).astype(np.uint8)
            b = gf2_matvec(A, x0)
            x, ok = gf2_solve(A, b)
            assert ok
            assert np.array_equal(gf2_matvec(A, x), b)

    @pytest.mark.parametrize("rows,columns", SIZES)
    def test_solvable_iff_ranks_agree(self, rows, columns):
        rng = np.random.default_rng(rows * 17 + columns)
        A = build_influence_matrix(rows, columns)
        rank_A = gf2_rank(A)
        for _ in range(10):
            b = rng.integers(0, 2, size=rows * columns).astype(np.uint8)
            x, ok = gf2_solve(A, b)
            rank_Ab = gf2_rank(np.column_stack([A, b]))
            assert ok == (rank_A == rank_Ab)
            if ok:
                assert np.array_equal(gf2_matvec(A, x), b)
            else:
                assert x is None

    def test_inconsistent_system_reports_unsolvable(self):
        A = np.ones((4, 4), dtype=np.uint8)
        b = np.array([1, 0, 0, 1], dtype=np.uint8)
        x, ok = gf2_solve(A, b)
        assert not ok
        assert x is None

    def test_rank_deficient_consistent_sets_free_vars_to_zero(self):
        A = np.ones((4, 4), dtype=np.uint8)
        b = np.ones(4, dtype=np.uint8)
        x, ok = gf2_solve(A, b)
        assert ok
        assert np.array_equal(x, [1, 0, 0, 0])

    def test_2x2_diagonal_state(self):
        A = build_influence_matrix(2, 2)
        b = np.array([1, 0, 0, 1], dtype=np.uint8)
        x, ok = gf2_solve(A, b)
        assert ok
        assert np.array_equal(x, [1, 0, 0, 1])
        assert int(x.sum()) % 2 == int(b.sum()) % 2

    def test_zero_state_needs_no_toggles(self):
        A = build_influence_matrix(3, 3)
        x, ok = gf2_solve(A, np.zeros(9, dtype=np.uint8))
        assert ok
        assert not x.any()

    def test_rref_eliminates_augmented_column(self):
        A = np.array([[0, 1], [1, 1]], dtype=np.uint8)
        b = np.array([1, 0], dtype=np.uint8)
        M, pivcols = gf2_rref_augmented(A, b)
        assert pivcols == [0, 1]
        assert np.array_equal(M, [[1, 0, 1], [0, 1, 1]])

    def test_rref_does_not_touch_inputs(self):
        A = np.array([[0, 1], [1, 1]], dtype=np.uint8)
        b = np.array([1, 0], dtype=np.uint8)
        gf2_rref_augmented(A, b)
        assert np.array_equal(A, [[0, 1], [1, 1]])
        assert np.array_equal(b, [1, 0])

    def test_rank(self):
        assert gf2_rank(build_influence_matrix(1, 2)) == 1
        assert gf2_rank(build_influence_matrix(2, 2)) == 4
        assert gf2_rank(np.ones((4, 4), dtype=np.uint8)) == 1

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            gf2_solve(np.eye(3, dtype=np.uint8), np.zeros(2, dtype=np.uint8))
