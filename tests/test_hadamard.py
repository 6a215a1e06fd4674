"""
Tests for the Hadamard L-product and the rho invariant.
"""

import itertools

import numpy as np
import pytest

from latinsq.algebra.hadamard import (
    HadProd,
    hadamard_power_sequence,
    rho,
    rho_iteration_bound,
)
from latinsq.csp.completion import LS
from latinsq.errors import InvalidInputError, InvariantNotFoundError, StructuralViolationError


L1 = [[1, 2, 3], [3, 1, 2], [2, 3, 1]]
L2 = [[1, 3, 2], [3, 2, 1], [2, 1, 3]]
L3 = [[1, 2, 3], [2, 3, 1], [3, 1, 2]]


class TestHadProd:
    def test_known_product(self):
        assert HadProd(L1, L2, L3).tolist() == [[1, 1, 1], [2, 2, 2], [3, 3, 3]]

    def test_matches_elementwise_definition(self):
        H = HadProd(L1, L2, L3)
        for i, j in itertools.product(range(3), repeat=2):
            assert H[i, j] == L3[L1[i][j] - 1][L2[i][j] - 1]

    def test_accepts_dataframe_like_input(self):
        import pandas as pd

        H = HadProd(pd.DataFrame(L1), np.array(L2), L3)
        assert H.tolist() == [[1, 1, 1], [2, 2, 2], [3, 3, 3]]

    def test_entry_out_of_range(self):
        with pytest.raises(InvalidInputError):
            HadProd([[1, 0, 3], [3, 1, 2], [2, 3, 1]], L2, L3)
        with pytest.raises(InvalidInputError):
            HadProd(L1, [[1, 3, 2], [3, 4, 1], [2, 1, 3]], L3)

    def test_order_mismatch(self):
        with pytest.raises(InvalidInputError):
            HadProd([[1, 2], [2, 1]], L2, L3)

    def test_non_square(self):
        with pytest.raises(InvalidInputError):
            HadProd([[1, 2, 3]], L2, L3)


class TestRho:
    def test_constant_diagonal_square(self, square3):
        assert rho(square3) == 2

    def test_klein_group(self, klein4):
        assert rho(klein4) == 2

    def test_cyclic_groups(self, cyclic3, cyclic4):
        # rho of Z_n is the smallest k >= 2 with k*x = 0 for every x
        assert rho(cyclic3) == 3
        assert rho(cyclic4) == 4

    def test_unique_completion(self):
        assert rho([[2, 1, 3], [1, 3, 2], [3, 2, 1]]) == 2

    def test_every_order_4_square_within_bound(self):
        bound = rho_iteration_bound(4)
        for L in LS(np.zeros((4, 4), dtype=int)):
            assert 2 <= rho(L) <= bound

    def test_non_latin_input_is_rejected_before_iterating(self):
        with pytest.raises(StructuralViolationError):
            rho([[2, 1], [1, 1]])

    def test_large_non_latin_input_is_rejected(self):
        # the lcm bound at n=20 is far too large to iterate through
        L = np.ones((20, 20), dtype=int)
        L[0, 0] = 2
        with pytest.raises(StructuralViolationError):
            rho(L)

    def test_explicit_bound(self, cyclic4):
        with pytest.raises(InvariantNotFoundError):
            rho(cyclic4, max_iterations=3)
        assert rho(cyclic4, max_iterations=4) == 4

    def test_rejects_empty_cells(self):
        with pytest.raises(InvalidInputError):
            rho(np.diag([1, 2, 3]))


def test_iteration_bound():
    assert rho_iteration_bound(1) == 2
    assert rho_iteration_bound(4) == 12
    assert rho_iteration_bound(6) == 60


def test_power_sequence_starts_with_self_product(cyclic3):
    seq = hadamard_power_sequence(cyclic3)
    first = next(seq)
    assert first.tolist() == HadProd(cyclic3, cyclic3, cyclic3).tolist()
    assert next(seq).tolist() == HadProd(first, cyclic3, cyclic3).tolist()
