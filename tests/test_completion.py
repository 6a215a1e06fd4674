"""
Tests for LS, the exhaustive completion of partial Latin squares.
"""

import numpy as np
import pytest

from helpers import as_key_set, assert_latin
from latinsq.csp.completion import LS, complete_square, count_completions
from latinsq.errors import InvalidInputError, ResourceExhaustedError, StructuralViolationError
from latinsq.grid.model import validate


class TestCompletionProperties:
    def test_diagonal_2143_completions(self, diagonal_2143):
        results = LS(diagonal_2143)

        assert len(results) > 0
        for L in results:
            assert_latin(L)
            assert np.diag(L).tolist() == [2, 1, 4, 3]

    def test_fixed_cells_are_preserved(self):
        P = np.array([[0, 2, 0, 0], [0, 0, 0, 1], [3, 0, 0, 0], [0, 0, 4, 0]])
        results = LS(P)

        assert results
        mask = P != 0
        for L in results:
            assert_latin(L)
            assert (L[mask] == P[mask]).all()

    def test_results_are_distinct(self, diagonal_2143):
        results = LS(diagonal_2143)
        assert len(as_key_set(results)) == len(results)

    def test_idempotent(self, diagonal_2143):
        assert as_key_set(LS(diagonal_2143)) == as_key_set(LS(diagonal_2143))

    def test_results_are_read_only(self, diagonal_2143):
        for L in LS(diagonal_2143):
            assert not L.flags.writeable


@pytest.mark.parametrize("n,expected", [(1, 1), (2, 2), (3, 12), (4, 576)])
def test_empty_grid_counts_all_latin_squares(n, expected):
    assert count_completions(np.zeros((n, n), dtype=int)) == expected


def test_complete_square_returns_itself(cyclic4):
    results = LS(cyclic4)
    assert len(results) == 1
    assert results[0].tolist() == cyclic4.tolist()


def test_constant_diagonal_order_3():
    results = LS(np.diag([1, 1, 1]))
    assert as_key_set(results) == as_key_set([
        np.array([[1, 2, 3], [3, 1, 2], [2, 3, 1]]),
        np.array([[1, 3, 2], [2, 1, 3], [3, 2, 1]]),
    ])


def test_infeasible_returns_empty_list():
    # (1,2) must be 2 for its row but column 2 already holds 2
    assert LS([[1, 0], [0, 2]]) == []


def test_duplicate_is_rejected_before_search():
    with pytest.raises(StructuralViolationError):
        LS([[1, 1, 0], [0, 0, 0], [0, 0, 0]])


def test_invalid_input():
    with pytest.raises(InvalidInputError):
        LS([[1, 0, 0], [0, 0, 0]])


def test_budget_exhaustion_reports_partial_result():
    with pytest.raises(ResourceExhaustedError) as excinfo:
        LS(np.zeros((4, 4), dtype=int), max_nodes=40)

    err = excinfo.value
    assert err.nodes_visited == 41
    assert len(err.partial) < 576
    for L in err.partial:
        assert_latin(L)


def test_parallel_matches_sequential(diagonal_2143):
    sequential = LS(diagonal_2143)
    parallel = LS(diagonal_2143, workers=2)
    assert as_key_set(parallel) == as_key_set(sequential)


def test_trace_writes_search_debug_log(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    P = validate([[1, 0, 0], [0, 0, 0], [0, 0, 0]])

    results = complete_square(P, max_nodes=None, trace=True)

    assert len(results) == 4
    assert (tmp_path / "logs" / "search_debug.log").exists()
