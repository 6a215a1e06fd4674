"""
Tests for grid parsing and the (partial) Latin square model.
"""

import numpy as np
import pandas as pd
import pytest

from latinsq.errors import InvalidInputError, StructuralViolationError
from latinsq.grid.model import (
    apply_assignment,
    candidates,
    empty_cells,
    grid_key,
    is_latin_square,
    is_partial_latin_square,
    validate,
    validate_latin_square,
)
from latinsq.grid.parser import normalize_cell, normalize_grid
from latinsq.types import Cell


class TestNormalizeCell:
    @pytest.mark.parametrize("value", [None, "", ".", " ", float("nan"), np.nan])
    def test_empty_tokens(self, value):
        assert normalize_cell(value) == 0

    def test_numbers(self):
        assert normalize_cell(3) == 3
        assert normalize_cell(np.int32(2)) == 2
        assert normalize_cell(4.0) == 4
        assert normalize_cell(" 7 ") == 7

    @pytest.mark.parametrize("value", ["x", "1.5", 2.5, True, "\u00b2"])
    def test_rejects_garbage(self, value):
        with pytest.raises(InvalidInputError):
            normalize_cell(value)


class TestNormalizeGrid:
    def test_dataframe_with_missing_cells(self):
        df = pd.DataFrame([[1, None], [None, "1"]])
        grid = normalize_grid(df)
        assert grid.dtype == np.int64
        assert grid.tolist() == [[1, 0], [0, 1]]

    def test_nested_list(self):
        assert normalize_grid([[1, 2], [2, 1]]).tolist() == [[1, 2], [2, 1]]

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_grid([[1, 2], [1]])

    def test_non_2d_array_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_grid(np.zeros((2, 2, 2)))

    @pytest.mark.parametrize("data", [[1, 2, 3], "12", 5])
    def test_one_dimensional_input_rejected(self, data):
        with pytest.raises(InvalidInputError):
            normalize_grid(data)


class TestValidate:
    def test_returns_read_only_copy(self):
        src = np.diag([1, 2, 3])
        P = validate(src)
        assert not P.flags.writeable
        src[0, 1] = 3
        assert P[0, 1] == 0

    def test_non_square(self):
        with pytest.raises(InvalidInputError):
            validate([[1, 2, 0], [0, 0, 0]])

    def test_empty_grid(self):
        with pytest.raises(InvalidInputError):
            validate([])

    def test_symbol_out_of_range(self):
        with pytest.raises(InvalidInputError):
            validate([[1, 0, 0], [0, 4, 0], [0, 0, 0]])

    def test_row_duplicate(self):
        with pytest.raises(StructuralViolationError) as excinfo:
            validate([[1, 1, 0], [0, 0, 0], [0, 0, 0]])
        assert excinfo.value.kind == "row"
        assert excinfo.value.index == 1
        assert excinfo.value.symbol == 1

    def test_column_duplicate(self):
        with pytest.raises(StructuralViolationError) as excinfo:
            validate([[0, 2, 0], [0, 0, 0], [0, 2, 0]])
        assert excinfo.value.kind == "col"
        assert excinfo.value.index == 2

    def test_structural_violation_is_value_error(self):
        with pytest.raises(ValueError):
            validate([[1, 1], [0, 0]])

    def test_latin_square_requires_full_grid(self, square3):
        assert validate_latin_square(square3).tolist() == square3.tolist()
        with pytest.raises(InvalidInputError):
            validate_latin_square(np.diag([1, 2, 3]))


def test_predicates(square3):
    assert is_latin_square(square3)
    assert is_partial_latin_square(np.diag([1, 1, 1]))
    assert not is_latin_square(np.diag([1, 1, 1]))
    assert not is_partial_latin_square([[1, 1], [0, 0]])


def test_candidates_exclude_row_and_column():
    P = validate([[1, 0, 0], [0, 0, 2], [0, 3, 0]])
    assert candidates(P, Cell(1, 2)) == {2}
    assert candidates(P, Cell(2, 1)) == {3}
    assert candidates(P, Cell(3, 3)) == {1}
    # the cell's own value is not counted against itself
    assert candidates(P, Cell(1, 1)) == {1, 2, 3}


def test_empty_cells_row_major():
    P = validate([[1, 0], [0, 1]])
    assert empty_cells(P) == [Cell(1, 2), Cell(2, 1)]


def test_apply_assignment_does_not_touch_source():
    P = validate([[1, 0], [0, 1]])
    Q = apply_assignment(P, {Cell(1, 2): 2})
    assert Q.tolist() == [[1, 2], [0, 1]]
    assert P.tolist() == [[1, 0], [0, 1]]
    assert not Q.flags.writeable


def test_grid_key_is_shape_aware():
    a = np.array([[1, 2], [2, 1]])
    assert grid_key(a) == grid_key(a.copy())
    assert grid_key(a) != grid_key(np.array([[2, 1], [1, 2]]))
