# -*- coding: utf-8 -*-
"""
(部分)ラテン方陣の表現と検証を行うモジュールです。

盤面は n×n の整数 numpy 配列で、0 が空マス、1..n が記号です。
公開関数の境界を越える盤面は、すべて読み取り専用のコピーにします。
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Set

import numpy as np

from ..config import EMPTY_CELL
from ..errors import InvalidInputError, StructuralViolationError
from ..types import Cell
from .parser import normalize_grid


def freeze(grid: np.ndarray) -> np.ndarray:
    """grid の読み取り専用コピーを返します。"""
    out = np.array(grid, dtype=np.int64, copy=True)
    out.flags.writeable = False
    return out


def _find_duplicate(line: np.ndarray) -> int:
    """line の中で重複している空でない記号を返します（なければ 0）。"""
    filled = line[line != EMPTY_CELL]
    values, counts = np.unique(filled, return_counts=True)
    dup = values[counts > 1]
    return int(dup[0]) if dup.size else 0


def validate(grid: Any) -> np.ndarray:
    """
    部分ラテン方陣として検証し、正規化済みの読み取り専用コピーを返します。

    Raises
    ------
    InvalidInputError
        正方でない・空・記号が 0..n の範囲外。
    StructuralViolationError
        ある行または列に、同じ記号が2回以上現れる。
    """
    arr = normalize_grid(grid)
    rows, cols = arr.shape
    if rows == 0 or rows != cols:
        raise InvalidInputError(f"盤面が正方ではありません: shape={arr.shape}")

    n = rows
    bad = (arr < EMPTY_CELL) | (arr > n)
    if bad.any():
        i, j = np.argwhere(bad)[0]
        raise InvalidInputError(
            f"記号が範囲外です: cell=({i + 1},{j + 1}) value={arr[i, j]} (n={n})"
        )

    for i in range(n):
        sym = _find_duplicate(arr[i, :])
        if sym:
            raise StructuralViolationError(
                f"行 {i + 1} に記号 {sym} が重複しています", kind="row", index=i + 1, symbol=sym
            )
    for j in range(n):
        sym = _find_duplicate(arr[:, j])
        if sym:
            raise StructuralViolationError(
                f"列 {j + 1} に記号 {sym} が重複しています", kind="col", index=j + 1, symbol=sym
            )

    return freeze(arr)


def validate_latin_square(grid: Any) -> np.ndarray:
    """validate に加えて、空マスがないこと（完全なラテン方陣）を要求します。"""
    arr = validate(grid)
    if not is_complete(arr):
        raise InvalidInputError(f"空マスを含むためラテン方陣ではありません: {len(empty_cells(arr))} 個")
    return arr


def order(grid: np.ndarray) -> int:
    return int(grid.shape[0])


def cell_value(grid: np.ndarray, cell: Cell) -> int:
    """1 始まりの cell の値を返します。"""
    return int(grid[cell.row - 1, cell.col - 1])


def is_assigned(grid: np.ndarray, cell: Cell) -> bool:
    return cell_value(grid, cell) != EMPTY_CELL


def candidates(grid: np.ndarray, cell: Cell) -> Set[int]:
    """
    cell に置ける記号の集合を返します。

    1..n から、同じ行・同じ列にすでにある記号を除いたものです。
    cell 自身の値は考慮しません。
    """
    n = order(grid)
    rest_row = np.delete(grid[cell.row - 1, :], cell.col - 1)
    rest_col = np.delete(grid[:, cell.col - 1], cell.row - 1)
    used = set(rest_row.tolist()) | set(rest_col.tolist())
    return set(range(1, n + 1)) - used


def apply_assignment(grid: np.ndarray, assignment: Dict[Cell, int]) -> np.ndarray:
    """
    grid のコピーに、マス → 記号の割り当てを書き込んだ盤面を返します。

    元の grid は変更しません。戻り値は読み取り専用です。
    """
    out = np.array(grid, dtype=np.int64, copy=True)
    for cell, value in assignment.items():
        out[cell.row - 1, cell.col - 1] = value
    out.flags.writeable = False
    return out


def empty_cells(grid: np.ndarray) -> List[Cell]:
    """空マスを行優先の順で返します。"""
    return [Cell(int(i) + 1, int(j) + 1) for i, j in np.argwhere(grid == EMPTY_CELL)]


def is_complete(grid: np.ndarray) -> bool:
    return not (np.asarray(grid) == EMPTY_CELL).any()


def is_partial_latin_square(grid: Any) -> bool:
    try:
        validate(grid)
    except (InvalidInputError, StructuralViolationError):
        return False
    return True


def is_latin_square(grid: Any) -> bool:
    """すべての行・列が 1..n の置換になっていれば True。"""
    try:
        validate_latin_square(grid)
    except (InvalidInputError, StructuralViolationError):
        return False
    return True


def grid_key(grid: np.ndarray) -> Hashable:
    """盤面を集合・辞書のキーに使える形に正規化します。"""
    arr = np.asarray(grid)
    return (int(arr.shape[0]), tuple(int(v) for v in arr.ravel()))
