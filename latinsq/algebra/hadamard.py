# -*- coding: utf-8 -*-
"""
ラテン方陣 L を演算表とした Hadamard 積と、その反復不変量 rho を計算するモジュールです。

    HadProd(P, Q, L)[i, j] = L[P[i, j], Q[i, j]]

rho(L) は HP = HadProd(L, L, L) から始めて HP <- HadProd(HP, L, L) を繰り返し、
HP が L に戻るまでの回数（2 から数える）です。
"""

from __future__ import annotations

import math
from typing import Any, Iterator, Optional

import numpy as np

from ..config import RHO_MAX_ITERATIONS
from ..errors import InvalidInputError, InvariantNotFoundError
from ..grid.model import validate_latin_square
from ..grid.parser import normalize_grid
from ..logging_utils import get_logger

logger = get_logger("algebra.hadamard")


def _as_symbol_matrix(data: Any, name: str, n: Optional[int] = None) -> np.ndarray:
    """正方で、すべての成分が 1..n の整数行列に変換します。"""
    arr = normalize_grid(data)
    rows, cols = arr.shape
    if rows == 0 or rows != cols:
        raise InvalidInputError(f"{name} が正方ではありません: shape={arr.shape}")
    if n is not None and rows != n:
        raise InvalidInputError(f"{name} の次数が一致しません: {rows} != {n}")

    size = rows
    bad = (arr < 1) | (arr > size)
    if bad.any():
        i, j = np.argwhere(bad)[0]
        raise InvalidInputError(
            f"{name}[{i + 1},{j + 1}] = {arr[i, j]} は 1..{size} の範囲外です"
        )
    return arr


def _product(P: np.ndarray, Q: np.ndarray, L: np.ndarray) -> np.ndarray:
    # 1 始まりの記号を 0 始まりの添字に直して、まとめて引く
    return L[P - 1, Q - 1]


def HadProd(P: Any, Q: Any, L: Any) -> np.ndarray:
    """
    L を演算表とした P と Q の Hadamard 積 H[i, j] = L[P[i, j], Q[i, j]] を返します。

    Raises
    ------
    InvalidInputError
        3つの行列の次数が異なる、または成分が 1..n の範囲外の場合。
    """
    L_arr = _as_symbol_matrix(L, "L")
    n = L_arr.shape[0]
    P_arr = _as_symbol_matrix(P, "P", n)
    Q_arr = _as_symbol_matrix(Q, "Q", n)
    return _product(P_arr, Q_arr, L_arr)


def rho_iteration_bound(n: int) -> int:
    """
    rho の反復上限 max(2, lcm(1..n)) を返します。

    HP_k[i, j] は L[i, j] に「列 L[i, j] による右乗算」を繰り返し施したものなので、
    ラテン方陣であれば各記号の巡回の長さの最小公倍数で必ず元に戻ります。
    """
    return max(2, math.lcm(*range(1, n + 1)))


def hadamard_power_sequence(L: Any) -> Iterator[np.ndarray]:
    """HadProd(L, L, L), HadProd(HP, L, L), ... を順に返す無限ジェネレータ。"""
    L_arr = _as_symbol_matrix(L, "L")
    hp = _product(L_arr, L_arr, L_arr)
    while True:
        yield hp
        hp = _product(hp, L_arr, L_arr)


def rho(L: Any, max_iterations: Optional[int] = RHO_MAX_ITERATIONS) -> int:
    """
    Hadamard 自己積を反復して L に戻るまでの回数を返します。

    Parameters
    ----------
    L : array-like
        n×n のラテン方陣。
    max_iterations : int, optional
        反復回数の上限。None なら :func:`rho_iteration_bound` を使います。

    Raises
    ------
    InvalidInputError, StructuralViolationError
        L がラテン方陣でない場合。
    InvariantNotFoundError
        max_iterations を指定し、その回数以内に L に戻らなかった場合。
    """
    # ラテン方陣に限れば lcm(1..n) 回以内に必ず戻る
    L_arr = validate_latin_square(L)
    n = L_arr.shape[0]
    bound = max_iterations if max_iterations is not None else rho_iteration_bound(n)

    powers = hadamard_power_sequence(L_arr)
    next(powers)  # HadProd(L, L, L) 自体は比較しない

    k = 2
    for hp in powers:
        if np.array_equal(hp, L_arr):
            logger.debug("rho: n=%d -> %d", n, k)
            return k
        if k >= bound:
            break
        k += 1

    raise InvariantNotFoundError(f"rho: {bound} 回の反復で L に戻りませんでした (n={n})")
