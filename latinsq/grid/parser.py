# -*- coding: utf-8 -*-
"""
盤面のセルを内部表現に正規化するモジュールです。

主な役割:
- pandas.DataFrame / numpy 配列 / 2次元リストを整数の numpy 配列に変換
- 各セルの値を「空マス(0)」「記号(1..n)」に正規化
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd

from ..config import EMPTY_CELL
from ..errors import InvalidInputError

# 空マスとして扱う文字列表現
EMPTY_TOKENS = {"", ".", "_", "-"}


def normalize_cell(x: Any) -> int:
    """
    個々のセルの値を、内部表現（整数）に変換します。

    変換ルール
    ----------
    - None / NaN / "" / "." : 空マス (0)
    - 整数, "3" のような数字文字列 : int
    - それ以外 : InvalidInputError
    """
    if x is None:
        return EMPTY_CELL

    if isinstance(x, (bool, np.bool_)):
        raise InvalidInputError(f"真偽値はセルに使えません: {x!r}")

    if isinstance(x, (int, np.integer)):
        return int(x)

    if isinstance(x, (float, np.floating)):
        if math.isnan(x):
            return EMPTY_CELL
        if float(x).is_integer():
            return int(x)
        raise InvalidInputError(f"整数でない値がセルに含まれています: {x!r}")

    s = str(x).strip()
    if s in EMPTY_TOKENS:
        return EMPTY_CELL

    # "²" は isdigit() が真でも int() で読めない
    if s.isdecimal():
        return int(s)

    raise InvalidInputError(f"解釈できないセル値です: {x!r}")


def normalize_grid(data: Any) -> np.ndarray:
    """
    盤面データを 2次元の整数 numpy 配列に変換し、
    各セルを :func:`normalize_cell` によって正規化します。

    Parameters
    ----------
    data : pandas.DataFrame, numpy.ndarray or list of list
        入力の盤面データ。

    Returns
    -------
    numpy.ndarray
        shape = (rows, cols), dtype = int64 の 2次元配列。
        ここでは正方かどうかは検査しません（model.validate の役割）。
    """
    if isinstance(data, pd.DataFrame):
        df = data
    elif isinstance(data, np.ndarray):
        if data.ndim != 2:
            raise InvalidInputError(f"2次元の盤面が必要です (ndim={data.ndim})")
        df = pd.DataFrame(data)
    else:
        if not isinstance(data, (list, tuple)):
            raise InvalidInputError(f"盤面として解釈できない型です: {type(data).__name__}")
        if not all(isinstance(r, (list, tuple, np.ndarray)) for r in data):
            raise InvalidInputError("盤面の各行はリストである必要があります（1次元の入力は不可）")
        rows = [list(r) for r in data]
        widths = {len(r) for r in rows}
        if len(widths) > 1:
            raise InvalidInputError(f"行の長さが揃っていません: {sorted(widths)}")
        df = pd.DataFrame(rows)

    rows, cols = df.shape
    grid = np.zeros((rows, cols), dtype=np.int64)

    for i in range(rows):
        for j in range(cols):
            grid[i, j] = normalize_cell(df.iat[i, j])

    return grid
