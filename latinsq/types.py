# -*- coding: utf-8 -*-
"""
latinsq で使う主なデータ構造（型）をまとめたモジュールです。

座標・記号はすべて 1 始まりで表します（numpy 配列へのアクセス時のみ 0 始まり）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, NamedTuple, Set, Tuple

import numpy as np


class Cell(NamedTuple):
    """盤面上のマス (row, col)。どちらも 1..n。"""

    row: int
    col: int


# n 個のマスの並び。行・列それぞれが 1..n の置換になっているのが本来の形だが、
# チェーン探索で導出されるものは重複を含むことがある。
Transversal = Tuple[Cell, ...]

# 同型写像 σ を (σ(1), ..., σ(n)) で表す
Isomorphism = Tuple[int, ...]


@dataclass
class FillState:
    """
    バックトラック探索中の1ノードを表すクラスです。

    Attributes
    ----------
    assignment : dict[Cell, int]
        作業対象のマス → 割り当てた記号。
    domains : dict[Cell, set[int]]
        各マスが取り得る記号の集合（割り当て済みのマスは {値}）。
    """

    assignment: Dict[Cell, int]
    domains: Dict[Cell, Set[int]]


@dataclass(frozen=True, eq=False)
class SearchState:
    """
    HL のワークリストに積む状態です。

    Attributes
    ----------
    grid : numpy.ndarray
        その時点の部分ラテン方陣（読み取り専用）。
    transversal : Transversal
        この grid を作るときに埋めた transversal。
    depth : int
        チェーンの何段目か（T0 を埋めた状態が 0）。
    history : tuple of Transversal
        T0 からこの状態までに使った transversal の列（由来の記録）。
    """

    grid: np.ndarray
    transversal: Transversal
    depth: int = 0
    history: Tuple[Transversal, ...] = field(default_factory=tuple)
