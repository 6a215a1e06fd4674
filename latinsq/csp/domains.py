# -*- coding: utf-8 -*-
"""
作業対象マスごとの初期ドメイン（候補記号集合）を計算するモジュールです。

- 各マスについて、同じ行・列にすでにある記号を除いた 1..n をドメインとします
- transversal を埋める場合は、transversal 上ですでに確定している記号も除外します

また、どのマス同士が「異なる値でなければならない」か（peer 関係）も
ここでまとめて作ります。
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

import numpy as np

from ..grid.model import candidates
from ..types import Cell


def build_initial_domains(
    grid: np.ndarray,
    cells: Iterable[Cell],
    extra_excluded: Optional[Set[int]] = None,
) -> Dict[Cell, Set[int]]:
    """
    初期ドメインを構築します。

    Parameters
    ----------
    grid : numpy.ndarray
        検証済みの部分ラテン方陣。
    cells : iterable of Cell
        値を割り当てる（空の）マス。
    extra_excluded : set of int, optional
        すべてのマスから追加で除外する記号（transversal 上の確定値など）。

    Returns
    -------
    domains : dict[Cell, set[int]]
        各マス -> 候補記号集合。空集合のマスがあれば、その問題は解なし。
    """
    excluded = extra_excluded or set()
    domains: Dict[Cell, Set[int]] = {}
    for cell in cells:
        domains[cell] = candidates(grid, cell) - excluded
    return domains


def build_peer_map(cells: List[Cell], clique: bool = False) -> Dict[Cell, List[Cell]]:
    """
    各マスについて、値が異なっていなければならない作業対象マスを列挙します。

    - 同じ行、または同じ列にあるマス
    - clique=True のときは、作業対象のすべてのマス（transversal 内の相異条件）
    """
    peers: Dict[Cell, List[Cell]] = {c: [] for c in cells}
    for a in cells:
        for b in cells:
            if a == b:
                continue
            if clique or a.row == b.row or a.col == b.col:
                peers[a].append(b)
    return peers
