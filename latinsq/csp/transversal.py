# -*- coding: utf-8 -*-
"""
transversal 上のマスだけを埋めるすべての方法を列挙するモジュールです（PLT）。

LS と同じバックトラック探索を、transversal 上の空マスだけに限定して使います。
制約は次の2つです。

(i)  transversal 上のマス同士は、互いに異なる記号を持つ
     （新しく埋める値は、transversal 上で既に確定している記号とも異なる）
(ii) 新しく埋める値は、同じ行・同じ列の確定済みの記号と異なる

transversal の外側のマスには一切触れません。
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

from ..config import MAX_SEARCH_NODES
from ..errors import InvalidInputError
from ..grid.model import apply_assignment, cell_value, is_assigned, validate
from ..logging_utils import get_logger
from ..types import Cell, Transversal
from .domains import build_initial_domains, build_peer_map
from .search import SearchContext, solve_all

logger = get_logger("csp.transversal")


def make_transversal(cells: Iterable[Sequence[int]], n: int) -> Transversal:
    """
    (row, col) の並びを Transversal に変換し、座標の範囲を検査します。

    行・列が置換になっているかは問いません
    （HL が導出する transversal は重複を含むことがあるため）。
    """
    out = tuple(Cell(int(r), int(c)) for r, c in cells)
    if len(out) != n:
        raise InvalidInputError(f"transversal のマス数が {len(out)} です（{n} 個必要）")
    for cell in out:
        if not (1 <= cell.row <= n and 1 <= cell.col <= n):
            raise InvalidInputError(f"transversal のマスが範囲外です: {tuple(cell)} (n={n})")
    return out


def diagonal_transversal(n: int) -> Transversal:
    """主対角線 ((1,1), (2,2), ..., (n,n)) を返します。"""
    return tuple(Cell(i, i) for i in range(1, n + 1))


def is_permutation_support(transversal: Transversal, n: int) -> bool:
    """行・列がそれぞれ 1..n の置換になっていれば True。"""
    full = set(range(1, n + 1))
    return (
        len(transversal) == n
        and {c.row for c in transversal} == full
        and {c.col for c in transversal} == full
    )


def fill_transversal(
    grid: np.ndarray,
    transversal: Transversal,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    label: str = "PLT",
) -> List[np.ndarray]:
    """
    検証済みの grid について、transversal 上の空マスのすべての埋め方を返します。

    transversal がすでにすべて埋まっていれば [grid] を返します。
    """
    # 同じマスが複数回現れても1つの変数として扱う
    cells: List[Cell] = list(dict.fromkeys(transversal))

    targets = [c for c in cells if not is_assigned(grid, c)]
    if not targets:
        return [grid]

    fixed_on_transversal = {cell_value(grid, c) for c in cells if is_assigned(grid, c)}

    domains = build_initial_domains(grid, targets, extra_excluded=fixed_on_transversal)
    peers = build_peer_map(targets, clique=True)

    ctx = SearchContext(max_nodes=max_nodes, label=label)
    solve_all(targets, domains, peers, ctx, lambda a: apply_assignment(grid, a))

    logger.debug(
        "[%s] targets=%d nodes_visited=%d fillings=%d",
        label, len(targets), ctx.nodes_visited, len(ctx.solutions),
    )
    return ctx.solutions


def PLT(
    grid: Any,
    transversal: Iterable[Sequence[int]],
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
) -> List[np.ndarray]:
    """
    部分ラテン方陣 grid の、transversal 上の空マスを埋めるすべての方法を列挙します。

    Parameters
    ----------
    grid : array-like
        n×n の盤面（0 が空マス）。
    transversal : iterable of (row, col)
        n 個のマス（1 始まり）。

    Returns
    -------
    list of numpy.ndarray
        transversal 上だけが埋まった部分ラテン方陣。埋められなければ空リスト。
    """
    P = validate(grid)
    T = make_transversal(transversal, P.shape[0])

    results = fill_transversal(P, T, max_nodes=max_nodes)
    logger.info("PLT: %d fillings", len(results))
    return results
