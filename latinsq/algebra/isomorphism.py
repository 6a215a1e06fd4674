# -*- coding: utf-8 -*-
"""
2つのラテン方陣の間の同型写像を、置換空間のバックトラック探索で列挙するモジュールです。

σ: 1..n -> 1..n が同型写像であるとは、すべての i, j について

    L2[σ(i), σ(j)] = σ(L1[i, j])

が成り立つことです（行・列・記号に同じ置換を同時に施す）。

σ(1), σ(2), ... の順に値を決めていき、
- σ は単射（使用済みの値は使わない）
- 等式 (i, j) は、σ(i), σ(j), σ(L1[i, j]) の3つがすべて決まった段階
  （= max(i, j, L1[i, j]) 番目を決めたとき）で検査する
という2つで枝を刈ります。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..config import MAX_SEARCH_NODES
from ..csp.search import SearchContext
from ..errors import InvalidInputError
from ..grid.model import validate_latin_square
from ..logging_utils import get_logger
from ..types import Isomorphism

logger = get_logger("algebra.isomorphism")


def _checks_by_level(L1: np.ndarray) -> Dict[int, List[Tuple[int, int, int]]]:
    """
    各段 k について、σ(k) を決めた時点で初めて検査できる等式 (i, j, L1[i,j]) を集めます。
    """
    n = L1.shape[0]
    checks: Dict[int, List[Tuple[int, int, int]]] = {k: [] for k in range(1, n + 1)}
    for i in range(1, n + 1):
        for j in range(1, n + 1):
            v = int(L1[i - 1, j - 1])
            checks[max(i, j, v)].append((i, j, v))
    return checks


def _consistent(
    sigma: Dict[int, int],
    checks: List[Tuple[int, int, int]],
    L2: np.ndarray,
) -> bool:
    for i, j, v in checks:
        if int(L2[sigma[i] - 1, sigma[j] - 1]) != sigma[v]:
            return False
    return True


def isom(
    L1: Any,
    L2: Any,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
) -> List[Isomorphism]:
    """
    L1 から L2 への同型写像をすべて返します。

    Returns
    -------
    list of tuple
        (σ(1), ..., σ(n)) のリスト。同型でなければ空リスト。

    Raises
    ------
    InvalidInputError
        次数が異なる、または空マスを含む場合。
    StructuralViolationError
        行・列に重複がある場合。
    ResourceExhaustedError
        探索ノード数の上限に達した場合。
    """
    A = validate_latin_square(L1)
    B = validate_latin_square(L2)
    n = A.shape[0]
    if B.shape[0] != n:
        raise InvalidInputError(f"次数が異なります: {n} != {B.shape[0]}")

    checks = _checks_by_level(A)
    ctx = SearchContext(max_nodes=max_nodes, label="isom")

    # スタックの要素は (次に決める段 k, 部分写像 σ, 使用済みの値)
    stack: List[Tuple[int, Dict[int, int], frozenset]] = [(1, {}, frozenset())]

    while stack:
        k, sigma, used = stack.pop()
        ctx.tick()

        if k > n:
            ctx.solutions.append(tuple(sigma[i] for i in range(1, n + 1)))
            continue

        for image in range(n, 0, -1):
            if image in used:
                continue
            child = dict(sigma)
            child[k] = image
            if not _consistent(child, checks[k], B):
                continue
            stack.append((k + 1, child, used | {image}))

    logger.info("isom: n=%d, nodes_visited=%d, isomorphisms=%d", n, ctx.nodes_visited, len(ctx.solutions))
    return ctx.solutions


def is_isomorphism(L1: Any, L2: Any, sigma: Sequence[int]) -> bool:
    """sigma が L1 から L2 への同型写像であれば True。"""
    A = validate_latin_square(L1)
    B = validate_latin_square(L2)
    n = A.shape[0]
    if B.shape[0] != n or sorted(sigma) != list(range(1, n + 1)):
        return False

    s = np.asarray(sigma, dtype=np.int64)
    # B[σ(i), σ(j)] と σ(A[i, j]) を一度に比較する
    lhs = B[np.ix_(s - 1, s - 1)]
    rhs = s[A - 1]
    return bool(np.array_equal(lhs, rhs))


def apply_isomorphism(L: Any, sigma: Sequence[int]) -> np.ndarray:
    """
    L に σ を施した方陣 M（M[σ(i), σ(j)] = σ(L[i, j])）を返します。

    isom(L, M) は必ず sigma を含みます。
    """
    A = validate_latin_square(L)
    n = A.shape[0]
    if sorted(sigma) != list(range(1, n + 1)):
        raise InvalidInputError(f"1..{n} の置換ではありません: {list(sigma)}")

    s = np.asarray(sigma, dtype=np.int64)
    out = np.zeros_like(A)
    out[np.ix_(s - 1, s - 1)] = s[A - 1]
    out.flags.writeable = False
    return out
