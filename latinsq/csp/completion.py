# -*- coding: utf-8 -*-
"""
部分ラテン方陣を、ラテン方陣へ補完するすべての方法を列挙するモジュールです（LS）。

- 空マスすべてを作業対象とし、同じ行・列のマス同士を peer とします
- 既に埋まっているマスは固定で、変更しません
- 最初の解で止めず、すべての補完を返します（下流の HL が全解を必要とするため）

workers > 1 を指定すると、最初に分岐するマスの値ごとに部分問題へ分割し、
ProcessPoolExecutor で並列に解きます。各部分問題は自分専用の盤面コピーを持ちます。
"""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, List, Optional

import numpy as np

from ..config import DEFAULT_WORKERS, MAX_SEARCH_NODES
from ..errors import ResourceExhaustedError
from ..grid.model import apply_assignment, empty_cells, freeze, validate
from ..logging_utils import get_logger
from .domains import build_initial_domains, build_peer_map
from .search import SearchContext, choose_next_cell, solve_all

logger = get_logger("csp.completion")


def complete_square(
    grid: np.ndarray,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    label: str = "LS",
    trace: bool = False,
) -> List[np.ndarray]:
    """
    検証済みの部分ラテン方陣 grid のすべての補完を返します。

    入力の検証は行いません（呼び出し側で validate 済みの前提）。
    """
    cells = empty_cells(grid)
    domains = build_initial_domains(grid, cells)
    peers = build_peer_map(cells)

    ctx = SearchContext(max_nodes=max_nodes, label=label, trace=trace)
    solve_all(cells, domains, peers, ctx, lambda a: apply_assignment(grid, a))

    logger.debug("[%s] nodes_visited=%d completions=%d", label, ctx.nodes_visited, len(ctx.solutions))
    return ctx.solutions


def _split_subproblems(grid: np.ndarray) -> List[np.ndarray]:
    """最初に分岐するマス（MRV）の値ごとに、部分問題の盤面を作ります。"""
    cells = empty_cells(grid)
    domains = build_initial_domains(grid, cells)
    peers = build_peer_map(cells)

    cell = choose_next_cell({}, domains, peers)
    if cell is None:
        return [grid]

    return [apply_assignment(grid, {cell: value}) for value in sorted(domains[cell])]


def _complete_worker(grid: np.ndarray, max_nodes: Optional[int]) -> List[np.ndarray]:
    return complete_square(freeze(grid), max_nodes=max_nodes, label="LS-worker")


def _complete_parallel(
    grid: np.ndarray,
    max_nodes: Optional[int],
    workers: int,
) -> List[np.ndarray]:
    subproblems = _split_subproblems(grid)
    if len(subproblems) <= 1:
        return complete_square(grid, max_nodes=max_nodes)

    worker_count = min(workers, len(subproblems), os.cpu_count() or 1)
    try:
        executor = ProcessPoolExecutor(max_workers=worker_count)
    except (PermissionError, OSError) as e:
        logger.warning("ProcessPoolExecutor を作成できないため逐次実行します: %s", e)
        return complete_square(grid, max_nodes=max_nodes)

    logger.info("LS: %d 個の部分問題を %d ワーカーで並列に解きます", len(subproblems), worker_count)

    results: List[np.ndarray] = []
    exhausted: Optional[ResourceExhaustedError] = None
    nodes_visited = 0

    with executor:
        futures = {
            executor.submit(_complete_worker, sub, max_nodes): index
            for index, sub in enumerate(subproblems)
        }
        for future in as_completed(futures):
            try:
                results.extend(freeze(g) for g in future.result())
            except ResourceExhaustedError as e:
                exhausted = e
                results.extend(freeze(g) for g in e.partial)
                nodes_visited += e.nodes_visited

    if exhausted is not None:
        raise ResourceExhaustedError(
            f"LS: 部分問題の探索が上限 {max_nodes} に達しました",
            partial=results,
            nodes_visited=nodes_visited,
        ) from exhausted

    return results


def LS(
    grid: Any,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    workers: int = DEFAULT_WORKERS,
) -> List[np.ndarray]:
    """
    部分ラテン方陣のすべての補完を列挙します。

    Parameters
    ----------
    grid : array-like
        n×n の盤面（0 が空マス）。
    max_nodes : int or None
        探索ノード数の上限（並列時は部分問題ごと）。None で無制限。
    workers : int
        1 より大きければプロセス並列で探索します。

    Returns
    -------
    list of numpy.ndarray
        補完されたラテン方陣（読み取り専用）。補完できなければ空リスト。

    Raises
    ------
    InvalidInputError, StructuralViolationError
        探索を始める前の入力検証に失敗した場合。
    ResourceExhaustedError
        探索ノード数の上限に達した場合（partial に途中までの解）。
    """
    P = validate(grid)
    logger.info("LS START: n=%d, empty=%d", P.shape[0], len(empty_cells(P)))

    results = complete_all(P, max_nodes=max_nodes, workers=workers)

    logger.info("LS END: %d completions", len(results))
    return results


def complete_all(
    grid: np.ndarray,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    workers: int = DEFAULT_WORKERS,
) -> List[np.ndarray]:
    """検証済みの grid について、workers に応じて逐次または並列で補完します。"""
    if workers > 1:
        return _complete_parallel(grid, max_nodes, workers)
    return complete_square(grid, max_nodes=max_nodes)


def count_completions(grid: Any, max_nodes: Optional[int] = MAX_SEARCH_NODES) -> int:
    """LS の結果の個数を返します。"""
    return len(LS(grid, max_nodes=max_nodes))
