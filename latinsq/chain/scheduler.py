# -*- coding: utf-8 -*-
"""
transversal のチェーンを順に埋めていくスケジューラです（HL）。

対角成分 d_i = P[i,i] から出発し、

    T0[i] = (P[d_i, d_i], d_i)
    T'[i] = (Q[T[i].row, d_i], T[i].col)

という規則で次の transversal を導出しては PLT で埋めていきます。
導出した transversal がすでにすべて埋まっている状態を「チェーン完了」とし、
最後にそれらを LS で補完したものの和集合を返します。

ざっくり流れ
------------
1. 対角成分がすべて埋まっていることを確認し、T0 を作る
2. PLT(P, T0) の結果をすべてワークリストに積む
3. ワークリストから状態 (Q, T) を取り出し、T' を導出する
   - T' がすべて埋まっていれば Q をチェーン完了リストへ
   - そうでなければ PLT(Q, T') の結果を (結果, T') としてワークリストへ
4. ワークリストが空になったら、チェーン完了の各盤面を LS で補完して和集合をとる

同じ (盤面, transversal) の状態は二度処理しません（循環の防止）。
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Generic, Hashable, List, Optional, Set, Tuple, TypeVar

import numpy as np

from ..config import DEFAULT_WORKERS, EMPTY_CELL, MAX_CHAIN_STATES, MAX_SEARCH_NODES
from ..csp.completion import complete_all
from ..csp.transversal import fill_transversal
from ..errors import InvalidInputError, ResourceExhaustedError
from ..grid.model import cell_value, grid_key, is_assigned, validate
from ..logging_utils import get_logger
from ..types import Cell, SearchState, Transversal

logger = get_logger("chain")

T = TypeVar("T")


def _state_key(state: SearchState) -> Hashable:
    return (grid_key(state.grid), state.transversal)


class ChainWorklist:
    """
    SearchState のスタック。push / pop は Lock で保護しています。

    深さ優先で取り出すので、同時に保持する状態数が小さく済みます。
    一度 push した (盤面, transversal) の状態は二度と積みません（循環の防止）。

    Attributes
    ----------
    skipped : int
        既出のため積まなかった状態の数。
    """

    def __init__(self) -> None:
        self._items: Deque[SearchState] = deque()
        self._seen: Set[Hashable] = set()
        self._lock = threading.Lock()
        self.skipped = 0

    def push(self, state: SearchState) -> bool:
        """state を積みます。既出の状態なら積まずに False を返します。"""
        key = _state_key(state)
        with self._lock:
            if key in self._seen:
                self.skipped += 1
                return False
            self._seen.add(key)
            self._items.append(state)
            return True

    def pop(self) -> Optional[SearchState]:
        """次の状態を取り出します。空なら None。"""
        with self._lock:
            if not self._items:
                return None
            return self._items.pop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class LockedList(Generic[T]):
    """append だけを行う、Lock 付きの結果蓄積リスト。"""

    def __init__(self) -> None:
        self._items: List[T] = []
        self._lock = threading.Lock()

    def append(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def snapshot(self) -> List[T]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def base_transversal(grid: np.ndarray) -> Tuple[Tuple[int, ...], Transversal]:
    """
    対角成分と、最初の transversal T0 を返します。

    Raises
    ------
    InvalidInputError
        対角成分に空マスがある場合（T0 が定義できない）。
    """
    n = grid.shape[0]
    diag = tuple(int(grid[i, i]) for i in range(n))
    missing = [i + 1 for i, d in enumerate(diag) if d == EMPTY_CELL]
    if missing:
        raise InvalidInputError(
            f"undefined base transversal: 対角成分が空です (rows={missing})"
        )

    t0 = tuple(Cell(cell_value(grid, Cell(d, d)), d) for d in diag)
    return diag, t0


def next_transversal(
    grid: np.ndarray,
    transversal: Transversal,
    diag: Tuple[int, ...],
) -> Optional[Transversal]:
    """
    T'[i] = (Q[T[i].row, d_i], T[i].col) を計算します。

    行座標が空マスを指してしまう場合は None（この枝は続けられない）。
    """
    out: List[Cell] = []
    for cell, d in zip(transversal, diag):
        row = cell_value(grid, Cell(cell.row, d))
        if row == EMPTY_CELL:
            return None
        out.append(Cell(row, cell.col))
    return tuple(out)


def _fill_chain_step(
    grid: np.ndarray,
    transversal: Transversal,
    max_nodes: Optional[int],
    chain_complete: LockedList[SearchState],
) -> List[np.ndarray]:
    """チェーン内の PLT。打ち切り時はそこまでのチェーン完了状態を partial にします。"""
    try:
        return fill_transversal(grid, transversal, max_nodes=max_nodes, label="HL/PLT")
    except ResourceExhaustedError as e:
        raise ResourceExhaustedError(
            f"[HL] transversal の充填が上限に達しました: {e}",
            partial=chain_complete.snapshot(),
            nodes_visited=e.nodes_visited,
        ) from e


def chain_from_validated(
    P: np.ndarray,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    max_states: Optional[int] = MAX_CHAIN_STATES,
) -> List[SearchState]:
    """
    検証済みの P について、チェーン完了となった状態をすべて返します。

    上限に達した場合の ResourceExhaustedError.partial は、
    それまでに得られたチェーン完了の SearchState です。
    """
    diag, t0 = base_transversal(P)

    worklist = ChainWorklist()
    chain_complete: LockedList[SearchState] = LockedList()

    for Q in _fill_chain_step(P, t0, max_nodes, chain_complete):
        worklist.push(SearchState(grid=Q, transversal=t0, depth=0, history=(t0,)))

    processed = 0

    while True:
        state = worklist.pop()
        if state is None:
            break

        processed += 1
        if max_states is not None and processed > max_states:
            raise ResourceExhaustedError(
                f"[HL] 状態数の上限 {max_states} に達しました",
                partial=chain_complete.snapshot(),
                nodes_visited=processed,
            )

        t_next = next_transversal(state.grid, state.transversal, diag)
        if t_next is None:
            logger.debug("[HL] 次の transversal を導出できないため枝を捨てます depth=%d", state.depth)
            continue

        if all(is_assigned(state.grid, c) for c in t_next):
            chain_complete.append(state)
            continue

        for R in _fill_chain_step(state.grid, t_next, max_nodes, chain_complete):
            pushed = worklist.push(
                SearchState(
                    grid=R,
                    transversal=t_next,
                    depth=state.depth + 1,
                    history=state.history + (t_next,),
                )
            )
            if not pushed:
                logger.debug("[HL] 既出の状態をスキップ depth=%d", state.depth + 1)

    logger.info(
        "[HL] processed=%d, skipped=%d, chain_complete=%d",
        processed, worklist.skipped, len(chain_complete),
    )
    return chain_complete.snapshot()


def transversal_chains(
    grid: Any,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    max_states: Optional[int] = MAX_CHAIN_STATES,
) -> List[SearchState]:
    """
    チェーン完了となった SearchState（由来の transversal 列つき）を返します。

    HL の途中経過を調べたいときに使います。
    """
    return chain_from_validated(validate(grid), max_nodes=max_nodes, max_states=max_states)


def HL(
    grid: Any,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    max_states: Optional[int] = MAX_CHAIN_STATES,
    workers: int = DEFAULT_WORKERS,
) -> List[np.ndarray]:
    """
    transversal チェーンを埋めた盤面を補完し、得られるラテン方陣をすべて返します。

    Parameters
    ----------
    grid : array-like
        対角成分がすべて埋まった n×n の部分ラテン方陣。
    max_nodes : int or None
        PLT / LS 1回あたりの探索ノード数の上限。
    max_states : int or None
        ワークリストから取り出す状態数の上限。
    workers : int
        最後の LS をプロセス並列で行うワーカー数。

    Returns
    -------
    list of numpy.ndarray
        重複を除いたラテン方陣のリスト。

    Raises
    ------
    ResourceExhaustedError
        いずれかの上限に達した場合。partial はそれまでに得られたラテン方陣で、
        チェーン段階で打ち切られたときは空です（チェーン完了の状態は __cause__ 側の partial）。
    """
    P = validate(grid)
    logger.info("=== HL START: n=%d ===", P.shape[0])

    try:
        states = chain_from_validated(P, max_nodes=max_nodes, max_states=max_states)
    except ResourceExhaustedError as e:
        raise ResourceExhaustedError(
            f"[HL] チェーンの構成が上限に達しました: {e}",
            partial=[],
            nodes_visited=e.nodes_visited,
        ) from e

    # 異なる transversal から同じ盤面に到達することがあるので、盤面で重複を除く
    unique_grids = {}
    for state in states:
        unique_grids.setdefault(grid_key(state.grid), state.grid)

    results: LockedList[np.ndarray] = LockedList()
    result_keys: Set[Hashable] = set()

    for Q in unique_grids.values():
        try:
            completions = complete_all(Q, max_nodes=max_nodes, workers=workers)
        except ResourceExhaustedError as e:
            partial = results.snapshot()
            partial.extend(L for L in e.partial if grid_key(L) not in result_keys)
            raise ResourceExhaustedError(
                f"[HL] 補完の探索が上限に達しました: {e}",
                partial=partial,
                nodes_visited=e.nodes_visited,
            ) from e

        for L in completions:
            k = grid_key(L)
            if k not in result_keys:
                result_keys.add(k)
                results.append(L)

    logger.info(
        "=== HL END: chain_complete=%d, latin_squares=%d ===",
        len(unique_grids), len(results),
    )
    return results.snapshot()
