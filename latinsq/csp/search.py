# -*- coding: utf-8 -*-
"""
有限ドメインのバックトラック探索を行うモジュールです。

LS（補完）・PLT（transversal の充填）の両方が、ここにある
:func:`solve_all` を共通の制約ソルバーとして使います。

ざっくり流れ
------------
1. 初期状態（確定済みマスだけが割り当て済み）をスタックに積む
2. ループのたびに、スタックの先頭の状態を取り出す（1ノードとして数える）
3. MRV で次に割り当てるマスを選び、ドメインの小さい値から順に子状態を作る
4. 各値について制約伝播（propagate）し、ドメインが空にならなければスタックへ
5. すべてのマスが割り当て済みになったら解として記録する
6. スタックが空になるまで続ける（最初の解で止めず、すべての解を列挙）

探索ノード数が max_nodes を超えた場合は、途中までの解を添えて
ResourceExhaustedError を送出します。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from ..config import LOG_PROGRESS_INTERVAL
from ..errors import ResourceExhaustedError
from ..logging_utils import get_logger, get_search_debug_logger
from ..types import Cell, FillState
from .propagation import has_empty_domain, propagate

logger = get_logger("csp.search")


@dataclass
class SearchContext:
    """
    探索全体で共有する情報をまとめたクラスです。
    """

    max_nodes: Optional[int]
    label: str = "search"
    trace: bool = False

    nodes_visited: int = 0
    solutions: List[Any] = field(default_factory=list)

    def tick(self) -> None:
        """1ノード展開したことを記録し、上限を超えていれば打ち切ります。"""
        self.nodes_visited += 1

        if self.max_nodes is not None and self.nodes_visited > self.max_nodes:
            raise ResourceExhaustedError(
                f"[{self.label}] 探索ノード数の上限 {self.max_nodes} に達しました",
                partial=self.solutions,
                nodes_visited=self.nodes_visited,
            )

        if self.nodes_visited % LOG_PROGRESS_INTERVAL == 0:
            logger.info(
                "[%s] nodes_visited = %d, solutions = %d",
                self.label,
                self.nodes_visited,
                len(self.solutions),
            )


def choose_next_cell(
    assignment: Dict[Cell, int],
    domains: Dict[Cell, Set[int]],
    peers: Dict[Cell, List[Cell]],
) -> Optional[Cell]:
    """
    次に割り当てるべきマスを選びます。

    MRV（Minimum Remaining Values）＋ degree ヒューリスティック：
    - まだ割り当てられていないマスのうち、ドメインサイズが最も小さいもの
    - 同じなら、より多くの peer を持つマスを優先
    - それも同じなら座標順（結果を決定的にするため）
    """
    candidates = [c for c in domains.keys() if c not in assignment]
    if not candidates:
        return None

    return min(
        candidates,
        key=lambda c: (len(domains[c]), -len(peers.get(c, ())), c),
    )


def solve_all(
    cells: List[Cell],
    domains: Dict[Cell, Set[int]],
    peers: Dict[Cell, List[Cell]],
    ctx: SearchContext,
    on_solution: Callable[[Dict[Cell, int]], Any],
) -> List[Any]:
    """
    cells へのすべての整合的な割り当てを列挙します。

    Parameters
    ----------
    cells : list of Cell
        割り当て対象のマス。
    domains : dict[Cell, set[int]]
        初期ドメイン。
    peers : dict[Cell, list[Cell]]
        値が異なっていなければならないマスの対応。
    ctx : SearchContext
        ノード数の上限・カウンタ・解の蓄積先。
    on_solution : callable
        完全な割り当て（dict[Cell, int]）を受け取り、記録する値を返す関数。

    Returns
    -------
    list
        on_solution の戻り値のリスト（ctx.solutions と同じもの）。
    """
    debug_logger = get_search_debug_logger() if ctx.trace else None

    if not cells:
        ctx.tick()
        ctx.solutions.append(on_solution({}))
        return ctx.solutions

    initial_state = FillState(assignment={}, domains=dict(domains))
    if has_empty_domain(initial_state.domains, initial_state.assignment):
        logger.debug("[%s] 初期ドメインに空集合があるため解なし", ctx.label)
        return ctx.solutions

    stack: List[FillState] = [initial_state]

    while stack:
        state = stack.pop()
        ctx.tick()

        cell = choose_next_cell(state.assignment, state.domains, peers)
        if cell is None:
            ctx.solutions.append(on_solution(dict(state.assignment)))
            continue

        # 小さい値から試すため、逆順にスタックへ積む
        for value in sorted(state.domains[cell], reverse=True):
            new_assignment = dict(state.assignment)
            new_assignment[cell] = value

            new_domains = propagate(state.domains, new_assignment, cell, value, peers)
            if new_domains is None:
                if debug_logger is not None:
                    debug_logger.debug(
                        "[%s] prune depth=%d cell=%s value=%d",
                        ctx.label, len(state.assignment), cell, value,
                    )
                continue

            stack.append(FillState(assignment=new_assignment, domains=new_domains))

    return ctx.solutions
