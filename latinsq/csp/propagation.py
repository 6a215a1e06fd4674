# -*- coding: utf-8 -*-
"""
制約伝播（propagation）を行うモジュールです。

ラテン方陣の制約はすべて「2つのマスの値が異なる」（AllDifferent）の
組み合わせなので、ここでは前方検査（forward checking）を行います。

- あるマスに値を確定したら、その peer（同じ行・列、または同じ transversal）の
  未割り当てマスのドメインから、その値を取り除く
- どこかのドメインが空になったら、その枝は探索不能として即座に捨てる

ドメインは必ずコピーしてから変更し、兄弟の枝とは共有しません。
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set

from ..types import Cell


def propagate(
    domains: Dict[Cell, Set[int]],
    assignment: Dict[Cell, int],
    cell: Cell,
    value: int,
    peers: Dict[Cell, List[Cell]],
) -> Optional[Dict[Cell, Set[int]]]:
    """
    cell = value を反映したドメインを返します。

    Parameters
    ----------
    domains : dict[Cell, set[int]]
        直前の状態のドメイン（変更しません）。
    assignment : dict[Cell, int]
        cell を含む、現在の割り当て。
    peers : dict[Cell, list[Cell]]
        :func:`latinsq.csp.domains.build_peer_map` の結果。

    Returns
    -------
    dict or None
        新しいドメイン。peer のドメインが空になった場合は None。
    """
    new_domains: Dict[Cell, Set[int]] = dict(domains)
    new_domains[cell] = {value}

    for other in peers.get(cell, ()):
        if other in assignment:
            continue
        dom = new_domains[other]
        if value in dom:
            reduced = dom - {value}
            if not reduced:
                return None
            new_domains[other] = reduced

    return new_domains


def has_empty_domain(
    domains: Dict[Cell, Set[int]],
    assignment: Dict[Cell, int],
) -> bool:
    """未割り当てのマスに、空のドメインが1つでもあれば True。"""
    return any(
        (cell not in assignment) and (len(dom) == 0)
        for cell, dom in domains.items()
    )
