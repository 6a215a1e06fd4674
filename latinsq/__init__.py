# -*- coding: utf-8 -*-
"""
latinsq パッケージの入口となるモジュールです。

    from latinsq import LS, PLT, HL, HadProd, rho, isom

のように、各操作を直接呼び出せます。

analyze() は盤面（pandas.DataFrame / 2次元リスト）を受け取り、
1. 盤面の正規化と検証
2. transversal チェーンの構成と補完（HL）
3. 得られた各ラテン方陣の不変量 rho の計算
4. 表示用の結果構築
を順番に呼び出します。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .algebra.hadamard import HadProd, rho
from .algebra.isomorphism import apply_isomorphism, is_isomorphism, isom
from .chain.scheduler import HL, transversal_chains
from .config import DEFAULT_WORKERS, MAX_CHAIN_STATES, MAX_SEARCH_NODES
from .csp.completion import LS, count_completions
from .csp.transversal import PLT, diagonal_transversal
from .errors import (
    InvalidInputError,
    InvariantNotFoundError,
    LatinSquareError,
    ResourceExhaustedError,
    StructuralViolationError,
)
from .grid.model import candidates, is_latin_square, is_partial_latin_square, validate
from .logging_utils import get_logger
from .postprocess.render_result import build_result, square_to_frame
from .types import Cell

logger = get_logger()

__all__ = [
    "Cell",
    "HL",
    "HadProd",
    "LS",
    "PLT",
    "InvalidInputError",
    "InvariantNotFoundError",
    "LatinSquareError",
    "ResourceExhaustedError",
    "StructuralViolationError",
    "analyze",
    "apply_isomorphism",
    "build_result",
    "candidates",
    "count_completions",
    "diagonal_transversal",
    "is_isomorphism",
    "is_latin_square",
    "is_partial_latin_square",
    "isom",
    "rho",
    "square_to_frame",
    "transversal_chains",
    "validate",
]


def analyze(
    data: Any,
    max_nodes: Optional[int] = MAX_SEARCH_NODES,
    max_states: Optional[int] = MAX_CHAIN_STATES,
    workers: int = DEFAULT_WORKERS,
) -> Dict[str, Any]:
    """
    部分ラテン方陣から HL の結果と各 rho をまとめて返すメイン関数。
    """
    logger.info("=== analyze() START ===")

    P = validate(data)
    logger.info("Grid order: %d", P.shape[0])

    squares = HL(P, max_nodes=max_nodes, max_states=max_states, workers=workers)
    rhos = [rho(L) for L in squares]

    for idx, r in enumerate(rhos):
        logger.debug("  square #%d rho=%d", idx, r)

    result = build_result(squares, rhos)

    logger.info("=== analyze() END: %d squares ===", result["count"])
    return result
