# -*- coding: utf-8 -*-
"""
探索結果をもとに表示用の情報を構築するモジュールです。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd


def square_to_frame(grid: np.ndarray) -> pd.DataFrame:
    """
    盤面を、行・列ラベルが 1..n の DataFrame に変換します。
    """
    n = grid.shape[0]
    labels = list(range(1, n + 1))
    return pd.DataFrame(np.asarray(grid), index=labels, columns=labels)


def build_result(
    squares: Sequence[np.ndarray],
    rhos: Optional[Sequence[int]] = None,
) -> Dict[str, Any]:
    """
    ラテン方陣のリスト（と rho の値）から、JSON にそのまま出せる辞書を作ります。
    """
    items: List[Dict[str, Any]] = []
    for idx, sq in enumerate(squares):
        item: Dict[str, Any] = {"square": np.asarray(sq).tolist()}  # ★ ndarray を返さない
        if rhos is not None:
            item["rho"] = int(rhos[idx])
        items.append(item)

    order = int(squares[0].shape[0]) if len(squares) else 0

    return {
        "order": order,
        "count": len(items),
        "squares": items,
    }
