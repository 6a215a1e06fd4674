# -*- coding: utf-8 -*-
"""
latinsq で送出する例外クラスをまとめたモジュールです。

入力検証の失敗は ValueError の、探索・反復の打ち切りは RuntimeError の
サブクラスになっているので、組み込み例外で捕まえることもできます。

解が存在しない（補完できない・同型写像がない）ことは例外ではなく、
空リストで表現します。
"""

from __future__ import annotations

from typing import Any, List, Optional


class LatinSquareError(Exception):
    """latinsq が送出する例外の基底クラス。"""


class InvalidInputError(LatinSquareError, ValueError):
    """正方でない盤面、1..n の範囲外の記号、必須の対角成分の欠落など。"""


class StructuralViolationError(LatinSquareError, ValueError):
    """入力の部分ラテン方陣の行または列に、同じ記号が重複している。"""

    def __init__(self, message: str, kind: str = "", index: int = -1, symbol: int = 0):
        super().__init__(message)
        self.kind = kind
        self.index = index
        self.symbol = symbol


class InvariantNotFoundError(LatinSquareError, RuntimeError):
    """rho の反復が安全上限を超えても元の方陣に戻らなかった。"""


class ResourceExhaustedError(LatinSquareError, RuntimeError):
    """
    探索ノード数（または状態数）の上限に達した。

    Attributes
    ----------
    partial : list
        打ち切りまでに見つかった解。
    nodes_visited : int
        打ち切りまでに展開したノード数。
    """

    def __init__(
        self,
        message: str,
        partial: Optional[List[Any]] = None,
        nodes_visited: int = 0,
    ):
        super().__init__(message)
        self.partial = list(partial) if partial else []
        self.nodes_visited = nodes_visited

    def __reduce__(self):
        # プロセス間で受け渡しても partial と nodes_visited を失わないようにする
        return (self.__class__, (str(self), self.partial, self.nodes_visited))
