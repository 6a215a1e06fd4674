# -*- coding: utf-8 -*-
"""
latinsq 全体で共通して使う設定値をまとめたモジュールです。

実運用時には、ここを編集することで
- 探索の深さ（ノード数上限）
- transversal チェーンの状態数上限
- 並列ワーカー数
- ログ出力
などを簡単に変更できます。

各公開関数はキーワード引数でこれらの値を上書きできます。
"""

from __future__ import annotations

from typing import Optional

# ==== 盤面表現 =============================================================

# 空マスを表す値。記号は 1..n の整数で表します。
EMPTY_CELL: int = 0

# ==== 探索関連 =============================================================

# バックトラック探索（LS / PLT / isom）で何ノードまで展開するかの上限。
# None にすると無制限（網羅探索が終わるまで続ける）。
# 上限に達した場合は ResourceExhaustedError が送出され、
# それまでに見つかった解が partial として添付されます。
MAX_SEARCH_NODES: Optional[int] = 2_000_000

# HL のワークリストから取り出す状態数の上限。
MAX_CHAIN_STATES: Optional[int] = 100_000

# LS を並列実行するときのデフォルトワーカー数（1 なら逐次実行）。
DEFAULT_WORKERS: int = 1

# ==== 不変量 rho 関連 ======================================================

# rho の反復上限。None の場合は max(2, lcm(1..n)) を使います。
# （ラテン方陣であれば必ずこの範囲で元に戻る）
RHO_MAX_ITERATIONS: Optional[int] = None

# ==== ログ関連 =============================================================

# パッケージ logger のレベル
LOG_LEVEL: str = "INFO"

# 何ノードごとに探索の進捗をログに出すか
LOG_PROGRESS_INTERVAL: int = 10000

# ノード単位のデバッグログ（ファイル出力）の保存先
SEARCH_DEBUG_LOG_DIR: str = "logs"
SEARCH_DEBUG_LOG_FILE: str = "search_debug.log"
