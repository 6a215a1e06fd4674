# -*- coding: utf-8 -*-
"""
ログ出力の設定を行うモジュールです。

- パッケージ共通の logger（標準出力へ INFO 以上）
- 探索ノード単位のトレースを書き出すファイル logger
の2種類を用意しています。
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import LOG_LEVEL, SEARCH_DEBUG_LOG_DIR, SEARCH_DEBUG_LOG_FILE

# latinsq パッケージ共通で使うロガー名
LOGGER_NAME = "latinsq"


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """
    latinsq 全体で共通して使う logger を返します。

    すでに handler（出力先）が設定されていない場合は、
    標準出力（コンソール）に LOG_LEVEL 以上のログを表示するように設定します。

    component を渡すと、その子 logger（"latinsq.<component>"）を返します。
    子 logger は handler を持たず、パッケージ logger の出力先とレベルを使うので、
    ログの [%(name)s] 欄でどの部品（csp.search, chain など）の出力かが分かります。
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(LOG_LEVEL)

    if component:
        return logger.getChild(component)
    return logger


def get_search_debug_logger() -> logging.Logger:
    """
    探索ノードごとの詳細を記録するファイル logger を返します。

    初回呼び出し時に logs/search_debug.log を作成します。
    """
    logger = logging.getLogger(f"{LOGGER_NAME}.search_debug")

    if logger.handlers:
        return logger  # すでに初期化済み

    logger.setLevel(logging.DEBUG)

    os.makedirs(SEARCH_DEBUG_LOG_DIR, exist_ok=True)
    log_file = os.path.join(SEARCH_DEBUG_LOG_DIR, SEARCH_DEBUG_LOG_FILE)

    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    fh.setFormatter(formatter)

    logger.addHandler(fh)

    # 他ロガーへの伝播禁止（stdout に出さない）
    logger.propagate = False

    return logger
