# -*- coding: utf-8 -*-
"""
latinsq.grid パッケージ

盤面（グリッド）に関する処理をまとめたサブパッケージです。
- parser.py : DataFrame などから内部表現への変換
- model.py  : (部分)ラテン方陣の検証と候補記号の問い合わせ
"""
