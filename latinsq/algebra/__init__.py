# -*- coding: utf-8 -*-
"""
latinsq.algebra パッケージ

ラテン方陣を演算表として扱う処理をまとめたサブパッケージです。
- hadamard.py    : Hadamard L-積と不変量 rho
- isomorphism.py : 同型写像の探索
"""
