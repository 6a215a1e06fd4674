# -*- coding: utf-8 -*-
"""
latinsq.chain パッケージ

transversal チェーンの構成（HL）をまとめたサブパッケージです。
- scheduler.py : ワークリストによるチェーン探索と最終補完
"""
