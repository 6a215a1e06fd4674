# -*- coding: utf-8 -*-
"""
latinsq.postprocess パッケージ

結果の表示用変換をまとめたサブパッケージです。
"""
