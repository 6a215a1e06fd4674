# -*- coding: utf-8 -*-
"""
latinsq.csp パッケージ

有限ドメインの制約充足（AllDifferent の組み合わせ）に関する処理をまとめています。

主に以下の役割を持つモジュールから構成されています。
- domains.py     : マスごとの初期ドメインと peer 関係の計算
- propagation.py : 制約伝播（前方検査によるドメインの絞り込み）
- search.py      : スタックを使った網羅的バックトラック探索
- completion.py  : 部分ラテン方陣の全補完（LS）
- transversal.py : transversal 上のマスだけを埋める（PLT）
"""
