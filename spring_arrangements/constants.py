"""共通定数をまとめたモジュール"""

from __future__ import annotations

from .record_types import Cell

# 入力文字とセル状態の対応表
SYMBOL_TO_CELL = {
    ".": Cell.OPERATIONAL,
    "#": Cell.DAMAGED,
    "?": Cell.UNKNOWN,
}

CELL_TO_SYMBOL = {cell: symbol for symbol, cell in SYMBOL_TO_CELL.items()}

# 展開版の問題では行と区間長リストを 5 回繰り返す
UNFOLD_FACTOR = 5

# 繰り返しの間に挿入するセル
UNFOLD_JOINER = Cell.UNKNOWN

# レポートを書き出すときのファイル名
REPORT_FILENAME = "arrangements_report.json"


__all__ = [
    "SYMBOL_TO_CELL",
    "CELL_TO_SYMBOL",
    "UNFOLD_FACTOR",
    "UNFOLD_JOINER",
    "REPORT_FILENAME",
]
