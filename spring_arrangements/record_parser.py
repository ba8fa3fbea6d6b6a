"""入力行を ConditionRecord へ変換するモジュール"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .constants import SYMBOL_TO_CELL
from .record_types import ConditionRecord

logger = logging.getLogger(__name__)


class RecordParseError(ValueError):
    """行の解析に失敗したことを表す例外の基底クラス

    :param reason: エラー内容
    :param line: 問題のあった行
    :param line_no: 1 始まりの行番号。単独の行を解析したときは ``None``
    """

    def __init__(self, reason: str, line: str, line_no: Optional[int] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line
        self.line_no = line_no

    def __str__(self) -> str:
        # 行番号はバッチ解析時に後から設定されるので表示時に組み立てる
        where = f"{self.line_no} 行目" if self.line_no is not None else "入力行"
        return f"{where} {self.line!r}: {self.reason}"


class MalformedLine(RecordParseError):
    """状態列と区間長リストを区切る空白がない"""


class InvalidCharacter(RecordParseError):
    """状態列に ``.#?`` 以外の文字が含まれている"""


class InvalidRunLength(RecordParseError):
    """区間長が空、数値でない、または 0 以下"""


def _parse_groups(text: str, line: str) -> Tuple[int, ...]:
    """カンマ区切りの区間長を解析する"""

    # 区切りの後ろが空なら区間なしの行として扱う
    if text == "":
        return ()
    groups: List[int] = []
    for token in text.split(","):
        if not (token.isascii() and token.isdigit()):
            raise InvalidRunLength(f"区間長 {token!r} が正の整数ではありません", line)
        value = int(token)
        if value <= 0:
            raise InvalidRunLength(f"区間長 {token!r} は 1 以上を指定してください", line)
        groups.append(value)
    return tuple(groups)


def parse_line(line: str) -> ConditionRecord:
    """``<状態列> <区間長,...>`` の 1 行を解析する"""

    line = line.rstrip("\r\n")
    condition, sep, group_text = line.partition(" ")
    if not sep:
        raise MalformedLine("状態列と区間長を区切る空白がありません", line)

    bad = sorted(set(condition) - SYMBOL_TO_CELL.keys())
    if bad:
        raise InvalidCharacter(f"使用できない文字 {''.join(bad)!r} があります", line)

    groups = _parse_groups(group_text, line)
    cells = np.array([SYMBOL_TO_CELL[ch] for ch in condition], dtype=np.uint8)
    return ConditionRecord(cells=cells, groups=groups)


def parse_lines(
    lines: Iterable[str],
) -> Tuple[List[Tuple[int, ConditionRecord]], List[RecordParseError]]:
    """複数行をまとめて解析する

    空行は読み飛ばす。解析に失敗した行は警告を出して記録し、
    残りの行の処理は続ける。

    :return: ((行番号, レコード) の一覧, 発生したエラーの一覧)
    """

    records: List[Tuple[int, ConditionRecord]] = []
    errors: List[RecordParseError] = []
    for line_no, raw in enumerate(lines, start=1):
        if not raw.strip():
            continue
        try:
            record = parse_line(raw)
        except RecordParseError as exc:
            exc.line_no = line_no
            logger.warning("解析失敗: %s", exc)
            errors.append(exc)
            continue
        records.append((line_no, record))
    return records, errors


__all__ = [
    "RecordParseError",
    "MalformedLine",
    "InvalidCharacter",
    "InvalidRunLength",
    "parse_line",
    "parse_lines",
]
