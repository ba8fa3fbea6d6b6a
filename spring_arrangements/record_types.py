"""行データを表す型をまとめたモジュール

Python 標準ライブラリの ``types`` モジュールと名前が衝突しないよう、
このファイル名を ``record_types`` としている。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, NamedTuple, Tuple

import numpy as np


class Cell(IntEnum):
    """1 マスの状態。配列には uint8 の値として格納する"""

    OPERATIONAL = 0
    DAMAGED = 1
    UNKNOWN = 2


# 表示用。constants と循環しないようここにも持たせる
_SYMBOLS = ".#?"


@dataclass(frozen=True, eq=False)
class ConditionRecord:
    """1 行分のセル列と区間長リスト

    ``cells`` は読み取り専用の uint8 配列で、作成後に書き換えない。
    展開などの変換は新しいインスタンスを返す。
    """

    cells: np.ndarray
    groups: Tuple[int, ...]

    def __post_init__(self) -> None:
        raw = np.asarray(self.cells)
        if raw.ndim != 1:
            raise ValueError("cells は 1 次元で指定してください")
        if raw.size and (raw.min() < min(Cell) or raw.max() > max(Cell)):
            raise ValueError("cells に Cell 以外の値が含まれています")
        if any(int(g) < 1 for g in self.groups):
            raise ValueError("区間長は 1 以上を指定してください")
        cells = np.array(raw, dtype=np.uint8)
        cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)
        object.__setattr__(self, "groups", tuple(int(g) for g in self.groups))

    def __len__(self) -> int:
        return int(self.cells.shape[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConditionRecord):
            return NotImplemented
        return self.groups == other.groups and np.array_equal(
            self.cells, other.cells
        )

    def __hash__(self) -> int:
        return hash((self.cells.tobytes(), self.groups))

    @property
    def condition(self) -> str:
        """セル列を ``.#?`` の文字列に戻す"""
        return "".join(_SYMBOLS[int(c)] for c in self.cells)

    def to_line(self) -> str:
        """入力と同じ書式の 1 行に変換する"""
        return f"{self.condition} {','.join(str(g) for g in self.groups)}"

    def __str__(self) -> str:
        return self.to_line()


class Slot(NamedTuple):
    """セル配列上の半開区間 [start, stop)

    OPERATIONAL を含まない連続区間を表す。配置後の残り部分も
    同じ配列上の窓として表現するので、部分文字列のコピーは発生しない。
    """

    start: int
    stop: int

    @property
    def length(self) -> int:
        return self.stop - self.start


@dataclass
class RowResult:
    """1 行分の集計結果"""

    line_no: int
    line: str
    count: int


@dataclass
class RowError:
    """解析に失敗した行"""

    line_no: int
    line: str
    kind: str  # 例外クラス名
    message: str


@dataclass
class BatchReport:
    """複数行をまとめて数えた結果"""

    mode: str  # "folded" または "unfolded"
    rows: List[RowResult] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(r.count for r in self.rows)


__all__ = ["Cell", "ConditionRecord", "Slot", "RowResult", "RowError", "BatchReport"]
