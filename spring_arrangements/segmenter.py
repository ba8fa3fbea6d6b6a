"""セル列を OPERATIONAL で区切ってスロットへ分割するモジュール"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from numba import njit

from .record_types import Cell, ConditionRecord, Slot

# njit 関数内では IntEnum ではなく整数定数として参照する
_OPERATIONAL = int(Cell.OPERATIONAL)
_DAMAGED = int(Cell.DAMAGED)


@njit(cache=True)
def _slot_bounds(cells: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """OPERATIONAL を含まない極大区間の開始・終了位置を求める"""

    n = cells.shape[0]
    starts = np.empty(n, dtype=np.int64)
    stops = np.empty(n, dtype=np.int64)
    count = 0
    i = 0
    while i < n:
        if cells[i] == _OPERATIONAL:
            i += 1
            continue
        j = i
        while j < n and cells[j] != _OPERATIONAL:
            j += 1
        starts[count] = i
        stops[count] = j
        count += 1
        i = j
    return starts[:count], stops[:count]


@njit(cache=True)
def _next_damaged_table(cells: np.ndarray) -> np.ndarray:
    """各位置以降で最初に現れる DAMAGED の位置を求める

    末尾に番兵として ``n`` を置くので、配列長は ``n + 1`` になる。
    DAMAGED が存在しない位置の値も ``n`` となる。
    """

    n = cells.shape[0]
    table = np.empty(n + 1, dtype=np.int64)
    table[n] = n
    for i in range(n - 1, -1, -1):
        if cells[i] == _DAMAGED:
            table[i] = i
        else:
            table[i] = table[i + 1]
    return table


def split_slots(cells: np.ndarray) -> Tuple[Slot, ...]:
    """セル配列をスロット (区間の窓) の並びへ分割する"""

    starts, stops = _slot_bounds(np.ascontiguousarray(cells, dtype=np.uint8))
    return tuple(Slot(int(s), int(e)) for s, e in zip(starts, stops))


@dataclass(frozen=True, eq=False)
class SegmentedRecord:
    """スロット分割済みの 1 行分のデータ

    カウンタはこのオブジェクトが持つ配列を窓 (``Slot``) で参照するだけで、
    部分列のコピーは作らない。
    """

    cells: np.ndarray
    slots: Tuple[Slot, ...]
    groups: Tuple[int, ...]
    next_damaged: np.ndarray

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def first_damaged(self, slot: Slot) -> Optional[int]:
        """スロット内で最初の DAMAGED の相対位置。無ければ ``None``"""
        idx = int(self.next_damaged[slot.start])
        if idx < slot.stop:
            return idx - slot.start
        return None

    def has_damaged(self, slot: Slot) -> bool:
        return int(self.next_damaged[slot.start]) < slot.stop

    def damaged_from(self, position: int) -> bool:
        """``position`` 以降に DAMAGED が残っているか"""
        return int(self.next_damaged[position]) < self.size

    def is_damaged(self, position: int) -> bool:
        return int(self.cells[position]) == _DAMAGED


def segment_record(record: ConditionRecord) -> SegmentedRecord:
    """ConditionRecord をカウンタ用の形式に変換する"""

    cells = np.ascontiguousarray(record.cells, dtype=np.uint8)
    return SegmentedRecord(
        cells=cells,
        slots=split_slots(cells),
        groups=record.groups,
        next_damaged=_next_damaged_table(cells),
    )


def slot_strings(record: ConditionRecord) -> List[str]:
    """各スロットの中身を文字列で返す (ログ表示用)"""

    condition = record.condition
    return [condition[s.start : s.stop] for s in split_slots(record.cells)]


__all__ = ["SegmentedRecord", "split_slots", "segment_record", "slot_strings"]
