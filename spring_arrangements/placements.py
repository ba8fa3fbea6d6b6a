"""スロット内に 1 区間を置ける位置を列挙するモジュール"""

from __future__ import annotations

from typing import Iterator, Optional

from .record_types import Slot
from .segmenter import SegmentedRecord


def last_start(segmented: SegmentedRecord, slot: Slot, group_size: int) -> int:
    """区間を置ける最後の開始位置 (スロット内の相対位置)

    最初の DAMAGED より後ろから始めるとその DAMAGED を覆えなくなるので、
    開始位置はそこで打ち切る。区間が入らない場合は負の値になる。
    """

    limit = slot.length - group_size
    first = segmented.first_damaged(slot)
    if first is not None:
        return min(first, limit)
    return limit


def placements(
    segmented: SegmentedRecord, slot: Slot, group_size: int
) -> Iterator[Optional[Slot]]:
    """``slot`` に長さ ``group_size`` の区間を置く方法を順に返す

    各配置について、区間の直後の 1 マスを区切りとして消費した残りの
    スロットを返す。残りが無い場合は ``None`` を返す。
    """

    for offset in range(last_start(segmented, slot, group_size) + 1):
        end = slot.start + offset + group_size
        if end == slot.stop:
            yield None
            continue
        # 直後のマスは区切りになるので DAMAGED であってはいけない
        if segmented.is_damaged(end):
            continue
        if end + 1 >= slot.stop:
            yield None
        else:
            yield Slot(end + 1, slot.stop)


__all__ = ["last_start", "placements"]
