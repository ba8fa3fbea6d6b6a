"""行を繰り返して展開版の問題を作るモジュール"""

from __future__ import annotations

import numpy as np

from .constants import UNFOLD_FACTOR, UNFOLD_JOINER
from .record_types import ConditionRecord


def unfold_record(
    record: ConditionRecord, factor: int = UNFOLD_FACTOR
) -> ConditionRecord:
    """セル列を ``?`` でつなぎながら ``factor`` 回、区間長リストを
    ``factor`` 回繰り返した新しいレコードを返す

    元のレコードは変更しない。
    """

    if factor < 1:
        raise ValueError("factor は 1 以上を指定してください")

    joiner = np.array([UNFOLD_JOINER], dtype=np.uint8)
    parts = [record.cells]
    for _ in range(factor - 1):
        parts.append(joiner)
        parts.append(record.cells)
    return ConditionRecord(cells=np.concatenate(parts), groups=record.groups * factor)


__all__ = ["unfold_record"]
