from pathlib import Path
import sys

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from spring_arrangements.record_types import Cell, ConditionRecord  # noqa: E402


def test_condition_record_from_cell_codes() -> None:
    record = ConditionRecord(cells=[2, 1, 0], groups=(1,))
    assert record.condition == "?#."
    assert record.cells.dtype == np.uint8
    assert record == ConditionRecord(cells=np.array([2, 1, 0]), groups=[1])


@pytest.mark.parametrize("groups", [(0,), (1, 0, 2), (-1,)])
def test_condition_record_rejects_non_positive_groups(groups: tuple) -> None:
    # 区間長 0 を受け入れると誤った配置数が返ってしまう
    with pytest.raises(ValueError):
        ConditionRecord(cells=[Cell.UNKNOWN, Cell.UNKNOWN], groups=groups)


@pytest.mark.parametrize("cells", [[2, 3], [-1, 2], [[2, 2]]])
def test_condition_record_rejects_unknown_cell_codes(cells: list) -> None:
    with pytest.raises(ValueError):
        ConditionRecord(cells=cells, groups=(1,))


def test_condition_record_empty() -> None:
    record = ConditionRecord(cells=[], groups=())
    assert len(record) == 0
    assert record.to_line() == " "
