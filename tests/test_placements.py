from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from spring_arrangements.placements import last_start, placements  # noqa: E402
from spring_arrangements.record_parser import parse_line  # noqa: E402
from spring_arrangements.record_types import Slot  # noqa: E402
from spring_arrangements.segmenter import segment_record  # noqa: E402


def _placements(line: str, size: int) -> list:
    seg = segment_record(parse_line(line))
    return list(placements(seg, seg.slots[0], size))


def test_all_unknown_slot() -> None:
    assert _placements("???? 1", 1) == [Slot(2, 4), Slot(3, 4), None, None]


def test_first_damaged_bounds_start() -> None:
    # 3 番目の # より後ろからは始められない
    assert _placements("???#?? 1", 1) == [Slot(2, 6), Slot(3, 6), Slot(5, 6)]


def test_separator_must_not_be_damaged() -> None:
    assert _placements("??#? 2", 2) == [None, None]


def test_group_longer_than_slot() -> None:
    seg = segment_record(parse_line("?? 3"))
    assert last_start(seg, seg.slots[0], 3) < 0
    assert _placements("?? 3", 3) == []


def test_placements_on_suffix_window() -> None:
    seg = segment_record(parse_line(".?#??. 1"))
    assert list(placements(seg, Slot(3, 5), 1)) == [None, None]
    assert list(placements(seg, Slot(1, 5), 2)) == [Slot(4, 5), None]
