from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from spring_arrangements.record_parser import parse_line  # noqa: E402
from spring_arrangements.unfold import unfold_record  # noqa: E402


def test_unfold_record() -> None:
    record = parse_line(".# 1")
    unfolded = unfold_record(record)
    assert unfolded.to_line() == ".#?.#?.#?.#?.# 1,1,1,1,1"
    # 元のレコードは変更されない
    assert record.to_line() == ".# 1"


def test_unfold_fixture_shape() -> None:
    record = parse_line("???.### 1,1,3")
    unfolded = unfold_record(record)
    assert unfolded.condition == "?".join(["???.###"] * 5)
    assert unfolded.groups == (1, 1, 3) * 5
    assert len(unfolded) == 7 * 5 + 4


def test_unfold_factor() -> None:
    record = parse_line("#? 1")
    assert unfold_record(record, factor=1) == record
    assert unfold_record(record, factor=2).to_line() == "#??#? 1,1"
    with pytest.raises(ValueError):
        unfold_record(record, factor=0)


def test_unfold_empty_row() -> None:
    assert unfold_record(parse_line(" ")).to_line() == "???? "
