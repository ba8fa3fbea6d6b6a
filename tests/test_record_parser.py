from pathlib import Path
import sys

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from spring_arrangements import record_parser  # noqa: E402
from spring_arrangements.record_types import Cell  # noqa: E402


def test_parse_line_basic() -> None:
    record = record_parser.parse_line("?#.? 1,2\n")
    assert record.cells.tolist() == [
        Cell.UNKNOWN,
        Cell.DAMAGED,
        Cell.OPERATIONAL,
        Cell.UNKNOWN,
    ]
    assert record.groups == (1, 2)
    assert record.condition == "?#.?"
    assert record.to_line() == "?#.? 1,2"


def test_parsed_cells_are_read_only() -> None:
    record = record_parser.parse_line("??? 1")
    assert record.cells.dtype == np.uint8
    with pytest.raises(ValueError):
        record.cells[0] = Cell.DAMAGED


def test_empty_group_field_is_empty_list() -> None:
    record = record_parser.parse_line("??.? ")
    assert record.groups == ()


def test_empty_condition_is_allowed() -> None:
    record = record_parser.parse_line(" 1")
    assert len(record) == 0
    assert record.groups == (1,)


def test_missing_space_is_malformed() -> None:
    with pytest.raises(record_parser.MalformedLine) as info:
        record_parser.parse_line("???.###")
    assert info.value.line == "???.###"
    assert "'???.###'" in str(info.value)


@pytest.mark.parametrize("line", ["??x 1", "?#a.b 1,1", "??\t? 1"])
def test_invalid_character(line: str) -> None:
    with pytest.raises(record_parser.InvalidCharacter):
        record_parser.parse_line(line)


@pytest.mark.parametrize(
    "line", ["??? 1,,2", "??? 1,", "??? 0", "??? -1", "??? a", "??? 1, 2"]
)
def test_invalid_run_length(line: str) -> None:
    with pytest.raises(record_parser.InvalidRunLength):
        record_parser.parse_line(line)


def test_parse_errors_are_value_errors() -> None:
    # 呼び出し側は ValueError として扱える
    with pytest.raises(ValueError):
        record_parser.parse_line("???")


def test_parse_lines_collects_errors() -> None:
    lines = ["???.### 1,1,3", "", "abc 1", "??? 1,x", "???", ".# 1"]
    records, errors = record_parser.parse_lines(lines)
    assert [no for no, _ in records] == [1, 6]
    assert [e.line_no for e in errors] == [3, 4, 5]
    assert [type(e) for e in errors] == [
        record_parser.InvalidCharacter,
        record_parser.InvalidRunLength,
        record_parser.MalformedLine,
    ]
    assert str(errors[0]).startswith("3 行目 'abc 1'")
