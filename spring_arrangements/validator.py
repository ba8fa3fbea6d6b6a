"""確定済みの行が条件を満たすか確認するモジュール"""

from __future__ import annotations

import itertools
from typing import List

from .constants import CELL_TO_SYMBOL
from .record_types import Cell, ConditionRecord


def damaged_runs(resolved: str) -> List[int]:
    """``.#`` だけからなる行の DAMAGED 連続区間の長さを左から返す"""

    return [len(run) for run in resolved.split(".") if run]


def validate_arrangement(record: ConditionRecord, resolved: str) -> None:
    """確定した行 ``resolved`` がレコードと矛盾しないか簡易チェックする"""

    if len(resolved) != len(record):
        raise ValueError("行の長さがレコードと一致しません")
    if set(resolved) - {".", "#"}:
        raise ValueError("未確定または不正な文字が残っています")
    for pos, (cell, symbol) in enumerate(zip(record.cells, resolved)):
        cell = Cell(int(cell))
        if cell != Cell.UNKNOWN and CELL_TO_SYMBOL[cell] != symbol:
            raise ValueError(f"{pos} 番目のマスが確定済みの状態と異なります")
    if tuple(damaged_runs(resolved)) != record.groups:
        raise ValueError("DAMAGED の区間が区間長リストと一致しません")


def enumerate_arrangements(record: ConditionRecord, max_unknown: int = 20) -> List[str]:
    """すべての埋め方を試し、条件を満たす行を列挙する

    検証用の総当たりなので ``?`` が ``max_unknown`` 個を超える行は扱わない。
    """

    template = list(record.condition)
    unknown = [i for i, ch in enumerate(template) if ch == "?"]
    if len(unknown) > max_unknown:
        raise ValueError(f"? が多すぎます ({len(unknown)} > {max_unknown})")

    found: List[str] = []
    for bits in itertools.product(".#", repeat=len(unknown)):
        for pos, ch in zip(unknown, bits):
            template[pos] = ch
        resolved = "".join(template)
        try:
            validate_arrangement(record, resolved)
        except ValueError:
            continue
        found.append(resolved)
    return found


def brute_force_count(record: ConditionRecord, max_unknown: int = 20) -> int:
    """総当たりで配置数を数える"""
    return len(enumerate_arrangements(record, max_unknown=max_unknown))


__all__ = [
    "damaged_runs",
    "validate_arrangement",
    "enumerate_arrangements",
    "brute_force_count",
]
