# 区間配置の組み合わせ数を数えるモジュール

from __future__ import annotations

import logging
import time
from typing import Dict, Tuple, cast

from .record_parser import parse_line
from .record_types import ConditionRecord
from .segmenter import SegmentedRecord, segment_record
from .placements import placements
from .unfold import unfold_record

logger = logging.getLogger(__name__)

# メモのキー: (スロット番号, 先頭スロットの開始位置, 区間番号)
MemoKey = Tuple[int, int, int]


def count_segmented(
    segmented: SegmentedRecord,
    *,
    memoize: bool = True,
    timeout_s: float | None = None,
    return_stats: bool = False,
) -> int | tuple[int, Dict[str, int]]:
    """スロット分割済みの行について配置の個数を数える

    残りのスロット列と区間列は常に元の配列の後ろ側なので、状態は
    位置の組だけで表せる。先頭スロットだけは配置後に途中から始まる
    ことがあるため、その開始位置もキーに含める。

    :param memoize: False にするとメモ化なしの素朴な再帰になる
    :param timeout_s: 制限時間 (秒)。超えた場合は ``TimeoutError``
    :param return_stats: True なら探索統計も返す
    """

    slots = segmented.slots
    groups = segmented.groups
    n_slots = len(slots)
    n_groups = len(groups)
    end = segmented.size

    deadline = None if timeout_s is None else time.perf_counter() + timeout_s
    memo: Dict[MemoKey, int] = {}
    calls = 0
    hits = 0
    max_depth = 0

    def next_slot(slot_idx: int) -> Tuple[int, int]:
        nxt = slot_idx + 1
        return nxt, slots[nxt].start if nxt < n_slots else end

    def count(slot_idx: int, head_start: int, group_idx: int, depth: int) -> int:
        nonlocal calls, hits, max_depth
        calls += 1
        if depth > max_depth:
            max_depth = depth
        if deadline is not None and time.perf_counter() > deadline:
            raise TimeoutError("counting timed out")

        key = (slot_idx, head_start, group_idx)
        if memoize and key in memo:
            hits += 1
            return memo[key]

        if group_idx == n_groups:
            # 残りに DAMAGED が無ければすべて OPERATIONAL にできる
            result = 0 if segmented.damaged_from(head_start) else 1
        elif slot_idx == n_slots:
            # 置き場所が無いのに区間が残っている
            result = 0
        else:
            result = _branch(slot_idx, head_start, group_idx, depth)

        if memoize:
            memo[key] = result
        return result

    def _branch(slot_idx: int, head_start: int, group_idx: int, depth: int) -> int:
        head = slots[slot_idx]._replace(start=head_start)
        size = groups[group_idx]
        skippable = not segmented.has_damaged(head)
        after_idx, after_start = next_slot(slot_idx)

        def skip() -> int:
            # スロット全体を OPERATIONAL とし、同じ区間を次のスロットへ回す
            if not skippable:
                return 0
            return count(after_idx, after_start, group_idx, depth + 1)

        if size > head.length:
            return skip()

        if size == head.length:
            # 区間がスロットをちょうど埋める
            return count(after_idx, after_start, group_idx + 1, depth + 1) + skip()

        total = 0
        for rest in placements(segmented, head, size):
            if rest is None:
                total += count(after_idx, after_start, group_idx + 1, depth + 1)
            else:
                total += count(slot_idx, rest.start, group_idx + 1, depth + 1)
        return total + skip()

    first_start = slots[0].start if n_slots else end
    result = count(0, first_start, 0, 0)
    stats = {
        "calls": calls,
        "cache_hits": hits,
        "cache_size": len(memo),
        "max_depth": max_depth,
    }
    logger.debug("配置数 %d stats=%s", result, stats)
    if return_stats:
        return result, stats
    return result


def count_arrangements(
    record: ConditionRecord,
    *,
    memoize: bool = True,
    timeout_s: float | None = None,
    return_stats: bool = False,
) -> int | tuple[int, Dict[str, int]]:
    """1 行分のレコードについて、条件を満たす配置の個数を返す

    メモは呼び出しごとに作り直すので、行をまたいで共有されることはない。
    """

    return count_segmented(
        segment_record(record),
        memoize=memoize,
        timeout_s=timeout_s,
        return_stats=return_stats,
    )


def count_line(
    line: str,
    *,
    unfold: bool = False,
    memoize: bool = True,
    timeout_s: float | None = None,
) -> int:
    """1 行の文字列を解析して配置数を返す"""

    record = parse_line(line)
    if unfold:
        record = unfold_record(record)
    return cast(int, count_arrangements(record, memoize=memoize, timeout_s=timeout_s))


__all__ = ["count_segmented", "count_arrangements", "count_line"]
