"""PySAT を使って配置数を数える検算用モジュール"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pysat.formula import CNF, IDPool

# EncType は PySAT で定義されている列挙型で、
# エンコーディング方式を数値で表現します
from pysat.card import CardEnc, EncType
from pysat.solvers import Minisat22

from .record_types import Cell, ConditionRecord


def _create_variables(
    record: ConditionRecord, pool: IDPool
) -> Tuple[List[int], Dict[Tuple[int, int], int]]:
    """マスごとの変数と (区間番号, 開始位置) ごとの変数を作成する"""

    n = len(record)
    cells = [pool.id(f"x_{i}") for i in range(n)]
    starts: Dict[Tuple[int, int], int] = {}
    for k, size in enumerate(record.groups):
        for s in range(n - size + 1):
            starts[(k, s)] = pool.id(f"p_{k}_{s}")
    return cells, starts


def _build_cnf(
    record: ConditionRecord, pool: IDPool
) -> Optional[Tuple[CNF, List[int]]]:
    """配置条件を CNF に変換する。明らかに解が無い場合は ``None``"""

    cells, starts = _create_variables(record, pool)
    groups = record.groups
    cnf = CNF()

    # 各区間はちょうど 1 か所から始まる
    for k in range(len(groups)):
        lits = [var for (kk, _), var in starts.items() if kk == k]
        if not lits:
            return None
        cnf.extend(
            CardEnc.equals(
                lits,
                1,
                vpool=pool,
                encoding=EncType.seqcounter,
            ).clauses
        )

    # 次の区間は前の区間の終端から 1 マス以上空けて始まる
    for (k, s), var in starts.items():
        if k + 1 >= len(groups):
            continue
        for (kk, t), nxt in starts.items():
            if kk == k + 1 and t < s + groups[k] + 1:
                cnf.append([-var, -nxt])

    # マスが DAMAGED であることと、いずれかの区間に覆われることを同値にする
    for i, x in enumerate(cells):
        covering = [
            var
            for (k, s), var in starts.items()
            if s <= i < s + groups[k]
        ]
        cnf.append([-x] + covering)
        for var in covering:
            cnf.append([-var, x])

        state = Cell(int(record.cells[i]))
        if state == Cell.DAMAGED:
            cnf.append([x])
        elif state == Cell.OPERATIONAL:
            cnf.append([-x])

    return cnf, cells


def count_arrangements_sat(record: ConditionRecord, limit: int | None = None) -> int:
    """モデルを列挙して配置数を数える

    マス変数だけでブロッキング節を作るので、補助変数の違いで
    同じ配置が重複して数えられることはない。

    :param limit: この個数に達したら列挙を打ち切る
    """

    pool = IDPool()
    built = _build_cnf(record, pool)
    if built is None:
        return 0
    cnf, cells = built
    if not cells:
        # マスも区間も無い行は空の配置 1 通り
        return 1

    count = 0
    with Minisat22(bootstrap_with=cnf.clauses) as solver:
        while solver.solve():
            count += 1
            if limit is not None and count >= limit:
                break
            model = solver.get_model()
            blocking = []
            for var in cells:
                if model[var - 1] > 0:
                    blocking.append(-var)
                else:
                    blocking.append(var)
            solver.add_clause(blocking)
    return count


__all__ = ["count_arrangements_sat"]
