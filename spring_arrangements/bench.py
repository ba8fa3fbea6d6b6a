import time
from typing import Sequence

from . import batch


def run(
    lines: Sequence[str], n: int = 1, *, unfold: bool = True, memoize: bool = True
) -> float:
    """指定回数まとめて数えて平均時間を返す簡易ベンチマーク関数"""
    total = 0.0
    for _ in range(n):
        start = time.perf_counter()
        batch.evaluate_lines(lines, unfold=unfold, memoize=memoize)
        total += time.perf_counter() - start
    avg = total / n if n else 0.0
    print(f"平均計数時間: {avg:.3f} 秒")
    return avg


if __name__ == "__main__":
    import argparse

    from .record_io import load_lines

    parser = argparse.ArgumentParser(description="配置数計算のベンチマーク")
    parser.add_argument("input", help="入力ファイル (- なら標準入力)")
    parser.add_argument("-n", type=int, default=1, help="繰り返し回数")
    parser.add_argument("--folded", action="store_true", help="展開せずに数える")
    parser.add_argument("--no-memo", action="store_true", help="メモ化を無効にする")
    args = parser.parse_args()
    run(
        load_lines(args.input),
        args.n,
        unfold=not args.folded,
        memoize=not args.no_memo,
    )
