"""複数行の配置数をまとめて数えるモジュール"""

from __future__ import annotations

import argparse
import concurrent.futures
import logging
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, cast

from .counter import count_arrangements
from .record_io import load_lines, save_report
from .record_parser import parse_lines
from .record_types import BatchReport, ConditionRecord, RowError, RowResult
from .unfold import unfold_record

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """ログ出力の設定を行う関数

    並列実行時はワーカープロセスの初期化関数としても使う。

    :param level: 表示するログの重要度。``logging.INFO`` などを指定
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _count_one(
    record: ConditionRecord,
    unfold: bool,
    memoize: bool,
    timeout_s: float | None,
) -> int:
    """1 行分を数える。ワーカープロセスからも呼ばれる"""

    if unfold:
        record = unfold_record(record)
    return cast(int, count_arrangements(record, memoize=memoize, timeout_s=timeout_s))


def count_records(
    records: Iterable[ConditionRecord],
    *,
    unfold: bool = False,
    memoize: bool = True,
    timeout_s: float | None = None,
    jobs: int = 1,
    worker_log_level: int = logging.WARNING,
) -> List[int]:
    """各行の配置数を入力と同じ順序で返す

    行ごとの計算は互いに独立しているので、``jobs`` が 2 以上なら
    プロセスプールで並列に数える。

    :param unfold: True なら各行を展開してから数える
    :param timeout_s: 1 行あたりの制限時間 (秒)
    :param jobs: 並列プロセス数
    """

    items = list(records)
    start_time = time.perf_counter()

    if jobs <= 1 or len(items) <= 1:
        counts = [_count_one(r, unfold, memoize, timeout_s) for r in items]
    else:
        counts = [0] * len(items)
        futures: Dict[concurrent.futures.Future[int], int] = {}
        with concurrent.futures.ProcessPoolExecutor(
            max_workers=jobs,
            initializer=setup_logging,
            initargs=(worker_log_level,),
        ) as executor:
            for idx, record in enumerate(items):
                future = executor.submit(_count_one, record, unfold, memoize, timeout_s)
                futures[future] = idx
            for future in concurrent.futures.as_completed(futures):
                # ワーカー側の例外 (TimeoutError など) はそのまま送出する
                counts[futures[future]] = future.result()

    logger.info(
        "%d 行の計数完了 (unfold=%s): %.3f 秒",
        len(items),
        unfold,
        time.perf_counter() - start_time,
    )
    return counts


def total_arrangements(
    records: Iterable[ConditionRecord],
    *,
    unfold: bool = False,
    memoize: bool = True,
    timeout_s: float | None = None,
    jobs: int = 1,
    worker_log_level: int = logging.WARNING,
) -> int:
    """全行の配置数の合計を返す"""
    return sum(
        count_records(
            records,
            unfold=unfold,
            memoize=memoize,
            timeout_s=timeout_s,
            jobs=jobs,
            worker_log_level=worker_log_level,
        )
    )


def evaluate_modes(
    lines: Iterable[str],
    modes: Sequence[bool],
    *,
    memoize: bool = True,
    timeout_s: float | None = None,
    jobs: int = 1,
) -> List[BatchReport]:
    """テキスト行を一度だけ解析し、指定した各モードで数える

    ``modes`` の要素は展開するかどうか。解析できなかった行はエラーとして
    記録し、他の行の処理は続ける。エラーはすべてのレポートに同じものが入る。
    """

    lines = list(lines)
    parsed, parse_errors = parse_lines(lines)
    records = [record for _, record in parsed]
    errors = [
        RowError(
            line_no=cast(int, exc.line_no),
            line=exc.line,
            kind=type(exc).__name__,
            message=exc.reason,
        )
        for exc in parse_errors
    ]

    reports: List[BatchReport] = []
    for unfold in modes:
        counts = count_records(
            records,
            unfold=unfold,
            memoize=memoize,
            timeout_s=timeout_s,
            jobs=jobs,
        )
        report = BatchReport(mode="unfolded" if unfold else "folded")
        for (line_no, _), count in zip(parsed, counts):
            report.rows.append(
                RowResult(
                    line_no=line_no, line=lines[line_no - 1].rstrip("\r\n"), count=count
                )
            )
        report.errors.extend(errors)
        reports.append(report)
    return reports


def evaluate_lines(
    lines: Iterable[str],
    *,
    unfold: bool = False,
    memoize: bool = True,
    timeout_s: float | None = None,
    jobs: int = 1,
) -> BatchReport:
    """テキスト行を解析して数え、行ごとの結果と合計をまとめる"""

    return evaluate_modes(
        lines, (unfold,), memoize=memoize, timeout_s=timeout_s, jobs=jobs
    )[0]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="各行の ? の埋め方のうち、区間長リストを満たすものを数えます"
    )
    parser.add_argument("input", help="入力ファイル (- なら標準入力)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--unfold", action="store_true", help="5 倍に展開してから数える")
    mode.add_argument(
        "--both", action="store_true", help="通常版と展開版の両方の合計を表示"
    )
    parser.add_argument("--jobs", type=int, default=1, help="並列プロセス数")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="1 行あたりのタイムアウト秒数 (指定しない場合は無制限)",
    )
    parser.add_argument("--per-row", action="store_true", help="行ごとの配置数も表示")
    parser.add_argument("--save", metavar="DIR", help="JSON レポートの保存先")
    parser.add_argument("--verbose", action="store_true", help="DEBUG ログを表示")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """引数を解釈して配置数を数え、合計を表示する

    :return: すべての行を解析できたら 0、失敗した行があれば 1
    """

    args = _build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    lines = load_lines(args.input)
    if args.both:
        modes: Tuple[bool, ...] = (False, True)
    else:
        modes = (args.unfold,)

    reports = evaluate_modes(lines, modes, timeout_s=args.timeout, jobs=args.jobs)
    for report in reports:
        if args.per_row:
            for row in report.rows:
                print(f"{row.line_no}: {row.line} -> {row.count}")
        print(f"{report.mode}: {report.total}")

    if args.save:
        path = save_report(reports[0] if len(reports) == 1 else reports, args.save)
        print(f"{path} を作成しました")

    # エラーはどのモードでも同じなので最初のレポートで判定する
    return 1 if reports[0].errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
