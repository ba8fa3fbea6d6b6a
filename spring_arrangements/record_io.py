"""入力の読み込みと集計結果の保存をまとめたモジュール"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from .constants import REPORT_FILENAME
from .record_types import BatchReport


def load_lines(path: str | Path) -> List[str]:
    """入力ファイルを行のリストとして読み込む。``-`` なら標準入力"""

    if str(path) == "-":
        return sys.stdin.read().splitlines()
    return Path(path).read_text(encoding="utf-8").splitlines()


def report_to_dict(report: BatchReport) -> Dict[str, Any]:
    """JSON に書き出せる辞書へ変換する"""

    return {
        "mode": report.mode,
        "total": report.total,
        "rows": [
            {"lineNo": r.line_no, "line": r.line, "count": r.count}
            for r in report.rows
        ],
        "errors": [
            {
                "lineNo": e.line_no,
                "line": e.line,
                "kind": e.kind,
                "message": e.message,
            }
            for e in report.errors
        ],
    }


def save_report(
    reports: BatchReport | List[BatchReport], directory: str | Path = "data"
) -> Path:
    """集計結果を JSON 形式で保存する"""
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    file_path = path / REPORT_FILENAME
    if isinstance(reports, BatchReport):
        data: Any = report_to_dict(reports)
    else:
        data = [report_to_dict(r) for r in reports]
    with file_path.open("w", encoding="utf-8") as fp:
        json.dump(data, fp, ensure_ascii=False, indent=2)
    return file_path


__all__ = ["load_lines", "report_to_dict", "save_report"]
