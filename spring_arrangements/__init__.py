"""配置数の計算や入出力の関数を公開するパッケージ用モジュール"""

from importlib import import_module
from typing import Any

__all__ = [
    "parse_line",
    "parse_lines",
    "count_arrangements",
    "count_line",
    "unfold_record",
    "count_records",
    "total_arrangements",
    "evaluate_lines",
    "save_report",
    "count_arrangements_sat",
    "brute_force_count",
]


def __getattr__(name: str) -> Any:
    """必要になったタイミングで対象モジュールを読み込む"""

    if name in {"parse_line", "parse_lines"}:
        module = import_module(".record_parser", __name__)
        return getattr(module, name)

    if name in {"count_arrangements", "count_line"}:
        module = import_module(".counter", __name__)
        return getattr(module, name)

    if name == "unfold_record":
        module = import_module(".unfold", __name__)
        return getattr(module, name)

    if name in {"count_records", "total_arrangements", "evaluate_lines"}:
        module = import_module(".batch", __name__)
        return getattr(module, name)

    if name == "save_report":
        module = import_module(".record_io", __name__)
        return getattr(module, name)

    # PySAT は検算用なので使うときだけ読み込む
    if name == "count_arrangements_sat":
        module = import_module(".sat_count", __name__)
        return getattr(module, name)

    if name == "brute_force_count":
        module = import_module(".validator", __name__)
        return getattr(module, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name}")
