from pathlib import Path
import json
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
from spring_arrangements import record_io  # noqa: E402
from spring_arrangements.batch import evaluate_lines  # noqa: E402


def test_load_lines(tmp_path: Path) -> None:
    path = tmp_path / "rows.txt"
    path.write_text("???.### 1,1,3\r\n#. 1\n", encoding="utf-8")
    assert record_io.load_lines(path) == ["???.### 1,1,3", "#. 1"]


def test_save_report(tmp_path: Path) -> None:
    report = evaluate_lines(["???.### 1,1,3", "?x 1"])
    path = record_io.save_report(report, directory=tmp_path)
    assert path.exists()
    assert path.name == "arrangements_report.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["mode"] == "folded"
    assert data["total"] == 1
    assert data["rows"] == [{"lineNo": 1, "line": "???.### 1,1,3", "count": 1}]
    assert data["errors"][0]["kind"] == "InvalidCharacter"
    assert data["errors"][0]["lineNo"] == 2
