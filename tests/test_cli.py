import json
import sys

from src.graph import __main__ as cli


def test_offline_cli_writes_strategy_json(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("PLANNER_LOG_DIR", str(tmp_path / "logs"))
    csv_path = tmp_path / "customers.csv"
    csv_path.write_text("age,plan\n31,pro\n42,basic\n", encoding="utf-8")
    out_path = tmp_path / "strategy.json"
    monkeypatch.setattr(sys, "argv", [
        "planner",
        "--product", "Meal kits",
        "--budget", "12000",
        "--csv", str(csv_path),
        "--output", str(out_path),
        "--offline",
    ])

    assert cli.main() == 0

    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["source"] == "fallback"
    assert payload["reason"] == "offline"
    assert any(c["channel"] == "Influencer Marketing" for c in payload["strategy"]["campaigns"])
    assert payload["budget_audit"]["consistent"] is True
    assert "written to" in capsys.readouterr().out


def test_cli_rejects_non_csv_file(tmp_path, monkeypatch, capsys):
    bad = tmp_path / "notes.txt"
    bad.write_text("hello", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["planner", "--product", "X", "--csv", str(bad), "--offline"])

    assert cli.main() == 2
    assert "notes.txt" in capsys.readouterr().err


def test_stdout_holds_only_json_without_output_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("PLANNER_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(sys, "argv", ["planner", "--product", "Mugs", "--budget", "1500", "--offline"])

    assert cli.main() == 0

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert payload["source"] == "fallback"
    assert payload["strategy"]["budgetAllocation"]
    assert "--- [1] Insights" in captured.err
    assert "fell back to budget templates" in captured.err
