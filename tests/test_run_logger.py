import json
import logging

from src.utils.run_logger import finalize_run_log, init_run_log, log_run_event


def test_events_are_appended_as_json_lines(tmp_path):
    path = init_run_log("abc", {"budget": 5000}, log_dir=str(tmp_path))
    log_run_event("abc", "strategy_ready", {"source": "generated"}, log_dir=str(tmp_path))
    finalize_run_log("abc", {"total_reach": 10}, log_dir=str(tmp_path))

    with open(path, encoding="utf-8") as f:
        records = [json.loads(line) for line in f]
    assert [r["event"] for r in records] == ["run_start", "strategy_ready", "run_end"]
    assert records[0]["metadata"] == {"budget": 5000}
    assert records[2]["payload"] == {"total_reach": 10}
    assert all(r["run_id"] == "abc" for r in records)


def test_empty_run_id_is_ignored(tmp_path):
    log_run_event("", "strategy_ready", {}, log_dir=str(tmp_path))
    assert list(tmp_path.iterdir()) == []


def test_env_log_dir_is_used(tmp_path, monkeypatch):
    monkeypatch.setenv("PLANNER_LOG_DIR", str(tmp_path / "from_env"))
    init_run_log("envrun", {})
    assert (tmp_path / "from_env" / "run_envrun.jsonl").exists()


def test_unwritable_log_dir_warns_without_raising(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        assert init_run_log("x", {}, log_dir=str(blocker / "logs")) is None
    assert "RUN_LOG_WRITE_FAILED" in caplog.text
