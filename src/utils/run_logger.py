import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def default_log_dir() -> str:
    return os.getenv("PLANNER_LOG_DIR") or "logs"


def _log_path(run_id: str, log_dir: str) -> str:
    return os.path.join(log_dir, f"run_{run_id}.jsonl")


def _append(run_id: str, record: Dict[str, Any], log_dir: Optional[str]) -> Optional[str]:
    log_dir = log_dir or default_log_dir()
    path = _log_path(run_id, log_dir)
    try:
        os.makedirs(log_dir, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except OSError as exc:
        logger.warning("RUN_LOG_WRITE_FAILED path=%s error=%s", path, exc)
        return None
    return path


def init_run_log(run_id: str, metadata: Dict[str, Any], log_dir: Optional[str] = None) -> Optional[str]:
    return _append(
        run_id,
        {
            "event": "run_start",
            "run_id": run_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "metadata": metadata,
        },
        log_dir,
    )


def log_run_event(run_id: str, event: str, payload: Dict[str, Any] | None = None, log_dir: Optional[str] = None) -> None:
    if not run_id:
        return
    _append(
        run_id,
        {
            "event": event,
            "run_id": run_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "payload": payload or {},
        },
        log_dir,
    )


def finalize_run_log(run_id: str, summary: Dict[str, Any], log_dir: Optional[str] = None) -> None:
    log_run_event(run_id, "run_end", summary, log_dir=log_dir)
