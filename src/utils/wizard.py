from typing import Any, Dict, List, MutableMapping

TOTAL_STEPS = 6
UPLOAD_STEP = 5
REVIEW_STEP = 6

PHASE_LANDING = "landing"
PHASE_ONBOARDING = "onboarding"
PHASE_RESULTS = "results"

UPLOADER_NONCE = "uploader_nonce"

# step -> answers key for the free-text steps
ANSWER_STEPS = {
    1: "product",
    2: "budget",
    3: "customers",
    4: "growthGoal",
}


def empty_answers() -> Dict[str, str]:
    return {key: "" for key in ANSWER_STEPS.values()}


def is_step_complete(step: int, answers: Dict[str, Any], has_csv: bool = False) -> bool:
    if step in ANSWER_STEPS:
        return bool(str(answers.get(ANSWER_STEPS[step]) or "").strip())
    if step == UPLOAD_STEP:
        return bool(has_csv)
    if step == REVIEW_STEP:
        return all(is_step_complete(s, answers) for s in ANSWER_STEPS)
    return False


def can_advance(step: int, answers: Dict[str, Any], has_csv: bool = False) -> bool:
    if step >= TOTAL_STEPS:
        return False
    return step == UPLOAD_STEP or is_step_complete(step, answers, has_csv)


def can_go_back(step: int) -> bool:
    return step > 1


def next_step(step: int) -> int:
    return min(step + 1, TOTAL_STEPS)


def previous_step(step: int) -> int:
    return max(step - 1, 1)


def progress(step: int) -> float:
    return max(0, min(step, TOTAL_STEPS)) / TOTAL_STEPS


def init_session(session: MutableMapping[str, Any]) -> None:
    session.setdefault("phase", PHASE_LANDING)
    session.setdefault("step", 1)
    session.setdefault("answers", empty_answers())
    session.setdefault("csv_rows", None)
    session.setdefault("csv_filename", None)
    session.setdefault("csv_file_id", None)
    session.setdefault(UPLOADER_NONCE, 0)
    session.setdefault("strategy_result", None)


def start_planning(session: MutableMapping[str, Any]) -> None:
    session["phase"] = PHASE_ONBOARDING
    session["step"] = 1


def complete_planning(session: MutableMapping[str, Any], final_state: Dict[str, Any]) -> None:
    session["strategy_result"] = final_state
    session["phase"] = PHASE_RESULTS


def uploader_key(session: MutableMapping[str, Any]) -> str:
    return f"csv_upload_{session.get(UPLOADER_NONCE, 0)}"


def is_new_upload(session: MutableMapping[str, Any], file_id: Any) -> bool:
    return file_id is not None and file_id != session.get("csv_file_id")


def store_upload(session: MutableMapping[str, Any], rows: List[Dict[str, str]], filename: str, file_id: Any) -> None:
    session["csv_rows"] = rows
    session["csv_filename"] = filename
    session["csv_file_id"] = file_id


def clear_upload(session: MutableMapping[str, Any]) -> None:
    """Forget the parsed CSV and hand the uploader a fresh key so its widget state is dropped too."""
    session["csv_rows"] = None
    session["csv_filename"] = None
    session["csv_file_id"] = None
    session[UPLOADER_NONCE] = session.get(UPLOADER_NONCE, 0) + 1


def start_over(session: MutableMapping[str, Any]) -> None:
    """Back to the landing page with every per-session value discarded."""
    nonce = session.get(UPLOADER_NONCE, 0)
    for key in list(session.keys()):
        del session[key]
    init_session(session)
    session[UPLOADER_NONCE] = nonce + 1
