import os
import sys
import uuid
from typing import Any, Dict, List, Optional, TypedDict

from dotenv import load_dotenv
from langgraph.graph import StateGraph, END

# Add src to path to allow imports if running from root
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from src.agents.strategist import MarketingStrategistAgent
from src.utils.budget import budget_tier, parse_budget
from src.utils.csv_insights import CSVInsight, analyze_csv_data
from src.utils.run_logger import finalize_run_log, init_run_log, log_run_event
from src.utils.strategy_report import build_strategy_report, summarize_strategy
from src.utils.strategy_schema import StrategyResult, audit_budget_allocation

load_dotenv()


class AgentState(TypedDict, total=False):
    run_id: str
    answers: Dict[str, str]
    csv_rows: List[Dict[str, str]]
    offline: bool
    csv_insight: CSVInsight
    strategy_result: StrategyResult
    budget_audit: Dict[str, Any]
    final_report: str


strategist = MarketingStrategistAgent()


def run_insights(state: AgentState) -> AgentState:
    print("--- [1] Insights: Summarizing uploaded data ---")
    run_id = state.get("run_id") or uuid.uuid4().hex[:12]
    answers = state.get("answers") or {}
    rows = state.get("csv_rows") or []
    budget = parse_budget(answers.get("budget"))

    init_run_log(run_id, {
        "budget": budget,
        "budget_tier": budget_tier(budget),
        "csv_rows": len(rows),
        "offline": bool(state.get("offline")),
    })
    insight = analyze_csv_data(rows)
    log_run_event(run_id, "insights_ready", {
        "total_rows": insight["totalRows"],
        "columns": insight["columns"],
        "insight_count": len(insight["insights"]),
    })
    return {"run_id": run_id, "csv_insight": insight}


def run_strategist(state: AgentState) -> AgentState:
    print("--- [2] Strategist: Drafting marketing strategy ---")
    answers = state.get("answers") or {}
    if state.get("offline"):
        result = strategist.fallback_result(answers, "offline")
    else:
        result = strategist.generate_strategy(answers, state.get("csv_insight"))

    audit = audit_budget_allocation(result["strategy"], parse_budget(answers.get("budget")))
    if result["source"] != "generated":
        print(f"Warning: Strategist fell back to budget templates ({result.get('reason')}).")
    log_run_event(state.get("run_id", ""), "strategy_ready", {
        "source": result["source"],
        "reason": result.get("reason"),
        "model": result.get("model"),
        "campaigns": len(result["strategy"]["campaigns"]),
        "budget_warnings": audit["warnings"],
    })
    return {"strategy_result": result, "budget_audit": audit}


def run_report(state: AgentState) -> AgentState:
    print("--- [3] Report: Assembling marketing plan ---")
    result = state["strategy_result"]
    report = build_strategy_report(
        state.get("answers") or {},
        result,
        state.get("csv_insight"),
        state.get("budget_audit"),
    )
    summary = summarize_strategy(result["strategy"])
    finalize_run_log(state.get("run_id", ""), {
        "source": result["source"],
        "total_budget": summary["total_budget"],
        "total_reach": summary["total_reach"],
        "report_chars": len(report),
    })
    return {"final_report": report}


workflow = StateGraph(AgentState)

workflow.add_node("insights", run_insights)
workflow.add_node("strategist", run_strategist)
workflow.add_node("report", run_report)

workflow.set_entry_point("insights")
workflow.add_edge("insights", "strategist")
workflow.add_edge("strategist", "report")
workflow.add_edge("report", END)

app_graph = workflow.compile()


def run_planner(
    answers: Dict[str, str],
    csv_rows: Optional[List[Dict[str, str]]] = None,
    offline: bool = False,
    run_id: Optional[str] = None,
) -> AgentState:
    initial_state: AgentState = {
        "answers": dict(answers or {}),
        "csv_rows": list(csv_rows or []),
        "offline": offline,
    }
    if run_id:
        initial_state["run_id"] = run_id
    return app_graph.invoke(initial_state)
