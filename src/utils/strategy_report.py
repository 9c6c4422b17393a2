import re
from typing import Any, Dict, List, Optional

from src.utils.budget import format_currency, parse_budget
from src.utils.csv_insights import CSVInsight
from src.utils.strategy_schema import SOURCE_FALLBACK, StrategyData, StrategyResult, audit_budget_allocation

_WEEKS = re.compile(r"(\d+(?:\.\d+)?)\s*(week|wk|month|mo)", re.IGNORECASE)


def timeline_weeks(timeline: Any) -> int:
    """'12 weeks' -> 12, '3 months' -> 13; unparseable -> 0."""
    match = _WEEKS.search(str(timeline or ""))
    if not match:
        return 0
    value = float(match.group(1))
    if match.group(2).lower().startswith("m"):
        value *= 52 / 12
    return int(round(value))


def cost_per_reach(budget: Any, reach: Any) -> Optional[float]:
    try:
        budget_value = float(budget)
        reach_value = float(reach)
    except (TypeError, ValueError):
        return None
    if reach_value <= 0:
        return None
    return round(budget_value / reach_value, 2)


def summarize_strategy(strategy: StrategyData) -> Dict[str, Any]:
    campaigns = strategy.get("campaigns") or []
    allocation = strategy.get("budgetAllocation") or []
    return {
        "total_budget": sum(int(item.get("amount", 0) or 0) for item in allocation),
        "total_reach": sum(int(c.get("expectedReach", 0) or 0) for c in campaigns),
        "campaign_count": len(campaigns),
        "timeline_weeks": max((timeline_weeks(c.get("timeline")) for c in campaigns), default=0),
        # aligned with campaigns by position; names may repeat
        "cost_per_reach": [cost_per_reach(c.get("budget"), c.get("expectedReach")) for c in campaigns],
    }


def _cell(value: Any) -> str:
    return str(value if value is not None else "").replace("|", "/").replace("\n", " ")


def _table(headers: List[str], rows: List[List[Any]]) -> List[str]:
    lines = ["| " + " | ".join(headers) + " |", "|" + "---|" * len(headers)]
    for row in rows:
        lines.append("| " + " | ".join(_cell(v) for v in row) + " |")
    return lines


def build_strategy_report(
    answers: Dict[str, Any],
    result: StrategyResult,
    insight: Optional[CSVInsight] = None,
    audit: Optional[Dict[str, Any]] = None,
) -> str:
    """Markdown version of the results dashboard, used for the exported plan."""
    strategy = result.get("strategy") or {}
    summary = summarize_strategy(strategy)
    requested = parse_budget(answers.get("budget"))
    if audit is None:
        audit = audit_budget_allocation(strategy, requested)

    lines: List[str] = ["# Marketing Strategy Plan", ""]
    lines += [
        "## Business Profile",
        f"- **Product/Service:** {answers.get('product', '')}",
        f"- **Monthly Budget:** {format_currency(requested)}",
        f"- **Target Customers:** {answers.get('customers', '')}",
        f"- **Growth Goal:** {answers.get('growthGoal', '')}",
        "",
        "## Overview",
        f"- **Total Budget:** {format_currency(summary['total_budget'])} (monthly allocation)",
        f"- **Expected Reach:** {summary['total_reach']:,} people per month",
        f"- **Campaigns:** {summary['campaign_count']}",
        f"- **Weeks to Full Scale:** {summary['timeline_weeks']}",
        "",
    ]
    if audit.get("warnings"):
        lines.append("## Budget Consistency")
        lines += [f"- {w}" for w in audit["warnings"]]
        lines.append("")

    campaigns = strategy.get("campaigns") or []
    if campaigns:
        lines.append("## Campaign Strategies")
        rows = []
        for c, cpr in zip(campaigns, summary["cost_per_reach"]):
            rows.append([
                c.get("name"),
                c.get("channel"),
                format_currency(c.get("budget", 0)),
                c.get("timeline"),
                f"{int(c.get('expectedReach', 0)):,}",
                f"${cpr:.2f}" if cpr is not None else "n/a",
            ])
        lines += _table(["Campaign", "Channel", "Budget", "Timeline", "Expected Reach", "Cost per Reach"], rows)
        lines.append("")
        for c in campaigns:
            if c.get("description") or c.get("costBreakdown"):
                lines.append(f"### {c.get('name')}")
                if c.get("description"):
                    lines.append(c["description"])
                if c.get("costBreakdown"):
                    lines.append(f"*Cost breakdown:* {c['costBreakdown']}")
                lines.append("")

    allocation = strategy.get("budgetAllocation") or []
    if allocation:
        lines.append("## Budget Allocation")
        lines += _table(
            ["Category", "Amount", "Share", "Explanation"],
            [
                [a.get("category"), format_currency(a.get("amount", 0)), f"{a.get('percentage', 0)}%", a.get("explanation", "")]
                for a in allocation
            ],
        )
        lines.append("")

    segments = strategy.get("targetSegments") or []
    if segments:
        lines.append("## Target Audience Segments")
        for s in segments:
            lines.append(f"### {s.get('name')} ({int(s.get('size', 0)):,} people)")
            lines += [f"- {trait}" for trait in s.get("characteristics") or []]
            if s.get("reasoning"):
                lines.append(f"\n{s['reasoning']}")
            lines.append("")

    tips = strategy.get("actionableTips") or []
    if tips:
        lines.append("## Implementation Roadmap")
        lines += [f"{i}. {tip}" for i, tip in enumerate(tips, 1)]
        lines.append("")

    options = strategy.get("strategyOptions") or []
    if options:
        lines.append("## Strategic Options")
        for option in options:
            lines.append(f"### {option.get('name')}")
            if option.get("description"):
                lines.append(option["description"])
            if option.get("pros"):
                lines.append("**Pros:** " + "; ".join(option["pros"]))
            if option.get("cons"):
                lines.append("**Cons:** " + "; ".join(option["cons"]))
            lines.append("")

    if insight and insight.get("totalRows"):
        lines.append("## Data Insights")
        lines.append(f"Based on {insight['totalRows']} uploaded records.")
        lines += [f"- {item}" for item in insight.get("insights") or []]
        lines.append("")

    if result.get("source") == SOURCE_FALLBACK:
        lines.append(
            "> This plan was produced by the built-in budget templates because the AI service "
            f"was unavailable ({result.get('reason') or 'unknown'})."
        )
    else:
        lines.append(f"> Generated with {result.get('model') or 'the AI service'}.")
    return "\n".join(lines).rstrip() + "\n"
