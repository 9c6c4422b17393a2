from src.utils.fallback_strategy import build_fallback_strategy
from src.utils.strategy_report import (
    build_strategy_report,
    cost_per_reach,
    summarize_strategy,
    timeline_weeks,
)

ANSWERS = {
    "product": "Bike repair | mobile",
    "budget": "5000",
    "customers": "Commuters",
    "growthGoal": "50 new customers a month",
}


def test_timeline_weeks_handles_weeks_and_months():
    assert timeline_weeks("12 weeks") == 12
    assert timeline_weeks("3 months") == 13
    assert timeline_weeks("ongoing") == 0
    assert timeline_weeks(None) == 0


def test_cost_per_reach_guards_zero_reach():
    assert cost_per_reach(1000, 0) is None
    assert cost_per_reach("x", 10) is None
    assert cost_per_reach(1750, 26250) == 0.07


def test_summary_of_fallback_plan():
    summary = summarize_strategy(build_fallback_strategy(5000))
    assert summary["total_budget"] == 5000
    assert summary["campaign_count"] == 4
    assert summary["timeline_weeks"] == 16
    assert summary["total_reach"] > 0


def test_fallback_report_sections_and_note():
    result = {"strategy": build_fallback_strategy(5000), "source": "fallback", "reason": "missing_api_key", "model": None}
    insight = {"totalRows": 12, "columns": ["a"], "insights": ["Dataset size: 12 records"], "sampleData": []}

    report = build_strategy_report(ANSWERS, result, insight=insight)

    assert report.startswith("# Marketing Strategy Plan")
    assert "- **Monthly Budget:** $5,000" in report
    assert "## Campaign Strategies" in report
    assert "Facebook & Instagram Ads Campaign" in report
    assert "## Implementation Roadmap" in report
    assert "1. Week 1-2:" in report
    assert "## Data Insights" in report
    assert "Based on 12 uploaded records." in report
    assert "## Budget Consistency" not in report
    assert "(missing_api_key)" in report


def test_generated_report_flags_budget_warnings():
    strategy = {
        "campaigns": [{"name": "Ads", "channel": "PPC", "budget": 9000, "timeline": "4 weeks", "expectedReach": 0}],
        "budgetAllocation": [{"category": "Ads", "amount": 9000, "percentage": 90}],
        "targetSegments": [],
        "actionableTips": [],
        "strategyOptions": [],
    }
    result = {"strategy": strategy, "source": "generated", "reason": None, "model": "gemini-1.5-flash"}

    report = build_strategy_report(ANSWERS, result)

    assert "## Budget Consistency" in report
    assert "n/a" in report
    assert "## Target Audience Segments" not in report
    assert "> Generated with gemini-1.5-flash." in report


def test_cost_per_reach_follows_campaign_order_with_repeated_names():
    strategy = {
        "campaigns": [
            {"name": "Launch", "channel": "PPC", "budget": 1000, "timeline": "4 weeks", "expectedReach": 500},
            {"name": "Launch", "channel": "Email", "budget": 300, "timeline": "4 weeks", "expectedReach": 3000},
        ],
        "budgetAllocation": [],
        "targetSegments": [],
        "actionableTips": [],
        "strategyOptions": [],
    }

    assert summarize_strategy(strategy)["cost_per_reach"] == [2.0, 0.1]

    result = {"strategy": strategy, "source": "generated", "reason": None, "model": "m"}
    report = build_strategy_report(ANSWERS, result)
    assert "| Launch | PPC | $1,000 | 4 weeks | 500 | $2.00 |" in report
    assert "| Launch | Email | $300 | 4 weeks | 3,000 | $0.10 |" in report
