import pytest

from src.utils.fallback_strategy import ACTIONABLE_TIPS, build_fallback_strategy
from src.utils.strategy_schema import STRATEGY_LIST_FIELDS


@pytest.mark.parametrize("budget", [0, -50, "abc", "", None, "1500", "5000", "20000", 10000, 1999.5, "1e308", 1e300])
def test_every_list_field_is_non_empty(budget):
    strategy = build_fallback_strategy(budget)
    for field in STRATEGY_LIST_FIELDS:
        assert strategy[field], field


@pytest.mark.parametrize("budget", ["1500", "5000", "20000"])
def test_allocation_percentages_sum_to_100(budget):
    strategy = build_fallback_strategy(budget)
    assert sum(item["percentage"] for item in strategy["budgetAllocation"]) == 100


@pytest.mark.parametrize("budget", ["1500", "5000", "20000"])
def test_amounts_never_exceed_budget(budget):
    total = float(budget)
    strategy = build_fallback_strategy(budget)
    assert sum(item["amount"] for item in strategy["budgetAllocation"]) <= total
    assert sum(c["budget"] for c in strategy["campaigns"]) <= total
    assert total - sum(item["amount"] for item in strategy["budgetAllocation"]) < len(strategy["budgetAllocation"])


def test_idempotent_for_same_input():
    assert build_fallback_strategy("7300") == build_fallback_strategy("7300")
    assert build_fallback_strategy("abc") == build_fallback_strategy(0)


def test_low_tier_is_organic_first_without_social_media():
    strategy = build_fallback_strategy("1500")
    channels = [c["channel"] for c in strategy["campaigns"]]
    assert "Social Media" not in channels
    assert "PPC" not in channels
    seo = next(c for c in strategy["campaigns"] if c["channel"] == "SEO")
    assert seo["budget"] == 600
    assert seo["timeline"] == "16 weeks"
    assert strategy["strategyOptions"][0]["name"] == "Organic Growth Focus"


def test_medium_tier_has_paid_social_at_35_percent():
    strategy = build_fallback_strategy("5000")
    social = [c for c in strategy["campaigns"] if c["channel"] == "Social Media"]
    assert len(social) == 1
    assert social[0]["name"] == "Facebook & Instagram Ads Campaign"
    assert social[0]["budget"] == 1750
    assert social[0]["expectedReach"] == 26250
    assert "$1,400" in social[0]["costBreakdown"]
    assert strategy["strategyOptions"][0]["name"] == "Balanced Growth Strategy"


def test_high_tier_adds_higher_cost_channels():
    strategy = build_fallback_strategy("20000")
    channels = {c["channel"] for c in strategy["campaigns"]}
    assert "Influencer Marketing" in channels
    assert {"Social Media", "PPC", "Email"} <= channels
    assert len(strategy["campaigns"]) == 5
    assert strategy["targetSegments"][0]["size"] == 40000


def test_unusable_budget_uses_default_constant():
    assert build_fallback_strategy("not a number") == build_fallback_strategy(5000)


def test_tips_follow_week_and_month_cadence():
    tips = build_fallback_strategy(3000)["actionableTips"]
    assert tips == ACTIONABLE_TIPS
    assert [t.split(":")[0] for t in tips] == ["Week 1-2", "Week 3-4", "Month 2", "Month 3"]
    assert len(build_fallback_strategy(3000)["strategyOptions"]) == 1


def test_huge_budget_is_capped_instead_of_overflowing():
    strategy = build_fallback_strategy("1e308")
    assert strategy == build_fallback_strategy(1e12)
    assert sum(item["amount"] for item in strategy["budgetAllocation"]) <= 1e12
    assert all(c["expectedReach"] > 0 for c in strategy["campaigns"])
