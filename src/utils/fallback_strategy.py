import math
from typing import Any, Dict, List, Tuple

from src.utils.budget import budget_tier, parse_budget
from src.utils.strategy_schema import BudgetItem, Campaign, StrategyData

# (name, channel, share of budget, weeks, reach per dollar, description, cost breakdown template)
_CampaignTemplate = Tuple[str, str, float, int, float, str, str]
# (category, percentage, explanation)
_AllocationTemplate = Tuple[str, int, str]

_CAMPAIGNS: Dict[str, List[_CampaignTemplate]] = {
    "low": [
        (
            "Organic Content & Community Strategy",
            "Content Marketing",
            0.3, 12, 0.5,
            "Focus on consistent posting, community engagement, and user-generated content to build an organic following.",
            "Content creation tools $50/month, scheduling tool $15/month, remaining {rest} for boosted posts",
        ),
        (
            "Google My Business & Local SEO",
            "SEO",
            0.4, 16, 0.3,
            "Optimize for local search, gather reviews, and create location-based content.",
            "SEO tools $99/month, content creation $200/month, local citations $100",
        ),
        (
            "Email List Building & Nurture",
            "Email",
            0.2, 8, 2.0,
            "Capture leads with a simple incentive and nurture them with a weekly newsletter.",
            "Email platform $20/month, lead magnet design {rest}",
        ),
        (
            "Referral & Partnership Program",
            "Referral",
            0.1, 10, 1.0,
            "Reward existing customers and local partners for introductions to build word-of-mouth.",
            "Referral rewards {rest}",
        ),
    ],
    "medium": [
        (
            "Facebook & Instagram Ads Campaign",
            "Social Media",
            0.35, 10, 15.0,
            "Targeted social media advertising focusing on lookalike audiences and interest-based targeting.",
            "Ad spend 80% ({ad_spend_80}), creative production 15%, management 5%",
        ),
        (
            "Google Ads Search Campaign",
            "PPC",
            0.3, 8, 8.0,
            "Target high-intent keywords related to your product with optimized landing pages.",
            "Ad spend 85% ({ad_spend_85}), landing page optimization $200, keyword research tools $100",
        ),
        (
            "SEO Content Program",
            "SEO",
            0.2, 16, 6.0,
            "Publish search-focused articles and landing pages that compound traffic over time.",
            "Freelance writing 70%, SEO tools $99/month, on-page optimization 30%",
        ),
        (
            "Email Marketing Automation",
            "Email",
            0.15, 12, 20.0,
            "Automated welcome, nurture and win-back sequences for new and existing leads.",
            "Email platform $50-$150/month, template design, list growth incentives",
        ),
    ],
    "high": [
        (
            "Influencer Partnership Program",
            "Influencer Marketing",
            0.25, 12, 20.0,
            "Micro- and mid-tier creators in your niche producing authentic product content and reviews.",
            "Creator fees 75% ({ad_spend_75}), product seeding 15%, influencer platform 10%",
        ),
        (
            "Full-Funnel Paid Social",
            "Social Media",
            0.25, 12, 15.0,
            "Prospecting, retargeting and lookalike campaigns across Meta and TikTok with weekly creative refreshes.",
            "Ad spend 80% ({ad_spend_80}), creative production 15%, management 5%",
        ),
        (
            "Google Ads Search & Shopping",
            "PPC",
            0.2, 10, 8.0,
            "High-intent search and shopping campaigns with dedicated landing pages and bid automation.",
            "Ad spend 85% ({ad_spend_85}), landing pages and CRO tools 15%",
        ),
        (
            "Marketing Automation & Lifecycle Email",
            "Email",
            0.1, 12, 20.0,
            "Segmented lifecycle journeys on a premium automation platform tied to purchase behavior.",
            "Automation platform $300-$800/month, copy and design for lifecycle flows",
        ),
        (
            "Content Hub & Technical SEO",
            "Content Marketing",
            0.1, 16, 6.0,
            "Pillar content, technical SEO fixes and digital PR to build long-term organic authority.",
            "Content production 60%, SEO platform $200/month, digital PR outreach",
        ),
    ],
}

_ALLOCATIONS: Dict[str, List[_AllocationTemplate]] = {
    "low": [
        ("Content Creation", 40, "Essential for organic growth - includes graphics, copywriting, and video content"),
        ("Marketing Tools", 25, "Canva Pro, Buffer, Google Workspace, basic analytics tools"),
        ("Paid Promotion", 25, "Small budget for boosting best-performing organic content"),
        ("Testing & Optimization", 10, "A/B testing different content types and posting times"),
    ],
    "medium": [
        ("Paid Social", 35, "Meta ads spend plus creative production for lookalike and interest audiences"),
        ("Paid Search", 30, "Google Ads spend on high-intent keywords and landing page optimization"),
        ("Content & SEO", 20, "Search-focused content and SEO tooling that compounds over time"),
        ("Email & Automation", 15, "Email platform, templates and list growth incentives"),
    ],
    "high": [
        ("Influencer Marketing", 25, "Creator fees, product seeding and an influencer management platform"),
        ("Paid Social", 25, "Prospecting and retargeting spend with continuous creative testing"),
        ("Paid Search & Shopping", 20, "Search and shopping spend with landing page optimization"),
        ("Content & SEO", 10, "Pillar content, technical SEO and digital PR"),
        ("Email & Automation", 10, "Premium automation platform and lifecycle journeys"),
        ("Analytics & Testing", 10, "Attribution tooling, dashboards and a reserve for experiments"),
    ],
}

ACTIONABLE_TIPS = [
    "Week 1-2: Set up tracking (Google Analytics, Facebook Pixel) and create branded social media profiles",
    "Week 3-4: Launch first campaign with 20% of budget to test audience response and optimize",
    "Month 2: Double down on best-performing channels and creative formats based on data",
    "Month 3: Scale successful campaigns while maintaining target cost-per-acquisition",
]


def _floor(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(math.floor(value))


def _campaigns(tier: str, budget: float) -> List[Campaign]:
    campaigns: List[Campaign] = []
    for name, channel, share, weeks, reach_rate, description, breakdown in _CAMPAIGNS[tier]:
        spend = budget * share
        cost_breakdown = breakdown.format(
            rest=f"${_floor(spend * 0.5):,}",
            ad_spend_75=f"${_floor(spend * 0.75):,}",
            ad_spend_80=f"${_floor(spend * 0.8):,}",
            ad_spend_85=f"${_floor(spend * 0.85):,}",
        )
        campaigns.append({
            "name": name,
            "channel": channel,
            "budget": _floor(spend),
            "timeline": f"{weeks} weeks",
            "expectedReach": _floor(spend * reach_rate),
            "description": description,
            "costBreakdown": cost_breakdown,
        })
    return campaigns


def _allocation(tier: str, budget: float) -> List[BudgetItem]:
    return [
        {
            "category": category,
            "amount": _floor(budget * percentage / 100),
            "percentage": percentage,
            "explanation": explanation,
        }
        for category, percentage, explanation in _ALLOCATIONS[tier]
    ]


def build_fallback_strategy(budget: Any) -> StrategyData:
    """
    Deterministic strategy used when the model call or its parsing fails.

    ``budget`` may be a number or the raw answer text; anything non-positive or
    unparsable is replaced with DEFAULT_BUDGET.
    """
    amount = parse_budget(budget)
    tier = budget_tier(amount)
    primary_size = 5000 if amount < 5000 else _floor(amount * 2)

    return {
        "campaigns": _campaigns(tier, amount),
        "budgetAllocation": _allocation(tier, amount),
        "targetSegments": [
            {
                "name": "Primary Target Audience",
                "size": primary_size,
                "characteristics": [
                    "Based on your customer description",
                    "Budget-conscious decision makers",
                    "Active on digital platforms",
                ],
                "reasoning": "Sized according to your budget reach and typical market penetration rates",
            },
            {
                "name": "Lookalike Expansion Audience",
                "size": primary_size * 3,
                "characteristics": [
                    "Similar profile to your best customers",
                    "Not yet aware of your brand",
                    "Reachable through paid and partner channels",
                ],
                "reasoning": "Broader pool for scaling once the primary audience converts profitably",
            },
        ],
        "actionableTips": list(ACTIONABLE_TIPS),
        "strategyOptions": [
            {
                "name": "Organic Growth Focus" if amount < 3000 else "Balanced Growth Strategy",
                "description": "Prioritize sustainable growth within budget constraints using proven channels",
                "pros": ["Cost-effective", "Builds long-term assets", "Lower risk"],
                "cons": [
                    "Slower initial results",
                    "Requires consistent effort",
                    "Limited reach without paid amplification",
                ],
            }
        ],
    }
