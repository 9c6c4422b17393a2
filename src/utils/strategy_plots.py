import logging
import os
from typing import List

from src.utils.strategy_schema import StrategyData

logger = logging.getLogger(__name__)

COLORS = ["#3B82F6", "#8B5CF6", "#10B981", "#F59E0B", "#EF4444", "#14B8A6"]


def render_strategy_plots(strategy: StrategyData, out_dir: str = "static/plots") -> List[str]:
    """Write the allocation and reach charts as PNGs; returns the written paths."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    os.makedirs(out_dir, exist_ok=True)
    paths: List[str] = []

    allocation = [a for a in strategy.get("budgetAllocation") or [] if a.get("amount", 0) > 0]
    if allocation:
        path = os.path.join(out_dir, "budget_allocation.png")
        plt.figure(figsize=(6, 4))
        plt.pie(
            [a["amount"] for a in allocation],
            labels=[f"{a['category']}: {a.get('percentage', 0)}%" for a in allocation],
            colors=[COLORS[i % len(COLORS)] for i in range(len(allocation))],
            startangle=90,
            textprops={"fontsize": 8},
        )
        plt.title("Budget Allocation")
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close()
        paths.append(path)

    campaigns = strategy.get("campaigns") or []
    if campaigns:
        path = os.path.join(out_dir, "expected_reach.png")
        plt.figure(figsize=(6, 4))
        plt.bar([c.get("name", "") for c in campaigns], [c.get("expectedReach", 0) for c in campaigns], color=COLORS[0])
        plt.xticks(rotation=30, ha="right", fontsize=8)
        plt.ylabel("Expected reach")
        plt.title("Expected Reach by Campaign")
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close()
        paths.append(path)

    logger.info("STRATEGY_PLOTS_WRITTEN count=%d dir=%s", len(paths), out_dir)
    return paths
