import math
import re
from typing import Any

DEFAULT_BUDGET = 5000.0
MAX_BUDGET = 1e12

LOW_TIER_CEILING = 2000.0
HIGH_TIER_FLOOR = 10000.0

_LEADING_NUMBER = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_budget(raw: Any, default: float = DEFAULT_BUDGET) -> float:
    """
    Parse a free-text monthly budget ("5000", "$5,000", "2500 per month").
    Only the leading number counts. Zero, negative, non-finite or unparsable
    input falls back to ``default``. Values above MAX_BUDGET are capped.
    """
    if isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return MAX_BUDGET if raw > 0 else default
    else:
        text = str(raw or "").strip().replace("$", "").replace(",", "").replace(" ", "")
        match = _LEADING_NUMBER.match(text)
        if not match:
            return default
        try:
            value = float(match.group(0))
        except ValueError:
            return default
    if not math.isfinite(value) or value <= 0:
        return default
    return min(value, MAX_BUDGET)


def budget_tier(budget: float) -> str:
    if budget < LOW_TIER_CEILING:
        return "low"
    if budget < HIGH_TIER_FLOOR:
        return "medium"
    return "high"


def format_currency(amount: Any) -> str:
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return "$0"
    if value.is_integer():
        return f"${int(value):,}"
    return f"${value:,.2f}"
