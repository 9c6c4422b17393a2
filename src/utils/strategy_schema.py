import json
import math
import re
from typing import Any, Dict, List, Optional, TypedDict


class _CampaignFields(TypedDict):
    name: str
    channel: str
    budget: int
    timeline: str
    expectedReach: int


class Campaign(_CampaignFields, total=False):
    description: str
    costBreakdown: str


class _BudgetItemFields(TypedDict):
    category: str
    amount: int
    percentage: int


class BudgetItem(_BudgetItemFields, total=False):
    explanation: str


class _SegmentFields(TypedDict):
    name: str
    size: int
    characteristics: List[str]


class Segment(_SegmentFields, total=False):
    reasoning: str


class StrategyOption(TypedDict):
    name: str
    description: str
    pros: List[str]
    cons: List[str]


class StrategyData(TypedDict):
    campaigns: List[Campaign]
    budgetAllocation: List[BudgetItem]
    targetSegments: List[Segment]
    actionableTips: List[str]
    strategyOptions: List[StrategyOption]


class StrategyResult(TypedDict):
    strategy: StrategyData
    source: str  # "generated" | "fallback"
    reason: Optional[str]
    model: Optional[str]


SOURCE_GENERATED = "generated"
SOURCE_FALLBACK = "fallback"

STRATEGY_LIST_FIELDS = (
    "campaigns",
    "budgetAllocation",
    "targetSegments",
    "actionableTips",
    "strategyOptions",
)


class StrategyParseError(ValueError):
    """The model response did not contain a parseable JSON object."""


_JSON_SPAN = re.compile(r"\{[\s\S]*\}")
_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _clean_json(text: str) -> str:
    text = re.sub(r"```json", "", text)
    text = re.sub(r"```", "", text)
    return text.strip()


def extract_json_block(text: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of a free-text completion.

    Takes the span from the first "{" to the last "}" so that prose before and
    after the object is ignored.
    """
    match = _JSON_SPAN.search(_clean_json(text or ""))
    if not match:
        raise StrategyParseError("No valid JSON found in response")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise StrategyParseError(f"Malformed JSON in response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise StrategyParseError("JSON span is not an object")
    return parsed


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value).strip()


def _as_int(value: Any, minimum: int = 0, maximum: Optional[int] = None) -> int:
    number: Optional[float] = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER.search(value.replace(",", "").replace("$", ""))
        if match:
            try:
                number = float(match.group(0))
            except ValueError:
                number = None
    if number is None or not math.isfinite(number):
        number = float(minimum)
    result = max(minimum, int(round(number)))
    if maximum is not None:
        result = min(maximum, result)
    return result


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    items = []
    for item in value:
        if isinstance(item, (dict, list)) or item is None:
            continue
        text = str(item).strip()
        if text:
            items.append(text)
    return items


def _as_dict_list(value: Any) -> List[Dict[str, Any]]:
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _timeline(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{_as_int(value)} weeks"
    return _as_text(value)


def _put_optional(target: Dict[str, Any], key: str, value: Any) -> None:
    text = _as_text(value)
    if text:
        target[key] = text


def _normalize_campaign(raw: Dict[str, Any], index: int) -> Campaign:
    campaign: Dict[str, Any] = {
        "name": _as_text(raw.get("name")) or f"Campaign {index}",
        "channel": _as_text(raw.get("channel")) or "Other",
        "budget": _as_int(raw.get("budget")),
        "timeline": _timeline(raw.get("timeline")),
        "expectedReach": _as_int(raw.get("expectedReach")),
    }
    _put_optional(campaign, "description", raw.get("description"))
    _put_optional(campaign, "costBreakdown", raw.get("costBreakdown"))
    return campaign  # type: ignore[return-value]


def _normalize_budget_item(raw: Dict[str, Any], index: int) -> BudgetItem:
    item: Dict[str, Any] = {
        "category": _as_text(raw.get("category")) or f"Category {index}",
        "amount": _as_int(raw.get("amount")),
        "percentage": _as_int(raw.get("percentage"), minimum=0, maximum=100),
    }
    _put_optional(item, "explanation", raw.get("explanation"))
    return item  # type: ignore[return-value]


def _normalize_segment(raw: Dict[str, Any], index: int) -> Segment:
    segment: Dict[str, Any] = {
        "name": _as_text(raw.get("name")) or f"Segment {index}",
        "size": _as_int(raw.get("size")),
        "characteristics": _as_text_list(raw.get("characteristics")),
    }
    _put_optional(segment, "reasoning", raw.get("reasoning"))
    return segment  # type: ignore[return-value]


def _normalize_option(raw: Dict[str, Any], index: int) -> StrategyOption:
    return {
        "name": _as_text(raw.get("name")) or f"Option {index}",
        "description": _as_text(raw.get("description")),
        "pros": _as_text_list(raw.get("pros")),
        "cons": _as_text_list(raw.get("cons")),
    }


def normalize_strategy_payload(payload: Any) -> StrategyData:
    """
    Shape a parsed model payload into StrategyData.

    Absent list fields become empty lists. Numeric fields are coerced to
    non-negative integers and percentages are clamped to 0..100. Totals are not
    reconciled against the requested budget; see audit_budget_allocation.
    """
    if not isinstance(payload, dict):
        payload = {}
    return {
        "campaigns": [
            _normalize_campaign(raw, i) for i, raw in enumerate(_as_dict_list(payload.get("campaigns")), 1)
        ],
        "budgetAllocation": [
            _normalize_budget_item(raw, i) for i, raw in enumerate(_as_dict_list(payload.get("budgetAllocation")), 1)
        ],
        "targetSegments": [
            _normalize_segment(raw, i) for i, raw in enumerate(_as_dict_list(payload.get("targetSegments")), 1)
        ],
        "actionableTips": _as_text_list(payload.get("actionableTips")),
        "strategyOptions": [
            _normalize_option(raw, i) for i, raw in enumerate(_as_dict_list(payload.get("strategyOptions")), 1)
        ],
    }


def audit_budget_allocation(
    strategy: StrategyData,
    total_budget: float,
    percentage_tolerance: int = 2,
    amount_tolerance: float = 0.05,
) -> Dict[str, Any]:
    """
    Compare the allocation against the requested budget. Reports only; nothing is rescaled.
    """
    allocation = strategy.get("budgetAllocation") or []
    allocated = sum(int(item.get("amount", 0) or 0) for item in allocation)
    percentage_total = sum(int(item.get("percentage", 0) or 0) for item in allocation)
    campaign_total = sum(int(c.get("budget", 0) or 0) for c in strategy.get("campaigns") or [])
    warnings: List[str] = []

    if not allocation:
        warnings.append("No budget allocation was provided.")
    else:
        if abs(percentage_total - 100) > percentage_tolerance:
            warnings.append(f"Allocation percentages sum to {percentage_total}%, not 100%.")
        if total_budget > 0 and abs(allocated - total_budget) > total_budget * amount_tolerance:
            warnings.append(
                f"Allocated amounts total ${allocated:,} against a requested budget of ${total_budget:,.0f}."
            )
    if total_budget > 0 and campaign_total > total_budget * (1 + amount_tolerance):
        warnings.append(f"Campaign budgets total ${campaign_total:,}, above the requested budget.")

    return {
        "requested_budget": total_budget,
        "allocated_amount": allocated,
        "percentage_total": percentage_total,
        "campaign_total": campaign_total,
        "amount_gap": round(total_budget - allocated, 2),
        "consistent": not warnings,
        "warnings": warnings,
    }
