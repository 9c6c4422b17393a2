import json
import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
import google.generativeai as genai
from openai import OpenAI

from src.agents.prompts import (
    CHANNEL_BENCHMARKS,
    CSV_CONTEXT_TEMPLATE,
    NO_CSV_CONTEXT,
    STRATEGIST_ROLE,
    STRATEGY_OUTPUT_SCHEMA,
    STRATEGY_PROMPT_TEMPLATE,
)
from src.utils.budget import HIGH_TIER_FLOOR, LOW_TIER_CEILING, parse_budget
from src.utils.csv_insights import CSVInsight
from src.utils.fallback_strategy import build_fallback_strategy
from src.utils.prompting import render_prompt
from src.utils.strategy_schema import (
    SOURCE_FALLBACK,
    SOURCE_GENERATED,
    StrategyParseError,
    StrategyResult,
    extract_json_block,
    normalize_strategy_payload,
)

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "google"
DEFAULT_MODELS = {
    "google": "gemini-1.5-flash",
    "openai": "gpt-4o-mini",
}


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("CONFIG_INVALID name=%s value=%r using=%s", name, raw, default)
        return default


def _fmt_budget(budget: float) -> str:
    if float(budget).is_integer():
        return f"${int(budget)}"
    return f"${budget:.2f}"


def build_csv_context(insight: Optional[CSVInsight]) -> str:
    if not insight or not insight.get("totalRows"):
        return NO_CSV_CONTEXT
    return render_prompt(
        CSV_CONTEXT_TEMPLATE,
        total_rows=insight.get("totalRows", 0),
        columns=", ".join(insight.get("columns") or []),
        insights="; ".join(insight.get("insights") or []),
        sample_records=json.dumps(insight.get("sampleData") or [], ensure_ascii=False),
    ).strip()


def build_strategy_prompt(answers: Dict[str, Any], insight: Optional[CSVInsight]) -> str:
    benchmarks = "\n".join(f"- {channel}: {ranges}" for channel, ranges in CHANNEL_BENCHMARKS)
    return render_prompt(
        STRATEGY_PROMPT_TEMPLATE,
        role=STRATEGIST_ROLE,
        product=answers.get("product", ""),
        budget=_fmt_budget(parse_budget(answers.get("budget"))),
        customers=answers.get("customers", ""),
        growth_goal=answers.get("growthGoal", ""),
        csv_context=build_csv_context(insight),
        low_ceiling=int(LOW_TIER_CEILING),
        high_floor=int(HIGH_TIER_FLOOR),
        benchmarks=benchmarks,
        schema=STRATEGY_OUTPUT_SCHEMA.strip(),
    )


def _chat_content(response: Any) -> str:
    choices = getattr(response, "choices", None)
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None) if message is not None else None
    return content if isinstance(content, str) else ""


class MarketingStrategistAgent:
    """
    Turns a business profile and CSV insights into a StrategyData payload.

    One completion request per call; any failure (no credential, transport
    error, empty or unparseable completion) returns the deterministic fallback
    plan tagged with ``source="fallback"``.
    """

    def __init__(self, api_key: str = None, provider: str = None, model_name: str = None):
        self.provider = (provider or os.getenv("STRATEGIST_PROVIDER") or DEFAULT_PROVIDER).strip().lower()
        if self.provider not in DEFAULT_MODELS:
            raise ValueError(f"Unsupported STRATEGIST_PROVIDER: {self.provider}")

        self.model_name = model_name or os.getenv("STRATEGIST_MODEL") or DEFAULT_MODELS[self.provider]
        self.temperature = _env_float("STRATEGIST_TEMPERATURE", 0.4)
        self.timeout = _env_float("STRATEGIST_TIMEOUT_SECONDS", None)
        self.client = None
        self.model = None
        self.last_prompt = None
        self.last_response = None

        if self.provider == "openai":
            self.api_key = api_key or os.getenv("OPENAI_API_KEY")
            if self.api_key:
                self.client = OpenAI(
                    api_key=self.api_key,
                    base_url=os.getenv("OPENAI_BASE_URL") or None,
                    timeout=self.timeout,
                )
        else:
            self.api_key = api_key or os.getenv("GOOGLE_API_KEY")
            if self.api_key:
                genai.configure(api_key=self.api_key)
                self.model = genai.GenerativeModel(
                    model_name=self.model_name,
                    generation_config={
                        "temperature": self.temperature,
                        "max_output_tokens": 8192,
                    },
                )

    @property
    def enabled(self) -> bool:
        return self.client is not None or self.model is not None

    def _call_model(self, prompt: str) -> str:
        if self.provider == "openai":
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
            return _chat_content(response)

        kwargs = {}
        if self.timeout:
            kwargs["request_options"] = {"timeout": self.timeout}
        response = self.model.generate_content(prompt, **kwargs)
        return getattr(response, "text", "") or ""

    def fallback_result(self, answers: Dict[str, Any], reason: str, exc: Exception = None) -> StrategyResult:
        if exc is not None:
            logger.warning(
                "STRATEGIST_FALLBACK reason=%s provider=%s model=%s error=%s message=%s",
                reason,
                self.provider,
                self.model_name,
                type(exc).__name__,
                str(exc)[:200],
            )
        else:
            logger.warning("STRATEGIST_FALLBACK reason=%s provider=%s", reason, self.provider)
        return {
            "strategy": build_fallback_strategy(answers.get("budget")),
            "source": SOURCE_FALLBACK,
            "reason": reason,
            "model": None,
        }

    def generate_strategy(self, answers: Dict[str, Any], insight: Optional[CSVInsight] = None) -> StrategyResult:
        answers = answers or {}
        prompt = build_strategy_prompt(answers, insight)
        self.last_prompt = prompt
        self.last_response = None

        if not self.enabled:
            return self.fallback_result(answers, "missing_api_key")

        logger.info(
            "STRATEGIST_REQUEST provider=%s model=%s prompt_chars=%d",
            self.provider,
            self.model_name,
            len(prompt),
        )
        try:
            text = self._call_model(prompt)
        except Exception as exc:
            return self.fallback_result(answers, "remote_call_failed", exc)

        self.last_response = text
        if not text.strip():
            return self.fallback_result(answers, "empty_response")

        try:
            payload = extract_json_block(text)
        except StrategyParseError as exc:
            return self.fallback_result(answers, "parse_failed", exc)

        return {
            "strategy": normalize_strategy_payload(payload),
            "source": SOURCE_GENERATED,
            "reason": None,
            "model": self.model_name,
        }
