from typing import Any, Dict, List, TypedDict

import pandas as pd

SAMPLE_ROWS = 5
SEGMENTATION_MIN_ROWS = 10
TOP_CATEGORIES = 3


class CSVInsight(TypedDict):
    totalRows: int
    columns: List[str]
    sampleData: List[Dict[str, str]]
    insights: List[str]


def empty_insight() -> CSVInsight:
    return {"totalRows": 0, "columns": [], "sampleData": [], "insights": []}


def _fmt_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _numeric_values(series: pd.Series) -> pd.Series:
    cleaned = series.astype(str).str.strip()
    cleaned = cleaned[cleaned != ""]
    numeric = pd.to_numeric(cleaned, errors="coerce")
    numeric = numeric[numeric.notna()]
    return numeric[numeric.abs() != float("inf")]


def analyze_csv_data(rows: List[Dict[str, Any]]) -> CSVInsight:
    """
    Summarize parsed CSV rows into one-line insights for the strategy prompt.

    Numeric columns report mean and range. Columns that repeat a handful of
    values report their category count and the first three values seen.
    """
    if not rows:
        return empty_insight()

    columns = [str(c) for c in rows[0].keys()]
    df = pd.DataFrame(rows, columns=columns).fillna("").astype(str)
    row_count = len(df)
    insights: List[str] = []

    for column in columns:
        numeric = _numeric_values(df[column])
        if numeric.empty:
            continue
        insights.append(
            f"{column}: Average {numeric.mean():.2f} "
            f"(Range: {_fmt_number(numeric.min())}-{_fmt_number(numeric.max())})"
        )

    for column in columns:
        values = df[column]
        distinct = [v for v in pd.unique(values) if v != ""]
        if 1 < len(distinct) < row_count:
            top = ", ".join(distinct[:TOP_CATEGORIES])
            insights.append(f"{column}: {len(distinct)} unique categories - Top: {top}")

    if row_count > SEGMENTATION_MIN_ROWS:
        insights.append(f"Dataset size: {row_count} records - suitable for segmentation analysis")

    return {
        "totalRows": row_count,
        "columns": columns,
        "sampleData": [dict(r) for r in rows[:SAMPLE_ROWS]],
        "insights": insights,
    }
