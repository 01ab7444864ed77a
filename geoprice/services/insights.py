"""Turns a DatasetSummary into the prompt sent to the text-generation service."""

from __future__ import annotations

from typing import Optional

from ..core.config import settings
from ..core.errors import InsufficientDataError
from ..core.utils import format_currency, format_date, format_number
from ..data.base import DatasetSummary
from ..schemas import InsightRequest

ANALYST_PREAMBLE = (
    "You are an expert real estate market analyst. Analyze the following dataset "
    "summary and generate a human-readable summary of key market insights and trends."
)

FOCUS_INSTRUCTION = (
    "Consider the user prompt while generating the insights. "
    "Focus your analysis based on the prompt."
)

CLOSING_INSTRUCTIONS = (
    "Focus on identifying the most significant trends, patterns, and anomalies in the data. "
    "Provide actionable insights that would be valuable to real estate investors and analysts.\n"
    "\n"
    "Output Format:\n"
    "A concise summary of key insights and trends."
)


def format_dataset_summary(summary: DatasetSummary, currency: Optional[str] = None) -> str:
    currency = currency or settings.DEFAULT_CURRENCY
    lines = [
        f"- Number of properties: {summary.count}",
        f"- Sale date range: {format_date(summary.min_date)} to {format_date(summary.max_date)}",
        f"- Price range: {format_currency(summary.min_price, currency)} to {format_currency(summary.max_price, currency)}",
        f"- Average price: {format_currency(summary.avg_price, currency)}",
        f"- Square footage range: {format_number(summary.min_area)} to {format_number(summary.max_area)} sqft",
        f"- Average square footage: {summary.avg_area:,.2f} sqft",
        f"- Average price per square foot: {format_currency(summary.avg_price_per_area, currency)}",
    ]
    return "\n".join(lines)


def _clean_focus(focus: Optional[str]) -> Optional[str]:
    if focus is None:
        return None
    focus = focus.strip()
    return focus or None


def build_insight_request(
    summary: Optional[DatasetSummary],
    focus: Optional[str] = None,
    currency: Optional[str] = None,
) -> InsightRequest:
    if summary is None:
        raise InsufficientDataError("Please load data to generate insights.")
    return InsightRequest(
        dataset_summary=format_dataset_summary(summary, currency),
        user_prompt=_clean_focus(focus),
    )


def render_prompt(request: InsightRequest) -> str:
    """Full analyst prompt: summary block, optional focus, output instructions."""
    parts = [ANALYST_PREAMBLE, "", "Dataset Summary:", request.dataset_summary.strip(), ""]
    focus = _clean_focus(request.user_prompt)
    if focus:
        parts += [f"User Prompt: {focus}", "", FOCUS_INSTRUCTION, ""]
    parts.append(CLOSING_INSTRUCTIONS)
    return "\n".join(parts)


def build_insight_prompt(
    summary: Optional[DatasetSummary],
    focus: Optional[str] = None,
    currency: Optional[str] = None,
) -> str:
    return render_prompt(build_insight_request(summary, focus, currency))
