"""
Normalizes scored audit records into report issues.
"""
import math
import re
from typing import Any

from webaudit.schemas.audit import Issue, Priority

MARKDOWN_LINK_RE = re.compile(r"\[(.*?)\]\(.*?\)")

FALLBACK_RECOMMENDATION = "See Lighthouse report for details."


def round_half_up(value: float) -> int:
    """Round .5 upwards, the way the engine's own reports do."""
    return int(math.floor(value + 0.5))


def strip_markdown_links(text: str) -> str:
    """Replace every ``[text](target)`` with ``text``."""
    return MARKDOWN_LINK_RE.sub(r"\1", text)


def classify_priority(score: float) -> Priority:
    # Order matters: a score of exactly 0 is also < 0.5 and must end up critical.
    priority = Priority.LOW
    if score < 0.5:
        priority = Priority.MEDIUM
    if score == 0:
        priority = Priority.CRITICAL
    return priority


def build_recommendation(description: str, details: dict[str, Any] | None) -> str:
    savings_ms = (details or {}).get("overallSavingsMs")
    if savings_ms:
        return f"Optimizing this could save up to {round_half_up(savings_ms / 1000)}s."
    if description:
        return description
    return FALLBACK_RECOMMENDATION


def is_failing(record: dict[str, Any]) -> bool:
    """Passing (score 1) and not-applicable (score None) records produce no issue."""
    score = record.get("score")
    return score is not None and score != 1


def normalize(record: dict[str, Any]) -> Issue:
    """
    Convert one audit record into an Issue.

    Args:
        record: Audit record with ``title``, ``score`` (0..1), and optional
            ``description`` and ``details``

    Returns:
        Issue with priority, link-free description and recommendation
    """
    description = strip_markdown_links(record.get("description") or "")

    return Issue(
        title=record.get("title") or record.get("id", ""),
        priority=classify_priority(record["score"]),
        description=description,
        recommendation=build_recommendation(description, record.get("details")),
    )
