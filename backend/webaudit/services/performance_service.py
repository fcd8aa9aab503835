"""
Performance service: turns a Lighthouse run into report categories.
"""
import logging
from dataclasses import dataclass
from typing import Any

from webaudit.core.exceptions import ScanExecutionError
from webaudit.integrations.browser import BrowserSession
from webaudit.integrations.lighthouse import LighthouseRunner, PerformanceEngine
from webaudit.schemas.audit import Category, Issue
from webaudit.services.issue_normalizer import is_failing, normalize, round_half_up

logger = logging.getLogger(__name__)

AUDIT_CATEGORIES = ("performance", "seo", "accessibility")

# category id -> (title, icon)
CATEGORY_META = {
    "performance": ("Performance", "zap"),
    "seo": ("SEO", "trending-up"),
    "accessibility": ("Accessibility", "person-standing"),
}


@dataclass
class PerformanceResult:
    performance: Category
    seo: Category
    accessibility: Category


def extract_issues(audits: dict[str, Any], audit_refs: list[dict[str, Any]]) -> list[Issue]:
    """Normalize every failing audit referenced by a category, in reference order."""
    issues = []
    for ref in audit_refs:
        audit = audits.get(ref.get("id"))
        if audit is None or not is_failing(audit):
            continue
        issues.append(normalize(audit))
    return issues


def build_category(lhr: dict[str, Any], category_id: str) -> Category:
    """Build one report category from a Lighthouse result."""
    category = lhr["categories"].get(category_id)
    if category is None:
        raise ScanExecutionError(f"Lighthouse result has no '{category_id}' category")

    title, icon = CATEGORY_META[category_id]
    score = category.get("score") or 0

    return Category(
        title=title,
        icon=icon,
        score=round_half_up(score * 100),
        issues=extract_issues(lhr["audits"], category.get("auditRefs") or []),
    )


class PerformanceService:
    """Service for Lighthouse performance, SEO and accessibility audits."""

    def __init__(self, engine: PerformanceEngine | None = None):
        self.engine = engine or LighthouseRunner()

    async def run_performance_audit(self, url: str, session: BrowserSession) -> PerformanceResult:
        """
        Audit a URL using the browser session's debugging port.

        Args:
            url: Page to audit
            session: Running browser session the engine attaches to

        Returns:
            PerformanceResult with the three Lighthouse categories

        Raises:
            ScanExecutionError: if the engine fails or its result is malformed
        """
        lhr = await self.engine.run(url, session.port, AUDIT_CATEGORIES)

        try:
            categories = {key: build_category(lhr, key) for key in AUDIT_CATEGORIES}
        except ScanExecutionError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"[Lighthouse] Malformed result for {url}: {e}")
            raise ScanExecutionError(f"Malformed Lighthouse result: {e}") from e

        logger.info(
            f"[Lighthouse] {url}: "
            + ", ".join(f"{key}={c.score}" for key, c in categories.items())
        )
        return PerformanceResult(**categories)
