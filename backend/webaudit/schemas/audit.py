"""
Audit report schemas.

A report is four scored categories, each holding a list of normalized issues.
"""
from enum import Enum

from pydantic import ConfigDict, Field

from webaudit.schemas.common import BaseSchema


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    CRITICAL = "critical"


class Issue(BaseSchema):
    """A single user-facing finding."""

    model_config = ConfigDict(frozen=True)

    title: str
    priority: Priority
    description: str
    recommendation: str


class Category(BaseSchema):
    """One scored section of the report."""

    title: str
    icon: str
    score: int = Field(..., ge=0, le=100)
    issues: list[Issue] = Field(default_factory=list)


class Report(BaseSchema):
    """Combined audit report."""

    security: Category
    performance: Category
    seo: Category
    accessibility: Category

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "security": {
                    "title": "Security",
                    "icon": "shield",
                    "score": 80,
                    "issues": [
                        {
                            "title": "Content Security Policy (CSP) Not Found",
                            "priority": "medium",
                            "description": "CSP header is not configured, increasing the risk of Cross-Site Scripting (XSS) attacks.",
                            "recommendation": "Implement a strict CSP to control which resources can be loaded and executed.",
                        }
                    ],
                },
                "performance": {"title": "Performance", "icon": "zap", "score": 92, "issues": []},
                "seo": {"title": "SEO", "icon": "trending-up", "score": 100, "issues": []},
                "accessibility": {"title": "Accessibility", "icon": "person-standing", "score": 88, "issues": []},
            }
        }
    )


class AuditRequest(BaseSchema):
    """Request to audit a single URL."""

    url: str | None = Field(
        None,
        description="Absolute http(s) URL to audit",
        examples=["https://example.com"],
    )
