from webaudit.schemas.common import BaseSchema, ErrorResponse, HealthResponse
from webaudit.schemas.audit import AuditRequest, Category, Issue, Priority, Report

__all__ = [
    "BaseSchema",
    "ErrorResponse",
    "HealthResponse",
    "AuditRequest",
    "Category",
    "Issue",
    "Priority",
    "Report",
]
