"""
Audit endpoint.
"""
from typing import Annotated

from fastapi import APIRouter, Depends

from webaudit.schemas.audit import AuditRequest, Report
from webaudit.schemas.common import ErrorResponse
from webaudit.services.audit_service import AuditService

router = APIRouter(prefix="/audit", tags=["Audit"])


def get_audit_service() -> AuditService:
    return AuditService()


@router.post(
    "",
    response_model=Report,
    summary="Audit a URL",
    description="""
    Run a single-page audit.

    Lighthouse (performance, SEO, accessibility) runs against a fresh headless
    Chromium while a TLS scan checks the security headers and certificate.
    The call blocks until both scans complete.
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid URL"},
        500: {"model": ErrorResponse, "description": "Browser launch or scan failure"},
    },
)
async def run_audit(
    request: AuditRequest,
    service: Annotated[AuditService, Depends(get_audit_service)],
) -> Report:
    """Audit a single URL."""
    return await service.run_audit(request.url)
