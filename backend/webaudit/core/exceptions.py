"""
Audit exceptions and their HTTP mapping.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "A valid URL is required."
AUDIT_FAILED_MESSAGE = "Failed to complete the audit. The URL may be invalid or the server is down."


class AuditError(Exception):
    """Base class for errors that abort an audit."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = AUDIT_FAILED_MESSAGE

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class InvalidInputError(AuditError):
    """Missing or malformed target URL."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = INVALID_URL_MESSAGE


class BrowserLaunchError(AuditError):
    """The headless browser process could not be started."""


class ScanExecutionError(AuditError):
    """The performance engine (or an unexpected scan step) failed."""


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers that render every failure as ``{"error": ...}``."""

    @app.exception_handler(AuditError)
    async def audit_error_handler(request: Request, exc: AuditError):
        if exc.status_code >= 500:
            logger.error(f"[Audit] {request.url.path} failed: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_URL_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": AUDIT_FAILED_MESSAGE},
        )
