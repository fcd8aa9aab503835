"""
Audit orchestration.

Validates the target URL, holds a headless browser for the duration of the
audit, runs the Lighthouse and TLS security scans concurrently and merges
them into a single report. The browser is released on every exit path.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from urllib.parse import urlparse

from webaudit.core.exceptions import (
    AuditError,
    BrowserLaunchError,
    InvalidInputError,
    ScanExecutionError,
)
from webaudit.integrations.browser import BrowserLauncher, BrowserSession, ChromeLauncher
from webaudit.schemas.audit import Report
from webaudit.services.performance_service import PerformanceService
from webaudit.services.security_scanner import SecurityScanner

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = {"http", "https"}


def validate_url(url: str | None) -> str:
    """Return the URL if it is an absolute http(s) URL with a host, else raise InvalidInputError."""
    if not url or not isinstance(url, str):
        raise InvalidInputError()

    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError as e:
        raise InvalidInputError() from e

    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not host:
        raise InvalidInputError()

    return url


@asynccontextmanager
async def browser_session(launcher: BrowserLauncher) -> AsyncIterator[BrowserSession]:
    """Acquire a browser session and guarantee it is killed exactly once."""
    try:
        session = await launcher.launch()
    except BrowserLaunchError:
        raise
    except Exception as e:
        raise BrowserLaunchError(f"Browser launch failed: {e}") from e

    try:
        yield session
    finally:
        try:
            await launcher.kill(session)
        except Exception as e:
            logger.warning(f"[Browser] Failed to kill browser on port {session.port}: {e}")


def _raise_scan_failure(stage: str, error: BaseException) -> None:
    if isinstance(error, AuditError):
        raise error
    if not isinstance(error, Exception):
        raise error
    logger.error(f"[Audit] {stage} scan failed unexpectedly: {error!r}")
    raise ScanExecutionError(f"{stage} scan failed: {error}") from error


class AuditService:
    """Runs a full single-page audit."""

    def __init__(
        self,
        launcher: BrowserLauncher | None = None,
        performance: PerformanceService | None = None,
        security: SecurityScanner | None = None,
    ):
        self.launcher = launcher or ChromeLauncher()
        self.performance = performance or PerformanceService()
        self.security = security or SecurityScanner()

    async def run_audit(self, url: str | None) -> Report:
        """
        Audit a URL.

        Args:
            url: Absolute http(s) URL

        Returns:
            Report with security, performance, seo and accessibility categories

        Raises:
            InvalidInputError: URL missing or not http(s)
            BrowserLaunchError: headless browser could not be started
            ScanExecutionError: the performance scan failed
        """
        logger.info(f"[Audit] Received audit request for: {url}")
        url = validate_url(url)

        async with browser_session(self.launcher) as session:
            performance_result, security_result = await asyncio.gather(
                self.performance.run_performance_audit(url, session),
                self.security.run_security_scan(url),
                return_exceptions=True,
            )

        if isinstance(performance_result, BaseException):
            _raise_scan_failure("Performance", performance_result)
        if isinstance(security_result, BaseException):
            _raise_scan_failure("Security", security_result)

        report = Report(
            security=security_result,
            performance=performance_result.performance,
            seo=performance_result.seo,
            accessibility=performance_result.accessibility,
        )
        logger.info(
            f"[Audit] Completed {url}: security={report.security.score}, "
            f"performance={report.performance.score}, seo={report.seo.score}, "
            f"accessibility={report.accessibility.score}"
        )
        return report
