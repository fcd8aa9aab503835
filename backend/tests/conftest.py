"""
Pytest configuration and fixtures for webaudit tests.
"""
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from lighthouse_reports import sample_lhr as make_sample_lhr
from webaudit.api.audit import get_audit_service
from webaudit.core.exceptions import BrowserLaunchError
from webaudit.integrations.browser import BrowserSession
from webaudit.schemas.audit import Category
from webaudit.services.audit_service import AuditService
from webaudit.services.performance_service import PerformanceService
from webaudit.services.security_scanner import SecurityScanner

FROZEN_NOW = datetime(2026, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


# ============================================================================
# Fakes for the external collaborators
# ============================================================================

class FakeLauncher:
    """Browser launcher that records launches and kills without starting a process."""

    def __init__(self, fail_with: Exception | None = None, port: int = 9222):
        self.fail_with = fail_with
        self.port = port
        self.launched: list[BrowserSession] = []
        self.killed: list[BrowserSession] = []

    async def launch(self) -> BrowserSession:
        if self.fail_with is not None:
            raise self.fail_with
        session = BrowserSession(port=self.port)
        self.launched.append(session)
        return session

    async def kill(self, session: BrowserSession) -> None:
        self.killed.append(session)


class FakeEngine:
    """Performance engine returning a canned Lighthouse result."""

    def __init__(self, result: dict | None = None, fail_with: Exception | None = None):
        self.result = result
        self.fail_with = fail_with
        self.calls: list[tuple] = []

    async def run(self, url, port, categories):
        self.calls.append((url, port, tuple(categories)))
        if self.fail_with is not None:
            raise self.fail_with
        return self.result


# ============================================================================
# Sample Data Fixtures
# ============================================================================

@pytest.fixture
def sample_lhr() -> dict:
    """Sample Lighthouse result."""
    return make_sample_lhr()


@pytest.fixture
def frozen_now() -> datetime:
    return FROZEN_NOW


@pytest.fixture
def hardened_headers() -> dict:
    """Response headers with every checked security header present."""
    return {
        "Strict-Transport-Security": "max-age=63072000; includeSubDomains",
        "Content-Security-Policy": "default-src 'self'",
        "X-Frame-Options": "DENY",
        "Content-Type": "text/html; charset=utf-8",
    }


@pytest.fixture
def far_expiry() -> datetime:
    """Certificate expiry comfortably in the future."""
    return FROZEN_NOW + timedelta(days=200)


@pytest.fixture
def security_category() -> Category:
    return Category(title="Security", icon="shield", score=100, issues=[])


# ============================================================================
# Collaborator Fixtures
# ============================================================================

@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def failing_launcher() -> FakeLauncher:
    return FakeLauncher(fail_with=BrowserLaunchError("chromium missing"))


@pytest.fixture
def fake_engine(sample_lhr) -> FakeEngine:
    return FakeEngine(result=sample_lhr)


@pytest.fixture
def engine_factory():
    """Build engines with a custom result or failure."""
    return FakeEngine


@pytest.fixture
def launcher_factory():
    """Build launchers with a custom failure."""
    return FakeLauncher


@pytest.fixture
def stub_security(security_category):
    """Security scanner stub returning a fixed category."""
    scanner = AsyncMock(spec=SecurityScanner)
    scanner.run_security_scan = AsyncMock(return_value=security_category)
    return scanner


@pytest.fixture
def audit_service(fake_launcher, fake_engine, stub_security) -> AuditService:
    return AuditService(
        launcher=fake_launcher,
        performance=PerformanceService(engine=fake_engine),
        security=stub_security,
    )


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def app(audit_service: AuditService) -> FastAPI:
    """Create test FastAPI application with fake collaborators."""
    from webaudit.main import app as main_app

    main_app.dependency_overrides[get_audit_service] = lambda: audit_service

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
