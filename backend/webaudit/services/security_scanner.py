"""
TLS security scan.

Makes a single HTTPS GET to the target host, checks the response for the
standard hardening headers and inspects the server certificate. Untrusted
certificates are inspected rather than rejected. Network failures never
raise: they produce a zero-score Security category.
"""
import logging
import math
import ssl
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Mapping
from urllib.parse import ParseResult, urlparse

import httpx
from cryptography import x509

from webaudit.config import settings
from webaudit.schemas.audit import Category, Issue, Priority

logger = logging.getLogger(__name__)

SECURITY_TITLE = "Security"
SECURITY_ICON = "shield"
DEFAULT_TLS_PORT = 443
EXPIRING_SOON_DEDUCTION = 10


@dataclass(frozen=True)
class HeaderRule:
    header: str
    deduction: int
    issue: Issue


HEADER_RULES: tuple[HeaderRule, ...] = (
    HeaderRule(
        header="strict-transport-security",
        deduction=25,
        issue=Issue(
            title="HTTP Strict Transport Security (HSTS) Not Enabled",
            priority=Priority.CRITICAL,
            description="HSTS header is missing, leaving the site vulnerable to protocol downgrade attacks and cookie hijacking.",
            recommendation="Implement the HSTS header to force browsers to always use HTTPS.",
        ),
    ),
    HeaderRule(
        header="content-security-policy",
        deduction=20,
        issue=Issue(
            title="Content Security Policy (CSP) Not Found",
            priority=Priority.MEDIUM,
            description="CSP header is not configured, increasing the risk of Cross-Site Scripting (XSS) attacks.",
            recommendation="Implement a strict CSP to control which resources can be loaded and executed.",
        ),
    ),
    HeaderRule(
        header="x-frame-options",
        deduction=20,
        issue=Issue(
            title="Clickjacking Protection Missing",
            priority=Priority.MEDIUM,
            description="The X-Frame-Options header is not set, which could allow an attacker to embed your site in a malicious one.",
            recommendation='Set the X-Frame-Options header to "DENY" or "SAMEORIGIN" to prevent clickjacking.',
        ),
    ),
)

CERT_INVALID_ISSUE = Issue(
    title="SSL Certificate Invalid",
    priority=Priority.CRITICAL,
    description="Could not validate the SSL/TLS certificate. This will cause major browser warnings.",
    recommendation="Ensure a valid, trusted SSL certificate is installed correctly on the server.",
)

CERT_EXPIRED_ISSUE = Issue(
    title="SSL Certificate Expired",
    priority=Priority.CRITICAL,
    description="The SSL/TLS certificate has expired, which will cause browsers to show security warnings to users.",
    recommendation="Renew the SSL certificate immediately to restore trust and security.",
)


def cert_expiring_issue(days_left: int) -> Issue:
    return Issue(
        title="SSL Certificate Expiring Soon",
        priority=Priority.LOW,
        description=f"The SSL/TLS certificate expires in {days_left} days.",
        recommendation="Renew the SSL certificate soon to avoid service interruption and security warnings.",
    )


def unreachable_issue(host: str) -> Issue:
    return Issue(
        title="Could Not Connect for Security Scan",
        priority=Priority.CRITICAL,
        description=(
            f"Failed to perform security scan. Could not connect to the host at {host}. "
            "This could be a firewall issue or the server is down."
        ),
        recommendation="Ensure the domain is correct and the server is accessible over HTTPS (port 443).",
    )


def evaluate_security(
    headers: Mapping[str, str],
    cert_expiry: datetime | None,
    now: datetime,
    warning_days: int = 30,
) -> tuple[int, list[Issue]]:
    """
    Fold the header rules and the certificate rule over a starting score of 100.

    Every header rule is evaluated. An invalid or expired certificate forces
    the score to 0 regardless of header deductions.

    Returns:
        Tuple of (score clamped to >= 0, issues in evaluation order)
    """
    headers = httpx.Headers(headers)
    score = 100
    issues: list[Issue] = []

    for rule in HEADER_RULES:
        if not headers.get(rule.header):
            score -= rule.deduction
            issues.append(rule.issue)

    if cert_expiry is None:
        issues.append(CERT_INVALID_ISSUE)
        score = 0
    else:
        days_until_expiry = (cert_expiry - now).total_seconds() / 86400
        if days_until_expiry < 0:
            issues.append(CERT_EXPIRED_ISSUE)
            score = 0
        elif days_until_expiry < warning_days:
            issues.append(cert_expiring_issue(math.floor(days_until_expiry)))
            score -= EXPIRING_SOON_DEDUCTION

    return max(0, score), issues


def build_ssl_context() -> ssl.SSLContext:
    """TLS context that completes the handshake even for untrusted certificates."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def peer_certificate_expiry(response: httpx.Response) -> datetime | None:
    """Read the expiry of the certificate presented on the response's connection."""
    stream = response.extensions.get("network_stream")
    if stream is None:
        return None

    ssl_object = stream.get_extra_info("ssl_object")
    if ssl_object is None:
        return None

    der = ssl_object.getpeercert(binary_form=True)
    if not der:
        return None

    try:
        certificate = x509.load_der_x509_certificate(der)
    except ValueError as e:
        logger.warning(f"[Security] Could not parse peer certificate: {e}")
        return None

    return certificate.not_valid_after_utc


class SecurityScanner:
    """Header and certificate checks over one TLS request."""

    def __init__(
        self,
        timeout: float | None = None,
        warning_days: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.timeout = timeout if timeout is not None else settings.SECURITY_SCAN_TIMEOUT
        self.warning_days = warning_days if warning_days is not None else settings.CERT_EXPIRY_WARNING_DAYS
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def run_security_scan(self, url: str) -> Category:
        """
        Scan a URL's host over TLS.

        Args:
            url: Target URL; http URLs are still scanned over TLS

        Returns:
            Security category. Connection failures give score 0 and a single
            critical issue instead of raising.
        """
        logger.info(f"[Security] Running security checks for {url}")
        parsed = urlparse(url)
        host = parsed.hostname or ""

        try:
            target = self._target_url(parsed)
            headers, cert_expiry = await self._fetch(target)
        except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError) as e:
            logger.error(f"[Security] Security scan error for {host or url}: {e}")
            return Category(
                title=SECURITY_TITLE,
                icon=SECURITY_ICON,
                score=0,
                issues=[unreachable_issue(host)],
            )

        score, issues = evaluate_security(
            headers,
            cert_expiry,
            now=self.clock(),
            warning_days=self.warning_days,
        )
        logger.info(f"[Security] {host}: score={score}, issues={len(issues)}")

        return Category(title=SECURITY_TITLE, icon=SECURITY_ICON, score=score, issues=issues)

    def _target_url(self, parsed: ParseResult) -> str:
        host = parsed.hostname
        if not host:
            raise ValueError("URL has no host")
        if ":" in host:
            host = f"[{host}]"
        port = parsed.port or DEFAULT_TLS_PORT
        path = parsed.path or "/"
        return f"https://{host}:{port}{path}"

    async def _fetch(self, target_url: str) -> tuple[httpx.Headers, datetime | None]:
        """Issue the GET and capture headers and peer certificate before the connection closes."""
        async with httpx.AsyncClient(
            verify=build_ssl_context(),
            timeout=self.timeout,
            trust_env=False,
        ) as client:
            async with client.stream("GET", target_url) as response:
                return response.headers, peer_certificate_expiry(response)
