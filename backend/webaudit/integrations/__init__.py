"""
External service integrations for webaudit.

- browser: headless Chromium launched through Playwright
- lighthouse: Lighthouse CLI for performance, SEO and accessibility audits
"""

from webaudit.integrations.browser import BrowserLauncher, BrowserSession, ChromeLauncher
from webaudit.integrations.lighthouse import LighthouseRunner, PerformanceEngine

__all__ = [
    "BrowserLauncher",
    "BrowserSession",
    "ChromeLauncher",
    "LighthouseRunner",
    "PerformanceEngine",
]
