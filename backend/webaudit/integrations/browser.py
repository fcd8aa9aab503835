"""
Headless Chromium lifecycle.

Launches Chromium through Playwright with a remote debugging port so that
Lighthouse can attach to it, and tears it down again.

Chromium picks the debugging port itself (``--remote-debugging-port=0``) and
publishes it in ``DevToolsActivePort`` inside the profile directory, so two
concurrent audits can never be handed the same port.
"""
from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from playwright.async_api import async_playwright, Error as PlaywrightError

from webaudit.config import settings
from webaudit.core.exceptions import BrowserLaunchError

logger = logging.getLogger(__name__)

DEVTOOLS_PORT_FILE = "DevToolsActivePort"
PORT_POLL_INTERVAL = 0.05  # seconds


@dataclass
class BrowserSession:
    """A running browser process addressable on ``port``."""
    port: int
    browser: Any = None  # persistent BrowserContext; closing it exits Chromium
    playwright: Any = None
    user_data_dir: str | None = None
    closed: bool = field(default=False)


class BrowserLauncher(Protocol):
    async def launch(self) -> BrowserSession: ...

    async def kill(self, session: BrowserSession) -> None: ...


async def read_devtools_port(user_data_dir: str, timeout: float) -> int | None:
    """
    Wait for Chromium to write the debugging port it bound.

    Returns:
        The port, or None if the file did not appear within ``timeout`` seconds
    """
    path = Path(user_data_dir) / DEVTOOLS_PORT_FILE
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    while True:
        try:
            lines = path.read_text().splitlines()
            if lines:
                return int(lines[0])
        except (OSError, ValueError):
            pass
        if loop.time() >= deadline:
            return None
        await asyncio.sleep(PORT_POLL_INTERVAL)


class ChromeLauncher:
    """Starts and stops headless Chromium via Playwright."""

    def __init__(
        self,
        flags: list[str] | None = None,
        timeout_ms: int | None = None,
    ):
        self.flags = flags if flags is not None else settings.browser_flags_list
        self.timeout_ms = timeout_ms or settings.BROWSER_LAUNCH_TIMEOUT_MS

    async def launch(self) -> BrowserSession:
        """
        Launch a headless Chromium instance with its own profile directory.

        Raises:
            BrowserLaunchError: if Playwright or Chromium fails to start, or
                Chromium never reports its debugging port
        """
        session = BrowserSession(port=0, user_data_dir=tempfile.mkdtemp(prefix="webaudit-chrome-"))

        try:
            session.playwright = await async_playwright().start()
            session.browser = await session.playwright.chromium.launch_persistent_context(
                session.user_data_dir,
                headless=True,
                args=[*self.flags, "--remote-debugging-port=0"],
                timeout=self.timeout_ms,
            )
            port = await read_devtools_port(session.user_data_dir, timeout=self.timeout_ms / 1000)
        except (PlaywrightError, OSError) as e:
            logger.error(f"[Browser] Failed to launch Chromium: {e}")
            await self.kill(session)
            raise BrowserLaunchError(f"Chromium launch failed: {e}") from e

        if port is None:
            logger.error(f"[Browser] Chromium did not publish {DEVTOOLS_PORT_FILE} in {session.user_data_dir}")
            await self.kill(session)
            raise BrowserLaunchError("Chromium did not report a remote debugging port")

        session.port = port
        logger.info(f"[Browser] Chromium launched on debugging port {port}")
        return session

    async def kill(self, session: BrowserSession) -> None:
        """Stop the browser. Safe to call repeatedly and on half-started sessions."""
        if session.closed:
            return
        session.closed = True

        if session.browser is not None:
            try:
                await session.browser.close()
            except Exception as e:
                logger.warning(f"[Browser] Error closing Chromium on port {session.port}: {e}")
            session.browser = None

        if session.playwright is not None:
            try:
                await session.playwright.stop()
            except Exception as e:
                logger.warning(f"[Browser] Error stopping Playwright: {e}")
            session.playwright = None

        if session.user_data_dir is not None:
            shutil.rmtree(session.user_data_dir, ignore_errors=True)
            session.user_data_dir = None

        logger.info(f"[Browser] Chromium instance on port {session.port} killed")
