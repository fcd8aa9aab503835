"""
Lighthouse CLI client.

Runs Lighthouse against an already running Chromium instance (attached via
its remote debugging port) and returns the parsed Lighthouse result (LHR).
"""
import asyncio
import json
import logging
from typing import Any, Protocol, Sequence

from webaudit.config import settings
from webaudit.core.exceptions import ScanExecutionError

logger = logging.getLogger(__name__)


class PerformanceEngine(Protocol):
    async def run(self, url: str, port: int, categories: Sequence[str]) -> dict[str, Any]: ...


class LighthouseRunner:
    """Executes the ``lighthouse`` binary as a subprocess."""

    LOG_LEVEL_FLAGS = {
        "silent": ["--quiet"],
        "error": ["--quiet"],
        "info": [],
        "verbose": ["--verbose"],
    }

    def __init__(
        self,
        binary: str | None = None,
        timeout: int | None = None,
        log_level: str | None = None,
    ):
        self.binary = binary or settings.LIGHTHOUSE_PATH
        self.timeout = timeout or settings.LIGHTHOUSE_TIMEOUT
        self.log_level = (log_level or settings.LIGHTHOUSE_LOG_LEVEL).lower()

    def build_command(self, url: str, port: int, categories: Sequence[str]) -> list[str]:
        return [
            self.binary,
            url,
            f"--port={port}",
            "--output=json",
            "--output-path=stdout",
            f"--only-categories={','.join(categories)}",
            *self.LOG_LEVEL_FLAGS.get(self.log_level, []),
        ]

    async def run(self, url: str, port: int, categories: Sequence[str]) -> dict[str, Any]:
        """
        Run Lighthouse for the given categories.

        Args:
            url: Page to audit
            port: Chromium remote debugging port
            categories: Lighthouse category ids

        Returns:
            Lighthouse result with ``categories`` and ``audits``

        Raises:
            ScanExecutionError: if Lighthouse cannot run, times out, exits
                non-zero or prints something other than a Lighthouse result
        """
        cmd = self.build_command(url, port, categories)
        logger.info(f"[Lighthouse] Running for {url} on port {port}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"[Lighthouse] Could not start {self.binary}: {e}")
            raise ScanExecutionError(f"Lighthouse could not be started: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            logger.error(f"[Lighthouse] Timeout after {self.timeout}s auditing {url}")
            raise ScanExecutionError(f"Lighthouse timed out after {self.timeout}s") from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()[-500:]
            logger.error(f"[Lighthouse] Exited with {process.returncode}: {message}")
            raise ScanExecutionError(f"Lighthouse failed with exit code {process.returncode}")

        return self.parse_output(stdout)

    def parse_output(self, stdout: bytes) -> dict[str, Any]:
        try:
            data = json.loads(stdout)
        except ValueError as e:
            raise ScanExecutionError(f"Lighthouse returned invalid JSON: {e}") from e

        # Accept both a bare LHR and a runner result wrapping it
        if isinstance(data, dict) and "lhr" in data:
            data = data["lhr"]

        if not isinstance(data, dict) or not isinstance(data.get("categories"), dict) or not isinstance(data.get("audits"), dict):
            raise ScanExecutionError("Lighthouse output is missing categories or audits")

        runtime_error = data.get("runtimeError")
        if isinstance(runtime_error, dict):
            logger.warning(f"[Lighthouse] Runtime error reported: {runtime_error.get('message', runtime_error)}")

        return data
