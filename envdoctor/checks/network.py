from __future__ import annotations

import time

import httpx
import structlog

from envdoctor.checks.base import DoctorCheck
from envdoctor.config import get_config
from envdoctor.models import DiagnosticResult

logger = structlog.get_logger()


class HttpEndpointCheck(DoctorCheck):
    """Verifica se um endpoint HTTP responde com status < 400."""

    def __init__(
        self,
        label: str,
        url: str,
        optional: bool = True,
        timeout: float | None = None,
    ) -> None:
        super().__init__(autofix=False)
        self.label = label
        self.url = url
        self.optional = optional
        self.timeout = timeout

    @property
    def name(self) -> str:
        return f"HttpEndpointCheck[{self.label}]"

    async def diagnose(self) -> DiagnosticResult:
        config = get_config()
        timeout = self.timeout if self.timeout is not None else config.http_timeout
        start = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=timeout) as http_client:
                response = await http_client.get(self.url, follow_redirects=True)
                latency_ms = int((time.perf_counter() - start) * 1000)

        except httpx.TimeoutException:
            return DiagnosticResult.failed(
                f"{self.label} ({self.url}) timed out after {timeout:.0f}s", self.optional
            )

        except httpx.HTTPError as e:
            logger.debug("endpoint_unreachable", url=self.url, error=str(e))
            return DiagnosticResult.failed(
                f"{self.label} ({self.url}) is unreachable: {e}", self.optional
            )

        if response.status_code >= 400:
            return DiagnosticResult.failed(
                f"{self.label} ({self.url}) answered HTTP {response.status_code}", self.optional
            )

        if latency_ms >= config.slow_threshold_ms:
            return DiagnosticResult.passed(
                f"{self.label} is reachable but slow ({latency_ms}ms)", self.optional
            )
        return DiagnosticResult.passed(f"{self.label} is reachable ({latency_ms}ms)", self.optional)

    async def fix(self) -> str:
        return f"Make sure {self.url} is reachable from this machine (proxy, VPN, firewall)"
