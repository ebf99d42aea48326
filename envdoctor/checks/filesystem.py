from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from envdoctor.checks.base import DoctorCheck
from envdoctor.exceptions import FixFailedError, FixSkippedError
from envdoctor.models import DiagnosticResult

logger = structlog.get_logger()


class DirectoryCheck(DoctorCheck):
    """Garante que um diretorio existe, criando-o quando autofix esta ligado."""

    def __init__(self, path: Path | str, create: bool = True) -> None:
        super().__init__(autofix=create)
        self.path = Path(path).expanduser()

    @property
    def name(self) -> str:
        return f"DirectoryCheck[{self.path}]"

    async def diagnose(self) -> DiagnosticResult:
        if self.path.is_dir():
            return DiagnosticResult.passed(f"Directory {self.path} exists")
        if self.path.exists():
            return DiagnosticResult.failed(f"{self.path} exists but is not a directory")
        return DiagnosticResult.failed(f"Directory {self.path} does not exist")

    async def fix(self) -> str | None:
        if not self.autofix:
            return f"Create the directory {self.path}"

        if self.path.exists() and not self.path.is_dir():
            raise FixSkippedError(f"{self.path} exists and is not a directory, leaving it alone")

        try:
            await asyncio.to_thread(self.path.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise FixFailedError(self.name, str(e)) from e

        logger.info("directory_created", path=str(self.path))
        return None
