"""Checks de variaveis de ambiente, executaveis e do interpretador Python."""

from __future__ import annotations

import asyncio
import importlib.util
import os
import shutil
import sys

import structlog

from envdoctor.checks.base import DoctorCheck
from envdoctor.models import DiagnosticResult

logger = structlog.get_logger()


class EnvVarCheck(DoctorCheck):
    def __init__(self, var: str, hint: str | None = None, optional: bool = False) -> None:
        super().__init__(autofix=False)
        self.var = var
        self.hint = hint
        self.optional = optional

    @property
    def name(self) -> str:
        return f"EnvVarCheck[{self.var}]"

    async def diagnose(self) -> DiagnosticResult:
        value = os.environ.get(self.var)
        if value:
            return DiagnosticResult.passed(f"{self.var} is set to: {value}", self.optional)
        return DiagnosticResult.failed(f"{self.var} is NOT set!", self.optional)

    async def fix(self) -> str:
        message = f"Set the environment variable {self.var}"
        if self.hint:
            message += f" ({self.hint})"
        return message


class ExecutableCheck(DoctorCheck):
    """Verifica se um executavel esta no PATH."""

    def __init__(
        self, binary: str, install_hint: str | None = None, optional: bool = False
    ) -> None:
        super().__init__(autofix=False)
        self.binary = binary
        self.install_hint = install_hint
        self.optional = optional

    @property
    def name(self) -> str:
        return f"ExecutableCheck[{self.binary}]"

    async def diagnose(self) -> DiagnosticResult:
        path = await asyncio.to_thread(shutil.which, self.binary)
        if path:
            return DiagnosticResult.passed(f"{self.binary} was found at: {path}", self.optional)
        return DiagnosticResult.failed(f"{self.binary} cannot be found", self.optional)

    async def fix(self) -> str:
        return self.install_hint or f"Install {self.binary} and make sure it is in your PATH"


class PythonVersionCheck(DoctorCheck):
    def __init__(self, minimum: tuple[int, ...] = (3, 11)) -> None:
        super().__init__(autofix=False)
        self.minimum = tuple(minimum)

    @property
    def required_version(self) -> str:
        return ".".join(str(p) for p in self.minimum)

    async def diagnose(self) -> DiagnosticResult:
        current = ".".join(str(p) for p in sys.version_info[:3])
        if sys.version_info[: len(self.minimum)] >= self.minimum:
            return DiagnosticResult.passed(f"Python {current} (>= {self.required_version})")
        return DiagnosticResult.failed(
            f"Python {current} is older than the required {self.required_version}"
        )

    async def fix(self) -> str:
        return f"Install Python {self.required_version} or newer"


class PythonPackageCheck(DoctorCheck):
    """Verifica se um pacote Python pode ser importado."""

    def __init__(
        self, package: str, distribution: str | None = None, optional: bool = False
    ) -> None:
        super().__init__(autofix=False)
        self.package = package
        self.distribution = distribution or package
        self.optional = optional

    @property
    def name(self) -> str:
        return f"PythonPackageCheck[{self.package}]"

    async def diagnose(self) -> DiagnosticResult:
        try:
            found = importlib.util.find_spec(self.package) is not None
        except (ImportError, ValueError):
            logger.debug("find_spec_failed", package=self.package, exc_info=True)
            found = False

        if found:
            return DiagnosticResult.passed(
                f"Python package {self.package} is installed", self.optional
            )
        return DiagnosticResult.failed(
            f"Python package {self.package} is NOT installed", self.optional
        )

    async def fix(self) -> str:
        return f"pip install {self.distribution}"
