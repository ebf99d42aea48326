"""Contrato dos checks de diagnostico."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import Protocol, runtime_checkable

from envdoctor.models import DiagnosticResult, ManualInstruction

DiagnoseReturn = DiagnosticResult | Awaitable[DiagnosticResult]
FixReturn = str | ManualInstruction | None | Awaitable[str | ManualInstruction | None]


@runtime_checkable
class Check(Protocol):
    """Contrato estrutural consumido pelo Doctor."""

    autofix: bool

    def diagnose(self) -> DiagnoseReturn: ...

    def fix(self) -> FixReturn: ...


class DoctorCheck(ABC):
    """
    Base para checks concretos.

    Checks manuais (autofix=False) devolvem em fix() a instrucao que o
    operador precisa executar e nao alteram nada. Checks automaticos
    aplicam a correcao e podem levantar FixSkippedError.
    """

    def __init__(self, autofix: bool = False) -> None:
        self._autofix = bool(autofix)

    @property
    def autofix(self) -> bool:
        return self._autofix

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def diagnose(self) -> DiagnosticResult:
        pass

    @abstractmethod
    async def fix(self) -> str | None:
        pass

    def __repr__(self) -> str:
        return f"<{self.name} autofix={self.autofix}>"


def check_name(check: object) -> str:
    name = getattr(check, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(check).__name__
