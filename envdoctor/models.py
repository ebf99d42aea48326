"""Modelos de dados do envdoctor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from envdoctor.checks.base import Check


@dataclass(frozen=True)
class DiagnosticResult:
    """Resultado imutavel de um diagnose()."""

    ok: bool
    message: str
    optional: bool = False

    @classmethod
    def passed(cls, message: str, optional: bool = False) -> DiagnosticResult:
        return cls(ok=True, message=message, optional=optional)

    @classmethod
    def failed(cls, message: str, optional: bool = False) -> DiagnosticResult:
        return cls(ok=False, message=message, optional=optional)


@dataclass
class FixCandidate:
    """Check que falhou e pode ser corrigido nesta execucao."""

    error: str
    check: Check
    fixed: bool = False


@dataclass(frozen=True)
class ManualInstruction:
    text: str
    optional: bool = False


class FixStatus(StrEnum):
    FIXED = "fixed"
    UNRESOLVED = "unresolved"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FixOutcome:
    """Resultado de uma tentativa de fix automatico."""

    status: FixStatus
    error: str
    message: str = ""


class RunOutcome(StrEnum):
    ALL_CLEAN = "all-clean"
    MANUAL_FIXES_PENDING = "manual-fixes-pending"
    AUTO_FIXES_ATTEMPTED = "auto-fixes-attempted"


@dataclass
class DoctorReport:
    outcome: RunOutcome
    version: str
    to_fix: list[FixCandidate] = field(default_factory=list)
    to_fix_optionals: list[FixCandidate] = field(default_factory=list)
    manual_instructions: list[ManualInstruction] = field(default_factory=list)
    fix_outcomes: list[FixOutcome] = field(default_factory=list)

    @property
    def remaining(self) -> list[FixCandidate]:
        if self.outcome == RunOutcome.ALL_CLEAN:
            return []
        return [f for f in self.to_fix if not f.fixed]

    @property
    def healthy(self) -> bool:
        """Limpo, ou so com fixes automaticos aplicados; manual pendente nunca e."""
        if self.outcome == RunOutcome.MANUAL_FIXES_PENDING:
            return False
        return not self.remaining

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "outcome": self.outcome.value,
            "required": [
                {"error": f.error, "autofix": f.check.autofix, "fixed": f.fixed}
                for f in self.to_fix
            ],
            "optional": [
                {"error": f.error, "autofix": f.check.autofix, "fixed": f.fixed}
                for f in self.to_fix_optionals
            ],
            "manual_fixes": [
                {"text": m.text, "optional": m.optional} for m in self.manual_instructions
            ],
            "auto_fixes": [
                {"error": o.error, "status": o.status.value, "message": o.message}
                for o in self.fix_outcomes
            ],
            "remaining": len(self.remaining),
        }
