"""Excecoes tipadas do envdoctor."""

from __future__ import annotations

from pathlib import Path


class EnvDoctorError(Exception):
    """Base para todas as excecoes do envdoctor."""

    pass


class FixSkippedError(EnvDoctorError):
    """Fix automatico decidiu nao agir. Nao e uma falha."""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        super().__init__(reason or "fix skipped")


class FixFailedError(EnvDoctorError):
    """Fix automatico nao conseguiu aplicar a correcao."""

    def __init__(self, check: str, reason: str) -> None:
        self.check = check
        self.reason = reason
        super().__init__(f"Fix failed ({check}): {reason}")


class CheckContractError(EnvDoctorError):
    """Check nao cumpre o contrato {diagnose, fix, autofix}."""

    def __init__(self, check: str, violation: str) -> None:
        self.check = check
        self.violation = violation
        super().__init__(f"Check contract violation in {check}: {violation}")


class CheckLoadError(EnvDoctorError):
    """Arquivo de checks nao pode ser carregado."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot load checks from {self.path}: {reason}")
