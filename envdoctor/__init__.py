"""envdoctor - diagnostico e correcao do ambiente de desenvolvimento."""

from __future__ import annotations

__version__ = "0.1.0"

from envdoctor.checks import Check, DoctorCheck
from envdoctor.doctor import Doctor
from envdoctor.exceptions import CheckContractError, FixSkippedError
from envdoctor.models import DiagnosticResult, DoctorReport, RunOutcome
from envdoctor.utils.logging import configure_logging

__all__ = [
    "Check",
    "CheckContractError",
    "DiagnosticResult",
    "Doctor",
    "DoctorCheck",
    "DoctorReport",
    "FixSkippedError",
    "RunOutcome",
    "configure_logging",
    "__version__",
]
