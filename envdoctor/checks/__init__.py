from __future__ import annotations

from pathlib import Path

from .base import Check, DoctorCheck, check_name
from .filesystem import DirectoryCheck
from .network import HttpEndpointCheck
from .system import EnvVarCheck, ExecutableCheck, PythonPackageCheck, PythonVersionCheck


def default_checks() -> list[DoctorCheck]:
    """Checks usados pela CLI quando nenhum arquivo de checks e informado."""
    return [
        PythonVersionCheck((3, 11)),
        ExecutableCheck("git", "Install git from https://git-scm.com/downloads"),
        EnvVarCheck("HOME"),
        DirectoryCheck(Path.home() / ".envdoctor"),
        PythonPackageCheck("pip", optional=True),
        HttpEndpointCheck("PyPI", "https://pypi.org/simple/", optional=True),
    ]


__all__: list[str] = [
    "Check",
    "DoctorCheck",
    "check_name",
    "DirectoryCheck",
    "EnvVarCheck",
    "ExecutableCheck",
    "HttpEndpointCheck",
    "PythonPackageCheck",
    "PythonVersionCheck",
    "default_checks",
]
