"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from envdoctor.checks.base import DoctorCheck
from envdoctor.config import reset_config
from envdoctor.models import DiagnosticResult


class RecordingSink:
    """Captures progress events as (kind, text) tuples."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def info(self, text: str) -> None:
        self.events.append(("info", text))

    def success(self, text: str) -> None:
        self.events.append(("success", text))

    def warn(self, text: str) -> None:
        self.events.append(("warn", text))

    def fail(self, text: str) -> None:
        self.events.append(("fail", text))

    def texts(self, kind: str | None = None) -> list[str]:
        return [t for k, t in self.events if kind is None or k == kind]


class FakeCheck(DoctorCheck):
    """Returns scripted results; the last one repeats once the script runs out."""

    def __init__(
        self,
        results: DiagnosticResult | Sequence[DiagnosticResult],
        autofix: bool = False,
        fix_result: str | None = None,
        fix_error: Exception | None = None,
        label: str = "fake",
    ) -> None:
        super().__init__(autofix=autofix)
        if isinstance(results, DiagnosticResult):
            results = [results]
        self.results = list(results)
        self.fix_result = fix_result
        self.fix_error = fix_error
        self.label = label
        self.diagnose_calls = 0
        self.fix_calls = 0

    @property
    def name(self) -> str:
        return self.label

    async def diagnose(self) -> DiagnosticResult:
        index = min(self.diagnose_calls, len(self.results) - 1)
        self.diagnose_calls += 1
        return self.results[index]

    async def fix(self) -> str | None:
        self.fix_calls += 1
        if self.fix_error is not None:
            raise self.fix_error
        return self.fix_result


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fake_check() -> type[FakeCheck]:
    return FakeCheck


@pytest.fixture(autouse=True)
def _clean_config():
    reset_config()
    yield
    reset_config()
