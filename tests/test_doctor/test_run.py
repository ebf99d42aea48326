"""End-to-end tests for Doctor.run()."""

from __future__ import annotations

import pytest

from envdoctor import __version__
from envdoctor.doctor import Doctor
from envdoctor.exceptions import FixSkippedError
from envdoctor.models import DiagnosticResult, FixStatus, RunOutcome

BROKEN = DiagnosticResult.failed("broken")
FIXED = DiagnosticResult.passed("works now")


class TestRun:
    @pytest.mark.asyncio
    async def test_all_clean(self, sink, fake_check):
        doctor = Doctor(sink=sink, app_title="Test Doctor")
        doctor.register([fake_check(DiagnosticResult.passed("fine")) for _ in range(2)])

        report = await doctor.run()

        assert report.outcome == RunOutcome.ALL_CLEAN
        assert report.to_fix == []
        assert report.to_fix_optionals == []
        assert report.healthy is True
        assert sink.events[0] == ("info", f"Test Doctor v.{__version__}")
        assert ("success", "Everything looks good, bye!") in sink.events

    @pytest.mark.asyncio
    async def test_manual_fix_scenario(self, sink, fake_check):
        passing = fake_check(DiagnosticResult.passed("A is fine"))
        failing = fake_check(DiagnosticResult.failed("X is missing"), fix_result="install X")
        doctor = Doctor(sink=sink)
        doctor.register([passing, failing])

        report = await doctor.run()

        assert report.outcome == RunOutcome.MANUAL_FIXES_PENDING
        assert (
            "info",
            "### Diagnostic for necessary dependencies completed, one fix needed. ###",
        ) in sink.events
        assert sink.texts("warn") == [" ➜ install X"]
        assert [m.text for m in report.manual_instructions] == ["install X"]
        assert report.fix_outcomes == []
        assert failing.fix_calls == 1
        assert report.healthy is False

    @pytest.mark.asyncio
    async def test_manual_fixes_block_auto_fixes(self, sink, fake_check):
        manual = fake_check(BROKEN, fix_result="do it by hand")
        auto = fake_check([BROKEN, FIXED], autofix=True)
        doctor = Doctor(sink=sink)
        doctor.register([auto, manual])

        report = await doctor.run()

        assert report.outcome == RunOutcome.MANUAL_FIXES_PENDING
        assert auto.fix_calls == 0

    @pytest.mark.asyncio
    async def test_optional_manual_fix_blocks_auto_fixes(self, sink, fake_check):
        optional = fake_check(
            DiagnosticResult.failed("nice to have", optional=True), fix_result="maybe install"
        )
        auto = fake_check([BROKEN, FIXED], autofix=True)
        doctor = Doctor(sink=sink)
        doctor.register([optional, auto])

        report = await doctor.run()

        assert report.outcome == RunOutcome.MANUAL_FIXES_PENDING
        assert auto.fix_calls == 0
        assert report.manual_instructions[0].optional is True

    @pytest.mark.asyncio
    async def test_optional_manual_fix_alone_is_not_healthy(self, sink, fake_check):
        optional = fake_check(
            DiagnosticResult.failed("nice to have", optional=True), fix_result="maybe install"
        )
        doctor = Doctor(sink=sink)
        doctor.register(optional)

        report = await doctor.run()

        assert report.outcome == RunOutcome.MANUAL_FIXES_PENDING
        assert report.to_fix == []
        assert report.remaining == []
        assert report.healthy is False

    @pytest.mark.asyncio
    async def test_auto_fixes_are_verified(self, sink, fake_check):
        fixable = fake_check([BROKEN, FIXED], autofix=True, label="fixable")
        stubborn = fake_check(BROKEN, autofix=True, label="stubborn")
        skipped = fake_check(BROKEN, autofix=True, fix_error=FixSkippedError(), label="skipped")
        doctor = Doctor(sink=sink)
        doctor.register([fixable, stubborn, skipped])

        report = await doctor.run()

        assert report.outcome == RunOutcome.AUTO_FIXES_ATTEMPTED
        assert [f.fixed for f in report.to_fix] == [True, False, False]
        assert [o.status for o in report.fix_outcomes] == [
            FixStatus.FIXED,
            FixStatus.UNRESOLVED,
            FixStatus.SKIPPED,
        ]
        assert [f.check for f in report.remaining] == [stubborn, skipped]
        assert fixable.diagnose_calls == 2

    @pytest.mark.asyncio
    async def test_optional_auto_candidates_are_not_fixed(self, sink, fake_check):
        optional_auto = fake_check(
            DiagnosticResult.failed("optional", optional=True), autofix=True
        )
        doctor = Doctor(sink=sink)
        doctor.register(optional_auto)

        report = await doctor.run()

        assert report.outcome == RunOutcome.AUTO_FIXES_ATTEMPTED
        assert optional_auto.fix_calls == 0
        assert report.remaining == []
        assert "Bye! All issues have been fixed!" in sink.texts()

    @pytest.mark.asyncio
    async def test_to_dict(self, sink, fake_check):
        doctor = Doctor(sink=sink)
        doctor.register(
            [
                fake_check(DiagnosticResult.failed("X is missing"), fix_result="install X"),
                fake_check(DiagnosticResult.failed("Y", optional=True), fix_result="install Y"),
            ]
        )

        data = (await doctor.run()).to_dict()

        assert data["version"] == __version__
        assert data["outcome"] == "manual-fixes-pending"
        assert data["required"] == [{"error": "X is missing", "autofix": False, "fixed": False}]
        assert data["manual_fixes"] == [
            {"text": "install X", "optional": False},
            {"text": "install Y", "optional": True},
        ]
        assert data["remaining"] == 1
