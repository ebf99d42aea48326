from __future__ import annotations

import inspect
from collections.abc import Iterable
from typing import Any

import structlog

from envdoctor import __version__
from envdoctor.checks.base import Check, check_name
from envdoctor.config import get_config
from envdoctor.constants import Glyph
from envdoctor.exceptions import CheckContractError, FixSkippedError
from envdoctor.models import (
    DiagnosticResult,
    DoctorReport,
    FixCandidate,
    FixOutcome,
    FixStatus,
    ManualInstruction,
    RunOutcome,
)
from envdoctor.reporting import ConsoleSink, ProgressSink

logger = structlog.get_logger()

_FATAL = (NotImplementedError, CheckContractError)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def classify(
    result: DiagnosticResult, candidates: list[FixCandidate], check: Check
) -> FixCandidate | None:
    """Registra o check como candidato a fix quando o resultado nao esta ok."""
    if result.ok:
        return None
    candidate = FixCandidate(error=result.message, check=check)
    candidates.append(candidate)
    return candidate


def fix_message(length: int, optional: bool = False) -> str:
    if length == 0:
        message = "no fix"
    elif length == 1:
        message = "one fix"
    else:
        message = f"{length} fixes"
    return f"{message} {'possible' if optional else 'needed'}"


class Doctor:
    """
    Orquestra diagnose -> classificacao -> fixes -> re-verificacao.

    Os checks rodam um de cada vez, na ordem de registro. Checks cujo
    resultado vem marcado como optional sao separados num grupo proprio e
    diagnosticados de novo depois que a passada obrigatoria termina.
    """

    def __init__(
        self,
        sink: ProgressSink | None = None,
        app_name: str | None = None,
        app_title: str | None = None,
    ) -> None:
        config = get_config()
        self.app_name = app_name or config.app_name
        self.app_title = app_title or config.app_title
        self.sink: ProgressSink = sink or ConsoleSink(color=None if config.color else False)

        self.checks: list[Check] = []
        self.check_optionals: list[Check] = []
        self.to_fix: list[FixCandidate] = []
        self.to_fix_optionals: list[FixCandidate] = []
        self.manual_instructions: list[ManualInstruction] = []
        self.fix_outcomes: list[FixOutcome] = []

    def register(self, checks: Check | Iterable[Check]) -> None:
        if isinstance(checks, Check):
            items = [checks]
        else:
            try:
                items = list(checks)
            except TypeError:
                raise CheckContractError(
                    check_name(checks), "not a check or a sequence of checks"
                ) from None

        for check in items:
            if not isinstance(check, Check):
                raise CheckContractError(
                    check_name(check), "missing one of diagnose(), fix() or autofix"
                )

        self.checks.extend(items)
        logger.debug("checks_registered", count=len(items), total=len(self.checks))

    async def _diagnose(self, check: Check) -> DiagnosticResult:
        name = check_name(check)
        try:
            result = await _resolve(check.diagnose())
        except _FATAL:
            raise
        except Exception as e:
            logger.error("diagnose_failed", check=name, error=str(e), exc_info=True)
            return DiagnosticResult.failed(f"{name} could not be diagnosed: {e}")

        if not isinstance(result, DiagnosticResult):
            raise CheckContractError(
                name, f"diagnose() returned {type(result).__name__}, expected DiagnosticResult"
            )

        logger.debug("check_diagnosed", check=name, ok=result.ok, optional=result.optional)
        return result

    async def diagnose(self) -> None:
        self.sink.info("### Diagnostic for necessary dependencies starting ###")
        self.to_fix = []
        self.check_optionals = []
        for check in self.checks:
            res = await self._diagnose(check)
            if res.optional:
                self.check_optionals.append(check)
                continue
            self.diagnostic_result_message(res, self.to_fix, check)
        self.sink.info(
            "### Diagnostic for necessary dependencies completed, "
            f"{fix_message(len(self.to_fix))}. ###"
        )
        self.sink.info("")

        self.sink.info("### Diagnostic for optional dependencies starting ###")
        self.to_fix_optionals = []
        for check in self.check_optionals:
            res = await self._diagnose(check)
            self.diagnostic_result_message(res, self.to_fix_optionals, check)
        self.sink.info(
            "### Diagnostic for optional dependencies completed, "
            f"{fix_message(len(self.to_fix_optionals), optional=True)}. ###"
        )
        self.sink.info("")

    def diagnostic_result_message(
        self, result: DiagnosticResult, candidates: list[FixCandidate], check: Check
    ) -> None:
        if result.ok:
            self.sink.success(f" {result.message}")
        elif result.optional:
            self.sink.warn(f" {result.message}")
        else:
            self.sink.fail(f" {result.message}")
        classify(result, candidates, check)

    def report_success(self, length: int, length_optional: int) -> bool:
        if length == 0 and length_optional == 0:
            self.sink.success("Everything looks good, bye!")
            self.sink.info("")
            return True
        return False

    async def _manual_instructions(self, candidates: list[FixCandidate]) -> list[str]:
        messages: list[str] = []
        for f in candidates:
            name = check_name(f.check)
            try:
                value = await _resolve(f.check.fix())
            except _FATAL:
                raise
            except Exception as e:
                logger.warning("manual_fix_failed", check=name, error=str(e))
                self.sink.warn(f"Could not get instructions from {name}: {e}")
                continue

            if isinstance(value, ManualInstruction):
                value = value.text
            if not isinstance(value, str) or not value.strip():
                raise CheckContractError(name, "manual fix() must return a non-empty instruction")
            messages.append(value)

        return list(dict.fromkeys(messages))

    async def report_manual_fixes(
        self, to_fix: list[FixCandidate], to_fix_optionals: list[FixCandidate]
    ) -> bool:
        manual_fixes = [f for f in to_fix if not f.check.autofix]
        manual_fixes_optional = [f for f in to_fix_optionals if not f.check.autofix]
        self.manual_instructions = []

        if manual_fixes:
            self.sink.info("### Manual Fixes Needed ###")
            self.sink.info(
                "The configuration cannot be automatically fixed, please do the following first:"
            )
            for text in await self._manual_instructions(manual_fixes):
                self.manual_instructions.append(ManualInstruction(text))
                self.sink.warn(f" {Glyph.ARROW.value} {text}")
            self.sink.info("")

        if manual_fixes_optional:
            self.sink.info("### Optional Manual Fixes ###")
            self.sink.info(
                "The configuration can install optionally. Please do the following manually:"
            )
            for text in await self._manual_instructions(manual_fixes_optional):
                self.manual_instructions.append(ManualInstruction(text, optional=True))
                self.sink.warn(f" {Glyph.ARROW.value} {text}")
            self.sink.info("")

        if manual_fixes or manual_fixes_optional:
            self.sink.info("###")
            self.sink.info(
                f"Bye! Run {self.app_name} again when all manual fixes have been applied!"
            )
            self.sink.info("")
            return True
        return False

    async def run_auto_fix(self, f: FixCandidate) -> FixOutcome:
        name = check_name(f.check)
        self.sink.info(f"### Fixing: {f.error} ###")
        try:
            await _resolve(f.check.fix())
        except FixSkippedError as e:
            logger.info("auto_fix_skipped", check=name, reason=e.reason)
            self.sink.info("### Skipped fix ###")
            return FixOutcome(FixStatus.SKIPPED, f.error, e.reason)
        except _FATAL:
            raise
        except Exception as e:
            logger.warning("auto_fix_failed", check=name, error=str(e))
            text = str(e)
            if text.endswith("\n"):
                text = text[:-1] + " "
            self.sink.warn(text)
            self.sink.info("### Fix did not succeed ###")
            return FixOutcome(FixStatus.FAILED, f.error, str(e))

        self.sink.info("Checking if this was fixed:")
        res = await self._diagnose(f.check)
        if res.ok:
            f.fixed = True
            self.sink.success(f" {res.message}")
            self.sink.info("### Fix was successfully applied ###")
            return FixOutcome(FixStatus.FIXED, f.error, res.message)

        logger.info("auto_fix_unresolved", check=name, message=res.message)
        self.sink.fail(f" {res.message}")
        self.sink.info("### Fix was applied but issue remains ###")
        return FixOutcome(FixStatus.UNRESOLVED, f.error, res.message)

    async def run_auto_fixes(self, to_fix: list[FixCandidate] | None = None) -> bool:
        """Aplica os fixes automaticos. Retorna True se algum problema permanece."""
        candidates = self.to_fix if to_fix is None else to_fix
        auto_fixes = [f for f in candidates if f.check.autofix]
        self.fix_outcomes = []

        for f in auto_fixes:
            self.fix_outcomes.append(await self.run_auto_fix(f))
            self.sink.info("")

        remaining = any(not f.fixed for f in auto_fixes)
        if remaining:
            self.sink.info(
                f"Bye! A few issues remain, fix manually and/or rerun {self.app_name}!"
            )
        else:
            self.sink.info("Bye! All issues have been fixed!")
        self.sink.info("")
        return remaining

    async def run(self) -> DoctorReport:
        self.manual_instructions = []
        self.fix_outcomes = []

        self.sink.info(f"{self.app_title} v.{__version__}")
        await self.diagnose()

        if self.report_success(len(self.to_fix), len(self.to_fix_optionals)):
            outcome = RunOutcome.ALL_CLEAN
        elif await self.report_manual_fixes(self.to_fix, self.to_fix_optionals):
            outcome = RunOutcome.MANUAL_FIXES_PENDING
        else:
            await self.run_auto_fixes()
            outcome = RunOutcome.AUTO_FIXES_ATTEMPTED

        report = DoctorReport(
            outcome=outcome,
            version=__version__,
            to_fix=list(self.to_fix),
            to_fix_optionals=list(self.to_fix_optionals),
            manual_instructions=list(self.manual_instructions),
            fix_outcomes=list(self.fix_outcomes),
        )
        logger.info(
            "doctor_run_completed",
            outcome=outcome.value,
            required=len(report.to_fix),
            optional=len(report.to_fix_optionals),
            remaining=len(report.remaining),
        )
        return report
