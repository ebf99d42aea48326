"""Destinos dos eventos de progresso do Doctor."""

from __future__ import annotations

from typing import Protocol

import structlog
import typer

from envdoctor.constants import Glyph

logger = structlog.get_logger()


class ProgressSink(Protocol):
    def info(self, text: str) -> None: ...

    def success(self, text: str) -> None: ...

    def warn(self, text: str) -> None: ...

    def fail(self, text: str) -> None: ...


class ConsoleSink:
    """
    Linhas de progresso no terminal, uma por evento.

    color=None deixa o click decidir (sem ANSI fora de um terminal),
    True forca as cores e False as desliga.
    """

    _colors = {
        Glyph.INFO: typer.colors.BLUE,
        Glyph.SUCCESS: typer.colors.GREEN,
        Glyph.WARN: typer.colors.YELLOW,
        Glyph.FAIL: typer.colors.RED,
    }

    def __init__(self, color: bool | None = None, err: bool = False) -> None:
        self.color = color
        self.err = err

    def _emit(self, glyph: Glyph, text: str) -> None:
        if self.color is not False:
            prefix = typer.style(glyph.value, fg=self._colors[glyph])
        else:
            prefix = glyph.value
        typer.echo(f"{prefix} {text}", err=self.err, color=self.color)

    def info(self, text: str) -> None:
        self._emit(Glyph.INFO, text)

    def success(self, text: str) -> None:
        self._emit(Glyph.SUCCESS, text)

    def warn(self, text: str) -> None:
        self._emit(Glyph.WARN, text)

    def fail(self, text: str) -> None:
        self._emit(Glyph.FAIL, text)


class LogSink:
    """Cada evento de progresso vira um evento structlog."""

    def __init__(self, event: str = "doctor_progress") -> None:
        self.event = event

    def info(self, text: str) -> None:
        if text.strip():
            logger.info(self.event, kind="info", text=text.strip())

    def success(self, text: str) -> None:
        logger.info(self.event, kind="success", text=text.strip())

    def warn(self, text: str) -> None:
        logger.warning(self.event, kind="warn", text=text.strip())

    def fail(self, text: str) -> None:
        logger.error(self.event, kind="fail", text=text.strip())
