"""Logging estruturado do envdoctor (structlog sobre o logging da stdlib)."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from envdoctor.config import DoctorConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_handlers: list[logging.Handler] = []


def resolve_level(name: str) -> int:
    """Converte o nome do nivel em inteiro, rejeitando nomes desconhecidos."""
    normalized = name.strip().upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level {name!r} (expected one of {', '.join(LOG_LEVELS)})"
        )
    return logging.getLevelName(normalized)


def _processors(json_format: bool, colors: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def configure_logging(
    config: DoctorConfig | None = None,
    log_file: Path | str | None = None,
) -> None:
    """
    Configura structlog a partir do DoctorConfig.

    Os logs vao para stderr; stdout fica para as linhas de progresso e o
    relatorio JSON. Chamadas repetidas substituem os handlers anteriores.

    Raises:
        ValueError: Se config.log_level nao for um nivel conhecido
    """
    if config is None:
        from envdoctor.config import get_config

        config = get_config()

    level = resolve_level(config.log_level)

    structlog.configure(
        processors=_processors(config.json_logs, colors=config.color and not config.json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    _handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        _handlers.append(logging.FileHandler(log_file))

    for handler in _handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.setLevel(level)
        root.addHandler(handler)
    root.setLevel(level)
