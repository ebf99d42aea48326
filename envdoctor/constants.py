"""Constantes e configuracoes do envdoctor."""

from __future__ import annotations

from enum import StrEnum

from pydantic_settings import BaseSettings


class Glyph(StrEnum):
    INFO = "ℹ"
    SUCCESS = "✔"
    WARN = "⚠"
    FAIL = "✖"
    ARROW = "➜"


class DoctorSettings(BaseSettings):
    app_name: str = "envdoctor"
    app_title: str = "Env Doctor"

    log_level: str = "WARNING"
    json_logs: bool = False
    color: bool = True

    http_timeout: float = 10.0
    slow_threshold_ms: int = 2000

    class Config:
        env_prefix = "ENVDOCTOR_"


CHECKS_ATTRIBUTE = "CHECKS"
CHECKS_FACTORY = "get_checks"
