"""Configuracao global do envdoctor."""

from __future__ import annotations

from dataclasses import dataclass

from envdoctor.constants import DoctorSettings

_config: DoctorConfig | None = None


@dataclass
class DoctorConfig:
    """Configuracao de execucao do envdoctor."""

    app_name: str = "envdoctor"
    app_title: str = "Env Doctor"

    log_level: str = "WARNING"
    json_logs: bool = False
    color: bool = True

    http_timeout: float = 10.0
    slow_threshold_ms: int = 2000

    @classmethod
    def from_settings(cls, settings: DoctorSettings | None = None) -> DoctorConfig:
        settings = settings or DoctorSettings()
        return cls(
            app_name=settings.app_name,
            app_title=settings.app_title,
            log_level=settings.log_level,
            json_logs=settings.json_logs,
            color=settings.color,
            http_timeout=settings.http_timeout,
            slow_threshold_ms=settings.slow_threshold_ms,
        )


def get_config() -> DoctorConfig:
    global _config
    if _config is None:
        _config = DoctorConfig.from_settings()
    return _config


def reset_config() -> None:
    global _config
    _config = None


def configure(
    app_name: str | None = None,
    app_title: str | None = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
    color: bool | None = None,
    http_timeout: float | None = None,
    slow_threshold_ms: int | None = None,
) -> None:
    config = get_config()

    if app_name is not None:
        config.app_name = app_name
    if app_title is not None:
        config.app_title = app_title
    if log_level is not None:
        config.log_level = log_level
    if json_logs is not None:
        config.json_logs = json_logs
    if color is not None:
        config.color = color
    if http_timeout is not None:
        config.http_timeout = http_timeout
    if slow_threshold_ms is not None:
        config.slow_threshold_ms = slow_threshold_ms


__all__ = [
    "DoctorConfig",
    "get_config",
    "reset_config",
    "configure",
]
