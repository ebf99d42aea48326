"""Carregamento de checks a partir de arquivos Python."""

from __future__ import annotations

import importlib.util
from collections.abc import Iterable
from pathlib import Path

import structlog

from envdoctor.checks.base import Check, check_name
from envdoctor.constants import CHECKS_ATTRIBUTE, CHECKS_FACTORY
from envdoctor.exceptions import CheckLoadError

logger = structlog.get_logger()


def _collect(module_checks: object, path: Path) -> list[Check]:
    if isinstance(module_checks, Check):
        items = [module_checks]
    elif isinstance(module_checks, Iterable):
        items = list(module_checks)
    else:
        raise CheckLoadError(path, f"{CHECKS_ATTRIBUTE} must be a check or a list of checks")

    for item in items:
        if not isinstance(item, Check):
            raise CheckLoadError(path, f"{check_name(item)} does not implement diagnose/fix/autofix")
    if not items:
        logger.warning("no_checks_found", path=str(path))
        raise CheckLoadError(path, "no checks defined")
    return items


def load_checks_from_file(path: Path | str) -> list[Check]:
    """
    Carrega os checks de um arquivo Python.

    O arquivo precisa expor CHECKS (lista de checks) ou get_checks()
    retornando a lista. A ordem da lista e a ordem de execucao.
    """
    path = Path(path)
    if not path.is_file():
        logger.error("checks_file_not_found", path=str(path))
        raise CheckLoadError(path, "file not found")

    spec = importlib.util.spec_from_file_location(f"envdoctor_checks_{path.stem}", path)
    if spec is None or spec.loader is None:
        logger.error("checks_spec_failed", path=str(path))
        raise CheckLoadError(path, "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise CheckLoadError(path, f"{type(e).__name__}: {e}") from e

    if hasattr(module, CHECKS_FACTORY):
        try:
            produced = getattr(module, CHECKS_FACTORY)()
        except Exception as e:
            raise CheckLoadError(path, f"{CHECKS_FACTORY}() failed: {type(e).__name__}: {e}") from e
        checks = _collect(produced, path)
    elif hasattr(module, CHECKS_ATTRIBUTE):
        checks = _collect(getattr(module, CHECKS_ATTRIBUTE), path)
    else:
        logger.warning("no_checks_found", path=str(path))
        raise CheckLoadError(path, f"no {CHECKS_ATTRIBUTE} or {CHECKS_FACTORY}() defined")

    logger.info("checks_loaded", path=str(path), count=len(checks))
    return checks


def load_checks_from_dir(directory: Path | str) -> list[Check]:
    """Carrega todos os arquivos de checks do diretorio, em ordem alfabetica."""
    directory = Path(directory)
    if not directory.is_dir():
        raise CheckLoadError(directory, "directory not found")

    loaded: list[Check] = []
    for path in sorted(directory.glob("*.py")):
        if path.name.startswith("_"):
            continue
        loaded.extend(load_checks_from_file(path))

    if not loaded:
        logger.warning("no_checks_found", path=str(directory))
        raise CheckLoadError(directory, "no checks files found")
    return loaded


def load_checks(paths: Iterable[Path | str]) -> list[Check]:
    checks: list[Check] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            checks.extend(load_checks_from_dir(path))
        else:
            checks.extend(load_checks_from_file(path))
    return checks


__all__ = [
    "load_checks",
    "load_checks_from_file",
    "load_checks_from_dir",
]
