"""Logging utilities for CodePax.

Sessions and CLI commands each log to their own file through a standalone
structlog logger. Building a logger never touches structlog's global
configuration, so several sessions with different levels can coexist.

The effective level is decided by `resolve_log_level`:

1. CODEPAX_DEBUG, if set to anything, forces DEBUG.
2. An explicit level (from configuration or a CLI flag).
3. CODEPAX_LOG_LEVEL.
4. INFO.
"""

import logging
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_codepax_cli_log_file, get_codepax_scm_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def resolve_log_level(level: str | None = None) -> int:
    """Return the numeric log level for `level`, honouring the environment.

    Unknown level names resolve to INFO.
    """
    if getenv("CODEPAX_DEBUG"):
        return logging.DEBUG

    name = level if level is not None else getenv("CODEPAX_LOG_LEVEL", "info")
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _renderers(log_format: LogFormatType) -> list[structlog.typing.Processor]:
    if log_format == "json":
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    # timestamp [level] event key=value ...
    return [structlog.dev.ConsoleRenderer(colors=False)]


def _create_logger(
    log_file: Path,
    *,
    log_level: int,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Build a logger appending rendered lines to `log_file`.

    The parent directory is created when missing.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        *_renderers(log_format),
    ]

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(log_file.open("a")),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_scm_logger(
    level: str | None = None,
    *,
    log_format: LogFormatType = "json",
    log_file: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create the logger a repository session records git activity with.

    Args:
        level: Log level name, or None to fall back to CODEPAX_LOG_LEVEL.
        log_format: Output format, either "json" or "text".
        log_file: Path to the log file; empty means scm.log in the per-user
            log directory.

    Returns:
        A FilteringBoundLogger writing to the session log.
    """
    path = Path(log_file) if log_file else get_codepax_scm_log_file()
    return _create_logger(path, log_level=resolve_log_level(level), log_format=log_format)


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create the CLI logger, binding `command` to every entry when given."""
    path = Path(log_file) if log_file else get_codepax_cli_log_file()
    logger = _create_logger(path, log_level=resolve_log_level(level), log_format=log_format)
    return logger.bind(command=command) if command else logger
