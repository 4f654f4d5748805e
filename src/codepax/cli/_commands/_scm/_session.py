"""Opening repository sessions for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from codepax.cli._commands._context import CLIContext
from codepax.cli._commands._shared import ExitCode, exit_with_error, get_error_console
from codepax.exceptions import (
    InvalidRefNameError,
    InvalidRemoteURLError,
    NotARepositoryError,
    ScmCommandError,
    ScmError,
)
from codepax.scm import RepositorySession
from codepax.utils import create_scm_logger, discover_working_copy

Username = Annotated[
    str,
    Parameter(
        name="--username",
        env_var="CODEPAX_SCM_USERNAME",
        help="User name embedded in the remote URL",
    ),
]
Password = Annotated[
    str,
    Parameter(
        name="--password",
        env_var="CODEPAX_SCM_PASSWORD",
        help="Password embedded in the remote URL",
    ),
]


def exit_code_for(error: ScmError) -> ExitCode:
    """Map a working copy error to the CLI exit code."""
    match error:
        case NotARepositoryError():
            return ExitCode.NOT_FOUND
        case InvalidRefNameError() | InvalidRemoteURLError():
            return ExitCode.VALIDATION_ERROR
        case ScmCommandError():
            return ExitCode.IO_ERROR
        case _:
            return ExitCode.INTERNAL_ERROR


def resolve_project_dir(ctx: CLIContext) -> Path:
    """Return --project-dir, else the working copy around the current directory."""
    if ctx.project_dir is not None:
        return ctx.project_dir
    discovered = discover_working_copy()
    return discovered if discovered is not None else Path.cwd()


def open_session(username: str, password: str) -> RepositorySession:
    """Open a session on the CLI's working copy, exiting on failure.

    Args:
        username: User name for the remote URL.
        password: Password for the remote URL.

    Returns:
        A ready session.

    Raises:
        SystemExit: If the session could not be initialized.
    """
    ctx = CLIContext.get_current()
    project_dir = resolve_project_dir(ctx)
    logging_config = ctx.config.logging

    try:
        session = RepositorySession(
            username,
            password,
            "",
            project_dir,
            config=ctx.config.scm,
            logger=create_scm_logger(
                logging_config.level.value,
                log_format=logging_config.format.value,  # type: ignore[arg-type]
                log_file=logging_config.file,
            ),
        )
    except ScmError as e:
        if ctx.logger is not None:
            ctx.logger.error("session_failed", project_dir=str(project_dir), error=str(e))
        exit_with_error(str(e), exit_code_for(e))

    if session.last_error is not None:
        get_error_console().print(
            f"[yellow]Warning:[/yellow] {session.last_error}", highlight=False
        )
        if ctx.verbose and session.last_error.output:
            get_error_console().print(
                session.last_error.output.rstrip(), markup=False, highlight=False
            )

    return session


@contextmanager
def scm_errors() -> Iterator[None]:
    """Turn working copy errors raised inside the block into CLI exits."""
    try:
        yield
    except ScmError as e:
        ctx = CLIContext.get_current()
        if ctx.logger is not None:
            ctx.logger.error("scm_command_failed", error=str(e), error_type=type(e).__name__)
        exit_with_error(str(e), exit_code_for(e))
