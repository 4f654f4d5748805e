"""Subprocess execution of git commands."""

from typing import TYPE_CHECKING, Final

from codepax.exceptions import CommandTimeoutError, GitNotFoundError, ScmCommandError
from codepax.scm._commands import GitCommand  # noqa: TC001
from codepax.utils._exec import (
    DEFAULT_TIMEOUT_MS,
    CommandConfig,
    run_command,
    truncate_output,
)

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

# Keeps failure markers ("fatal: ", "error: Could not") in English and
# makes git fail instead of prompting for credentials
GIT_ENVIRONMENT: Final[dict[str, str]] = {
    "LC_ALL": "C",
    "GIT_TERMINAL_PROMPT": "0",
}

_LOG_PREVIEW_BYTES: Final = 4096


class ProcessExecutor:
    """Executes git commands as child processes.

    Standard error is merged into standard output so the caller sees git's
    diagnostics where it prints them. Exit codes are logged, never raised.

    Args:
        timeout_ms: Per-invocation timeout in milliseconds.
        logger: Optional structlog logger for debug records.
    """

    __slots__ = ("_logger", "_timeout_ms")

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        self._timeout_ms = timeout_ms
        self._logger = logger

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def run(self, command: GitCommand) -> str:
        """Run a git command and return everything it printed.

        Args:
            command: The composed command.

        Returns:
            Combined stdout and stderr, verbatim.

        Raises:
            GitNotFoundError: If the git binary does not exist.
            CommandTimeoutError: If the command exceeds the timeout.
            ScmCommandError: If the process could not be started.
        """
        result = run_command(
            CommandConfig(
                argv=command.argv,
                cwd=command.cwd,
                env=GIT_ENVIRONMENT,
                merge_stderr=True,
                timeout_ms=self._timeout_ms,
            )
        )

        if self._logger is not None:
            self._logger.debug(
                "git_command",
                command=command.to_shell(),
                exit_code=result.exit_code,
                duration_ms=round(result.duration_ms, 1),
                timed_out=result.timed_out,
                output=command.mask(truncate_output(result.output, _LOG_PREVIEW_BYTES)),
            )

        if result.command_not_found:
            msg = f"Git executable not found: {command.binary}"
            raise GitNotFoundError(msg, binary=command.binary)
        if result.timed_out:
            msg = f"Git command timed out after {self._timeout_ms}ms: {command.subcommand}"
            raise CommandTimeoutError(
                msg, timeout_ms=self._timeout_ms, output=result.output
            )
        if not result.success:
            msg = f"Could not run git {command.subcommand}: {result.error}"
            raise ScmCommandError(msg, output=result.output)

        return result.output
