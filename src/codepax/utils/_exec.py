"""Execution utilities for external commands.

This module provides reusable utilities for executing external commands as
argument vectors with timeout handling, merged output capture, and error
management. Nothing here goes through a shell, so arguments containing
shell metacharacters reach the child process unchanged.
"""

import os
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path

# Default timeout in milliseconds
DEFAULT_TIMEOUT_MS: int = 60000  # 60 seconds

# Maximum output size in bytes for log previews
MAX_OUTPUT_BYTES: int = 102400  # 100KB


@dataclass(frozen=True, slots=True)
class CommandConfig:
    """Configuration for command execution.

    Attributes:
        argv: Program followed by its arguments.
        cwd: Working directory for execution.
        env: Additional environment variables to set.
        merge_stderr: Fold stderr into stdout, in emission order.
        timeout_ms: Execution timeout in milliseconds.
    """

    argv: tuple[str, ...]
    cwd: str | Path | None = None
    env: dict[str, str] = field(default_factory=dict)
    merge_stderr: bool = True
    timeout_ms: int = DEFAULT_TIMEOUT_MS


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result from command execution.

    Attributes:
        success: Whether the command could be executed (not whether it exited 0).
        exit_code: Process exit code, or None if execution failed.
        output: Standard output, with stderr appended inline when merged.
        stderr: Standard error when not merged.
        error: Error message if execution failed (timeout, not found, etc.).
        timed_out: Whether the command timed out.
        command_not_found: Whether the program was not found.
        duration_ms: Wall-clock time spent, in milliseconds.
    """

    success: bool
    exit_code: int | None = None
    output: str = ""
    stderr: str = ""
    error: str | None = None
    timed_out: bool = False
    command_not_found: bool = False
    duration_ms: float = 0.0


def truncate_output(output: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate output to max bytes, preserving valid UTF-8.

    Args:
        output: The string to truncate.
        max_bytes: Maximum size in bytes.

    Returns:
        Truncated string with indicator if truncated.
    """
    if not output:
        return output

    encoded = output.encode("utf-8")
    if len(encoded) <= max_bytes:
        return output

    # Use 'ignore' to skip incomplete multi-byte sequences at the end
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")

    return truncated + "\n... [output truncated]"


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


def run_command(config: CommandConfig) -> CommandResult:
    """Execute an external command.

    Handles timeouts and missing programs, and captures output. A non-zero
    exit code is reported in the result, never raised.

    Args:
        config: Command configuration specifying argv, env, cwd, timeout, etc.

    Returns:
        CommandResult with execution outcome.
    """
    if not config.argv:
        return CommandResult(success=False, error="No command specified")

    env = {**os.environ, **config.env}
    cwd = str(config.cwd) if config.cwd else None
    timeout_seconds = config.timeout_ms / 1000.0
    started = time.monotonic()

    try:
        result = subprocess.run(  # noqa: S603
            list(config.argv),
            env=env,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if config.merge_stderr else subprocess.PIPE,
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return CommandResult(
            success=False,
            output=_decode(e.output),
            error=f"Command timed out after {timeout_seconds}s",
            timed_out=True,
            duration_ms=(time.monotonic() - started) * 1000,
        )
    except FileNotFoundError as e:
        return CommandResult(
            success=False,
            error=str(e),
            command_not_found=True,
            duration_ms=(time.monotonic() - started) * 1000,
        )
    except OSError as e:
        return CommandResult(
            success=False,
            error=str(e),
            duration_ms=(time.monotonic() - started) * 1000,
        )

    return CommandResult(
        success=True,
        exit_code=result.returncode,
        output=_decode(result.stdout),
        stderr=_decode(result.stderr),
        duration_ms=(time.monotonic() - started) * 1000,
    )
