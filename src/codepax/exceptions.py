"""CodePax exceptions."""

from pathlib import Path  # noqa: TC003
from typing import Any


class CodepaxError(Exception):
    """Base exception for CodePax errors."""


class ConfigError(CodepaxError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# SCM Exceptions
# =============================================================================


class ScmError(CodepaxError):
    """Base exception for working copy operations.

    Attributes:
        output: Raw text captured from git, if any.
    """

    def __init__(self, message: str, *, output: str | None = None) -> None:
        """Initialize with error message and the captured git output.

        Args:
            message: Human-readable error message.
            output: Raw diagnostic text returned by git.
        """
        super().__init__(message)
        self.output: str | None = output


class NotARepositoryError(ScmError):
    """Raised when the project directory is not a git working copy.

    Attributes:
        path: The directory that was checked.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        output: str | None = None,
    ) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The directory that failed validation.
            output: Raw `git status` output.
        """
        super().__init__(message, output=output)
        self.path: Path | None = path


class RemoteUpdateFailedError(ScmError):
    """Raised (or recorded) when `git remote update` cannot reach a remote."""


class RemoteConfigError(ScmError):
    """Recorded when git refuses to rewrite the tracked remote's URL."""


class ScmParseError(ScmError):
    """Raised when git output does not have the expected shape."""


class DriftParseError(ScmParseError):
    """Raised when ahead/behind revision counts are not non-negative integers."""


class InvalidRemoteURLError(ScmError, ValueError):
    """Raised when a remote URL cannot be split into scheme, host and path.

    Attributes:
        url: The offending URL with any password redacted.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        """Initialize with error message and URL context.

        Args:
            message: Human-readable error message.
            url: The redacted remote URL.
        """
        super().__init__(message, output=url)
        self.url: str | None = url


class InvalidRefNameError(ScmError, ValueError):
    """Raised when a branch, tag or revision name cannot be passed to git.

    Attributes:
        name: The rejected name.
    """

    def __init__(self, message: str, *, name: str | None = None) -> None:
        """Initialize with error message and name context."""
        super().__init__(message)
        self.name: str | None = name


class ScmCommandError(ScmError):
    """Raised when git could not be executed at all."""


class CommandTimeoutError(ScmCommandError):
    """Raised when a git invocation exceeds its timeout.

    Attributes:
        timeout_ms: The timeout that was exceeded, in milliseconds.
    """

    def __init__(
        self,
        message: str,
        *,
        timeout_ms: int,
        output: str | None = None,
    ) -> None:
        """Initialize with error message and timeout context."""
        super().__init__(message, output=output)
        self.timeout_ms: int = timeout_ms


class GitNotFoundError(ScmCommandError):
    """Raised when the configured git binary does not exist.

    Attributes:
        binary: The configured binary path.
    """

    def __init__(self, message: str, *, binary: str) -> None:
        """Initialize with error message and binary path."""
        super().__init__(message)
        self.binary: str = binary
