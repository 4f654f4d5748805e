"""Git working copy access.

This module provides the public API for driving the git command line client
against a working copy: composing commands, running them, parsing what git
prints and keeping remote credentials in sync.

Example:
    >>> from pathlib import Path
    >>> import structlog
    >>> from codepax.scm import FakeExecutor, RepositorySession
    >>> fake = FakeExecutor()
    >>> fake.respond("rev-parse", "--abbrev-ref", "HEAD", output="feature-x\\n")
    >>> fake.respond("rev-list", "..origin/master", "--count", output="0\\n")
    >>> fake.respond("rev-list", "origin/master..", "--count", output="2\\n")
    >>> session = RepositorySession(
    ...     "", "", "", Path("."), executor=fake,
    ...     logger=structlog.wrap_logger(structlog.ReturnLogger()),
    ... )
    >>> session.get_branch_status()
    DriftReport(ahead=2, behind=0, stable_branch='master')
"""

from codepax.exceptions import (
    CommandTimeoutError,
    DriftParseError,
    GitNotFoundError,
    InvalidRefNameError,
    InvalidRemoteURLError,
    NotARepositoryError,
    RemoteConfigError,
    RemoteUpdateFailedError,
    ScmCommandError,
    ScmError,
    ScmParseError,
)

from ._commands import (
    MERGE_STDERR_DIRECTIVE,
    CommandBuilder,
    GitCommand,
    detect_platform,
    quote_argument,
    validate_ref_name,
)
from ._credentials import (
    ensure_credentials,
    format_remote_url,
    parse_remote_url,
    redact_url,
)
from ._executor import GIT_ENVIRONMENT, ProcessExecutor
from ._fake import FakeExecutor
from ._locks import working_copy_lock
from ._models import (
    BranchSet,
    CommitInfo,
    DriftReport,
    LocalBranchSet,
    Platform,
    RemoteURL,
    SessionState,
)
from ._parser import (
    GitOutputParser,
    is_fatal,
    parse_branches,
    parse_command_error,
    parse_commit_info,
    parse_current_position,
    parse_drift,
    parse_local_branches,
    parse_remote_update,
    parse_tags,
)
from ._protocol import CommandExecutor, OutputParser
from ._session import RepositorySession

__all__ = [
    "GIT_ENVIRONMENT",
    "MERGE_STDERR_DIRECTIVE",
    "BranchSet",
    "CommandBuilder",
    "CommandExecutor",
    "CommandTimeoutError",
    "CommitInfo",
    "DriftParseError",
    "DriftReport",
    "FakeExecutor",
    "GitCommand",
    "GitNotFoundError",
    "GitOutputParser",
    "InvalidRefNameError",
    "InvalidRemoteURLError",
    "LocalBranchSet",
    "NotARepositoryError",
    "OutputParser",
    "Platform",
    "ProcessExecutor",
    "RemoteConfigError",
    "RemoteURL",
    "RemoteUpdateFailedError",
    "RepositorySession",
    "ScmCommandError",
    "ScmError",
    "ScmParseError",
    "SessionState",
    "detect_platform",
    "ensure_credentials",
    "format_remote_url",
    "is_fatal",
    "parse_branches",
    "parse_command_error",
    "parse_commit_info",
    "parse_current_position",
    "parse_drift",
    "parse_local_branches",
    "parse_remote_update",
    "parse_tags",
    "quote_argument",
    "redact_url",
    "validate_ref_name",
    "working_copy_lock",
]
