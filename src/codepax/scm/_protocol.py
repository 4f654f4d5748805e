"""Protocols for the pluggable parts of a repository session.

A session talks to git through a `CommandExecutor` and interprets what git
prints through an `OutputParser`. Both are runtime-checkable so fakes can
be injected in tests and another output format only needs a new parser.
"""

from typing import Protocol, runtime_checkable

from codepax.scm._commands import GitCommand
from codepax.scm._models import BranchSet, CommitInfo, DriftReport, LocalBranchSet


@runtime_checkable
class CommandExecutor(Protocol):
    """Runs composed git commands."""

    def run(self, command: GitCommand) -> str:
        """Run a command and return its combined stdout and stderr.

        A non-zero exit status is not an error: callers inspect the text.

        Args:
            command: The command to run.

        Returns:
            Everything the command printed.

        Raises:
            ScmCommandError: If git could not be executed at all.
        """
        ...


@runtime_checkable
class OutputParser(Protocol):
    """Interprets git's textual output."""

    def is_fatal(self, raw: str) -> bool: ...

    def remote_update_error(self, raw: str) -> str | None: ...

    def command_error(self, raw: str) -> str | None: ...

    def branches(
        self, raw: str, stable_branch: str, merged_marker: str, *, remote: str
    ) -> BranchSet: ...

    def tags(self, raw: str) -> list[str]: ...

    def local_branches(self, raw: str, current: str) -> LocalBranchSet: ...

    def current_position(self, raw: str) -> str: ...

    def commit_info(self, raw: str, branch: str = "") -> CommitInfo: ...

    def drift(self, ahead_raw: str, behind_raw: str, stable_branch: str) -> DriftReport: ...
