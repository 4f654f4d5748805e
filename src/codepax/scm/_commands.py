"""Git command composition.

Every working copy operation is described as a `GitCommand`: an argument
vector run from the working copy directory. Commands are executed without a
shell; `GitCommand.to_shell()` renders the equivalent `cd ...; git ... 2>&1`
line for logs and diagnostics only.
"""

import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from codepax.exceptions import InvalidRefNameError
from codepax.scm._models import Platform

# Folds stderr into the captured stream; git mixes errors into its output
MERGE_STDERR_DIRECTIVE = "2>&1"

_SEPARATORS: dict[Platform, str] = {
    Platform.POSIX: "; ",
    Platform.WINDOWS: " && ",
}


def detect_platform() -> Platform:
    """Return the shell conventions of the running host."""
    return Platform.WINDOWS if os.name == "nt" else Platform.POSIX


def quote_argument(value: str, platform: Platform) -> str:
    """Quote one argument for display in a command line of the given platform.

    POSIX arguments are only quoted when they contain characters the shell
    would interpret; Windows paths and arguments use double quotes.
    """
    if platform is Platform.WINDOWS:
        return subprocess.list2cmdline([value])
    return shlex.quote(value)


def validate_ref_name(name: str) -> str:
    """Check that a branch, tag or revision name can be passed to git.

    Args:
        name: The candidate name.

    Returns:
        The name, unchanged.

    Raises:
        InvalidRefNameError: If the name is blank, starts with "-" (it
            would be read as an option), or contains whitespace or control
            characters.
    """
    if not name or not name.strip():
        msg = "Ref name must not be empty"
        raise InvalidRefNameError(msg, name=name)
    if name.startswith("-"):
        msg = f"Ref name must not start with '-': {name!r}"
        raise InvalidRefNameError(msg, name=name)
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in name):
        msg = f"Ref name contains whitespace or control characters: {name!r}"
        raise InvalidRefNameError(msg, name=name)
    return name


@dataclass(frozen=True, slots=True)
class GitCommand:
    """A single git invocation.

    Attributes:
        binary: Path to the git executable.
        cwd: Working copy directory the command runs in.
        args: Git subcommand and its arguments.
        platform: Shell conventions used by to_shell().
        mutating: Whether the command changes working copy state.
        redact: Substrings hidden when the command is rendered.
    """

    binary: str
    cwd: Path
    args: tuple[str, ...]
    platform: Platform = Platform.POSIX
    mutating: bool = False
    redact: tuple[str, ...] = ()

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.binary, *self.args)

    @property
    def subcommand(self) -> str:
        return self.args[0] if self.args else ""

    def to_shell(self) -> str:
        """Render the command as a single shell line.

        The line changes into the working copy, invokes git and merges
        stderr into stdout, joined by the platform's command separator.
        """
        cwd = quote_argument(str(self.cwd), self.platform)
        body = " ".join(quote_argument(part, self.platform) for part in self.argv)
        return self.mask(
            f"cd {cwd}{_SEPARATORS[self.platform]}{body} {MERGE_STDERR_DIRECTIVE}"
        )

    def mask(self, text: str) -> str:
        """Replace every redacted substring of `text` with "***"."""
        for secret in self.redact:
            if secret:
                text = text.replace(secret, "***")
        return text


class CommandBuilder:
    """Composes the git commands used by a repository session.

    Args:
        working_dir: Working copy directory.
        git_binary: Path to the git executable.
        platform: Shell conventions of the host. Detected when omitted.
        remote: Name of the remote the session tracks.
    """

    __slots__ = ("_git_binary", "_platform", "_remote", "_working_dir")

    def __init__(
        self,
        working_dir: Path,
        git_binary: str,
        platform: Platform | None = None,
        *,
        remote: str = "origin",
    ) -> None:
        self._working_dir = working_dir
        self._git_binary = git_binary
        self._platform = platform if platform is not None else detect_platform()
        self._remote = remote

    @property
    def working_dir(self) -> Path:
        return self._working_dir

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def remote(self) -> str:
        return self._remote

    def connection_prefix(self) -> str:
        """Shell prefix that enters the working copy and names the git binary."""
        return (
            f"cd {quote_argument(str(self._working_dir), self._platform)}"
            f"{_SEPARATORS[self._platform]}"
            f"{quote_argument(self._git_binary, self._platform)}"
        )

    def _command(
        self,
        *args: str,
        mutating: bool = False,
        redact: tuple[str, ...] = (),
    ) -> GitCommand:
        return GitCommand(
            binary=self._git_binary,
            cwd=self._working_dir,
            args=args,
            platform=self._platform,
            mutating=mutating,
            redact=redact,
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def status(self) -> GitCommand:
        return self._command("status")

    def remote_branches(self) -> GitCommand:
        return self._command("branch", "-r")

    def local_branches(self) -> GitCommand:
        return self._command("branch")

    def tags(self) -> GitCommand:
        return self._command("tag", "-l")

    def last_log(self) -> GitCommand:
        return self._command("log", "--max-count=1")

    def current_position(self) -> GitCommand:
        return self._command("rev-parse", "--abbrev-ref", "HEAD")

    def revisions_behind(self, stable_branch: str) -> GitCommand:
        """Count revisions on the remote stable line missing from HEAD."""
        validate_ref_name(stable_branch)
        return self._command("rev-list", f"..{self._remote}/{stable_branch}", "--count")

    def revisions_ahead(self, stable_branch: str) -> GitCommand:
        """Count revisions on HEAD missing from the remote stable line."""
        validate_ref_name(stable_branch)
        return self._command("rev-list", f"{self._remote}/{stable_branch}..", "--count")

    def remote_url(self) -> GitCommand:
        return self._command("config", "--get", f"remote.{self._remote}.url")

    # =========================================================================
    # Mutations
    # =========================================================================

    def checkout(self, name: str) -> GitCommand:
        return self._command("checkout", validate_ref_name(name), mutating=True)

    def checkout_tracking(self, name: str) -> GitCommand:
        """Create a local branch tracking the remote branch of the same name."""
        validate_ref_name(name)
        return self._command(
            "checkout", "-b", name, f"{self._remote}/{name}", mutating=True
        )

    def pull(self, name: str) -> GitCommand:
        return self._command("pull", self._remote, validate_ref_name(name), mutating=True)

    def remote_update(self) -> GitCommand:
        return self._command("remote", "update", mutating=True)

    def set_remote_url(self, url: str, *, redact: tuple[str, ...] = ()) -> GitCommand:
        return self._command(
            "remote", "set-url", self._remote, url, mutating=True, redact=redact
        )

    def add(self, path: str) -> GitCommand:
        # "--" keeps a path starting with "-" from being read as an option
        return self._command("add", "--force", "--", path, mutating=True)

    def commit(self, message: str) -> GitCommand:
        return self._command("commit", "--message", message, mutating=True)
