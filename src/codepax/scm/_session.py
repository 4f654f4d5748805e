"""Repository session façade.

A `RepositorySession` drives the git command line client against one
working copy. Construction validates the directory, embeds the configured
credentials in the tracked remote's URL, refreshes remote-tracking
branches and captures the latest commit. After that the session answers
branch, tag and drift queries and switches or commits the working copy.

Git is only ever reached through the session's `CommandExecutor`, and its
output is only ever interpreted by the session's `OutputParser`.
"""

from functools import partial
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Final, Self
from urllib.parse import quote

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from codepax.config import ScmConfig
from codepax.exceptions import (
    CommandTimeoutError,
    NotARepositoryError,
    RemoteConfigError,
    RemoteUpdateFailedError,
    ScmError,
    ScmParseError,
)
from codepax.scm._commands import CommandBuilder, GitCommand, validate_ref_name
from codepax.scm._credentials import ensure_credentials, redact_url
from codepax.scm._executor import ProcessExecutor
from codepax.scm._locks import working_copy_lock
from codepax.scm._models import (
    BranchSet,
    CommitInfo,
    DriftReport,
    LocalBranchSet,
    Platform,
    SessionState,
)
from codepax.scm._parser import GitOutputParser
from codepax.scm._protocol import CommandExecutor, OutputParser
from codepax.utils import create_scm_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

_NODE_KIND: Final = "directory"
_SCHEDULE: Final = "normal"


def _last_result(state: RetryCallState) -> str | None:
    """Return what the last attempt returned, re-raising what it raised."""
    if state.outcome is None:
        return None
    return state.outcome.result()


class RepositorySession:
    """A validated, credential-synced connection to one git working copy.

    Branch listings are cached on first use and kept until
    `refresh_branches()` is called; local branches, tags, the current
    position and drift are read from git on every call. Commands that
    change the working copy hold the process-wide lock for its directory.

    Args:
        username: User name to embed in the remote URL. Empty disables
            credential sync.
        password: Password to embed in the remote URL.
        remote_url: Remote URL used when the working copy has none
            configured for the tracked remote.
        project_dir: The working copy directory.
        config: SCM settings. Defaults apply when omitted.
        executor: Runs git commands. A `ProcessExecutor` when omitted.
        parser: Interprets git output. A `GitOutputParser` when omitted.
        platform: Shell conventions for rendered command lines. Detected
            when omitted.
        logger: structlog logger. A file logger writing to scm.log when
            omitted.

    Raises:
        NotARepositoryError: If the directory is missing or git reports it
            is not a working copy. No further commands are run.
        InvalidRemoteURLError: If the remote URL cannot be parsed.
        ScmCommandError: If git cannot be executed.

    Example:
        >>> with RepositorySession("bob", "s3cret", "", Path("/srv/app")) as session:
        ...     session.get_active_branches()
        ['feature-x', 'hotfix-1']
    """

    __slots__: Final = (
        "_branches",
        "_commands",
        "_commit_info",
        "_config",
        "_executor",
        "_git_info",
        "_last_error",
        "_lock",
        "_logger",
        "_more_info",
        "_parser",
        "_remote_url",
        "_state",
        "_top_info",
        "_working_dir",
    )

    def __init__(  # noqa: PLR0913
        self,
        username: str,
        password: str,
        remote_url: str,
        project_dir: Path,
        *,
        config: ScmConfig | None = None,
        executor: CommandExecutor | None = None,
        parser: OutputParser | None = None,
        platform: Platform | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        self._config = config if config is not None else ScmConfig()
        self._logger = logger if logger is not None else create_scm_logger()
        self._working_dir = Path(project_dir)
        self._commands = CommandBuilder(
            self._working_dir,
            self._config.git_binary,
            platform,
            remote=self._config.remote,
        )
        self._executor: CommandExecutor = (
            executor
            if executor is not None
            else ProcessExecutor(self._config.timeout_ms, logger=self._logger)
        )
        self._parser: OutputParser = parser if parser is not None else GitOutputParser()
        self._lock = working_copy_lock(self._working_dir)

        self._state = SessionState.UNINITIALIZED
        self._last_error: ScmError | None = None
        self._remote_url = remote_url
        self._git_info = ""
        self._commit_info: CommitInfo | None = None
        self._branches: BranchSet | None = None
        self._top_info: dict[str, str] = {}
        self._more_info: dict[str, str] = {}

        try:
            self._check_local_config()
            self._state = SessionState.LOCAL_VALIDATED
            self._check_remote_config(username, password, remote_url)
            self._state = SessionState.CREDENTIALS_SYNCED
            self._remote_update()
            self._capture_commit_info()
        except ScmError as e:
            self._state = SessionState.ERROR
            self._last_error = e
            self._logger.error(
                "session_failed",
                working_dir=str(self._working_dir),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        self._state = SessionState.READY
        self._logger.info(
            "session_ready",
            working_dir=str(self._working_dir),
            remote_url=redact_url(self._remote_url),
            revision=self._commit_info.revision if self._commit_info else None,
        )

    # =========================================================================
    # Context Manager Protocol
    # =========================================================================

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Drop cached branch listings and info maps."""
        self._branches = None
        self._top_info = {}
        self._more_info = {}

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def last_error(self) -> ScmError | None:
        """The most recent recorded error, such as a failed remote update."""
        return self._last_error

    @property
    def commit_info(self) -> CommitInfo | None:
        """Latest commit captured at construction, or None if the log was unreadable."""
        return self._commit_info

    @property
    def working_dir(self) -> Path:
        return self._working_dir

    @property
    def config(self) -> ScmConfig:
        return self._config

    @property
    def remote_url(self) -> str:
        """The tracked remote's URL with any password redacted."""
        return redact_url(self._remote_url)

    # =========================================================================
    # Initialization steps
    # =========================================================================

    def _run(self, command: GitCommand) -> str:
        if command.mutating:
            with self._lock:
                return self._executor.run(command)
        return self._executor.run(command)

    def _check_local_config(self) -> None:
        if not self._working_dir.is_dir():
            msg = f"Project directory does not exist: {self._working_dir}"
            raise NotARepositoryError(msg, path=self._working_dir)

        output = self._run(self._commands.status())
        if self._parser.is_fatal(output):
            msg = f"Not a git working copy: {self._working_dir}"
            raise NotARepositoryError(msg, path=self._working_dir, output=output)

    def _check_remote_config(self, username: str, password: str, remote_url: str) -> None:
        configured = self._run(self._commands.remote_url()).strip()
        current = remote_url.strip()
        if configured and not self._parser.is_fatal(configured):
            current = configured
        self._remote_url = current

        new_url = ensure_credentials(current, username, password)
        if new_url is None:
            return

        secrets = (password, quote(password, safe=""))
        command = self._commands.set_remote_url(new_url, redact=secrets)
        error = self._parser.command_error(self._run(command))
        if error is not None:
            msg = f"Could not set the URL of remote '{self._commands.remote}'"
            self._last_error = RemoteConfigError(msg, output=command.mask(error))
            self._logger.warning(
                "remote_credentials_rejected",
                remote=self._commands.remote,
                output=command.mask(error).strip(),
            )
            return

        self._remote_url = new_url
        self._logger.info(
            "remote_credentials_updated",
            remote=self._commands.remote,
            remote_url=redact_url(new_url),
        )

    def _remote_update(self) -> None:
        attempts = self._config.remote_update_retries + 1
        retrying = Retrying(
            retry=retry_if_result(lambda error: error is not None),
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=0.25, max=2),
            after=partial(self._log_remote_update_failure, attempts),
            retry_error_callback=_last_result,
        )
        error: str | None = retrying(self._try_remote_update)
        if error is not None:
            msg = "Could not update remote-tracking branches"
            self._last_error = RemoteUpdateFailedError(msg, output=error)

    def _try_remote_update(self) -> str | None:
        try:
            output = self._run(self._commands.remote_update())
        except CommandTimeoutError as e:
            return e.output or str(e)
        return self._parser.remote_update_error(output)

    def _log_remote_update_failure(self, attempts: int, state: RetryCallState) -> None:
        error = _last_result(state)
        self._logger.warning(
            "remote_update_failed",
            attempt=state.attempt_number,
            attempts=attempts,
            output=(error or "").strip(),
        )

    def _capture_commit_info(self) -> None:
        self._git_info = self._run(self._commands.last_log())
        try:
            self._commit_info = self._parser.commit_info(self._git_info)
        except ScmParseError as e:
            # A working copy without commits has no log to read
            self._last_error = e
            self._logger.warning("commit_info_unavailable", output=self._git_info.strip())

    # =========================================================================
    # Branches and tags
    # =========================================================================

    def get_branch_set(self) -> BranchSet:
        """Return the remote-tracking branches, listing them on first use."""
        if self._branches is None:
            return self.refresh_branches()
        return self._branches

    def refresh_branches(self) -> BranchSet:
        """List remote-tracking branches again and replace the cached set."""
        output = self._run(self._commands.remote_branches())
        self._branches = self._parser.branches(
            output,
            self._config.stable_branch,
            self._config.merged_marker,
            remote=self._commands.remote,
        )
        return self._branches

    def get_active_branches(self) -> list[str]:
        return list(self.get_branch_set().active)

    def get_merged_branches(self) -> list[str]:
        return list(self.get_branch_set().merged)

    def get_all_branches(self) -> list[str]:
        """Return every remote-tracking branch, with the remote prefix."""
        return list(self.get_branch_set().raw)

    def get_tags(self) -> list[str]:
        return self._parser.tags(self._run(self._commands.tags()))

    def get_current_position(self) -> str:
        """Return the checked-out branch name ("HEAD" when detached).

        Raises:
            ScmParseError: If git could not resolve HEAD.
        """
        return self._parser.current_position(self._run(self._commands.current_position()))

    def get_local_branches(self) -> LocalBranchSet:
        current = self.get_current_position()
        output = self._run(self._commands.local_branches())
        return self._parser.local_branches(output, current)

    def get_branch_status(self) -> DriftReport | None:
        """Compare the current position with the stable line on the remote.

        Returns:
            The drift report, or None when the stable line itself is
            checked out.

        Raises:
            DriftParseError: If git did not print two revision counts.
        """
        stable = self._config.stable_branch
        if self.get_current_position() == stable:
            return None

        behind = self._run(self._commands.revisions_behind(stable))
        ahead = self._run(self._commands.revisions_ahead(stable))
        return self._parser.drift(ahead, behind, stable)

    # =========================================================================
    # Repository info
    # =========================================================================

    def get_repo_info(self) -> str:
        """Return the raw latest-commit log and fill both info maps.

        Raises:
            ScmParseError: If the log captured at construction is unreadable.
        """
        info = self._commit_info
        if info is None:
            info = self._parser.commit_info(self._git_info)

        branch = self.get_current_position()
        self._commit_info = info.with_branch(branch)
        url = redact_url(self._remote_url)

        self._top_info.update(
            {
                "Branch": branch,
                "Revision": info.revision,
                "Author": info.author,
                "Last changed": info.last_changed,
                "URL": url,
            }
        )
        self._more_info.update(
            {
                "Path": str(self._working_dir),
                "Working Copy Root Path": str(self._working_dir),
                "Repository Root": url,
                "Node Kind": _NODE_KIND,
                "Schedule": _SCHEDULE,
            }
        )
        return self._git_info

    def get_repo_top_info(self) -> dict[str, str]:
        if not self._top_info:
            self.get_repo_info()
        return dict(self._top_info)

    def get_repo_more_info(self) -> dict[str, str]:
        if not self._more_info:
            self.get_repo_info()
        return dict(self._more_info)

    # =========================================================================
    # Switching
    # =========================================================================

    def switch_to_branch(self, name: str) -> str:
        """Switch the working copy to a branch of the tracked remote.

        A branch that already exists locally is checked out and then pulled
        from the remote. Otherwise a local branch tracking the remote one is
        created and checked out, without a pull.

        Args:
            name: Branch name without the remote prefix.

        Returns:
            What git printed for the checkout and, if run, the pull.

        Raises:
            InvalidRefNameError: If the name cannot be passed to git.
        """
        validate_ref_name(name)
        with self._lock:
            local = self.get_local_branches()
            if name not in local:
                self._logger.info("switch_branch", branch=name, created=True)
                return self._run(self._commands.checkout_tracking(name))

            self._logger.info("switch_branch", branch=name, created=False)
            output = self._run(self._commands.checkout(name))
            return output + self.update_current_branch(name)

    def update_current_branch(self, name: str) -> str:
        """Pull `name` from the tracked remote into the current branch."""
        return self._run(self._commands.pull(name))

    def switch_to_tag(self, name: str) -> str:
        """Switch to a tag.

        Tags are handled as branch names: the tag must exist as a branch
        on the remote for the switch to succeed.
        """
        return self.switch_to_branch(name)

    def switch_to_trunk(self) -> str:
        return self.switch_to_branch(self._config.stable_branch)

    def switch_to_revision(self, revision: str | None = None) -> str:
        """Switch to a revision, or update the current branch when None.

        Revisions are handled as branch names, so an arbitrary commit id
        cannot be targeted.
        """
        if revision is None:
            with self._lock:
                return self.update_current_branch(self.get_current_position())
        return self.switch_to_branch(revision)

    # =========================================================================
    # Committing
    # =========================================================================

    def add(self, path: str) -> str:
        """Stage a path relative to the working copy root, ignored files included."""
        return self._run(self._commands.add(path))

    def commit(self, message: str) -> str:
        output = self._run(self._commands.commit(message))
        self._logger.info("commit", message=message)
        return output

    def add_and_commit(self, message: str, path: str) -> str:
        """Stage `path` and commit it, returning what the commit printed."""
        with self._lock:
            self.add(path)
            return self.commit(message)
