"""Parsing of git's human-readable output.

All assumptions about git's text format live in this module. The functions
are pure: they take captured output and return structured values, raising
`ScmParseError` (or a subclass) when the text does not have the expected
shape. `GitOutputParser` bundles them behind the `OutputParser` protocol so
that a session can be handed a different parser without other changes.
"""

from typing import Final

from codepax.exceptions import DriftParseError, ScmParseError
from codepax.scm._models import BranchSet, CommitInfo, DriftReport, LocalBranchSet

FATAL_MARKER: Final = "fatal: "
REMOTE_UPDATE_ERROR_MARKER: Final = "error: Could not"
ERROR_MARKER: Final = "error: "
CURRENT_BRANCH_MARKER: Final = "* "

# Labels git prints in the default `git log` format
_MERGE_LABEL: Final = "Merge:"
_COMMIT_INFO_FIELDS: Final = 3


def _lines(raw: str) -> list[str]:
    """Split output into trimmed, non-empty lines."""
    return [line.strip() for line in raw.splitlines() if line.strip()]


def is_fatal(raw: str) -> bool:
    """Return True if git reported a fatal error in the output."""
    return FATAL_MARKER in raw


def parse_remote_update(raw: str) -> str | None:
    """Return the output if `git remote update` failed to reach a remote."""
    if REMOTE_UPDATE_ERROR_MARKER in raw:
        return raw
    return None


def parse_command_error(raw: str) -> str | None:
    """Return the output if git reported an error or a fatal condition."""
    if is_fatal(raw) or any(line.startswith(ERROR_MARKER) for line in _lines(raw)):
        return raw
    return None


def parse_branches(
    raw: str,
    stable_branch: str,
    merged_marker: str,
    *,
    remote: str = "origin",
) -> BranchSet:
    """Parse `git branch -r` output into active and merged branches.

    Every entry naming the stable line on the remote and every symbolic
    HEAD entry (e.g. "origin/HEAD -> origin/master") is dropped. The rest
    are classified by whether their name, without the remote prefix,
    starts with `merged_marker`.

    Args:
        raw: Captured `git branch -r` output.
        stable_branch: Name of the stable-line branch.
        merged_marker: Prefix identifying merged branches.
        remote: Remote name used as branch prefix.

    Returns:
        The classified branch set.

    Example:
        >>> parse_branches("  origin/master\\n  origin/merged_x\\n  origin/y\\n",
        ...                "master", "merged_")
        BranchSet(raw=('origin/merged_x', 'origin/y'), active=('y',), merged=('merged_x',))
    """
    prefix = f"{remote}/"
    stable = f"{prefix}{stable_branch}"
    head = f"{prefix}HEAD"

    raw_names: list[str] = []
    active: list[str] = []
    merged: list[str] = []

    for entry in _lines(raw):
        if entry == stable or entry.startswith(head):
            continue
        raw_names.append(entry)

        name = entry.removeprefix(prefix).strip()
        if name.startswith(merged_marker):
            merged.append(name)
        else:
            active.append(name)

    return BranchSet(raw=tuple(raw_names), active=tuple(active), merged=tuple(merged))


def parse_tags(raw: str) -> list[str]:
    """Parse `git tag -l` output.

    Slashes are removed from tag names and blank entries dropped; order is
    kept as git printed it.

    Example:
        >>> parse_tags("v1\\nv2\\n\\n")
        ['v1', 'v2']
    """
    return _lines(raw.replace("/", ""))


def parse_local_branches(raw: str, current: str) -> LocalBranchSet:
    """Parse `git branch` output.

    The entry equal to "* <current>" is replaced by the bare name. If no
    entry carries the marker for `current`, the listing is returned as-is
    and `current` is None.

    Args:
        raw: Captured `git branch` output.
        current: Name of the checked-out branch (from rev-parse).

    Returns:
        The local branches with the current one identified.
    """
    names = _lines(raw)
    marked = f"{CURRENT_BRANCH_MARKER}{current}"

    found: str | None = None
    for index, name in enumerate(names):
        if name == marked:
            names[index] = current
            found = current
            break

    return LocalBranchSet(names=tuple(names), current=found)


def parse_current_position(raw: str) -> str:
    """Parse `git rev-parse --abbrev-ref HEAD` output.

    Raises:
        ScmParseError: If git reported a fatal error or printed nothing.
    """
    position = raw.strip()
    if not position or is_fatal(raw):
        msg = "Could not determine the current branch"
        raise ScmParseError(msg, output=raw)
    return position


def parse_commit_info(raw: str, branch: str = "") -> CommitInfo:
    """Parse `git log --max-count=1` output in git's default format.

    The first three lines are expected to be "commit <sha>",
    "Author: <name>" and "Date: <date>"; the value of each is whatever
    follows the first space. A "Merge:" line printed for merge commits is
    skipped.

    Args:
        raw: Captured log output.
        branch: Branch name to record on the result.

    Returns:
        The commit metadata.

    Raises:
        ScmParseError: If fewer than three lines are present or a line has
            no label/value separator.
    """
    lines = [line for line in raw.splitlines() if line.strip()]
    header = [line for line in lines if not line.startswith(_MERGE_LABEL)]
    if is_fatal(raw) or len(header) < _COMMIT_INFO_FIELDS:
        msg = "Commit log output is missing revision, author or date"
        raise ScmParseError(msg, output=raw)

    values: list[str] = []
    for line in header[:_COMMIT_INFO_FIELDS]:
        label, sep, value = line.partition(" ")
        if not sep or not label or not value.strip():
            msg = f"Malformed commit log line: {line!r}"
            raise ScmParseError(msg, output=raw)
        values.append(value)

    revision, author, last_changed = values
    return CommitInfo(
        revision=revision.split()[0],
        author=author.strip(),
        last_changed=last_changed.strip(),
        branch=branch,
    )


def _parse_count(raw: str, direction: str) -> int:
    text = raw.strip()
    try:
        count = int(text)
    except ValueError as e:
        msg = f"Could not read the number of revisions {direction}: {text!r}"
        raise DriftParseError(msg, output=raw) from e
    if count < 0:
        msg = f"Negative number of revisions {direction}: {count}"
        raise DriftParseError(msg, output=raw)
    return count


def parse_drift(ahead_raw: str, behind_raw: str, stable_branch: str) -> DriftReport:
    """Parse two `git rev-list --count` outputs into a drift report.

    Args:
        ahead_raw: Output counting revisions ahead of the stable line.
        behind_raw: Output counting revisions behind the stable line.
        stable_branch: Name of the stable-line branch.

    Returns:
        The drift report.

    Raises:
        DriftParseError: If either count is missing, non-numeric or negative.
    """
    return DriftReport(
        ahead=_parse_count(ahead_raw, "ahead"),
        behind=_parse_count(behind_raw, "behind"),
        stable_branch=stable_branch,
    )


class GitOutputParser:
    """Parser for git's default human-readable output."""

    __slots__ = ()

    def is_fatal(self, raw: str) -> bool:
        return is_fatal(raw)

    def remote_update_error(self, raw: str) -> str | None:
        return parse_remote_update(raw)

    def command_error(self, raw: str) -> str | None:
        return parse_command_error(raw)

    def branches(
        self, raw: str, stable_branch: str, merged_marker: str, *, remote: str
    ) -> BranchSet:
        return parse_branches(raw, stable_branch, merged_marker, remote=remote)

    def tags(self, raw: str) -> list[str]:
        return parse_tags(raw)

    def local_branches(self, raw: str, current: str) -> LocalBranchSet:
        return parse_local_branches(raw, current)

    def current_position(self, raw: str) -> str:
        return parse_current_position(raw)

    def commit_info(self, raw: str, branch: str = "") -> CommitInfo:
        return parse_commit_info(raw, branch)

    def drift(self, ahead_raw: str, behind_raw: str, stable_branch: str) -> DriftReport:
        return parse_drift(ahead_raw, behind_raw, stable_branch)
