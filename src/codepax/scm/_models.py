"""Working copy state models.

This module defines the structured values produced from git output.
"""

import dataclasses
from dataclasses import dataclass
from enum import StrEnum
from typing import Self


class Platform(StrEnum):
    """Host shell conventions used when rendering command lines."""

    POSIX = "posix"
    WINDOWS = "windows"


class SessionState(StrEnum):
    """Lifecycle states of a RepositorySession."""

    UNINITIALIZED = "uninitialized"
    LOCAL_VALIDATED = "local_validated"
    CREDENTIALS_SYNCED = "credentials_synced"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class BranchSet:
    """Remote-tracking branches of a working copy.

    The stable-line branch and symbolic HEAD entries are never part of
    any of the three tuples.

    Attributes:
        raw: Remote-tracking names as listed by git (e.g. "origin/feature-x").
        active: Branch names without the remote prefix, not carrying the
            merged marker.
        merged: Branch names without the remote prefix, carrying the
            merged marker.
    """

    raw: tuple[str, ...]
    active: tuple[str, ...]
    merged: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class LocalBranchSet:
    """Local branches of a working copy.

    Attributes:
        names: Local branch names with the current-branch marker stripped.
        current: The checked-out branch, or None if it was not found in
            the listing.
    """

    names: tuple[str, ...]
    current: str | None

    def __contains__(self, name: object) -> bool:
        return name in self.names


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Metadata about the most recent commit of the working copy.

    Attributes:
        revision: Full commit SHA hex string.
        author: Author as printed by git ("Name <email>").
        last_changed: Commit date as printed by git.
        branch: Branch checked out when the info was captured or refreshed.
    """

    revision: str
    author: str
    last_changed: str
    branch: str = ""

    def with_branch(self, branch: str) -> Self:
        """Return a copy of this info with an updated branch name."""
        return dataclasses.replace(self, branch=branch)


@dataclass(frozen=True, slots=True)
class DriftReport:
    """Revision drift between the current position and the stable line.

    Attributes:
        ahead: Revisions on the current position missing from the stable line.
        behind: Revisions on the stable line missing from the current position.
        stable_branch: Name of the stable-line branch.
    """

    ahead: int
    behind: int
    stable_branch: str

    @property
    def is_up_to_date(self) -> bool:
        return self.ahead == 0 and self.behind == 0

    @property
    def message(self) -> str:
        """Human-readable drift sentence."""
        if self.is_up_to_date:
            return f"This branch is up to date with '{self.stable_branch}'"

        clauses: list[str] = []
        if self.behind:
            clauses.append(f"{self.behind} revision(s) behind")
        if self.ahead:
            clauses.append(f"{self.ahead} revision(s) ahead of")
        return f"This branch is {' and '.join(clauses)} '{self.stable_branch}'"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class RemoteURL:
    """Components of a remote URL.

    Attributes:
        scheme: URL scheme (https, http, ssh, ...).
        host: Host name without port.
        path: Path component, including the leading slash if present.
        port: Explicit port, or None.
        username: Decoded user name from the userinfo part, or None.
        password: Decoded password from the userinfo part, or None.
    """

    scheme: str
    host: str
    path: str
    port: int | None = None
    username: str | None = None
    password: str | None = None

