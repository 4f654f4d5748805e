"""Git working copy discovery helpers.

These helpers only locate a working copy on disk; every operation on the
working copy itself goes through the git binary (see `codepax.scm`).
"""

from pathlib import Path

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo


def decode_bytes(value: bytes | str) -> str:
    """Decode bytes to str if needed.

    Args:
        value: A bytes or str value.

    Returns:
        The value as a string.
    """
    if isinstance(value, bytes):
        return value.decode()
    return value


def get_worktree_dir(repo: Repo) -> Path:
    """Get the worktree directory for a repository.

    Args:
        repo: The repository instance.

    Returns:
        Path to the worktree directory.
    """
    path = Path(decode_bytes(repo.path))
    # If path is .git directory, return parent
    if path.name == ".git":
        return path.parent
    return path


def discover_working_copy(cwd: Path | str | None = None) -> Path | None:
    """Discover the root of the git working copy containing a directory.

    Args:
        cwd: Directory to start search from. If None, uses current directory.

    Returns:
        Resolved path to the working copy root, or None if not inside one.
    """
    try:
        repo = Repo.discover(str(cwd)) if cwd is not None else Repo.discover()
    except NotGitRepository:
        return None

    try:
        return get_worktree_dir(repo).resolve()
    finally:
        repo.close()
