import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest

from codepax.config import ScmConfig

GIT = shutil.which("git")

requires_git = pytest.mark.skipif(GIT is None, reason="git executable not available")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


def git(cwd: Path, *args: str) -> str:
    """Run git in `cwd`, failing the test on a non-zero exit."""
    result = subprocess.run(  # noqa: S603
        [GIT or "git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def commit_file(repo: Path, name: str, content: str, message: str) -> None:
    (repo / name).write_text(content)
    _ = git(repo, "add", name)
    _ = git(repo, "commit", "--message", message)


@dataclass(frozen=True, slots=True)
class GitRemoteEnv:
    """A bare remote and a fresh clone of it."""

    remote: Path
    clone: Path
    config: ScmConfig


@pytest.fixture
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> GitRemoteEnv:
    """Create a bare remote with master, feature-x and merged_old, and clone it."""
    home = tmp_path / "home"
    home.mkdir()
    (home / ".gitconfig").write_text(
        "[user]\n"
        "\tname = Test User\n"
        "\temail = test@example.com\n"
        "[init]\n"
        "\tdefaultBranch = master\n"
        "[pull]\n"
        "\trebase = false\n"
    )
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    for name in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(name, raising=False)

    remote = tmp_path / "remote.git"
    remote.mkdir()
    _ = git(remote, "init", "--bare")
    _ = git(remote, "symbolic-ref", "HEAD", "refs/heads/master")

    seed = tmp_path / "seed"
    seed.mkdir()
    _ = git(seed, "init")
    _ = git(seed, "symbolic-ref", "HEAD", "refs/heads/master")
    commit_file(seed, "README", "codepax\n", "Initial commit")
    _ = git(seed, "remote", "add", "origin", str(remote))
    _ = git(seed, "push", "origin", "master")

    _ = git(seed, "checkout", "-b", "feature-x")
    commit_file(seed, "feature.txt", "x\n", "Add feature x")
    _ = git(seed, "push", "origin", "feature-x")

    _ = git(seed, "checkout", "-b", "merged_old", "master")
    commit_file(seed, "old.txt", "old\n", "Old work")
    _ = git(seed, "push", "origin", "merged_old")

    clone = tmp_path / "work"
    _ = git(tmp_path, "clone", str(remote), str(clone))

    return GitRemoteEnv(
        remote=remote,
        clone=clone,
        config=ScmConfig(git_binary=GIT or "git", timeout_ms=30000),
    )
