from pathlib import Path

from dulwich.repo import Repo
from pytest_mock import MockerFixture

from codepax.utils import decode_bytes, discover_working_copy, get_worktree_dir


class TestDecodeBytes:
    def test_decodes_bytes(self) -> None:
        assert decode_bytes(b"/srv/app") == "/srv/app"

    def test_passes_str_through(self) -> None:
        assert decode_bytes("/srv/app") == "/srv/app"


class TestGetWorktreeDir:
    def test_strips_git_directory(self, mocker: MockerFixture) -> None:
        repo = mocker.Mock(path=b"/srv/app/.git")

        assert get_worktree_dir(repo) == Path("/srv/app")

    def test_keeps_worktree_path(self, mocker: MockerFixture) -> None:
        repo = mocker.Mock(path="/srv/app")

        assert get_worktree_dir(repo) == Path("/srv/app")


class TestDiscoverWorkingCopy:
    def test_finds_root_from_subdirectory(self, tmp_path: Path) -> None:
        Repo.init(str(tmp_path)).close()
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)

        assert discover_working_copy(nested) == tmp_path.resolve()

    def test_returns_none_outside_working_copy(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        from dulwich.errors import NotGitRepository

        _ = mocker.patch(
            "codepax.utils._git.Repo.discover", side_effect=NotGitRepository("none")
        )

        assert discover_working_copy(tmp_path) is None
