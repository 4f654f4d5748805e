from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem
from pytest_mock import MockerFixture

from codepax.config import (
    DEFAULT_CONFIG,
    PROJECT_CONFIG_FILENAME,
    ConfigSourceName,
    discover_sources,
    find_project_root,
)

USER_CONFIG = Path("/home/bob/.config/codepax/config.toml")


@pytest.fixture(autouse=True)
def _user_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("codepax.config._discovery.get_user_config_path", lambda: USER_CONFIG)


class TestFindProjectRoot:
    def test_delegates_to_working_copy_discovery(self, mocker: MockerFixture) -> None:
        discover = mocker.patch(
            "codepax.config._discovery.discover_working_copy", return_value=Path("/srv/app")
        )

        result = find_project_root(Path("/srv/app/src"))

        assert result == Path("/srv/app")
        discover.assert_called_once_with(Path("/srv/app/src"))

    def test_uses_cwd_when_start_is_none(
        self, mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.chdir(tmp_path)
        discover = mocker.patch(
            "codepax.config._discovery.discover_working_copy", return_value=None
        )

        assert find_project_root() is None
        discover.assert_called_once_with(Path.cwd())


class TestDiscoverSources:
    def test_order_without_cli(self, fs: FakeFilesystem) -> None:
        sources = discover_sources(Path("/srv/app"))

        assert [s.name for s in sources] == [
            ConfigSourceName.ENV,
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_cli_source_comes_first(self, fs: FakeFilesystem) -> None:
        overrides = {"scm": {"stable_branch": "main"}}

        sources = discover_sources(
            Path("/srv/app"), include_cli=True, cli_overrides=overrides
        )

        assert sources[0].name is ConfigSourceName.CLI
        assert sources[0].exists is True
        assert sources[0].values == overrides

    def test_project_file_existence(self, fs: FakeFilesystem) -> None:
        fs.create_file(f"/srv/app/{PROJECT_CONFIG_FILENAME}", contents="")

        project = discover_sources(Path("/srv/app"))[1]

        assert project.path == Path("/srv/app") / PROJECT_CONFIG_FILENAME
        assert project.exists is True

    def test_missing_files_are_listed(self, fs: FakeFilesystem) -> None:
        sources = {s.name: s for s in discover_sources(Path("/srv/app"))}

        assert sources[ConfigSourceName.PROJECT].exists is False
        assert sources[ConfigSourceName.USER].path == USER_CONFIG
        assert sources[ConfigSourceName.USER].exists is False

    def test_no_project_source_outside_working_copy(
        self, fs: FakeFilesystem, mocker: MockerFixture
    ) -> None:
        _ = mocker.patch("codepax.config._discovery.find_project_root", return_value=None)

        names = [s.name for s in discover_sources(include_env=False)]

        assert names == [ConfigSourceName.USER, ConfigSourceName.DEFAULT]

    def test_default_source_carries_defaults(self, fs: FakeFilesystem) -> None:
        default = discover_sources(Path("/srv/app"))[-1]

        assert default.values == DEFAULT_CONFIG
