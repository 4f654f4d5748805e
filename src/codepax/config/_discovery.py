"""Configuration source discovery.

This module locates the configuration files that contribute to the merged
CodePax configuration: the per-user file and the per-working-copy file.
"""

from pathlib import Path
from typing import Any

from codepax.utils import discover_working_copy, get_user_config_path

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_CONFIG_FILENAME = ".codepax.toml"


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the root of the git working copy containing `start`.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.

    Returns:
        The working copy root, or None outside a git working copy.
    """
    return discover_working_copy(start or Path.cwd())


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Discovers configuration sources in precedence order (highest first).
    File-based sources are checked for existence and included either way.

    Args:
        project_root: Working copy root. If None, auto-detect from the
            current directory.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: Dictionary of CLI argument overrides.

    Returns:
        List of ConfigSource objects in precedence order (highest first).

    Examples:
        >>> sources = discover_sources(Path("/srv/www/project"))
        >>> [s.name.value for s in sources]
        ['env', 'project', 'user', 'default']
    """
    sources: list[ConfigSource] = []

    resolved_root = project_root if project_root else find_project_root()

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    if resolved_root:
        project_path = resolved_root / PROJECT_CONFIG_FILENAME
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
