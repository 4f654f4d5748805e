from pathlib import Path

import platformdirs

_APP_NAME = "codepax"


def get_codepax_log_dir() -> Path:
    """Get the per-user log directory for CodePax."""
    return platformdirs.user_log_path(_APP_NAME)


def get_codepax_scm_log_file() -> Path:
    """Get the path to the working copy operations log file."""
    return get_codepax_log_dir() / "scm.log"


def get_codepax_cli_log_file() -> Path:
    """Get the path to the CLI log file."""
    return get_codepax_log_dir() / "cli.log"


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/codepax/config.toml``
    - macOS: ``~/Library/Application Support/codepax/config.toml``
    - Windows: ``%APPDATA%\codepax\config.toml``

    The path is returned regardless of whether the file exists.

    Returns:
        Path to the user config file for the current platform.
    """
    return platformdirs.user_config_path(_APP_NAME) / "config.toml"
