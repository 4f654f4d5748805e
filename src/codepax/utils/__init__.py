"""Shared utilities for CodePax."""

from ._exec import (
    DEFAULT_TIMEOUT_MS,
    CommandConfig,
    CommandResult,
    run_command,
    truncate_output,
)
from ._git import decode_bytes, discover_working_copy, get_worktree_dir
from ._logging import create_cli_logger, create_scm_logger, resolve_log_level
from ._paths import (
    get_codepax_cli_log_file,
    get_codepax_log_dir,
    get_codepax_scm_log_file,
    get_user_config_path,
)

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "CommandConfig",
    "CommandResult",
    "create_cli_logger",
    "create_scm_logger",
    "decode_bytes",
    "discover_working_copy",
    "get_codepax_cli_log_file",
    "get_codepax_log_dir",
    "get_codepax_scm_log_file",
    "get_user_config_path",
    "get_worktree_dir",
    "resolve_log_level",
    "run_command",
    "truncate_output",
]
