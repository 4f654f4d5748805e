"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is a plain dict for compatibility with deep_merge,
which always returns copies.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "scm": {
        "git_binary": "/usr/bin/git",
        "stable_branch": "master",
        "merged_marker": "merged_",
        "remote": "origin",
        "timeout_ms": 60000,
        "remote_update_retries": 0,
    },
}
