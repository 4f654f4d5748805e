"""CodePax configuration.

This module provides the public API for CodePax configuration management,
including loading and typed access to configuration values.

Example:
    >>> from codepax.config import Config
    >>> config = Config.load()
    >>> config.scm.stable_branch
    'master'
"""

from codepax.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._discovery import PROJECT_CONFIG_FILENAME, discover_sources, find_project_root
from ._load import safe_load_config
from ._loader import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ScmConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "PROJECT_CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ScmConfig",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
