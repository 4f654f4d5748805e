# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing CodePax configuration values.
"""

from pathlib import Path  # noqa: TC003
from typing import Any, ClassVar, Self, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from codepax.config._defaults import DEFAULT_CONFIG
from codepax.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from codepax.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from codepax.config._models._logging import LoggingConfig
from codepax.config._models._scm import ScmConfig
from codepax.exceptions import ConfigValidationError

T = TypeVar("T")


def _parse_log_level(value: str) -> LogLevel:
    """Parse log level string to LogLevel enum, with fallback.

    Args:
        value: Log level string value.

    Returns:
        LogLevel enum value, defaulting to INFO for invalid values.
    """
    try:
        return LogLevel(value)
    except ValueError:
        return LogLevel.INFO


def _parse_log_format(value: str) -> LogFormat:
    try:
        return LogFormat(value)
    except ValueError:
        return LogFormat.JSON


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=_parse_log_level(data.get("level", "info")),
        format=_parse_log_format(data.get("format", "json")),
        file=data.get("file", ""),
    )


def _parse_scm(data: dict[str, Any], *, source: str | None = None) -> ScmConfig:
    """Parse scm section dictionary into ScmConfig.

    Args:
        data: Dictionary containing scm configuration.
        source: Description of where the values came from, for error context.

    Returns:
        Parsed ScmConfig instance.

    Raises:
        ConfigValidationError: If a value has the wrong type or range.
    """
    try:
        return ScmConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        key = "scm." + ".".join(str(part) for part in first["loc"])
        msg = f"Invalid configuration value for {key}: {first['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=first.get("input"),
            expected=first["type"],
            source=source,
        ) from e


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to CodePax configuration.
    Use factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _scm: ScmConfig = PrivateAttr(default_factory=ScmConfig)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _logging: LoggingConfig | None = None,
        _scm: ScmConfig | None = None,
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict(), from_file(), or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _logging: Parsed logging configuration section.
            _scm: Parsed scm configuration section.
        """
        super().__init__()
        self._data = _data if _data is not None else {}
        self._sources = _sources
        self._logging = _logging if _logging is not None else LoggingConfig()
        self._scm = _scm if _scm is not None else ScmConfig()

    @classmethod
    def _from_merged(
        cls,
        merged: dict[str, Any],
        sources: tuple[ConfigSource, ...],
        *,
        source: str | None = None,
    ) -> Self:
        return cls(
            _data=merged,
            _sources=sources,
            _logging=_parse_logging(merged.get("logging", {})),
            _scm=_parse_scm(merged.get("scm", {}), source=source),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values, merged over the defaults.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If a section fails validation.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._from_merged(merged, ())

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=path,
            exists=True,
            values=data,
        )
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._from_merged(merged, (source,), source=str(path))

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order
        (defaults -> user -> project -> env -> cli).

        Args:
            project_root: Working copy root. If None, auto-detected from the
                current directory.
            include_env: Include environment variables as a source.
            include_cli: Include CLI overrides.
            cli_overrides: Dict of CLI argument overrides. Only used if
                include_cli is True.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        # Deferred import to avoid circular dependency
        from codepax.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            project_root=project_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        # Sources are discovered highest-to-lowest, so reverse for merging
        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name == ConfigSourceName.DEFAULT:
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.name == ConfigSourceName.CLI:
                values = cli_overrides or {}
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

            if values:
                merged = deep_merge(merged, values)

        return cls._from_merged(merged, tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration.

        Returns:
            List of ConfigSource objects in precedence order.
        """
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @property
    def scm(self) -> ScmConfig:
        """Return the scm configuration section."""
        return self._scm

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., "scm.stable_branch").
            default: Default value if key not found.

        Returns:
            The configuration value, or default if not found.

        Examples:
            >>> config.get("scm.stable_branch")
            'master'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Returns:
            Deep copy of the merged configuration values.
        """
        return copy_value(self._data)

    def to_toml(self) -> str:
        """Convert configuration to a TOML string.

        Returns:
            TOML string representation of the merged configuration.
        """
        return tomli_w.dumps(self.to_dict())
