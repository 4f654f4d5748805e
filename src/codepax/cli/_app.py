"""The command-line interface for CodePax."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from codepax.config import safe_load_config
from codepax.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "Inspect and switch git working copies for deployment and testing."


def _launch(
    app: App,
    tokens: tuple[str, ...],
    *,
    verbose: bool,
    config: Path | None,
    project_dir: Path | None,
) -> None:
    cli_overrides: dict[str, object] | None = None
    if verbose:
        cli_overrides = {"logging": {"level": "debug"}}

    loaded_config, config_error = safe_load_config(
        config_path=config,
        project_root=project_dir,
        cli_overrides=cli_overrides,
    )

    cli_logger = create_cli_logger(
        level=loaded_config.logging.level.value,
        log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
        log_file=loaded_config.logging.file,
        command=" ".join(token for token in tokens if not token.startswith("-")),
    )

    ctx = CLIContext(
        config=loaded_config,
        verbose=verbose,
        project_dir=project_dir,
        config_error=config_error,
        logger=cli_logger,
    )
    CLIContext.set_current(ctx)

    try:
        app(tokens)
    finally:
        CLIContext.reset()


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the `codepax` application with its global options."""
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="codepax",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_dir: Annotated[
            Path | None,
            Parameter(name="--project-dir", help="Working copy directory"),
        ] = None,
    ) -> None:
        """Launch the CodePax CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output and debug logging.
            config: Explicit path to config file.
            project_dir: Working copy directory. Defaults to the working
                copy containing the current directory.
        """
        _launch(
            app,
            tokens,
            verbose=verbose,
            config=config,
            project_dir=project_dir,
        )

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `codepax` CLI."""
    app = create_app()
    app.meta()
