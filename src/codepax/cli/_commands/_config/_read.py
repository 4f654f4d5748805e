# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, A002
"""Read commands for viewing CodePax configuration."""

from typing import Annotated

from cyclopts import Parameter
from rich.console import Console

from codepax.cli._commands._context import CLIContext, OutputFormat
from codepax.cli._commands._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    format_toml,
    get_error_console,
)

from ._app import app


@app.command(name="show")
def _show(
    *,
    format: Annotated[
        OutputFormat,
        Parameter(
            name=["--format", "-f"],
            help="Output format (toml, json)",
        ),
    ] = OutputFormat.TOML,
    section: Annotated[
        str | None,
        Parameter(
            name=["--section"],
            help="Show specific section only (e.g., logging, scm)",
        ),
    ] = None,
) -> None:
    """Display merged configuration

    Shows the configuration merged from defaults, the user and project
    files, CODEPAX_* environment variables and command line options.

    Args:
        format: Output format (toml, json).
        section: Specific section to show (e.g., logging, scm).
    """
    console = Console()
    ctx = CLIContext.get_current()

    if ctx.config_error:
        get_error_console().print(
            f"[yellow]Warning:[/yellow] {ctx.config_error}", highlight=False
        )

    data = ctx.config.to_dict()
    if section:
        selected = data.get(section)
        if not isinstance(selected, dict):
            exit_with_error(f"Section '{section}' not found", ExitCode.NOT_FOUND)
        data = {section: selected}

    match format:
        case OutputFormat.JSON:
            output = format_json(data)
        case _:
            output = format_toml(data)

    console.print(output.rstrip(), markup=False, highlight=False)
