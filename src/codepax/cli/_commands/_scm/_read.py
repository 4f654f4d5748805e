# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Read-only working copy commands."""

from typing import Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.table import Table

from codepax.cli._commands._context import CLIContext

from ._app import app
from ._session import Password, Username, open_session, scm_errors


def _info_table(title: str, rows: dict[str, str]) -> Table:
    table = Table(title=title, show_header=False, title_justify="left")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in rows.items():
        table.add_row(key, value)
    return table


def _print_names(console: Console, names: list[str], empty: str) -> None:
    if not names:
        console.print(f"[dim]{empty}[/dim]")
        return
    for name in names:
        console.print(name, markup=False, highlight=False)


@app.command(name="info")
def _info(*, username: Username = "", password: Password = "") -> None:
    """Show the latest commit and working copy details

    Args:
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()
    ctx = CLIContext.get_current()

    with open_session(username, password) as session, scm_errors():
        top = session.get_repo_top_info()
        more = session.get_repo_more_info()

    console.print(_info_table("Repository", top))
    if ctx.verbose:
        console.print(_info_table("Working copy", more))


@app.command(name="branches")
def _branches(
    *,
    merged: Annotated[
        bool,
        Parameter(name="--merged", help="List merged branches instead of active ones"),
    ] = False,
    all_branches: Annotated[
        bool,
        Parameter(name=["--all", "-a"], help="List every remote-tracking branch"),
    ] = False,
    username: Username = "",
    password: Password = "",
) -> None:
    """List branches of the tracked remote

    The stable line is never listed. Without options only active branches
    are shown.

    Args:
        merged: List merged branches instead of active ones.
        all_branches: List every remote-tracking branch with its remote prefix.
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()

    with open_session(username, password) as session, scm_errors():
        if all_branches:
            names = session.get_all_branches()
        elif merged:
            names = session.get_merged_branches()
        else:
            names = session.get_active_branches()

    _print_names(console, names, "No branches")


@app.command(name="tags")
def _tags(*, username: Username = "", password: Password = "") -> None:
    """List tags

    Args:
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()

    with open_session(username, password) as session, scm_errors():
        tags = session.get_tags()

    _print_names(console, tags, "No tags")


@app.command(name="status")
def _status(*, username: Username = "", password: Password = "") -> None:
    """Show the current branch and its drift from the stable line

    Args:
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()

    with open_session(username, password) as session, scm_errors():
        position = session.get_current_position()
        report = session.get_branch_status()
        stable = session.config.stable_branch

    console.print(f"On branch [bold]{position}[/bold]", highlight=False)
    if report is None:
        console.print(f"[dim]This is the stable line '{stable}'[/dim]", highlight=False)
    elif report.is_up_to_date:
        console.print(f"[green]{report.message}[/green]", highlight=False)
    else:
        console.print(f"[yellow]{report.message}[/yellow]", highlight=False)
