# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Working copy commands that switch or commit."""

from typing import Annotated

from cyclopts import Parameter
from rich.console import Console

from codepax.cli._commands._context import CLIContext

from ._app import app
from ._session import Password, Username, open_session, scm_errors


def _print_output(console: Console, output: str) -> None:
    if output.strip():
        console.print(output.rstrip(), markup=False, highlight=False)


@app.command(name="switch")
def _switch(
    name: str,
    /,
    *,
    tag: Annotated[
        bool,
        Parameter(name="--tag", help="Treat NAME as a tag"),
    ] = False,
    revision: Annotated[
        bool,
        Parameter(name="--revision", help="Treat NAME as a revision"),
    ] = False,
    username: Username = "",
    password: Password = "",
) -> None:
    """Switch the working copy to a branch of the tracked remote

    A branch that exists locally is checked out and pulled; otherwise a
    local tracking branch is created. Tags and revisions are switched to
    the same way, so they must exist as remote branches.

    Args:
        name: Branch, tag or revision name.
        tag: Treat NAME as a tag.
        revision: Treat NAME as a revision.
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()
    ctx = CLIContext.get_current()

    with open_session(username, password) as session, scm_errors():
        if tag:
            output = session.switch_to_tag(name)
        elif revision:
            output = session.switch_to_revision(name)
        else:
            output = session.switch_to_branch(name)

    if ctx.logger is not None:
        ctx.logger.info("switch", name=name, tag=tag, revision=revision)
    _print_output(console, output)


@app.command(name="trunk")
def _trunk(*, username: Username = "", password: Password = "") -> None:
    """Switch the working copy to the stable line

    Args:
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()

    with open_session(username, password) as session, scm_errors():
        output = session.switch_to_trunk()

    _print_output(console, output)


@app.command(name="update")
def _update(*, username: Username = "", password: Password = "") -> None:
    """Pull the current branch from the tracked remote

    Args:
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()

    with open_session(username, password) as session, scm_errors():
        output = session.switch_to_revision()

    _print_output(console, output)


@app.command(name="commit")
def _commit(
    *,
    message: Annotated[
        str,
        Parameter(name=["--message", "-m"], help="Commit message"),
    ],
    path: Annotated[
        str | None,
        Parameter(name=["--path", "-p"], help="Path to add before committing"),
    ] = None,
    username: Username = "",
    password: Password = "",
) -> None:
    """Commit staged changes, optionally adding a path first

    Args:
        message: Commit message.
        path: Path relative to the working copy root to add first.
        username: User name embedded in the remote URL.
        password: Password embedded in the remote URL.
    """
    console = Console()

    with open_session(username, password) as session, scm_errors():
        if path is not None:
            output = session.add_and_commit(message, path)
        else:
            output = session.commit(message)

    _print_output(console, output)
