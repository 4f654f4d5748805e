"""Cyclopts App definition for working copy commands."""

from cyclopts import App

app = App(
    name="scm",
    help="Inspect and switch the git working copy",
    help_on_error=True,
)
