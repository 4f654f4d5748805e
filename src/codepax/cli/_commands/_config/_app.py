"""Cyclopts App definition for config commands."""

from cyclopts import App

app = App(
    name="config",
    help="Inspect CodePax configuration",
    help_on_error=True,
)
