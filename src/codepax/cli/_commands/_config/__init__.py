# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
"""Config command app for inspecting CodePax configuration."""

# Import command modules to register commands with the app
from . import _read as _read
from ._app import app

__all__ = ["app"]
