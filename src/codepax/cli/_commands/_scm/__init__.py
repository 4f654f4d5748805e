# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
"""Working copy commands."""

# Import command modules to register commands with the app
from . import _read as _read, _write as _write
from ._app import app
from ._session import exit_code_for, open_session, resolve_project_dir, scm_errors

__all__ = ["app", "exit_code_for", "open_session", "resolve_project_dir", "scm_errors"]
