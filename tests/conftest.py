"""Shared test fixtures for CodePax tests."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import structlog
from rich.console import Console
from structlog.testing import CapturingLogger

from codepax.config import ScmConfig
from codepax.scm import FakeExecutor, RepositorySession

REMOTE_URL = "https://example.com/acme/app.git"

LAST_LOG = """\
commit 3f2a9c1d4b5e6f708192a3b4c5d6e7f8091a2b3c
Author: Jane Doe <jane@example.com>
Date:   Mon Oct 19 10:00:00 2026 +0000

    Fix login redirect
"""

REMOTE_BRANCHES = """\
  origin/HEAD -> origin/master
  origin/feature-x
  origin/master
  origin/merged_old-login
  origin/hotfix-1
"""


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def capture() -> CapturingLogger:
    """Raw logger recording every structlog call."""
    return CapturingLogger()


@pytest.fixture
def scm_logger(capture: CapturingLogger) -> Any:  # pyright: ignore[reportExplicitAny]
    """Bound logger passing event dicts straight to `capture`."""
    return structlog.wrap_logger(
        capture,
        processors=[],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )


@pytest.fixture
def fake() -> FakeExecutor:
    """Executor scripted as a healthy working copy on the stable line."""
    executor = FakeExecutor()
    executor.respond("status", output="On branch master\nnothing to commit\n")
    executor.respond("config", "--get", "remote.origin.url", output=f"{REMOTE_URL}\n")
    executor.respond("remote", "update", output="Fetching origin\n")
    executor.respond("log", "--max-count=1", output=LAST_LOG)
    executor.respond("rev-parse", "--abbrev-ref", "HEAD", output="master\n")
    executor.respond("branch", "-r", output=REMOTE_BRANCHES)
    executor.respond("branch", output="  feature-x\n* master\n")
    executor.respond("tag", "-l", output="v1.0\nv1.1\n")
    return executor


SessionFactory = Callable[..., RepositorySession]


@pytest.fixture
def make_session(
    tmp_path: Path, fake: FakeExecutor, scm_logger: Any  # pyright: ignore[reportExplicitAny]
) -> SessionFactory:
    """Return a factory opening sessions on `tmp_path` through `fake`."""

    def _make(
        username: str = "",
        password: str = "",
        remote_url: str = "",
        *,
        config: ScmConfig | None = None,
        project_dir: Path | None = None,
    ) -> RepositorySession:
        return RepositorySession(
            username,
            password,
            remote_url,
            project_dir if project_dir is not None else tmp_path,
            config=config,
            executor=fake,
            logger=scm_logger,
        )

    return _make


def logged_events(capture: CapturingLogger) -> list[str]:
    """Event names recorded by `capture`, in order."""
    return [str(call.kwargs.get("event")) for call in capture.calls]
