"""Working copy configuration model.

This module provides the ScmConfig Pydantic model holding the values that
drive git invocations and branch classification.
"""

from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ScmConfig(BaseModel):
    """SCM configuration section.

    Attributes:
        git_binary: Path to the git executable.
        stable_branch: Long-lived branch that drift is measured against.
        merged_marker: Branch name prefix marking merged/archived branches.
        remote: Name of the remote whose branches are listed.
        timeout_ms: Per-invocation timeout for git, in milliseconds.
        remote_update_retries: Extra attempts for a failed `remote update`.
    """

    # Environment values such as CODEPAX_SCM__STABLE_BRANCH=2024 arrive as numbers
    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", coerce_numbers_to_str=True
    )

    git_binary: NonEmptyStr = "/usr/bin/git"
    stable_branch: NonEmptyStr = "master"
    merged_marker: NonEmptyStr = "merged_"
    remote: NonEmptyStr = "origin"
    timeout_ms: int = Field(default=60000, gt=0)
    remote_update_retries: int = Field(default=0, ge=0, le=5)
