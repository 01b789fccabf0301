"""
Status Event Model

Immutable view of a GitHub `status` webhook payload.
Only the fields the deploy gate reads are modelled; everything else is ignored.
"""

from typing import Optional, List

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class StatusCommit(SQLModel):
    model_config = ConfigDict(frozen=True)

    sha: str = Field(description="Commit SHA the branch points at")


class StatusBranch(SQLModel):
    """A branch whose head is the commit the status was reported for."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Branch name, e.g. 'dependabot/npm_and_yarn/lodash-4.17.21'")
    commit: StatusCommit


class RepositoryOwner(SQLModel):
    model_config = ConfigDict(frozen=True)

    login: str


class Repository(SQLModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Repository name")
    full_name: str = Field(default="", description="owner/name")
    owner: Optional[RepositoryOwner] = None
    default_branch: Optional[str] = Field(
        default=None, description="Default branch as reported by GitHub"
    )

    @property
    def owner_login(self) -> str:
        if self.owner:
            return self.owner.login
        return self.full_name.split("/")[0]


class StatusEvent(SQLModel):
    """
    Status event.

    `state` is one of success, failure, pending or error.
    """

    model_config = ConfigDict(frozen=True)

    context: str = Field(description="Name of the check that reported the status")
    state: str = Field(description="success, failure, pending or error")
    sha: str = Field(default="", description="Commit the status was reported for")
    branches: List[StatusBranch] = Field(default_factory=list)
    repository: Optional[Repository] = None
