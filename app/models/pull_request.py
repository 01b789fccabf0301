"""
Pull Request Model

Read-only snapshot of an open pull request, taken from the pulls listing.
Not cached across runs.
"""

from typing import Any, Dict, FrozenSet, List
from sqlmodel import SQLModel, Field


class ChangeRequest(SQLModel):
    """
    Open pull request that a status event may refer to.
    """

    number: int = Field(description="GitHub PR number")
    title: str = Field(description="PR title, encodes package and versions")
    base_branch: str = Field(description="Branch the PR targets")
    head_branch: str = Field(description="Source branch of the PR")
    head_sha: str = Field(description="Commit SHA of the PR head")
    labels: FrozenSet[str] = Field(default_factory=frozenset)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ChangeRequest":
        """Build from a GitHub `pulls` API object."""
        return cls(
            number=data["number"],
            title=data.get("title", ""),
            base_branch=(data.get("base") or {}).get("ref", ""),
            head_branch=(data.get("head") or {}).get("ref", ""),
            head_sha=(data.get("head") or {}).get("sha", ""),
            labels=frozenset(label["name"] for label in data.get("labels") or []),
        )

    def matches(self, branch: str, sha: str, base: str) -> bool:
        return (
            self.head_branch == branch
            and self.base_branch == base
            and self.head_sha == sha
        )


class PullRequestHistory(SQLModel):
    """Commits, review comments and reviews of a PR, fetched together."""

    commits: List[Dict[str, Any]] = Field(default_factory=list)
    comments: List[Dict[str, Any]] = Field(default_factory=list)
    reviews: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def is_untouched(self) -> bool:
        return len(self.commits) <= 1 and not self.comments and not self.reviews

    @property
    def first_commit_author(self) -> str:
        if not self.commits:
            return ""
        commit = self.commits[0].get("commit") or {}
        return (commit.get("author") or {}).get("name") or ""
