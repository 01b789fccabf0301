"""
Models package.

Read-only views of GitHub objects used by the deploy gate.
"""

from app.models.pull_request import ChangeRequest, PullRequestHistory
from app.models.status_event import StatusEvent, StatusBranch, Repository

__all__ = [
    "ChangeRequest",
    "PullRequestHistory",
    "StatusEvent",
    "StatusBranch",
    "Repository",
]
