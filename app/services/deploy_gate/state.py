"""
Pipeline state model for the deploy gate.

Pure graph state: no service-layer imports.
"""

from typing import Any, Dict, Optional

from sqlmodel import SQLModel, Field

from app.models.pull_request import ChangeRequest
from app.models.status_event import StatusEvent
from app.schemas.enums import Decision
from app.schemas.verdict import Verdict


class PipelineState(SQLModel):
    """
    State of one deploy gate run.

    This is used by LangGraph to manage workflow state, not a database table.
    """

    status_payload: Optional[Dict[str, Any]] = Field(
        default=None, description="Raw payload of the GitHub status event."
    )
    event: Optional[StatusEvent] = Field(
        default=None, description="Parsed status event."
    )
    owner: Optional[str] = Field(default=None, description="Repository owner.")
    repo: Optional[str] = Field(default=None, description="Repository name.")
    default_branch: Optional[str] = Field(
        default=None, description="Branch the bot PRs must target."
    )
    pull_request: Optional[ChangeRequest] = Field(
        default=None, description="The single PR matching the event."
    )
    verdict: Optional[Verdict] = Field(
        default=None, description="Terminal verdict, set once per run."
    )
    approved: bool = Field(default=False, description="Approving review submitted.")
    merged: bool = Field(default=False, description="PR merged by the gate.")
    deployed: bool = Field(default=False, description="Deploy triggered.")

    @property
    def decision(self) -> Optional[Decision]:
        return self.verdict.decision if self.verdict else None

    @property
    def is_skipped(self) -> bool:
        return self.decision == Decision.SKIP
