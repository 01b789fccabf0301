"""
Verdict DTO produced by the policy evaluator.
"""

from typing import Optional
from sqlmodel import SQLModel, Field

from app.schemas.enums import Decision


class Verdict(SQLModel):
    """
    Terminal result of a pipeline gate.

    `fallback` is only set for MERGE_ONLY verdicts: it is what the dispatcher
    applies when the merge does not go through.
    """

    decision: Decision = Field(description="The decision reached by the gate.")
    reason: str = Field(description="Human-readable explanation, used in logs.")
    fallback: Optional[Decision] = Field(
        default=None, description="Decision to apply if a merge does not happen."
    )


def skip(reason: str) -> Verdict:
    """Shorthand for a SKIP verdict."""
    return Verdict(decision=Decision.SKIP, reason=reason)
