"""
Status event node for the deploy gate.

Parses the webhook payload and drops events the gate does not act on.
"""

import json
from typing import Optional, Tuple

from langgraph.runtime import Runtime
from pydantic import ValidationError

from app.core.exceptions import MalformedEventError
from app.core.logging import get_logger
from app.models.status_event import StatusEvent
from app.schemas.verdict import skip
from app.services.deploy_gate.context import Ctx
from app.services.deploy_gate.state import PipelineState

logger = get_logger(__name__)

EXPECTED_STATE = "success"


async def read_status_event(state: PipelineState, runtime: Runtime[Ctx]) -> dict:
    """
    Parse the status payload and decide whether the pipeline proceeds.

    Wrong context or a non-success state are skips. A payload that does not
    name exactly one bot branch is an upstream contract violation and fails
    the run.
    """
    ctx = runtime.context
    policy = ctx.policy

    try:
        event = StatusEvent.model_validate(state.status_payload or {})
    except ValidationError as e:
        raise MalformedEventError(f"Status payload could not be parsed: {e}") from e

    if event.context != policy.status_context:
        logger.info("Context is %r, not %r, skipping", event.context, policy.status_context)
        return {"event": event, "verdict": skip(f"Unexpected context {event.context}")}

    logger.debug("Status payload: %s", json.dumps(state.status_payload, default=str))

    if event.state != EXPECTED_STATE:
        logger.info("Status is %r, not success, skipping", event.state)
        return {"event": event, "verdict": skip(f"Status is {event.state}")}

    if len(event.branches) != 1:
        logger.debug("Status branches: %s", [b.name for b in event.branches])
        raise MalformedEventError(
            f"Length of branches array is different than expected. Length: {len(event.branches)}"
        )

    branch = event.branches[0]
    if not policy.is_bot_branch(branch.name):
        raise MalformedEventError(f"Branch had an unexpected name {branch.name}")

    owner, repo = _repository_coordinates(event, ctx.settings.GITHUB_REPOSITORY)
    default_branch = (
        event.repository.default_branch
        if event.repository and event.repository.default_branch
        else ctx.settings.DEFAULT_BRANCH
    )

    return {
        "event": event,
        "owner": owner,
        "repo": repo,
        "default_branch": default_branch,
    }


def _repository_coordinates(
    event: StatusEvent, fallback: Optional[str] = None
) -> Tuple[str, str]:
    if event.repository:
        return event.repository.owner_login, event.repository.name
    if fallback and "/" in fallback:
        owner, repo = fallback.split("/", 1)
        return owner, repo
    raise MalformedEventError(
        "Status payload has no repository and GITHUB_REPOSITORY is not set"
    )
