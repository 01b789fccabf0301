"""
Pull request lookup node for the deploy gate.
"""

from langgraph.runtime import Runtime

from app.core.exceptions import PullRequestLookupError
from app.core.logging import get_logger
from app.models.pull_request import ChangeRequest
from app.services.deploy_gate.context import Ctx
from app.services.deploy_gate.state import PipelineState

logger = get_logger(__name__)


async def locate_pull_request(state: PipelineState, runtime: Runtime[Ctx]) -> dict:
    """
    Find the one open PR whose head branch, base branch and head SHA match the event.

    Zero or several matches fail the run: acting on an ambiguous match could
    merge or deploy the wrong PR.
    """
    branch = state.event.branches[0]
    data = await runtime.context.github.list_open_pull_requests(
        state.owner, state.repo, state.default_branch
    )

    matches = [
        pr
        for pr in (ChangeRequest.from_api(item) for item in data)
        if pr.matches(branch.name, branch.commit.sha, state.default_branch)
    ]

    if len(matches) != 1:
        logger.debug("Matching PRs: %s", [pr.number for pr in matches])
        raise PullRequestLookupError(
            f"Expected exactly one open PR for {branch.name}@{branch.commit.sha}, "
            f"found {len(matches)}"
        )

    pull_request = matches[0]
    logger.info("Found PR %s for %s", pull_request.number, branch.name)
    return {"pull_request": pull_request}
