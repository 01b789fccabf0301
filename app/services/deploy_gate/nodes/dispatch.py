"""
Action nodes for the deploy gate.

These nodes perform the mutating GitHub calls: review, merge and deploy.
"""

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.enums import Decision
from app.services.deploy_gate.context import Ctx
from app.services.deploy_gate.state import PipelineState

logger = get_logger(__name__)


async def dispatch_actions(state: PipelineState, runtime: Runtime[Ctx]) -> dict:
    """
    Approve the PR, then merge or deploy it according to the verdict.

    A refused merge is not an error: the verdict's fallback decides whether
    the PR is deployed instead.
    """
    ctx = runtime.context
    pr = state.pull_request
    verdict = state.verdict

    await ctx.github.approve_pull_request(state.owner, state.repo, pr.number)
    logger.info("Approved PR %s", pr.number)

    decision = verdict.decision
    merged = False

    if decision == Decision.MERGE_ONLY:
        logger.info("Merging dependency without deploy. PR %s", pr.number)
        merged = await ctx.github.merge_pull_request(
            state.owner,
            state.repo,
            pr.number,
            sha=pr.head_sha,
            merge_method=ctx.policy.merge_method,
        )
        if merged:
            return {"approved": True, "merged": True}
        decision = verdict.fallback or Decision.SKIP
        logger.info("PR %s was not merged, falling back to %s", pr.number, decision.value)

    if decision == Decision.DEPLOY:
        deployment = await ctx.github.create_deployment(
            state.owner,
            state.repo,
            ref=pr.head_sha,
            environment=ctx.settings.DEPLOY_ENVIRONMENT,
            payload={"pull_number": pr.number, "branch": pr.head_branch},
        )
        logger.info("Deploy of PR %s triggered (deployment %s)", pr.number, deployment.get("id"))
        return {"approved": True, "merged": merged, "deployed": True}

    logger.info("Skipping deploy outside of working hours")
    return {"approved": True, "merged": merged}
