"""
History node for the deploy gate.

Only pristine PRs are acted on: a single commit authored by the bot, with no
comments and no reviews.
"""

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.verdict import skip
from app.services.deploy_gate.context import Ctx
from app.services.deploy_gate.state import PipelineState

logger = get_logger(__name__)


async def inspect_history(state: PipelineState, runtime: Runtime[Ctx]) -> dict:
    ctx = runtime.context
    pr = state.pull_request
    history = await ctx.github.fetch_pr_history(state.owner, state.repo, pr.number)

    if not history.is_untouched:
        reason = (
            f"Found interaction with the PR. Commits: {len(history.commits)}, "
            f"Comments: {len(history.comments)}, Reviews: {len(history.reviews)}"
        )
        logger.info("%s. Skipping.", reason)
        return {"verdict": skip(reason)}

    author = history.first_commit_author
    if not ctx.policy.is_bot_author(author):
        logger.info("First commit not from dependabot. Commit author: %s", author)
        return {"verdict": skip(f"Commit author {author!r} is not the bot")}

    return {}
