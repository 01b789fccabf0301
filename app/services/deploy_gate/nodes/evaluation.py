"""
Policy evaluation node for the deploy gate.
"""

from dataclasses import replace
from pathlib import Path

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.services.deploy_gate.context import Ctx
from app.services.deploy_gate.manifest import DependencyManifest, manifest_path
from app.services.deploy_gate.policy.gates import (
    MANIFEST_GATES,
    TITLE_GATES,
    GateContext,
    evaluate,
    first_verdict,
)
from app.services.deploy_gate.state import PipelineState

logger = get_logger(__name__)


async def load_manifest(
    ctx: Ctx, state: PipelineState, directory: str
) -> DependencyManifest:
    """
    Read the package.json the PR updates.

    From MANIFEST_ROOT when the repository is checked out locally, otherwise
    from the default branch through the contents API.
    """
    root = ctx.settings.MANIFEST_ROOT
    if root is not None:
        return DependencyManifest.from_file(Path(manifest_path(directory, root)))

    path = manifest_path(directory)
    content = await ctx.github.get_file_contents(
        state.owner, state.repo, path, state.default_branch
    )
    if content is None:
        logger.warning("No %s on %s, all packages are indirect", path, state.default_branch)
        return DependencyManifest()
    return DependencyManifest.from_json(content)


async def evaluate_policy(state: PipelineState, runtime: Runtime[Ctx]) -> dict:
    """
    Run the policy gates on the located PR and record the verdict.

    The manifest is only loaded once the title gates have passed, so a PR
    skipped on its version or labels never touches package.json.
    """
    ctx = runtime.context
    pr = state.pull_request

    gate_context = GateContext(
        pull_request=pr,
        settings=ctx.settings,
        policy=ctx.policy,
        manifest=DependencyManifest(),
        now=ctx.clock(),
    )

    verdict = first_verdict(gate_context, TITLE_GATES)
    if verdict is None:
        manifest = await load_manifest(ctx, state, gate_context.directory)
        verdict = evaluate(replace(gate_context, manifest=manifest), MANIFEST_GATES)

    logger.info("PR %s: %s (%s)", pr.number, verdict.decision.value, verdict.reason)
    return {"verdict": verdict}
