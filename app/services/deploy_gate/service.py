"""
Deploy gate service.

Runs the graph for one status event with its collaborators wired in.
"""

from datetime import datetime
from typing import Callable, Optional

from app.core.config import Settings
from app.core.logging import get_logger
from app.integrations.github import GitHubClient
from app.services.deploy_gate.context import Ctx, utc_now
from app.services.deploy_gate.graph import deploy_gate_graph
from app.services.deploy_gate.policy.loader import get_deploy_policy
from app.services.deploy_gate.state import PipelineState

logger = get_logger(__name__)


class DeployGateService:
    def __init__(
        self,
        settings: Settings,
        github: Optional[GitHubClient] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings
        self.github = github or GitHubClient(
            settings.GITHUB_TOKEN.get_secret_value(), base_url=settings.GITHUB_API_URL
        )
        self.clock = clock

    async def run(self, status_payload: dict) -> PipelineState:
        """
        Run the deploy gate for a status event.

        Args:
            status_payload: GitHub status webhook payload

        Returns:
            Final pipeline state with the verdict and the actions taken.

        Raises:
            GateError: for fatal pipeline errors
            httpx.HTTPStatusError: for failed GitHub reads
        """
        policy = get_deploy_policy(self.settings.POLICY_PATH)
        context = Ctx(
            settings=self.settings,
            github=self.github,
            policy=policy,
            clock=self.clock,
        )

        try:
            result = await deploy_gate_graph.ainvoke(
                {"status_payload": status_payload}, context=context
            )
        except Exception as e:
            logger.error("Deploy gate failed: %s", e)
            raise

        state = PipelineState.model_validate(result)
        logger.info(
            "Run finished: decision=%s approved=%s merged=%s deployed=%s",
            state.decision.value if state.decision else None,
            state.approved,
            state.merged,
            state.deployed,
        )
        return state
