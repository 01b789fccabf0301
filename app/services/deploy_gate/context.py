"""
LangGraph Runtime Context for the deploy gate.

Defines the context schema for dependency injection into LangGraph nodes.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from app.core.config import Settings
from app.integrations.github import GitHubClient
from app.services.deploy_gate.policy.types import DeployPolicy


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Ctx:
    """Runtime context for LangGraph nodes.

    Attributes:
        settings: Validated configuration.
        github: Client used for every GitHub call.
        policy: Recognized identifiers and the merge-only allow-list.
        clock: Source of the current, timezone-aware moment.
    """

    settings: Settings
    github: GitHubClient
    policy: DeployPolicy
    clock: Callable[[], datetime] = field(default=utc_now)
