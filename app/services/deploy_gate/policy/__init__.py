"""
Policy module for the deploy gate.
"""

from app.services.deploy_gate.policy.gates import (
    GATES,
    MANIFEST_GATES,
    TITLE_GATES,
    GateContext,
    evaluate,
    first_verdict,
)
from app.services.deploy_gate.policy.loader import get_deploy_policy, load_policy
from app.services.deploy_gate.policy.types import DeployPolicy

__all__ = [
    "GATES",
    "MANIFEST_GATES",
    "TITLE_GATES",
    "GateContext",
    "evaluate",
    "first_verdict",
    "get_deploy_policy",
    "load_policy",
    "DeployPolicy",
]
