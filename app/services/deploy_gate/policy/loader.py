"""
Policy loading utilities.
"""

import os
from functools import lru_cache
from typing import Any, Dict, Optional

import yaml

from app.core.logging import get_logger
from app.services.deploy_gate.policy.types import DeployPolicy

logger = get_logger(__name__)

DEFAULT_POLICY_PATH = os.path.join(os.path.dirname(__file__), "policy.yaml")


@lru_cache(maxsize=4)
def load_policy(policy_path: str) -> Dict[str, Any]:
    """
    Load policy from YAML file.

    Args:
        policy_path: Path to the policy YAML file.

    Returns:
        Dictionary containing the policy.
    """
    with open(policy_path, "r", encoding="utf-8") as f:
        policy = yaml.safe_load(f)
    return policy or {}


def get_deploy_policy(policy_path: Optional[str] = None) -> DeployPolicy:
    """
    Build the DeployPolicy from a YAML file.

    Args:
        policy_path: Path to the policy YAML. Defaults to the bundled policy.yaml.

    Returns:
        Parsed DeployPolicy.
    """
    path = str(policy_path or DEFAULT_POLICY_PATH)
    policy = load_policy(path)
    logger.debug("Loaded deploy policy from %s", path)
    return DeployPolicy.model_validate(policy)
