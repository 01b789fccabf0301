"""
Deploy gate: decides whether a Dependabot PR is merged, deployed or left alone.
"""

from app.services.deploy_gate.service import DeployGateService
from app.services.deploy_gate.state import PipelineState

__all__ = ["DeployGateService", "PipelineState"]
