"""
Nodes package for the deploy gate.
"""

from app.services.deploy_gate.nodes.event_filter import read_status_event
from app.services.deploy_gate.nodes.locator import locate_pull_request
from app.services.deploy_gate.nodes.history import inspect_history
from app.services.deploy_gate.nodes.evaluation import evaluate_policy
from app.services.deploy_gate.nodes.dispatch import dispatch_actions

__all__ = [
    "read_status_event",
    "locate_pull_request",
    "inspect_history",
    "evaluate_policy",
    "dispatch_actions",
]
