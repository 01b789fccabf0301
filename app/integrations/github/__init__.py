"""
GitHub integration package.
"""

from app.integrations.github.client import GitHubClient
from app.integrations.github.security import verify_signature

__all__ = [
    "GitHubClient",
    "verify_signature",
]
