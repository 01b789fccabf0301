"""
Schema and DTO package.
"""

from app.schemas.enums import (
    Decision,
    DependencyClassification,
    DeployDependencies,
    VersionBump,
)
from app.schemas.verdict import Verdict, skip

__all__ = [
    "Decision",
    "DependencyClassification",
    "DeployDependencies",
    "VersionBump",
    "Verdict",
    "skip",
]
