"""
Enums shared across the deploy gate.

Pure data definitions: no service imports.
"""

from enum import Enum, IntEnum


class VersionBump(IntEnum):
    """Semantic-version bump type, ordered PATCH < MINOR < MAJOR."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2


class DeployDependencies(str, Enum):
    """Which dependency groups may be deployed automatically."""

    DEV = "dev"
    ALL = "all"


class DependencyClassification(str, Enum):
    """Where a package is declared in the dependency manifest."""

    PRODUCTION = "PRODUCTION"
    DEVELOPMENT = "DEVELOPMENT"
    ANY = "ANY"  # only peer/optional dependencies
    UNKNOWN = "UNKNOWN"


class Decision(str, Enum):
    """Outcome of a pipeline run."""

    SKIP = "SKIP"
    MERGE_ONLY = "MERGE_ONLY"
    DEPLOY = "DEPLOY"
