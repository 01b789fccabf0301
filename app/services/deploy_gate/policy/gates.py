"""
Policy gates for the deploy gate.

Each gate is a pure function of the GateContext. It returns None to let the
next gate run, or a terminal Verdict. Gates run in the order of GATES: local
checks on the PR first, manifest lookups next, the clock last.
"""

from dataclasses import dataclass
from datetime import datetime
from functools import cached_property
from typing import Callable, Optional, Sequence

from app.core.config import Settings
from app.core.exceptions import TitleParseError
from app.models.pull_request import ChangeRequest
from app.schemas.enums import (
    Decision,
    DependencyClassification,
    DeployDependencies,
    VersionBump,
)
from app.schemas.verdict import Verdict, skip
from app.services.deploy_gate.manifest import DependencyManifest
from app.services.deploy_gate.policy.title import (
    ParseFailure,
    parse_package_name,
    parse_title,
    parse_version_bump,
)
from app.services.deploy_gate.policy.types import DeployPolicy
from app.services.deploy_gate.policy.working_hours import is_allowed_to_deploy_now


@dataclass(frozen=True)
class GateContext:
    """
    Inputs of a policy evaluation.

    Title fields and the manifest classification are computed on first access,
    so a gate that short-circuits early never triggers a later parse.
    """

    pull_request: ChangeRequest
    settings: Settings
    policy: DeployPolicy
    manifest: DependencyManifest
    now: datetime

    @cached_property
    def version_bump(self) -> VersionBump:
        result = parse_version_bump(self.pull_request.title)
        if isinstance(result, ParseFailure):
            raise TitleParseError(self.pull_request.title, result.reason)
        return result.value

    @cached_property
    def package_name(self) -> str:
        result = parse_package_name(self.pull_request.title)
        if isinstance(result, ParseFailure):
            raise TitleParseError(self.pull_request.title, result.reason)
        return result.value

    @cached_property
    def directory(self) -> str:
        result = parse_title(self.pull_request.title)
        if isinstance(result, ParseFailure):
            raise TitleParseError(self.pull_request.title, result.reason)
        return result.value.directory

    @cached_property
    def classification(self) -> DependencyClassification:
        return self.manifest.classify(self.package_name)


Gate = Callable[[GateContext], Optional[Verdict]]


def should_deploy_version(version: VersionBump, max_version: VersionBump) -> bool:
    return version <= max_version


def version_gate(ctx: GateContext) -> Optional[Verdict]:
    max_version = ctx.settings.MAX_DEPLOY_VERSION
    if not should_deploy_version(ctx.version_bump, max_version):
        return skip(
            f"Version type {ctx.version_bump.name} is above maxDeployVersion {max_version.name}"
        )
    return None


def label_gate(ctx: GateContext) -> Optional[Verdict]:
    labels = ctx.pull_request.labels
    if ctx.policy.label not in labels:
        return skip(f"PR labels {sorted(labels)} do not include {ctx.policy.label!r}")
    return None


def package_gate(ctx: GateContext) -> Optional[Verdict]:
    _ = ctx.package_name  # raises TitleParseError
    return None


def production_dependency_gate(ctx: GateContext) -> Optional[Verdict]:
    if (
        ctx.settings.DEPLOY_DEPENDENCIES == DeployDependencies.DEV
        and ctx.classification == DependencyClassification.PRODUCTION
    ):
        return skip(f"Package {ctx.package_name} found in prod dependencies")
    return None


def indirect_dependency_gate(ctx: GateContext) -> Optional[Verdict]:
    if (
        not ctx.settings.UPDATE_INDIRECT_DEPENDENCIES
        and ctx.classification == DependencyClassification.UNKNOWN
    ):
        return skip(f"Package {ctx.package_name} not found in any dependencies")
    return None


def deploy_window_gate(ctx: GateContext) -> Optional[Verdict]:
    if is_allowed_to_deploy_now(
        ctx.settings.DEPLOY_ONLY_IN_WORKING_HOURS, ctx.now, ctx.settings.zone
    ):
        return Verdict(decision=Decision.DEPLOY, reason="Deploy allowed")
    return skip("Outside of working hours, deploy deferred")


def merge_only_gate(ctx: GateContext) -> Optional[Verdict]:
    if (
        ctx.classification == DependencyClassification.DEVELOPMENT
        and ctx.policy.is_mergeable_dev_dependency(ctx.package_name)
    ):
        # applied by the dispatcher if the merge does not go through
        fallback = deploy_window_gate(ctx)
        return Verdict(
            decision=Decision.MERGE_ONLY,
            reason=f"Dev dependency {ctx.package_name} merged without deploy",
            fallback=fallback.decision,
        )
    return None


# Gates that only read the PR itself. They run before the manifest is loaded.
TITLE_GATES: Sequence[Gate] = (
    version_gate,
    label_gate,
    package_gate,
)

MANIFEST_GATES: Sequence[Gate] = (
    production_dependency_gate,
    indirect_dependency_gate,
    merge_only_gate,
    deploy_window_gate,
)

GATES: Sequence[Gate] = (*TITLE_GATES, *MANIFEST_GATES)


def first_verdict(ctx: GateContext, gates: Sequence[Gate]) -> Optional[Verdict]:
    """Run the gates in order, returning the first terminal verdict or None."""
    for gate in gates:
        verdict = gate(ctx)
        if verdict is not None:
            return verdict
    return None


def evaluate(ctx: GateContext, gates: Sequence[Gate] = GATES) -> Verdict:
    """
    Run the gates in order and return the first terminal verdict.

    Raises:
        TitleParseError: the title encodes no bump type or package name.
    """
    verdict = first_verdict(ctx, gates)
    if verdict is None:
        return skip("No gate reached a decision")
    return verdict
