"""Root test configuration and shared factories."""

import json
import logging

import pytest

from app.core.config import build_settings
from app.models.pull_request import ChangeRequest
from app.services.deploy_gate.manifest import DependencyManifest
from app.services.deploy_gate.policy.gates import GateContext
from app.services.deploy_gate.policy.loader import get_deploy_policy
from tests.factories import (
    BRANCH,
    CI_CONTEXT,
    HEAD_SHA,
    LODASH_TITLE,
    OWNER,
    PACKAGE_JSON,
    REPO,
    WORKING_TIME,
)


def pytest_configure(config):
    """Keep test output quiet."""
    logging.basicConfig(level=logging.WARNING, force=True)


@pytest.fixture
def make_settings():
    def _make(**overrides):
        values = {
            "_env_file": None,
            "GITHUB_TOKEN": "test-token",
            "TIMEZONE": "Europe/Prague",
            "MAX_DEPLOY_VERSION": "MAJOR",
            "DEPLOY_DEPENDENCIES": "dev",
            "DEPLOY_ONLY_IN_WORKING_HOURS": True,
            "UPDATE_INDIRECT_DEPENDENCIES": False,
            "GITHUB_WEBHOOK_SECRET": None,
            "GITHUB_REPOSITORY": None,
            "MANIFEST_ROOT": None,
            "POLICY_PATH": None,
        }
        values.update(overrides)
        return build_settings(**values)

    return _make


@pytest.fixture
def manifest():
    return DependencyManifest.from_dict(PACKAGE_JSON)


@pytest.fixture
def manifest_root(tmp_path):
    (tmp_path / "package.json").write_text(json.dumps(PACKAGE_JSON), encoding="utf-8")
    return tmp_path


@pytest.fixture
def status_payload():
    def _make(context=CI_CONTEXT, state="success", branches=None, repository=True):
        if branches is None:
            branches = [{"name": BRANCH, "commit": {"sha": HEAD_SHA, "url": ""}}]
        payload = {
            "id": 214015194,
            "sha": HEAD_SHA,
            "context": context,
            "state": state,
            "description": "Build passed",
            "branches": branches,
        }
        if repository:
            payload["repository"] = {
                "name": REPO,
                "full_name": f"{OWNER}/{REPO}",
                "owner": {"login": OWNER},
                "default_branch": "master",
            }
        return payload

    return _make


@pytest.fixture
def pull_request_data():
    def _make(
        number=42,
        title=LODASH_TITLE,
        head_ref=BRANCH,
        head_sha=HEAD_SHA,
        base_ref="master",
        labels=("dependencies", "javascript"),
    ):
        return {
            "number": number,
            "title": title,
            "state": "open",
            "head": {"ref": head_ref, "sha": head_sha},
            "base": {"ref": base_ref, "sha": "0000000"},
            "labels": [{"name": name} for name in labels],
        }

    return _make


@pytest.fixture
def bot_commit():
    return {"sha": HEAD_SHA, "commit": {"author": {"name": "dependabot[bot]"}}}


@pytest.fixture
def make_context(make_settings, manifest):
    def _make(
        title=LODASH_TITLE,
        labels=("dependencies",),
        now=WORKING_TIME,
        dependency_manifest=None,
        **settings,
    ):
        pull_request = ChangeRequest(
            number=1,
            title=title,
            base_branch="master",
            head_branch=BRANCH,
            head_sha=HEAD_SHA,
            labels=frozenset(labels),
        )
        return GateContext(
            pull_request=pull_request,
            settings=make_settings(**settings),
            policy=get_deploy_policy(),
            manifest=manifest if dependency_manifest is None else dependency_manifest,
            now=now,
        )

    return _make
