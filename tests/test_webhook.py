import hashlib
import hmac
import json

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import ConfigurationError
from app.integrations.github import verify_signature
from app.main import app
import app.services.github.webhook_service as webhook_service

SECRET = "webhook-secret"


def sign(body: bytes, secret: str = SECRET) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def use_settings(monkeypatch, make_settings):
    def _use(**overrides):
        settings = make_settings(**overrides)
        monkeypatch.setattr(webhook_service, "get_settings", lambda: settings)
        return settings

    return _use


def post(client, payload, event="status", signature=None):
    body = json.dumps(payload).encode()
    headers = {"X-GitHub-Event": event, "Content-Type": "application/json"}
    if signature is not None:
        headers["X-Hub-Signature-256"] = signature
    return client.post("/github/webhook", content=body, headers=headers)


def test_verify_signature():
    body = b'{"state": "success"}'

    assert verify_signature(body, SECRET, sign(body))
    assert not verify_signature(body, SECRET, sign(body, "other"))
    assert not verify_signature(body, SECRET, "")


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_other_events_are_ignored(client, use_settings):
    use_settings()

    response = post(client, {"ref": "refs/heads/master"}, event="push")

    assert response.status_code == 200
    assert response.json() == {"message": "Event ignored", "event": "push"}


def test_invalid_signature_is_rejected(client, use_settings, status_payload):
    use_settings(GITHUB_WEBHOOK_SECRET=SECRET)

    response = post(client, status_payload(), signature="sha256=deadbeef")

    assert response.status_code == 403


def test_skipped_status_returns_decision(client, use_settings, status_payload):
    use_settings(GITHUB_WEBHOOK_SECRET=SECRET)
    payload = status_payload(state="pending")
    body = json.dumps(payload).encode()

    response = post(client, payload, signature=sign(body))

    assert response.status_code == 200
    data = response.json()
    assert data["decision"] == "SKIP"
    assert data["pr_number"] is None
    assert data["deployed"] is False


def test_fatal_error_returns_500(client, use_settings, status_payload):
    use_settings()

    response = post(client, status_payload(branches=[]))

    assert response.status_code == 500
    assert "Length of branches" in response.json()["detail"]


def test_invalid_configuration_returns_500(client, monkeypatch, status_payload):
    def broken_settings():
        raise ConfigurationError("Invalid configuration for TIMEZONE: Unexpected input")

    monkeypatch.setattr(webhook_service, "get_settings", broken_settings)

    response = post(client, status_payload())

    assert response.status_code == 500
    assert "TIMEZONE" in response.json()["detail"]


def test_invalid_json_returns_400(client, use_settings):
    use_settings()

    response = client.post(
        "/github/webhook", content=b"{not json", headers={"X-GitHub-Event": "status"}
    )

    assert response.status_code == 400
