"""GitHub webhook handling: payload parsing and event processing."""

import json
import logging

from fastapi import HTTPException

from app.core.config import get_settings
from app.core.exceptions import ConfigurationError
from app.integrations.github import verify_signature
from app.services.deploy_gate import DeployGateService

logger = logging.getLogger(__name__)

STATUS_EVENT = "status"


async def handle_github_webhook(
    event_type: str, raw_body: bytes, signature_header: str
) -> dict:
    """
    Process a GitHub webhook: verify, parse and route by event type.

    - Verifies HMAC SHA-256 signature when a webhook secret is configured.
    - status: runs the deploy gate and returns its decision.
    - Other events: logged and ignored.

    Args:
        event_type: The X-GitHub-Event header value (e.g. "status").
        raw_body: The raw body bytes for signature verification.
        signature_header: The X-Hub-Signature-256 header.

    Returns:
        A dict to be returned as the JSON response.
    """
    # 1. Validate configuration before anything else
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    # 2. Verify Signature
    secret = settings.GITHUB_WEBHOOK_SECRET
    if secret is not None and not verify_signature(
        raw_body, secret.get_secret_value(), signature_header
    ):
        raise HTTPException(status_code=403, detail="Invalid signature")

    if event_type != STATUS_EVENT:
        logger.info("GitHub webhook received: %s, ignored", event_type)
        return {"message": "Event ignored", "event": event_type}

    # 3. Parse Payload
    try:
        payload = json.loads(raw_body)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail="Invalid JSON body") from e

    logger.info("Processing status event: %s %s", payload.get("context"), payload.get("state"))

    try:
        state = await DeployGateService(settings).run(payload)
    except Exception as e:
        logger.error("Deploy gate failed: %s", str(e), exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Deploy gate failed: {str(e)}"
        ) from e

    return {
        "message": "Status processed",
        "decision": state.decision.value if state.decision else None,
        "reason": state.verdict.reason if state.verdict else None,
        "pr_number": state.pull_request.number if state.pull_request else None,
        "approved": state.approved,
        "merged": state.merged,
        "deployed": state.deployed,
    }
