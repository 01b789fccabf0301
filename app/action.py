"""
GitHub Actions entrypoint.

Runs the deploy gate for the event the workflow was triggered by. A fatal
error is reported with an `::error::` annotation and a non-zero exit code,
which marks the step as failed.
"""

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from app.core.config import get_settings
from app.core.logging import get_logger, setup_logging
from app.services.deploy_gate import DeployGateService

logger = get_logger(__name__)

STATUS_EVENT = "status"


def set_failed(message: str) -> None:
    """Emit a GitHub Actions error annotation."""
    print(f"::error::{message}", flush=True)


def read_event_payload(path: Optional[str]) -> dict:
    if not path:
        raise FileNotFoundError("GITHUB_EVENT_PATH is not set")
    return json.loads(Path(path).read_text(encoding="utf-8"))


async def run_action() -> None:
    settings = get_settings()
    event_name = os.environ.get("GITHUB_EVENT_NAME", "")
    if event_name != STATUS_EVENT:
        logger.info("Not running for event %s", event_name)
        return

    payload = read_event_payload(os.environ.get("GITHUB_EVENT_PATH"))
    await DeployGateService(settings).run(payload)


def main() -> int:
    load_dotenv()
    # package.json is read from the checked-out workspace when there is one
    if os.environ.get("GITHUB_WORKSPACE"):
        os.environ.setdefault("MANIFEST_ROOT", os.environ["GITHUB_WORKSPACE"])
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        asyncio.run(run_action())
    except Exception as e:
        logger.error("Deploy gate failed: %s", e, exc_info=True)
        set_failed(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
