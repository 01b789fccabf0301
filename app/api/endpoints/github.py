from typing import Optional

from fastapi import APIRouter, Header, Request

from app.services.github.webhook_service import handle_github_webhook

router = APIRouter()


@router.post("/webhook")
async def github_webhook(
    request: Request,
    x_github_event: str = Header(...),
    x_hub_signature_256: Optional[str] = Header(default=None),
):
    """
    Handle GitHub webhook requests.

    Args:
        request: The incoming HTTP request.
        x_github_event: The GitHub event type (e.g., 'status', 'push').
        x_hub_signature_256: HMAC signature of the body.

    Returns:
        The deploy gate result, or a note that the event was ignored.
    """
    raw_body = await request.body()
    return await handle_github_webhook(x_github_event, raw_body, x_hub_signature_256 or "")
