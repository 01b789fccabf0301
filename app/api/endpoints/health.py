from fastapi import APIRouter

router = APIRouter()


@router.get("")
def health_check():
    """
    Liveness probe for the webhook service.
    """
    return {"status": "ok"}
