from fastapi import APIRouter

from ..core.ai_client import ai_client

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/status")
def get_ai_status():
    """Debug endpoint for AI availability."""
    return ai_client.status()
