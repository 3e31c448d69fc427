from datetime import datetime, timezone
from fastapi import APIRouter

from config import messages

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health():
    return {
        "status": "OK",
        "message": messages.HEALTH_OK,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
