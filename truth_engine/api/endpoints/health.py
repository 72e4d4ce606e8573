"""Health check endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...infrastructure.dependencies import get_engine_settings
from ...infrastructure.settings import EngineSettings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: EngineSettings = Depends(get_engine_settings)) -> Dict[str, Any]:
    """Report liveness and whether the verification cache is enabled."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "ledgerEnabled": settings.ledger_enabled,
    }
