"""Verification cache endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ...domain.errors import InputValidationError
from ...domain.services.verification_cache import VerificationCache
from ...infrastructure.dependencies import get_verification_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ledger", tags=["ledger"])


class LookupRequest(BaseModel):
    """Request model for a cache lookup."""

    content: Optional[str] = Field(None, description="Content whose verification is looked up")


class StoreRequest(BaseModel):
    """Request model for storing a finished run."""

    verification_result: Optional[Dict[str, Any]] = Field(None, description="Run in wire format")

    class Config:
        """Pydantic model configuration."""
        alias_generator = to_camel
        populate_by_name = True


def _require_cache(cache: Optional[VerificationCache]) -> VerificationCache:
    if cache is None:
        raise HTTPException(status_code=503, detail="Verification cache is disabled")
    return cache


@router.get("/status")
async def ledger_status(
    cache: Optional[VerificationCache] = Depends(get_verification_cache),
) -> Dict[str, Any]:
    """Report whether the verification cache is available."""
    return {"enabled": cache is not None, "provider": "memory" if cache is not None else None}


@router.post("/lookup")
async def lookup_verification(
    request: LookupRequest,
    cache: Optional[VerificationCache] = Depends(get_verification_cache),
) -> Dict[str, Any]:
    """Look up a stored verification by content."""
    if not request.content:
        raise HTTPException(status_code=400, detail="Content is required")
    record = await _require_cache(cache).lookup(request.content)
    if record is None:
        return {"exists": False, "message": "No verification found for this content"}
    return {"exists": True, "verification": record.model_dump(by_alias=True)}


@router.post("/store")
async def store_verification(
    request: StoreRequest,
    cache: Optional[VerificationCache] = Depends(get_verification_cache),
) -> Dict[str, Any]:
    """Store a finished verification run."""
    if not request.verification_result:
        raise HTTPException(status_code=400, detail="Verification result is required")
    try:
        stored = await _require_cache(cache).store(request.verification_result)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"📝 Stored verification {stored.content_hash[:10]}...")
    return {"success": True, **stored.model_dump(by_alias=True)}
