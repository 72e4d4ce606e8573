"""Content verification endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.errors import InputValidationError
from ...domain.services.verification_service import VerificationOrchestrator
from ...infrastructure.dependencies import get_verification_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verify"])


class VerifyRequest(BaseModel):
    """Request model for content verification."""

    content: Optional[str] = Field(None, description="Text to verify")


@router.post("/verify")
@router.post("/api/verify")
async def verify_content(
    request: Optional[VerifyRequest] = None,
    service: VerificationOrchestrator = Depends(get_verification_service),
) -> Dict[str, Any]:
    """Verify the factual claims in a piece of content.

    Returns:
        The finished verification run, including its logs

    Raises:
        HTTPException: 400 if content is missing, 500 on unexpected failure
    """
    content = request.content if request else None
    if not content or not content.strip():
        raise HTTPException(status_code=400, detail="Content is required")

    logger.info(f"🔍 Verifying content: {content[:100]}...")
    try:
        run = await service.verify(content)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Verification failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"{type(e).__name__}: {e}")

    logger.info(f"✅ Verification {run.status.value}: {len(run.results)} changes, trust {run.trust_score}")
    return run.to_dict()
