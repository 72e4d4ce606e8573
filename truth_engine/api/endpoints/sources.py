"""Source trust analysis and scraper diagnostics endpoints."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.models.trust import SourceInput
from ...domain.services.evidence_scraper import EvidenceScraper
from ...domain.services.trust_scorer import TrustScorer
from ...infrastructure.dependencies import get_evidence_scraper, get_trust_scorer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sources"])


class TrustRequest(BaseModel):
    """Request model for standalone trust analysis."""

    sources: List[SourceInput] = Field(default_factory=list, description="Sources to evaluate")


class ScraperTestRequest(BaseModel):
    """Request model for a single-URL scraper probe."""

    url: Optional[str] = Field(None, description="URL to fetch")
    claim: Optional[str] = Field(None, description="Claim for relevant sentence extraction")


@router.post("/sources/trust")
async def analyze_sources(
    request: TrustRequest,
    scorer: TrustScorer = Depends(get_trust_scorer),
) -> Dict[str, Any]:
    """Score a list of sources and explain the result."""
    logger.info(f"📚 Scoring {len(request.sources)} sources")
    return scorer.score(request.sources).model_dump(by_alias=True)


@router.post("/scraper/test")
@router.post("/api/test-scraper")
async def probe_scraper(
    request: Optional[ScraperTestRequest] = None,
    scraper: EvidenceScraper = Depends(get_evidence_scraper),
) -> Dict[str, Any]:
    """Fetch, extract and rank a single URL."""
    if request is None or not request.url:
        raise HTTPException(status_code=400, detail="URL is required")
    return await scraper.probe_url(request.url, request.claim)
