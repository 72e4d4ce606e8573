"""Evidence gathering: search, fetch, extract and rank candidate sources."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Set

from pydantic import BaseModel, Field

from ..errors import ParseError
from ..models.evidence import (
    EvidenceDocument,
    FailedUrl,
    ScrapeResult,
    ScrapeStatus,
)
from ..models.run_context import RunContext
from ..models.trust import SourceInput
from ..ports.fetcher import Fetcher
from .content_extractor import ContentExtractor
from .reference_searcher import ReferenceSearcher
from .source_ranker import SourceRanker
from .text_utils import domain_of, round_half_up
from .trust_scorer import TrustScorer

logger = logging.getLogger(__name__)


class ScrapeConfig(BaseModel):
    """Limits applied to one scrape."""

    max_results: int = Field(default=5, ge=1, description="Maximum documents returned")
    max_length: int = Field(default=50000, ge=1, description="Content length cap per document")
    timeout_ms: int = Field(default=15000, ge=1, description="Per-URL fetch timeout")
    max_parallel: int = Field(default=1, ge=1, description="Concurrent fetches, 1 is sequential")


class EvidenceScraper:
    """Collects a deduplicated, authority-sorted evidence set for a claim."""

    def __init__(
        self,
        fetcher: Fetcher,
        searcher: Optional[ReferenceSearcher] = None,
        extractor: Optional[ContentExtractor] = None,
        ranker: Optional[SourceRanker] = None,
        trust_scorer: Optional[TrustScorer] = None,
        config: Optional[ScrapeConfig] = None,
    ):
        """Initialize the scraper.

        Args:
            fetcher: Document fetcher
            searcher: Candidate URL source
            extractor: HTML content extractor
            ranker: Domain authority ranker
            trust_scorer: Scorer for the collected evidence
            config: Default limits
        """
        self._fetcher = fetcher
        self._searcher = searcher or ReferenceSearcher()
        self._extractor = extractor or ContentExtractor()
        self._ranker = ranker or SourceRanker()
        self._trust_scorer = trust_scorer or TrustScorer(self._ranker)
        self._config = config or ScrapeConfig()

    async def scrape(
        self,
        queries: Sequence[str],
        claim: Optional[str] = None,
        config: Optional[ScrapeConfig] = None,
        context: Optional[RunContext] = None,
    ) -> ScrapeResult:
        """Gather evidence for a claim.

        Queries are tried in order. A failing URL is recorded in
        ``failed_urls`` and never aborts the scrape. Collection stops as
        soon as ``max_results`` documents are held.

        Args:
            queries: Ordered search queries
            claim: Original claim, used to pick relevant excerpts
            config: Limits overriding the defaults
            context: Run context receiving log entries

        Returns:
            Scrape result sorted by descending authority
        """
        config = config or self._config
        context = context or RunContext.start()
        documents: List[EvidenceDocument] = []
        failed: List[FailedUrl] = []
        seen: Set[str] = set()

        context.log("info", f"Starting web scraping for {len(queries)} search queries")
        for query in queries:
            if len(documents) >= config.max_results:
                break
            urls = self._searcher.search(query)
            if not urls:
                context.log("warn", f'No search results found for "{query}". Trying next query...')
                continue
            context.log("info", f'Found {len(urls)} potential sources for query: "{query}"')

            candidates = [url for url in dict.fromkeys(urls) if url not in seen]
            position = 0
            while position < len(candidates) and len(documents) < config.max_results:
                batch_size = min(config.max_parallel, config.max_results - len(documents))
                batch = candidates[position:position + batch_size]
                position += len(batch)
                outcomes = await asyncio.gather(
                    *(self._collect(url, claim, config) for url in batch),
                    return_exceptions=True,
                )
                for url, outcome in zip(batch, outcomes):
                    seen.add(url)
                    if isinstance(outcome, EvidenceDocument):
                        documents.append(outcome)
                        context.log(
                            "success",
                            f"Successfully extracted content from {url} (Authority: {outcome.authority_score})",
                        )
                    elif isinstance(outcome, Exception):
                        reason = str(outcome) or type(outcome).__name__
                        failed.append(FailedUrl(url=url, reason=reason))
                        context.log("error", f"Failed to fetch content from {url}: {reason}")
                    else:
                        raise outcome

        documents.sort(key=lambda doc: doc.authority_score, reverse=True)
        trust_score = (
            round_half_up(sum(doc.authority_score for doc in documents) / len(documents))
            if documents else 0
        )
        trust_report = None
        if documents:
            trust_report = self._trust_scorer.score([
                SourceInput(url=doc.url, title=doc.title, content=doc.content)
                for doc in documents
            ])
        context.log(
            "success" if documents else "warn",
            f"Web scraping complete. Found {len(documents)} results with average trust score: {trust_score}",
        )
        return ScrapeResult(
            data=documents,
            status=ScrapeStatus.SUCCESS if documents else ScrapeStatus.NO_RESULTS,
            trust_score=trust_score,
            failed_urls=failed,
            trust_report=trust_report,
        )

    async def _collect(self, url: str, claim: Optional[str], config: ScrapeConfig) -> EvidenceDocument:
        raw = await self._fetcher.fetch(url, config.timeout_ms)
        extracted = self._extractor.extract(raw, url, claim, max_length=config.max_length)
        if not extracted.content:
            raise ParseError("No content extracted")
        domain = domain_of(url)
        return EvidenceDocument(
            url=url,
            title=extracted.title,
            content=extracted.content,
            domain=domain,
            site_name=extracted.site_name or domain,
            authority_score=self._ranker.rank(domain),
            relevant_excerpts=extracted.relevant_sentences or [],
        )

    async def probe_url(
        self,
        url: str,
        claim: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Fetch, extract and rank a single URL for diagnostics.

        Args:
            url: URL to probe
            claim: Optional claim for relevant sentence extraction
            timeout_ms: Fetch timeout, defaults to the configured one

        Returns:
            Probe report with ``success`` set, or an ``error`` message
        """
        logger.info(f"🔍 Testing scraper on URL: {url}" + (f" for claim: {claim}" if claim else ""))
        try:
            raw = await self._fetcher.fetch(url, timeout_ms or self._config.timeout_ms)
        except Exception as e:
            logger.error(f"❌ Test scraper error for {url}: {e}")
            return {"url": url, "claim": claim, "success": False, "error": str(e) or type(e).__name__}

        extracted = self._extractor.extract(raw, url, claim, max_length=self._config.max_length)
        return {
            "url": url,
            "claim": claim,
            "success": True,
            "contentLength": len(raw),
            "extraction": {
                "title": extracted.title,
                "contentLength": len(extracted.content),
                "relevantSentences": extracted.relevant_sentences or [],
            },
            "authorityScore": self._ranker.rank_url(url),
        }
