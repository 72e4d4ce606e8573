"""Service coordinating claim extraction, evidence gathering, analysis and rewriting."""

import logging
from typing import Optional

from ..errors import InputValidationError, TruthEngineError
from ..models.claim import Claim
from ..models.run_context import RunContext
from ..models.verification_run import ClaimResult, VerificationRun
from .claim_analyzer import ClaimAnalyzer, render_evidence
from .claim_extractor import ClaimExtractor
from .content_rewriter import ContentRewriter
from .evidence_scraper import EvidenceScraper, ScrapeConfig
from .text_utils import first_numeric_value, round_half_up
from .verification_cache import VerificationCache

logger = logging.getLogger(__name__)

CACHE_CHECKED_PROGRESS = 5
CLAIMS_EXTRACTED_PROGRESS = 50
DEFAULT_CLAIM_TRUST = 50


class VerificationOrchestrator:
    """Runs the verification pipeline for one piece of content at a time.

    Claims are processed strictly in order. Failures of a single claim are
    logged and skipped; any unexpected exception ends the run in the
    ``error`` state with partial claims and results kept.
    """

    def __init__(
        self,
        claim_extractor: ClaimExtractor,
        scraper: EvidenceScraper,
        analyzer: ClaimAnalyzer,
        rewriter: ContentRewriter,
        cache: Optional[VerificationCache] = None,
        scrape_config: Optional[ScrapeConfig] = None,
    ):
        """Initialize the orchestrator.

        Args:
            claim_extractor: Claim extraction stage
            scraper: Evidence gathering stage
            analyzer: Verdict stage
            rewriter: Text rewriting stage
            cache: Verification cache, None disables caching
            scrape_config: Limits for each scrape
        """
        self._claim_extractor = claim_extractor
        self._scraper = scraper
        self._analyzer = analyzer
        self._rewriter = rewriter
        self._cache = cache
        self._scrape_config = scrape_config
        logger.info("🔧 VerificationOrchestrator initialized")

    async def verify(self, content: str) -> VerificationRun:
        """Verify every claim in a piece of content.

        Args:
            content: Text to verify

        Returns:
            Run in the ``completed`` or ``error`` state

        Raises:
            InputValidationError: If content is empty
        """
        if not content or not content.strip():
            raise InputValidationError("Content is required")

        context = RunContext.start()
        run = VerificationRun(original_content=content, verified_content=content)
        run.logs = context.logs
        context.log("info", "Starting verification process")

        if await self._apply_cached(run, context):
            return run
        run.advance(CACHE_CHECKED_PROGRESS)

        try:
            await self._process(run, context)
        except Exception as e:
            logger.error(f"❌ Verification run failed: {e}", exc_info=True)
            context.log("error", f"Error during verification: {e}")
            run.mark_error(str(e) or type(e).__name__)
            return run

        if run.results:
            await self._store(run, context)
        return run

    async def _apply_cached(self, run: VerificationRun, context: RunContext) -> bool:
        if self._cache is None:
            return False
        context.log("info", "Checking verification cache for existing results...")
        try:
            record = await self._cache.lookup(run.original_content)
        except Exception as e:
            context.log("warn", f"Error checking verification cache: {e}")
            return False
        if record is None or not isinstance(record.data, dict):
            context.log("info", "No cached verification found, proceeding with new verification")
            return False

        try:
            run.apply_cached(record.data, record.summary())
        except (TypeError, ValueError) as e:
            context.log("warn", f"Ignoring unreadable cached verification: {e}")
            return False
        context.log("success", "Found existing verification in cache")
        return True

    async def _process(self, run: VerificationRun, context: RunContext) -> None:
        context.log("info", "Extracting claims from content")
        claims = await self._claim_extractor.extract(run.original_content, context.reference_time, context)
        if not claims:
            context.log("warn", "No claims extracted by the model, using fallback extractor")
            claims = self._claim_extractor.extract_fallback(run.original_content, context)
        run.claims = claims
        run.advance(CLAIMS_EXTRACTED_PROGRESS)
        context.log("result", f"Extracted {len(claims)} claims")

        for index, claim in enumerate(claims):
            try:
                await self._verify_claim(run, claim, context)
            except TruthEngineError as e:
                context.log("error", f'Error verifying claim "{claim.claim_text}": {e}')
            run.advance(
                CLAIMS_EXTRACTED_PROGRESS
                + round_half_up((100 - CLAIMS_EXTRACTED_PROGRESS) * (index + 1) / len(claims))
            )

        run.trust_score = (
            round_half_up(sum(r.trust_score for r in run.results) / len(run.results))
            if run.results else 0
        )
        run.mark_completed()
        context.log("success", f"Verification completed with {len(run.results)} changes")

    async def _verify_claim(self, run: VerificationRun, claim: Claim, context: RunContext) -> None:
        if not claim.search_queries:
            context.log("warn", f'Skipping claim without search queries: "{claim.claim_text}"')
            return

        context.log("info", f'Verifying claim: "{claim.claim_text}"')
        scrape = await self._scraper.scrape(
            claim.search_queries,
            claim=claim.claim_text,
            config=self._scrape_config,
            context=context,
        )
        if not scrape.data:
            context.log("warn", f'No evidence found for claim: "{claim.claim_text}"')
            return

        verdict = await self._analyzer.analyze(
            claim.claim_text,
            render_evidence(scrape.data),
            context.reference_time,
            context,
        )
        if verdict is None:
            context.log("warn", f'Could not analyze claim: "{claim.claim_text}"')
            return
        context.log("result", f"Claim status: {verdict.status.value} (source: {verdict.source})")
        if not verdict.is_actionable:
            return

        updated = await self._rewriter.rewrite(
            run.verified_content,
            claim.claim_text,
            verdict.verified_fact,
            verdict.source,
            context.reference_time,
            context,
        )
        if updated == run.verified_content:
            context.log("info", "Content unchanged by rewrite")
            return

        run.verified_content = updated
        run.results.append(
            ClaimResult(
                claim=claim.claim_text,
                original_value=first_numeric_value(claim.claim_text) or claim.claim_text,
                verified_value=verdict.verified_fact,
                source=verdict.source,
                status=verdict.status,
                trust_score=scrape.trust_score or DEFAULT_CLAIM_TRUST,
                trust_report=scrape.trust_report,
            )
        )
        context.log("success", f"Updated content for claim: {claim.claim_text}")

    async def _store(self, run: VerificationRun, context: RunContext) -> None:
        if self._cache is None:
            return
        context.log("info", "Storing verification results in cache...")
        try:
            stored = await self._cache.store(run)
        except Exception as e:
            context.log("error", f"Failed to store verification results: {e}")
            return
        run.ledger_verified = True
        run.ledger_data = {
            **stored.model_dump(by_alias=True, exclude={"already_stored", "transaction_id"}),
            "trustScore": run.trust_score,
            "claimCount": len(run.claims),
        }
        if stored.transaction_id:
            run.ledger_data["transactionId"] = stored.transaction_id
        context.log("success", f"Verification results stored ({stored.content_hash[:10]}...)")
