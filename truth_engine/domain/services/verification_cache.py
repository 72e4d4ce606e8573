"""Verification cache over a fingerprint ledger and a blob store."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from ..errors import DuplicateRecordError, InputValidationError
from ..models.verification_run import VerificationRun
from ..ports.ledger import BlobStore, LedgerRecord, StoredVerification, VerificationLedger
from .fingerprint import content_fingerprint

logger = logging.getLogger(__name__)


class VerificationCache:
    """Looks up and persists finished runs keyed by content fingerprint.

    The ledger holds one record per fingerprint pointing at the full run
    in the blob store. Whoever writes a fingerprint first wins; later
    writers get the existing record back.
    """

    def __init__(self, ledger: VerificationLedger, blob_store: BlobStore):
        self._ledger = ledger
        self._blob_store = blob_store

    async def lookup(self, content: str) -> Optional[LedgerRecord]:
        """Find the stored run for a piece of content.

        Args:
            content: Submitted text

        Returns:
            Ledger record with ``data`` resolved from the blob store, or None
        """
        fingerprint = content_fingerprint(content)
        if not await self._ledger.exists(fingerprint):
            return None
        record = await self._ledger.get(fingerprint)
        if record is None:
            return None
        data = await self._blob_store.get(record.results_hash) if record.results_hash else None
        if data is None:
            logger.warning(f"⚠️ Stored run {record.results_hash} missing for {fingerprint[:10]}...")
        return record.model_copy(update={"data": data})

    async def store(self, run: Union[VerificationRun, Dict[str, Any]]) -> StoredVerification:
        """Persist a finished run unless its content is already recorded.

        Args:
            run: Run object or its camelCase dictionary

        Returns:
            Where the run is stored, with ``already_stored`` set when another
            writer recorded the content first

        Raises:
            InputValidationError: If the run has no original content or a
                malformed trust score or claim list
        """
        payload = run.to_dict() if isinstance(run, VerificationRun) else dict(run)
        content = payload.get("originalContent")
        if not isinstance(content, str) or not content:
            raise InputValidationError("Verification result must include originalContent")

        try:
            trust_score = int(payload.get("trustScore") or 0)
        except (TypeError, ValueError):
            raise InputValidationError("Verification result trustScore must be a number")
        if not 0 <= trust_score <= 100:
            raise InputValidationError("Verification result trustScore must be between 0 and 100")
        claims = payload.get("claims") or []
        if not isinstance(claims, list):
            raise InputValidationError("Verification result claims must be a list")

        fingerprint = content_fingerprint(content)
        existing = await self._ledger.get(fingerprint) if await self._ledger.exists(fingerprint) else None
        if existing is not None:
            logger.info(f"📚 Verification already stored for {fingerprint[:10]}...")
            return self._stored(existing, already_stored=True)

        blob_id = await self._blob_store.put(payload)
        claim_count = len(claims)
        try:
            receipt = await self._ledger.put(fingerprint, blob_id, trust_score, claim_count)
        except DuplicateRecordError:
            existing = await self._ledger.get(fingerprint)
            if existing is None:
                raise
            logger.info(f"📚 Lost write race for {fingerprint[:10]}..., keeping existing record")
            return self._stored(existing, already_stored=True)

        record = await self._ledger.get(fingerprint)
        logger.info(f"✅ Stored verification {fingerprint[:10]}... as {blob_id}")
        return StoredVerification(
            content_hash=fingerprint,
            results_hash=blob_id,
            timestamp=record.timestamp if record else datetime.now(timezone.utc).isoformat(),
            transaction_id=receipt.transaction_id,
        )

    @staticmethod
    def _stored(record: LedgerRecord, already_stored: bool) -> StoredVerification:
        return StoredVerification(
            content_hash=record.content_hash,
            results_hash=record.results_hash,
            timestamp=record.timestamp,
            already_stored=already_stored,
        )
