"""In-process verification ledger and content-addressed blob store."""

import asyncio
import copy
import hashlib
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ...domain.errors import DuplicateRecordError
from ...domain.ports.ledger import LedgerReceipt, LedgerRecord

logger = logging.getLogger(__name__)


class InMemoryVerificationLedger:
    """Ledger kept in a dictionary, safe for concurrent runs on one event loop."""

    def __init__(self, verifier: str = "truth-engine"):
        self._verifier = verifier
        self._records: Dict[str, LedgerRecord] = {}
        self._lock = asyncio.Lock()

    async def exists(self, fingerprint: str) -> bool:
        return fingerprint in self._records

    async def get(self, fingerprint: str) -> Optional[LedgerRecord]:
        record = self._records.get(fingerprint)
        return record.model_copy() if record is not None else None

    async def put(
        self,
        fingerprint: str,
        blob_id: str,
        trust_score: int,
        claim_count: int,
    ) -> LedgerReceipt:
        """Write a record unless one exists.

        Raises:
            DuplicateRecordError: If the fingerprint is already recorded
        """
        async with self._lock:
            if fingerprint in self._records:
                raise DuplicateRecordError(fingerprint)
            self._records[fingerprint] = LedgerRecord(
                content_hash=fingerprint,
                results_hash=blob_id,
                timestamp=datetime.now(timezone.utc).isoformat(),
                trust_score=trust_score,
                claim_count=claim_count,
                verifier=self._verifier,
            )
        transaction_id = f"0x{uuid.uuid4().hex}"
        logger.info(f"📝 Recorded {fingerprint[:10]}... in transaction {transaction_id[:10]}...")
        return LedgerReceipt(transaction_id=transaction_id)

    def __len__(self) -> int:
        return len(self._records)


class InMemoryBlobStore:
    """Blob store addressing JSON objects by the hash of their canonical form."""

    def __init__(self):
        self._blobs: Dict[str, Any] = {}

    async def put(self, obj: Any) -> str:
        canonical = json.dumps(obj, sort_keys=True, separators=(",", ":"), default=str)
        blob_id = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        self._blobs[blob_id] = json.loads(canonical)
        return blob_id

    async def get(self, blob_id: str) -> Optional[Any]:
        blob = self._blobs.get(blob_id)
        return copy.deepcopy(blob) if blob is not None else None
