"""Verification ledger and blob store interfaces."""

from typing import Any, Dict, Optional, Protocol

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class LedgerRecord(BaseModel):
    """A stored verification, keyed by content fingerprint."""

    content_hash: str = Field(..., description="Fingerprint of the normalized content")
    results_hash: str = Field(..., description="Blob id of the stored run")
    timestamp: str = Field(..., description="When the record was written (ISO-8601)")
    trust_score: int = Field(default=0, ge=0, le=100)
    claim_count: int = Field(default=0, ge=0)
    verifier: str = Field(default="", description="Identity of the writer")
    data: Optional[Dict[str, Any]] = Field(None, description="Stored run, when resolved")

    def summary(self) -> Dict[str, Any]:
        """Record metadata without the stored run."""
        return self.model_dump(by_alias=True, exclude={"data"})

    class Config:
        """Pydantic model configuration."""
        alias_generator = to_camel
        populate_by_name = True


class LedgerReceipt(BaseModel):
    """Acknowledgement of a ledger write."""

    transaction_id: str

    class Config:
        """Pydantic model configuration."""
        alias_generator = to_camel
        populate_by_name = True


class StoredVerification(BaseModel):
    """Outcome of persisting a run."""

    content_hash: str
    results_hash: str
    timestamp: str
    transaction_id: Optional[str] = None
    already_stored: bool = Field(
        default=False, description="Another writer recorded this content first"
    )

    class Config:
        """Pydantic model configuration."""
        alias_generator = to_camel
        populate_by_name = True


class VerificationLedger(Protocol):
    """Key-value store of verification records with one-writer-wins semantics."""

    async def exists(self, fingerprint: str) -> bool:
        """Check whether a record exists."""
        ...

    async def get(self, fingerprint: str) -> Optional[LedgerRecord]:
        """Fetch a record, None if absent."""
        ...

    async def put(
        self,
        fingerprint: str,
        blob_id: str,
        trust_score: int,
        claim_count: int,
    ) -> LedgerReceipt:
        """Write a record. Raises ``DuplicateRecordError`` if one exists."""
        ...


class BlobStore(Protocol):
    """Content-addressed store for JSON-serializable objects."""

    async def put(self, obj: Any) -> str:
        """Store an object and return its blob id."""
        ...

    async def get(self, blob_id: str) -> Optional[Any]:
        """Fetch an object, None if absent."""
        ...
