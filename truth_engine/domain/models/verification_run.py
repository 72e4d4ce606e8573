"""Domain models for verification runs and their results."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .claim import Claim
from .trust import TrustScoreReport
from .verdict import VerdictStatus

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    """Lifecycle of a verification run."""

    ANALYZING = "analyzing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class LogEntry:
    """One observable event of a verification run."""

    type: str
    message: str
    timestamp: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "message": self.message, "timestamp": self.timestamp}


@dataclass
class ClaimResult:
    """A claim whose verdict changed the verified text."""

    claim: str
    original_value: str
    verified_value: str
    source: str
    status: VerdictStatus
    trust_score: int
    trust_report: Optional[TrustScoreReport] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary."""
        result = {
            "claim": self.claim,
            "originalValue": self.original_value,
            "verifiedValue": self.verified_value,
            "source": self.source,
            "status": self.status.value,
            "trustScore": self.trust_score,
        }
        if self.trust_report is not None:
            result["trustReport"] = self.trust_report.model_dump(by_alias=True)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClaimResult":
        """Rebuild a result from a stored dictionary."""
        trust_report = None
        if data.get("trustReport"):
            try:
                trust_report = TrustScoreReport.model_validate(data["trustReport"])
            except ValidationError:
                logger.warning("⚠️ Ignoring malformed stored trust report")
        claim = str(data.get("claim", ""))
        return cls(
            claim=claim,
            original_value=str(data.get("originalValue", claim)),
            verified_value=str(data.get("verifiedValue", "")),
            source=str(data.get("source", "")),
            status=VerdictStatus.parse(data.get("status")) or VerdictStatus.UNCERTAIN,
            trust_score=int(data.get("trustScore") or 0),
            trust_report=trust_report,
        )


@dataclass
class VerificationRun:
    """State of one verification request, mutated in place as stages complete."""

    original_content: str
    verified_content: str
    status: RunStatus = RunStatus.ANALYZING
    progress: int = 0
    claims: List[Claim] = field(default_factory=list)
    results: List[ClaimResult] = field(default_factory=list)
    trust_score: int = 0
    changes: int = 0
    logs: List[LogEntry] = field(default_factory=list)
    ledger_verified: bool = False
    ledger_data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        """Whether the run reached completed or error."""
        return self.status in (RunStatus.COMPLETED, RunStatus.ERROR)

    def advance(self, progress: int) -> None:
        """Move progress forward, never backwards."""
        self.progress = max(self.progress, min(100, progress))

    def mark_completed(self) -> None:
        """Mark run as completed."""
        self.status = RunStatus.COMPLETED
        self.progress = 100
        self.changes = len(self.results)

    def mark_error(self, message: str) -> None:
        """Mark run as failed, keeping partial claims and results."""
        self.status = RunStatus.ERROR
        self.error = message
        self.changes = len(self.results)

    def apply_cached(self, data: Dict[str, Any], ledger_data: Dict[str, Any]) -> None:
        """Merge a previously stored run into this one.

        The run is left untouched when the stored data is malformed.

        Raises:
            ValueError: If a stored number cannot be read
            TypeError: If a stored value has the wrong shape
        """
        claims = []
        for item in data.get("claims") or []:
            try:
                claims.append(Claim.model_validate(item))
            except ValidationError:
                logger.warning(f"⚠️ Ignoring malformed stored claim: {item!r}")
        results = [
            ClaimResult.from_dict(item)
            for item in data.get("results") or []
            if isinstance(item, dict)
        ]
        trust_score = data.get("trustScore")
        if trust_score is None:
            trust_score = ledger_data.get("trustScore")
        trust_score = int(trust_score) if trust_score is not None else self.trust_score
        changes = int(data["changes"]) if data.get("changes") is not None else None

        if "verifiedContent" in data:
            self.verified_content = str(data["verifiedContent"])
        self.claims = claims
        self.results = results
        self.trust_score = trust_score
        self.ledger_verified = True
        self.ledger_data = ledger_data
        self.mark_completed()
        if changes is not None:
            self.changes = changes

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format."""
        result = {
            "originalContent": self.original_content,
            "verifiedContent": self.verified_content,
            "status": self.status.value,
            "progress": self.progress,
            "claims": [claim.model_dump(by_alias=True) for claim in self.claims],
            "changes": self.changes,
            "results": [r.to_dict() for r in self.results],
            "trustScore": self.trust_score,
            "logs": [entry.to_dict() for entry in self.logs],
            "ledgerVerified": self.ledger_verified,
        }
        if self.ledger_data is not None:
            result["ledgerData"] = self.ledger_data
        if self.error is not None:
            result["error"] = self.error
        return result
