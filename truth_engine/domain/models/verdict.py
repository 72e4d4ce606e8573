"""Domain models for claim verdicts."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

NOT_FOUND = "Not Found"


class VerdictStatus(str, Enum):
    """Possible outcomes of analyzing a claim against evidence."""

    CONFIRMS = "Confirms"  # Evidence supports the claim
    REFUTES = "Refutes"  # Evidence contradicts the claim
    OUTDATED = "Outdated"  # Claim was true but is no longer current
    UNRELATED = "Unrelated"  # Evidence does not address the claim
    UNCERTAIN = "Uncertain"  # Insufficient evidence

    @classmethod
    def parse(cls, value: object) -> Optional["VerdictStatus"]:
        """Match a status string case-insensitively, None if unknown."""
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        return None


class Verdict(BaseModel):
    """Claim-level outcome of analysis."""

    verified_fact: str = Field(..., description="The fact established by the evidence")
    source: str = Field(..., description="Domain or label of the supporting source")
    status: VerdictStatus = Field(..., description="Verdict status")
    reasoning: Optional[str] = Field(None, description="Short justification")

    @property
    def is_actionable(self) -> bool:
        """Whether the verdict warrants rewriting the claim."""
        return (
            self.status in (VerdictStatus.CONFIRMS, VerdictStatus.REFUTES)
            and self.verified_fact != NOT_FOUND
        )

    class Config:
        """Pydantic model configuration."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "verifiedFact": "Donald Trump was born on June 14, 1946.",
                "source": "en.wikipedia.org",
                "status": "Refutes",
                "reasoning": "Biographical sources list June 14, 1946 as the birth date.",
            }
        }
