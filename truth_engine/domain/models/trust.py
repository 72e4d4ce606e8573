"""Domain models for source credibility analysis."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class _TrustModel(BaseModel):
    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True


class TrustComponent(_TrustModel):
    """One weighted factor of a source's credibility."""

    name: str
    score: int = Field(..., ge=0, le=100)
    weight: float = Field(..., ge=0.0, le=1.0)
    description: str = ""


class OwnershipInfo(_TrustModel):
    """Who owns or controls a source."""

    owner: str = "Unknown"
    type: str = "Unknown"
    founded: str = "Unknown"
    headquarters: str = "Unknown"
    ownership: str = "No ownership information available"
    notable: str = ""


class BiasProfile(_TrustModel):
    """Known or inferred editorial leaning of a source."""

    political_leaning: str = "Unknown"
    bias_level: str = "Unknown"
    ownership_bias: str = "No ownership information available"
    content_trends: str = "Insufficient data for analysis"


class SourceTrustReport(_TrustModel):
    """Credibility breakdown for a single source."""

    domain: str
    url: str
    title: str = "Unknown Title"
    overall: int = Field(..., ge=0, le=100)
    components: List[TrustComponent] = Field(default_factory=list)
    ownership_info: OwnershipInfo = Field(default_factory=OwnershipInfo)
    potential_biases: BiasProfile = Field(default_factory=BiasProfile)

    def component(self, name: str) -> Optional[TrustComponent]:
        """Look up a component by name."""
        for component in self.components:
            if component.name == name:
                return component
        return None


class TrustExplanation(_TrustModel):
    """Natural-language summary of an aggregate trust score."""

    trust_level: str
    summary: str
    source_breakdown: str
    top_sources: str
    strongest_factors: str
    weakest_factors: str
    recommendations: str


class TrustScoreReport(_TrustModel):
    """Aggregate credibility over a set of sources."""

    overall: int = Field(..., ge=0, le=100)
    components: List[TrustComponent] = Field(
        default_factory=list,
        description="Component scores averaged over all sources",
    )
    source_details: List[SourceTrustReport] = Field(default_factory=list)
    explanation: Union[TrustExplanation, str]
    source_count: int = 0
    top_sources: List[str] = Field(default_factory=list)
    trust_level: Optional[str] = None


class SourceInput(BaseModel):
    """A source submitted for trust analysis."""

    url: str
    title: Optional[str] = None
    content: Optional[str] = None
    ownership_data: Optional[Dict[str, Any]] = Field(
        None, description="Structured ownership metadata (owner, parentCompany, ...)"
    )
    json_ld: Optional[Dict[str, Any]] = Field(
        None, description="JSON-LD metadata found on the page"
    )

    class Config:
        """Pydantic model configuration."""
        alias_generator = to_camel
        populate_by_name = True
