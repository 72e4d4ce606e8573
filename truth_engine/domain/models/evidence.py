"""Domain models for evidence gathered from the web."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .trust import TrustScoreReport


class EvidenceDocument(BaseModel):
    """A fetched and extracted web page used to support or refute a claim."""

    url: str = Field(..., description="Document URL, unique within one claim's search")
    title: str = Field(default="", description="Page title")
    content: str = Field(default="", description="Plain text, length-capped")
    domain: str = Field(..., description="Host name of the URL")
    site_name: str = Field(..., description="Site name from metadata or the domain")
    authority_score: int = Field(..., ge=0, le=100, description="Domain authority (0-100)")
    relevant_excerpts: List[str] = Field(
        default_factory=list,
        description="Sentences mentioning claim keywords",
    )

    class Config:
        """Pydantic model configuration."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True


class ExtractedContent(BaseModel):
    """Normalized view of a raw document."""

    title: str = ""
    content: str = ""
    site_name: str = ""
    relevant_sentences: Optional[List[str]] = None

    class Config:
        """Pydantic model configuration."""
        alias_generator = to_camel
        populate_by_name = True


class FailedUrl(BaseModel):
    """A candidate URL that could not be turned into evidence."""

    url: str
    reason: str


class ScrapeStatus(str, Enum):
    """Outcome of a scrape."""

    SUCCESS = "success"
    NO_RESULTS = "no_results"


class ScrapeResult(BaseModel):
    """Deduplicated, authority-sorted evidence for one claim."""

    data: List[EvidenceDocument] = Field(default_factory=list)
    status: ScrapeStatus = Field(default=ScrapeStatus.NO_RESULTS)
    trust_score: int = Field(default=0, ge=0, le=100, description="Mean authority score")
    failed_urls: List[FailedUrl] = Field(default_factory=list)
    trust_report: Optional[TrustScoreReport] = Field(
        None, description="Multi-factor trust analysis of the returned documents"
    )

    class Config:
        """Pydantic model configuration."""
        alias_generator = to_camel
        populate_by_name = True
