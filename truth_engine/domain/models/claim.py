"""Domain model for factual claims."""

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Claim(BaseModel):
    """A candidate factual statement pulled from submitted text."""

    claim_text: str = Field(..., description="Exact text segment of the claim")
    search_queries: List[str] = Field(
        default_factory=list,
        description="Ordered search queries, the first one is the primary query",
    )

    @property
    def primary_query(self) -> Optional[str]:
        """First search query, if any."""
        return self.search_queries[0] if self.search_queries else None

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "claimText": "Apple's market share reached 23.4% in the smartphone market last quarter",
                "searchQueries": [
                    "Apple smartphone market share last quarter",
                    "Apple market share 23.4%",
                ],
            }
        }
