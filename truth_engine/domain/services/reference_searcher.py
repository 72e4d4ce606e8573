"""Deterministic candidate-URL construction against fixed reference sites.

This is a stand-in for a search engine: no network call is made, the
candidate list is a pure function of the query.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple
from urllib.parse import quote

from .text_utils import query_terms

logger = logging.getLogger(__name__)

SEARCH_STOPWORDS = ("the", "and", "that", "with", "from", "this", "these")


@dataclass(frozen=True)
class ReferenceSite:
    """A site candidate URLs are built against."""

    base_url: str
    article_paths: bool = False  # Encyclopedia-style /Capitalized_Title paths

    def candidate(self, keywords: Sequence[str]) -> str:
        if self.article_paths:
            article = "_".join(k[:1].upper() + k[1:] for k in keywords)
            return f"{self.base_url}{quote(article, safe='_')}"
        return f"{self.base_url}search?q={quote(' '.join(keywords))}"


REFERENCE_SITES: Tuple[ReferenceSite, ...] = (
    ReferenceSite("https://en.wikipedia.org/wiki/", article_paths=True),
    ReferenceSite("https://www.britannica.com/topic/", article_paths=True),
    ReferenceSite("https://www.reuters.com/"),
    ReferenceSite("https://apnews.com/"),
    ReferenceSite("https://www.bbc.com/news/"),
    ReferenceSite("https://www.factcheck.org/"),
    ReferenceSite("https://www.politifact.com/"),
    ReferenceSite("https://www.snopes.com/"),
)


class ReferenceSearcher:
    """Maps a query to one candidate URL per reference site."""

    def __init__(self, sites: Sequence[ReferenceSite] = REFERENCE_SITES):
        self._sites = tuple(sites)

    def keywords(self, query: str) -> List[str]:
        """Significant words of a query."""
        return query_terms(query, SEARCH_STOPWORDS)

    def search(self, query: str) -> List[str]:
        """Ordered candidate URLs for a query, empty without keywords."""
        keywords = self.keywords(query)
        if not keywords:
            logger.warning(f"⚠️ No significant keywords found in query: {query!r}")
            return []
        urls = [site.candidate(keywords) for site in self._sites]
        logger.info(f"🔍 Built {len(urls)} candidate URLs for query: {query!r}")
        return urls
