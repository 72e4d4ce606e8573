"""Domain authority ranking from a curated table and TLD heuristics."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .text_utils import domain_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorityEntry:
    """A curated domain score."""

    domain: str
    score: int
    category: str
    suffix: bool = False  # Category entry such as ac.uk, matched after specific entries

    def matches(self, domain: str) -> bool:
        return domain == self.domain or domain.endswith("." + self.domain)


HIGH_AUTHORITY_SOURCES: Tuple[AuthorityEntry, ...] = (
    AuthorityEntry("reuters.com", 95, "News Agency"),
    AuthorityEntry("ap.org", 95, "News Agency"),
    AuthorityEntry("bbc.com", 90, "Public Broadcaster"),
    AuthorityEntry("bbc.co.uk", 90, "Public Broadcaster"),
    AuthorityEntry("npr.org", 85, "Public Broadcaster"),
    AuthorityEntry("nytimes.com", 85, "Newspaper"),
    AuthorityEntry("washingtonpost.com", 85, "Newspaper"),
    AuthorityEntry("theguardian.com", 85, "Newspaper"),
    # Government
    AuthorityEntry("fed.us", 90, "Government", suffix=True),
    AuthorityEntry("nasa.gov", 95, "Government Agency"),
    AuthorityEntry("nih.gov", 95, "Government Agency"),
    AuthorityEntry("cdc.gov", 95, "Government Agency"),
    AuthorityEntry("who.int", 90, "International Organization"),
    AuthorityEntry("un.org", 90, "International Organization"),
    # Academic
    AuthorityEntry("ac.uk", 85, "Academic", suffix=True),
    AuthorityEntry("harvard.edu", 95, "Academic Institution"),
    AuthorityEntry("mit.edu", 95, "Academic Institution"),
    AuthorityEntry("stanford.edu", 95, "Academic Institution"),
    AuthorityEntry("berkeley.edu", 95, "Academic Institution"),
    # Scientific publications
    AuthorityEntry("nature.com", 95, "Scientific Journal"),
    AuthorityEntry("science.org", 95, "Scientific Journal"),
    AuthorityEntry("sciencedirect.com", 90, "Scientific Publisher"),
    AuthorityEntry("springer.com", 90, "Scientific Publisher"),
    AuthorityEntry("cell.com", 90, "Scientific Journal"),
    AuthorityEntry("nejm.org", 95, "Medical Journal"),
    AuthorityEntry("jamanetwork.com", 90, "Medical Journal"),
    # Fact-checkers
    AuthorityEntry("factcheck.org", 90, "Fact-Checking Organization"),
    AuthorityEntry("politifact.com", 85, "Fact-Checking Organization"),
    AuthorityEntry("snopes.com", 85, "Fact-Checking Organization"),
    AuthorityEntry("fullfact.org", 85, "Fact-Checking Organization"),
    # Reference
    AuthorityEntry("britannica.com", 90, "Encyclopedia"),
    AuthorityEntry("wikipedia.org", 75, "Community Encyclopedia"),
    AuthorityEntry("wolframalpha.com", 85, "Computational Knowledge Engine"),
    # News organizations
    AuthorityEntry("apnews.com", 90, "News Agency"),
    AuthorityEntry("bloomberg.com", 80, "Financial News"),
    AuthorityEntry("economist.com", 85, "News Magazine"),
    AuthorityEntry("ft.com", 85, "Financial News"),
    AuthorityEntry("wsj.com", 80, "Newspaper"),
    AuthorityEntry("time.com", 80, "News Magazine"),
    AuthorityEntry("theatlantic.com", 75, "News Magazine"),
    AuthorityEntry("newyorker.com", 75, "News Magazine"),
)

LOW_AUTHORITY_SOURCES: Tuple[AuthorityEntry, ...] = (
    AuthorityEntry("breitbart.com", 35, "Partisan News"),
    AuthorityEntry("infowars.com", 15, "Conspiracy"),
    AuthorityEntry("naturalnews.com", 20, "Pseudoscience"),
    AuthorityEntry("dailycaller.com", 40, "Partisan News"),
    AuthorityEntry("dailykos.com", 40, "Partisan Blog"),
    AuthorityEntry("rt.com", 30, "State-Controlled Media"),
    AuthorityEntry("sputniknews.com", 30, "State-Controlled Media"),
    AuthorityEntry("theonion.com", 20, "Satire"),
    AuthorityEntry("clickhole.com", 20, "Satire"),
    AuthorityEntry("babylonbee.com", 20, "Satire"),
    AuthorityEntry("tumblr.com", 30, "Social Media"),
    AuthorityEntry("blogspot.com", 30, "Blog Platform"),
    AuthorityEntry("medium.com", 50, "Blog Platform"),  # varies widely by author
    AuthorityEntry("wordpress.com", 30, "Blog Platform"),
    AuthorityEntry("substack.com", 50, "Newsletter Platform"),
)

TLD_SCORES: Tuple[Tuple[str, int], ...] = (
    (".gov", 85),
    (".edu", 80),
    (".mil", 80),
    (".int", 75),
    (".museum", 70),
    (".co.uk", 65),
    (".org", 65),
    (".com", 60),
    (".net", 60),
    (".info", 50),
    (".biz", 45),
    (".io", 55),
)

DEFAULT_AUTHORITY = 50


def normalize_domain(domain: str) -> str:
    """Lower-case a host name and drop the port and a leading ``www.``."""
    normalized = str(domain or "").strip().lower()
    if "://" in normalized:
        normalized = domain_of(normalized)
    normalized = normalized.split("/")[0].split(":")[0].rstrip(".")
    if normalized.startswith("www."):
        normalized = normalized[4:]
    return normalized


class SourceRanker:
    """Assigns a deterministic 0-100 authority score to a domain."""

    def __init__(
        self,
        high_authority: Tuple[AuthorityEntry, ...] = HIGH_AUTHORITY_SOURCES,
        low_authority: Tuple[AuthorityEntry, ...] = LOW_AUTHORITY_SOURCES,
        tld_scores: Tuple[Tuple[str, int], ...] = TLD_SCORES,
    ):
        self._high = high_authority
        self._low = low_authority
        self._tld_scores = tld_scores

    def lookup(self, domain: str) -> Optional[AuthorityEntry]:
        """Find the curated entry for a domain, if any."""
        normalized = normalize_domain(domain)
        if not normalized:
            return None
        for suffix_pass in (False, True):
            for entry in self._high:
                if entry.suffix == suffix_pass and entry.matches(normalized):
                    return entry
        for entry in self._low:
            if entry.matches(normalized):
                return entry
        return None

    def rank(self, domain: str) -> int:
        """Authority score for a domain.

        Args:
            domain: Host name, already stripped of scheme and path

        Returns:
            Score between 0 and 100
        """
        entry = self.lookup(domain)
        if entry is not None:
            return entry.score
        normalized = normalize_domain(domain)
        for tld, score in self._tld_scores:
            if normalized.endswith(tld):
                return score
        return DEFAULT_AUTHORITY

    def rank_url(self, url: str) -> int:
        """Authority score for the host of a URL."""
        return self.rank(domain_of(url))

    def category(self, domain: str) -> str:
        """Curated category of a domain, or a generic label."""
        entry = self.lookup(domain)
        return entry.category if entry else "Uncategorized"
