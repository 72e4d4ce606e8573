"""Ownership and editorial-bias profiles of well-known sources."""

import re
from typing import Any, Dict, Optional

from ..models.trust import BiasProfile, OwnershipInfo

KNOWN_OWNERSHIP: Dict[str, OwnershipInfo] = {
    "nytimes.com": OwnershipInfo(
        owner="The New York Times Company",
        type="Public company (NYSE: NYT)",
        founded="1851",
        headquarters="New York, NY, USA",
        ownership="Publicly traded, Sulzberger family remains principal owner",
        notable="One of the oldest and most respected news organizations",
    ),
    "washingtonpost.com": OwnershipInfo(
        owner="Nash Holdings LLC (Jeff Bezos)",
        type="Private company",
        founded="1877",
        headquarters="Washington, D.C., USA",
        ownership="Owned by Jeff Bezos, founder of Amazon, since 2013",
        notable="Previously owned by the Graham family for 80 years",
    ),
    "wsj.com": OwnershipInfo(
        owner="News Corp",
        type="Public company subsidiary",
        founded="1889",
        headquarters="New York, NY, USA",
        ownership="Controlled by Rupert Murdoch and family",
        notable="Business-focused newspaper with conservative editorial stance",
    ),
    "theguardian.com": OwnershipInfo(
        owner="Guardian Media Group",
        type="Private company, owned by Scott Trust Limited",
        founded="1821",
        headquarters="London, UK",
        ownership="The Scott Trust was created to ensure editorial independence",
        notable="Trust structure maintains independence and a liberal editorial stance",
    ),
    "reuters.com": OwnershipInfo(
        owner="Thomson Reuters Corporation",
        type="Public company (NYSE: TRI)",
        founded="1851",
        headquarters="Toronto, Canada",
        ownership="Publicly traded, Thomson family is principal shareholder",
        notable="One of the largest international news agencies",
    ),
    "apnews.com": OwnershipInfo(
        owner="Associated Press",
        type="Non-profit cooperative",
        founded="1846",
        headquarters="New York, NY, USA",
        ownership="Owned by its contributing newspapers and broadcasters",
        notable="Operates as a cooperative without corporate ownership",
    ),
    "cnn.com": OwnershipInfo(
        owner="Warner Bros. Discovery",
        type="Public company subsidiary (NASDAQ: WBD)",
        founded="1980",
        headquarters="Atlanta, GA, USA",
        ownership="Publicly traded media conglomerate",
        notable="Founded by Ted Turner, acquired by Time Warner in 1996",
    ),
    "foxnews.com": OwnershipInfo(
        owner="Fox Corporation",
        type="Public company (NASDAQ: FOXA)",
        founded="1996",
        headquarters="New York, NY, USA",
        ownership="Murdoch family maintains substantial voting power",
        notable="Known for conservative editorial stance",
    ),
    "bbc.com": OwnershipInfo(
        owner="British Broadcasting Corporation",
        type="Public service broadcaster",
        founded="1922",
        headquarters="London, UK",
        ownership="Public corporation established by Royal Charter",
        notable="Funded primarily through UK television license fees",
    ),
    "msnbc.com": OwnershipInfo(
        owner="NBCUniversal (Comcast)",
        type="Public company subsidiary",
        founded="1996",
        headquarters="New York, NY, USA",
        ownership="Comcast is the parent company",
        notable="Known for liberal editorial stance",
    ),
    "whitehouse.gov": OwnershipInfo(
        owner="United States Federal Government",
        type="Government website",
        founded="N/A",
        headquarters="Washington, D.C., USA",
        ownership="Executive Office of the President",
        notable="Official website of the White House",
    ),
    "cdc.gov": OwnershipInfo(
        owner="United States Federal Government",
        type="Government agency website",
        founded="1946",
        headquarters="Atlanta, GA, USA",
        ownership="Department of Health and Human Services",
        notable="Principal agency for protecting public health",
    ),
    "nih.gov": OwnershipInfo(
        owner="United States Federal Government",
        type="Government agency website",
        founded="1887",
        headquarters="Bethesda, MD, USA",
        ownership="Department of Health and Human Services",
        notable="Primary agency for biomedical and public health research",
    ),
    "wikipedia.org": OwnershipInfo(
        owner="Wikimedia Foundation",
        type="Non-profit organization",
        founded="2001",
        headquarters="San Francisco, CA, USA",
        ownership="Non-profit, user-contributed content",
        notable="Community-edited encyclopedia with no corporate ownership",
    ),
    "facebook.com": OwnershipInfo(
        owner="Meta Platforms, Inc.",
        type="Public company (NASDAQ: META)",
        founded="2004",
        headquarters="Menlo Park, CA, USA",
        ownership="Publicly traded, Mark Zuckerberg maintains controlling interest",
        notable="Mark Zuckerberg holds majority voting control",
    ),
    "twitter.com": OwnershipInfo(
        owner="X Corp. (Elon Musk)",
        type="Private company",
        founded="2006",
        headquarters="San Francisco, CA, USA",
        ownership="Privately owned by Elon Musk since 2022",
        notable="Previously publicly traded, taken private in 2022",
    ),
}

KNOWN_BIASES: Dict[str, BiasProfile] = {
    "foxnews.com": BiasProfile(
        political_leaning="Right/Conservative",
        bias_level="Strong",
        ownership_bias="Owned by Fox Corporation (Murdoch family)",
        content_trends="Generally favors Republican/conservative viewpoints",
    ),
    "breitbart.com": BiasProfile(
        political_leaning="Far-Right",
        bias_level="Strong",
        ownership_bias="Founded by conservative commentator Andrew Breitbart",
        content_trends="Strongly favors populist right-wing viewpoints",
    ),
    "msnbc.com": BiasProfile(
        political_leaning="Left/Progressive",
        bias_level="Moderate to Strong",
        ownership_bias="Owned by NBCUniversal (Comcast)",
        content_trends="Generally favors Democratic/progressive viewpoints",
    ),
    "huffpost.com": BiasProfile(
        political_leaning="Left/Progressive",
        bias_level="Moderate",
        ownership_bias="Owned by BuzzFeed Inc.",
        content_trends="Generally favors progressive viewpoints",
    ),
    "wsj.com": BiasProfile(
        political_leaning="Center-Right (News), Right (Opinion)",
        bias_level="Mild to Moderate",
        ownership_bias="Owned by News Corp (Murdoch family)",
        content_trends="News reporting relatively neutral, editorial page conservative",
    ),
    "nytimes.com": BiasProfile(
        political_leaning="Center-Left",
        bias_level="Mild to Moderate",
        ownership_bias="Publicly traded, Sulzberger family maintains control",
        content_trends="Generally favors liberal/progressive viewpoints",
    ),
    "reuters.com": BiasProfile(
        political_leaning="Center",
        bias_level="Low",
        ownership_bias="Publicly traded news agency",
        content_trends="Focuses on factual reporting with minimal bias",
    ),
    "apnews.com": BiasProfile(
        political_leaning="Center",
        bias_level="Low",
        ownership_bias="Cooperative owned by member newspapers and broadcasters",
        content_trends="Focuses on factual reporting with minimal bias",
    ),
}

_LEFT_LEANING = (
    re.compile(r"\b(?:progressive|liberal|left-wing|democrat|leftist)\b"),
    re.compile(r"\b(?:social justice|systemic|equity|privilege|marginalized)\b"),
)
_RIGHT_LEANING = (
    re.compile(r"\b(?:conservative|right-wing|republican|patriot|nationalist)\b"),
    re.compile(r"\b(?:free market|deregulation|small government|freedom|liberty)\b"),
)


def _lookup(table: Dict[str, Any], domain: str) -> Optional[Any]:
    for known_domain, profile in table.items():
        if domain == known_domain or domain.endswith("." + known_domain):
            return profile
    return None


def ownership_for(
    domain: str,
    content: Optional[str] = None,
    json_ld: Optional[Dict[str, Any]] = None,
) -> OwnershipInfo:
    """Ownership of a source from the curated table or page metadata."""
    known = _lookup(KNOWN_OWNERSHIP, domain)
    if known is not None:
        return known
    if json_ld:
        publisher = json_ld.get("publisher") or json_ld.get("creator") or json_ld.get("author")
        if isinstance(publisher, list):
            publisher = publisher[0] if publisher else None
        if publisher:
            name = publisher.get("name", "Unknown") if isinstance(publisher, dict) else publisher
            return OwnershipInfo(
                owner=str(name),
                ownership="Information extracted from page metadata",
            )
    return OwnershipInfo()


def _count(patterns, text: str) -> int:
    return sum(len(pattern.findall(text)) for pattern in patterns)


def bias_for(domain: str, content: Optional[str] = None) -> BiasProfile:
    """Editorial leaning from the curated table, else from keyword counts."""
    known = _lookup(KNOWN_BIASES, domain)
    if known is not None:
        return known
    if not content:
        return BiasProfile()

    text = content.lower()
    left = _count(_LEFT_LEANING, text)
    right = _count(_RIGHT_LEANING, text)
    if left > right:
        strong = left / (right + 1) > 3
        leaning = "Left/Progressive" if strong else "Center-Left"
        level = "Moderate to Strong" if strong else "Mild"
    elif right > left:
        strong = right / (left + 1) > 3
        leaning = "Right/Conservative" if strong else "Center-Right"
        level = "Moderate to Strong" if strong else "Mild"
    else:
        leaning, level = "Balanced/Center", "Low"
    return BiasProfile(
        political_leaning=leaning,
        bias_level=level,
        ownership_bias="Unknown - automated analysis based on content",
        content_trends="Based on keyword analysis of available content",
    )
