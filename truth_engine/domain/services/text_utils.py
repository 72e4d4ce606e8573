"""Text helpers shared by the extraction and search stages."""

import math
import re
from typing import FrozenSet, Iterable, List, Optional
from urllib.parse import urlparse

# Words ignored when matching evidence sentences against a claim
RELEVANCE_STOPWORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "and", "or", "but", "is", "are", "was", "were", "be",
    "been", "being", "in", "on", "at", "by", "for", "with", "about", "against",
    "between", "into", "through", "that", "this", "from", "these", "those",
})

# Words ignored when building search queries from a claim
QUERY_STOPWORDS: FrozenSet[str] = frozenset({
    "the", "and", "that", "with", "from", "this", "these", "those", "they",
    "their", "them", "have", "been", "were", "what", "when", "where", "which",
    "while",
})

_WORD = re.compile(r"\b\w{4,}\b")
_EDGE_PUNCTUATION = "\"'“”‘’.,;:!?()[]{}<>"
_NUMERIC_VALUE = re.compile(r"\d+(?:\.\d+)?%?")


def round_half_up(value: float) -> int:
    """Round .5 upwards, the way score formulas expect."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def domain_of(url: str) -> str:
    """Host name of a URL, tolerant of malformed input."""
    try:
        host = urlparse(url).hostname
    except (ValueError, AttributeError):
        host = None
    if host:
        return host.lower()
    parts = str(url or "").split("/")
    return parts[2] if len(parts) > 2 and parts[2] else "unknown"


def extract_keywords(text: Optional[str], stopwords: Iterable[str] = RELEVANCE_STOPWORDS) -> List[str]:
    """Unique lower-cased words longer than three characters, in order."""
    if not text:
        return []
    ignored = set(stopwords)
    keywords: List[str] = []
    for word in _WORD.findall(text.lower()):
        if word not in ignored and word not in keywords:
            keywords.append(word)
    return keywords


def query_terms(text: str, stopwords: Iterable[str] = QUERY_STOPWORDS) -> List[str]:
    """Whitespace tokens usable as search terms, keeping their original case."""
    ignored = {word.lower() for word in stopwords}
    terms = []
    for token in text.split():
        term = token.strip(_EDGE_PUNCTUATION)
        if len(term) > 3 and term.lower() not in ignored:
            terms.append(term)
    return terms


def split_sentences(text: str, min_length: int = 10) -> List[str]:
    """Break plain text on sentence punctuation."""
    sentences = (part.strip() for part in re.split(r"[.!?]+", text))
    return [s for s in sentences if len(s) > min_length]


def split_statements(text: str) -> List[str]:
    """Split on terminal punctuation followed by whitespace.

    Decimal numbers such as ``23.4%`` stay inside their sentence.
    """
    statements = []
    for part in re.split(r"(?<=[.!?])\s+", text.strip()):
        statement = part.strip().rstrip(".!?").strip()
        if statement:
            statements.append(statement)
    return statements


def first_numeric_value(text: str) -> Optional[str]:
    """First number or percentage in the text."""
    match = _NUMERIC_VALUE.search(text)
    return match.group(0) if match else None
