"""Narrow, model-free claim analysis for birth-date claims.

This is a safety net for when the language model is unreachable, not a
knowledge base: it only answers claims about a birth that carry an
extractable month or year, and declines everything else.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple
from urllib.parse import urlparse

from ..models.run_context import RunContext
from ..models.verdict import Verdict, VerdictStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KnownBirthFact:
    """A canonical birth date for a well-known entity."""

    entity_pattern: Pattern[str]
    canonical_fact: str
    month: str
    year: str
    source: str


KNOWN_BIRTH_FACTS: Tuple[KnownBirthFact, ...] = (
    KnownBirthFact(
        entity_pattern=re.compile(r"\bdonald\s+(?:j\.?\s+)?trump\b", re.IGNORECASE),
        canonical_fact="Donald Trump was born on June 14, 1946",
        month="june",
        year="1946",
        source="en.wikipedia.org",
    ),
    KnownBirthFact(
        entity_pattern=re.compile(r"\bbarack\s+(?:h\.?\s+)?obama\b", re.IGNORECASE),
        canonical_fact="Barack Obama was born on August 4, 1961",
        month="august",
        year="1961",
        source="en.wikipedia.org",
    ),
    KnownBirthFact(
        entity_pattern=re.compile(r"\bjoe\s+biden\b", re.IGNORECASE),
        canonical_fact="Joe Biden was born on November 20, 1942",
        month="november",
        year="1942",
        source="en.wikipedia.org",
    ),
)

_BIRTH_CLAIM = re.compile(r"\b(?:born|birth|birthdate|birthday)\b", re.IGNORECASE)
_MONTHS = (
    "january", "february", "march", "april", "may", "june", "july",
    "august", "september", "october", "november", "december",
)
_MONTH = re.compile(
    r"\b(january|february|march|april|may(?=\s+\d)|june|july|august|september|october|november|december"
    r"|jan|feb|mar|apr|jun|jul|aug|sept?|oct|nov|dec)\b\.?",
    re.IGNORECASE,
)
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
_EVIDENCE_BIRTH_DATES = (
    re.compile(r"born\s+(?:on\s+)?(\w+\s+\d{1,2}(?:st|nd|rd|th)?,?\s+\d{4})", re.IGNORECASE),
    re.compile(r"born\s+(?:on\s+)?(\d{1,2}(?:st|nd|rd|th)?\s+\w+\s+\d{4})", re.IGNORECASE),
    re.compile(r"\(born\s+([^)]*?\d{4})\)", re.IGNORECASE),
    re.compile(r"birthdate[\s\S]{1,20}?(\w+\s+\d{1,2},?\s+\d{4})", re.IGNORECASE),
)
_SOURCE_LINE = re.compile(r"Source:\s+(https?://[^/\s]+)", re.IGNORECASE)
_EVIDENCE_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+|\n+")
_NAME_TOKEN = re.compile(r"\b[A-Z][\w\-]+")
_NOT_NAMES = {"the", "he", "she", "they", "it", "in", "on", "born", "was", "is", "his", "her"}


def _full_month(token: str) -> str:
    token = token.lower().rstrip(".")
    for month in _MONTHS:
        if month.startswith(token[:3]):
            return month
    return token


def _claimed_month(text: str) -> Optional[str]:
    match = _MONTH.search(text)
    return _full_month(match.group(1)) if match else None


def _claimed_year(text: str) -> Optional[str]:
    match = _YEAR.search(text)
    return match.group(0) if match else None


def _name_tokens(claim_text: str) -> List[str]:
    """Capitalised words naming the claim's subject, months excluded."""
    tokens = []
    for token in _NAME_TOKEN.findall(claim_text):
        token = token.lower()
        if token in _NOT_NAMES or token in _MONTHS or _MONTH.fullmatch(token):
            continue
        tokens.append(token)
    return tokens


def _mentions_all(sentence: str, tokens: List[str]) -> bool:
    lowered = sentence.lower()
    return all(re.search(rf"\b{re.escape(token)}\b", lowered) for token in tokens)


class FallbackClaimAnalyzer:
    """Pattern-based verdicts for birth-date claims."""

    def __init__(self, known_facts: Tuple[KnownBirthFact, ...] = KNOWN_BIRTH_FACTS):
        self._known_facts = known_facts

    def analyze(
        self,
        claim_text: str,
        evidence_text: str,
        context: Optional[RunContext] = None,
    ) -> Optional[Verdict]:
        """Judge a birth-date claim, or decline with None."""
        context = context or RunContext.start()
        context.log("info", f'Using fallback analyzer for claim: "{claim_text}"')
        if not evidence_text or not evidence_text.strip():
            return None
        if not _BIRTH_CLAIM.search(claim_text):
            return None

        month = _claimed_month(claim_text)
        year = _claimed_year(claim_text)
        if month is None and year is None:
            return None

        for fact in self._known_facts:
            if fact.entity_pattern.search(claim_text):
                matches = (year is None or year == fact.year) and (month is None or month == fact.month)
                return Verdict(
                    verified_fact=fact.canonical_fact,
                    source=fact.source,
                    status=VerdictStatus.CONFIRMS if matches else VerdictStatus.REFUTES,
                    reasoning="Compared against a curated birth date.",
                )

        names = _name_tokens(claim_text)
        if not names:
            return None
        return self._from_evidence(evidence_text, names, month, year, context)

    @staticmethod
    def _from_evidence(
        evidence_text: str,
        names: List[str],
        month: Optional[str],
        year: Optional[str],
        context: RunContext,
    ) -> Optional[Verdict]:
        mentions = Counter()
        for sentence in _EVIDENCE_SENTENCE_BREAK.split(evidence_text):
            if not _mentions_all(sentence, names):
                continue
            for pattern in _EVIDENCE_BIRTH_DATES:
                for match in pattern.finditer(sentence):
                    mentions[match.group(1).strip().lower()] += 1
        if not mentions:
            return None

        best, count = mentions.most_common(1)[0]
        source_match = _SOURCE_LINE.search(evidence_text)
        source = urlparse(source_match.group(1)).hostname if source_match else "unknown"
        context.log("info", f'Found birth date "{best}" ({count} mentions) from {source}')

        found_year = _claimed_year(best)
        found_month = _claimed_month(best)
        refuted = (
            (year is not None and found_year is not None and year != found_year)
            or (month is not None and found_month is not None and month != found_month)
        )
        return Verdict(
            verified_fact=best.title(),
            source=source or "unknown",
            status=VerdictStatus.REFUTES if refuted else VerdictStatus.CONFIRMS,
            reasoning=f"Most frequently reported birth date in {count} evidence mentions.",
        )
