"""Multi-factor credibility scoring of evidence sources."""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models.trust import (
    SourceInput,
    SourceTrustReport,
    TrustComponent,
    TrustExplanation,
    TrustScoreReport,
)
from .source_profiles import bias_for, ownership_for
from .source_ranker import SourceRanker
from .text_utils import domain_of, round_half_up

logger = logging.getLogger(__name__)

NO_SOURCES_EXPLANATION = "No sources available for evaluation."

AUTHORITY = "Authority"
CONTENT_QUALITY = "Content Quality"
OWNERSHIP = "Ownership Transparency"
CITATIONS = "Citations"
BIAS = "Bias Assessment"

COMPONENT_WEIGHTS = {
    AUTHORITY: 0.30,
    CONTENT_QUALITY: 0.25,
    OWNERSHIP: 0.20,
    CITATIONS: 0.15,
    BIAS: 0.10,
}

TRUST_LEVELS = (
    (85, "Very High", "This information is extremely reliable and comes from highly credible sources with strong reputation for accuracy."),
    (70, "High", "This information is reliable and comes from generally trustworthy sources, though minor aspects may benefit from additional verification."),
    (55, "Moderate", "This information comes from sources of mixed reliability. Key claims should be verified through additional sources."),
    (40, "Low", "This information comes from sources with significant reliability concerns. Claims should be treated with skepticism and verified through more reliable sources."),
    (0, "Very Low", "This information comes from sources that lack credibility or have serious reliability issues. Claims should not be trusted without substantial verification from reliable sources."),
)

# Content quality signals
_QUALITY_CITATIONS = (
    re.compile(r"\[\d+\]"),
    re.compile(r"\((?:[A-Za-z]+,\s+\d{4})\)"),
    re.compile(r"https?://[^\s]+"),
    re.compile(r"et al\.,? \d{4}"),
    re.compile(r"\b(?:according to|cited by|source:|reference:)", re.IGNORECASE),
)
_NUMBERS = re.compile(r"\d+(?:\.\d+)?%?")
_DATES = re.compile(
    r"(?:19|20)\d{2}[-/]\d{1,2}[-/]\d{1,2}"
    r"|(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]* \d{1,2},? \d{4}",
    re.IGNORECASE,
)
_ERROR_MARKERS = (
    "access denied", "forbidden", "not found", "robot", "captcha",
    "javascript required", "cookies disabled", "error", "403", "404",
)
_CLICKBAIT = (
    re.compile(r"\b(?:you won't believe|mind-blowing|changed forever|shocking truth)\b", re.IGNORECASE),
    re.compile(r"\b(?:this one weird|one simple|secret trick|doctors hate)\b", re.IGNORECASE),
    re.compile(r"\b(?:\d+ (?:things|reasons|ways|tips|facts) (?:about|to|that))\b", re.IGNORECASE),
    re.compile(r"\b(?:(?:what|when) (?:happens|happened) next|you'll never guess)\b", re.IGNORECASE),
)
_POSITIVE_WORDS = (
    "good", "great", "excellent", "amazing", "wonderful", "fantastic",
    "outstanding", "positive", "beneficial", "successful", "effective",
    "impressive", "remarkable", "valuable", "exceptional", "favorable",
)
_NEGATIVE_WORDS = (
    "bad", "poor", "terrible", "awful", "horrible", "dreadful",
    "negative", "unsuccessful", "ineffective", "disappointing",
    "inadequate", "harmful", "detrimental", "problematic", "catastrophic",
)
_POSITIVE = re.compile(r"\b(?:" + "|".join(_POSITIVE_WORDS) + r")\b", re.IGNORECASE)
_NEGATIVE = re.compile(r"\b(?:" + "|".join(_NEGATIVE_WORDS) + r")\b", re.IGNORECASE)

# Citation component
_CITATION_PATTERNS = (
    re.compile(r"\[\d+\]"),  # [1], [23]
    re.compile(r"\((?:[A-Za-z]+,\s+\d{4}(?:, p\. \d+)?)\)"),  # (Smith, 2020, p. 23)
    re.compile(r"\"[^\"]*\"(?:\s+|&nbsp;)\((?:\d{4})\)"),  # "quote" (2020)
    re.compile(r"https?://[^\s]+"),
    re.compile(r"et al\.,? \d{4}"),
    re.compile(r"\b(?:according to|cited by|source:|reference:|source: [A-Z])", re.IGNORECASE),
)
_AUTHORITY_VOCABULARY = (
    re.compile(r"\b(?:study|research|survey|analysis|report|data)\b", re.IGNORECASE),
    re.compile(r"\b(?:university|institute|journal|professor|scientist|expert|official)\b", re.IGNORECASE),
    re.compile(r"\b(?:according to [A-Z][a-z]+ [A-Z][a-z]+)\b"),
)

# Bias component, matched against lower-cased content
_EMOTIONAL = (
    re.compile(r"\b(?:outrageous|shocking|horrif(?:ic|ying)|stunning|amazing|incredible|terrible|awful)\b"),
    re.compile(r"\b(?:slam(?:s|med)?|blast(?:s|ed)?|destroys|wrecks|crushes|demolishes|obliterates)\b"),
    re.compile(r"\b(?:wonderful|beautiful|perfect|fantastic|extraordinary|magnificent)\b"),
)
_LEFT_VOCABULARY = (
    re.compile(r"\b(?:progressive|liberal|left-wing|socialist|marxist)\b"),
    re.compile(r"\b(?:social justice|systemic|equity|privilege|marginalized)\b"),
)
_RIGHT_VOCABULARY = (
    re.compile(r"\b(?:conservative|right-wing|patriot|nationalist|traditional values)\b"),
    re.compile(r"\b(?:free market|deregulation|small government|freedom|liberty)\b"),
)


def _count(patterns, text: str) -> int:
    return sum(len(pattern.findall(text)) for pattern in patterns)


def _word_count(text: str) -> int:
    return max(1, len(text.split()))


def sentiment(content: str) -> float:
    """Positive/negative word balance between -1 and 1."""
    if not content:
        return 0.0
    positive = len(_POSITIVE.findall(content))
    negative = len(_NEGATIVE.findall(content))
    return (positive - negative) / (positive + negative + 10)


def content_quality_score(content: Optional[str]) -> int:
    """Blend of length, structure and quality signals minus penalties."""
    if not content:
        return 40

    word_count = _word_count(content)
    sentence_count = len(re.findall(r"[.!?]+", content))
    paragraph_count = len(re.findall(r"\n\s*\n", content)) + 1
    heading_count = len(re.findall(r"#{1,6}\s+.+", content))
    citation_count = _count(_QUALITY_CITATIONS, content)

    length_score = min(100, len(content) / 1000 * 50) + min(50, word_count / 500 * 50)
    structure_score = (
        paragraph_count / 5 * 40
        + sentence_count / paragraph_count * 30
        + heading_count / 3 * 30
    )
    signals_score = (
        citation_count * 15
        + (20 if _NUMBERS.search(content) else 0)
        + (20 if _DATES.search(content) else 0)
    )

    lowered = content.lower()
    error_penalty = min(5, sum(1 for marker in _ERROR_MARKERS if marker in lowered)) * 20
    clickbait_penalty = min(5, sum(1 for pattern in _CLICKBAIT if pattern.search(content))) * 15
    sentiment_penalty = abs(sentiment(content)) * 30

    score = (
        min(100, length_score) * 0.3
        + min(100, structure_score) * 0.3
        + min(100, signals_score) * 0.4
    )
    score = max(0, score - error_penalty - clickbait_penalty - sentiment_penalty)
    return round_half_up(score)


def ownership_transparency_score(domain: str, ownership_data: Optional[Dict[str, Any]] = None) -> int:
    """Transparency of ownership from metadata and domain type."""
    score = 50
    if ownership_data:
        score += 25
        for keys in (
            ("owner",),
            ("parentCompany", "parent_company"),
            ("founded",),
            ("headquarters",),
            ("fundingSources", "funding_sources"),
        ):
            if any(ownership_data.get(key) for key in keys):
                score += 5
    if domain.endswith(".gov"):
        score += 15
    if domain.endswith(".edu"):
        score += 10
    if domain.endswith(".org"):
        score += 5
    return min(100, score)


def citation_score(content: Optional[str]) -> int:
    """Density of references and authority vocabulary."""
    if not content:
        return 30
    score = min(80, _count(_CITATION_PATTERNS, content) * 10)
    score += min(20, _count(_AUTHORITY_VOCABULARY, content) * 5)
    return min(100, max(10, score))


def bias_score(content: Optional[str]) -> int:
    """100 minus emotional and political-skew penalties, floored at 10."""
    if not content:
        return 40
    text = content.lower()
    words = _word_count(text)
    emotional = _count(_EMOTIONAL, text) / words * 1000
    skew = abs(_count(_LEFT_VOCABULARY, text) - _count(_RIGHT_VOCABULARY, text)) / words * 1000
    emotional_penalty = min(40, emotional * 2)
    political_penalty = min(40, skew * 3)
    return max(10, round_half_up(100 - emotional_penalty - political_penalty))


def _band(score: float, descriptions) -> str:
    for threshold, description in zip((90, 75, 60, 45, 30), descriptions):
        if score >= threshold:
            return description
    return descriptions[-1]


def explain_authority(domain: str, score: int) -> str:
    return _band(score, (
        f"{domain} is a highly authoritative source, typically a government agency, academic institution, or major established news organization with rigorous fact-checking processes.",
        f"{domain} is a reliable source with good reputation, typically an established news organization, well-regarded publication, or authoritative reference.",
        f"{domain} is a generally reliable source, though may occasionally contain bias or require verification of claims.",
        f"{domain} has mixed reliability, requiring additional verification of claims and awareness of potential biases.",
        f"{domain} has significant reliability concerns, often containing bias or unverified information.",
        f"{domain} has serious reliability issues, often publishing misleading, biased, or false information.",
    ))


def explain_content_quality(score: int) -> str:
    return _band(score, (
        "Exceptional content quality with comprehensive information, structured presentation, and proper citations.",
        "High quality content with good depth, structure, and supporting evidence.",
        "Above average content quality with reasonable depth and some supporting evidence.",
        "Average content quality with basic information but limited depth or supporting evidence.",
        "Below average content quality with gaps in information and minimal supporting evidence.",
        "Poor content quality with significant issues in structure, depth, or accuracy.",
    ))


def explain_ownership(domain: str, score: int) -> str:
    return _band(score, (
        f"{domain} has exceptional transparency about ownership and funding sources.",
        f"{domain} provides clear information about ownership and organizational structure.",
        f"{domain} offers basic information about ownership but may lack complete details.",
        f"{domain} has limited transparency about ownership and funding.",
        f"{domain} provides minimal information about who owns or controls the source.",
        f"{domain} lacks transparency about ownership, raising questions about potential conflicts of interest.",
    ))


def explain_citations(score: int) -> str:
    return _band(score, (
        "Content is exceptionally well-cited with numerous references to authoritative sources.",
        "Content includes robust citations that substantiate key claims.",
        "Content provides adequate citations for most significant claims.",
        "Content includes some citations but lacks references for several claims.",
        "Content has minimal citations, with most claims lacking proper sourcing.",
        "Content lacks citations or supporting evidence for most or all claims.",
    ))


def explain_bias(score: int) -> str:
    return _band(score, (
        "Content shows minimal bias, presenting information in a balanced, neutral manner.",
        "Content shows slight bias but generally maintains fairness in presentation.",
        "Content has noticeable bias but attempts to acknowledge multiple perspectives.",
        "Content shows significant bias that affects how information is presented.",
        "Content is highly biased, primarily presenting one perspective while minimizing others.",
        "Content exhibits extreme bias, potentially misleading readers through selective presentation.",
    ))


def trust_level(score: int) -> str:
    """Label of the band a score falls into."""
    return _trust_band(score)[1]


def _trust_band(score: int):
    for band in TRUST_LEVELS:
        if score >= band[0]:
            return band
    return TRUST_LEVELS[-1]


SourceLike = Union[SourceInput, Dict[str, Any]]


class TrustScorer:
    """Computes per-source and aggregate credibility scores.

    Scoring is a pure function of its input: the same sources always
    produce the same report.
    """

    def __init__(self, ranker: Optional[SourceRanker] = None):
        """Initialize the scorer.

        Args:
            ranker: Authority ranker, defaults to the curated table
        """
        self._ranker = ranker or SourceRanker()

    def score_source(self, source: SourceLike) -> SourceTrustReport:
        """Score a single source across all five components."""
        if not isinstance(source, SourceInput):
            source = SourceInput.model_validate(source)
        domain = domain_of(source.url)
        content = source.content or ""

        authority = self._ranker.rank(domain)
        quality = content_quality_score(content)
        ownership = ownership_transparency_score(domain, source.ownership_data)
        citations = citation_score(content)
        bias = bias_score(content)

        overall = round_half_up(
            authority * COMPONENT_WEIGHTS[AUTHORITY]
            + quality * COMPONENT_WEIGHTS[CONTENT_QUALITY]
            + ownership * COMPONENT_WEIGHTS[OWNERSHIP]
            + citations * COMPONENT_WEIGHTS[CITATIONS]
            + bias * COMPONENT_WEIGHTS[BIAS]
        )
        return SourceTrustReport(
            domain=domain,
            url=source.url,
            title=source.title or "Unknown Title",
            overall=overall,
            components=[
                TrustComponent(name=AUTHORITY, score=authority, weight=COMPONENT_WEIGHTS[AUTHORITY],
                               description=explain_authority(domain, authority)),
                TrustComponent(name=CONTENT_QUALITY, score=quality, weight=COMPONENT_WEIGHTS[CONTENT_QUALITY],
                               description=explain_content_quality(quality)),
                TrustComponent(name=OWNERSHIP, score=ownership, weight=COMPONENT_WEIGHTS[OWNERSHIP],
                               description=explain_ownership(domain, ownership)),
                TrustComponent(name=CITATIONS, score=citations, weight=COMPONENT_WEIGHTS[CITATIONS],
                               description=explain_citations(citations)),
                TrustComponent(name=BIAS, score=bias, weight=COMPONENT_WEIGHTS[BIAS],
                               description=explain_bias(bias)),
            ],
            ownership_info=ownership_for(domain, content, source.json_ld),
            potential_biases=bias_for(domain, content),
        )

    def score(self, sources: Sequence[SourceLike]) -> TrustScoreReport:
        """Aggregate credibility of a set of sources.

        Each source's weight is its authority as a fraction, floored at 0.1.

        Args:
            sources: Sources with a url and optional title and content

        Returns:
            Trust score report
        """
        if not sources:
            return TrustScoreReport(overall=0, components=[], explanation=NO_SOURCES_EXPLANATION)

        details = [self.score_source(source) for source in sources]

        weighted_sum = 0.0
        total_weight = 0.0
        for detail in details:
            weight = max(0.1, detail.component(AUTHORITY).score / 100)
            weighted_sum += detail.overall * weight
            total_weight += weight
        overall = round_half_up(weighted_sum / total_weight)

        averages = self._average_components(details)
        ranked = sorted(details, key=lambda d: d.overall, reverse=True)
        top_sources = [d.domain for d in ranked[:3]]
        logger.debug(f"📊 Trust score {overall}/100 over {len(details)} sources")

        return TrustScoreReport(
            overall=overall,
            components=averages,
            source_details=details,
            explanation=self._explain(details, averages, overall, top_sources),
            source_count=len(details),
            top_sources=top_sources,
            trust_level=trust_level(overall),
        )

    @staticmethod
    def _average_components(details: List[SourceTrustReport]) -> List[TrustComponent]:
        averages = []
        for name, weight in COMPONENT_WEIGHTS.items():
            mean = sum(d.component(name).score for d in details) / len(details)
            averages.append(TrustComponent(
                name=name,
                score=round_half_up(mean),
                weight=weight,
                description=f"Average {name.lower()} score across {len(details)} sources",
            ))
        return averages

    @staticmethod
    def _explain(
        details: List[SourceTrustReport],
        averages: List[TrustComponent],
        overall: int,
        top_sources: List[str],
    ) -> TrustExplanation:
        high = sum(1 for d in details if d.overall >= 75)
        medium = sum(1 for d in details if 50 <= d.overall < 75)
        low = sum(1 for d in details if d.overall < 50)
        factors = sorted(averages, key=lambda c: c.score, reverse=True)
        _, label, summary = _trust_band(overall)

        return TrustExplanation(
            trust_level=label,
            summary=summary,
            source_breakdown=(
                f"Based on analysis of {len(details)} sources: {high} high-quality, "
                f"{medium} medium-quality, and {low} low-quality sources."
            ),
            top_sources=f"Top sources include: {', '.join(top_sources)}",
            strongest_factors=(
                f"Strongest factors: {factors[0].name} ({factors[0].score}/100) "
                f"and {factors[1].name} ({factors[1].score}/100)"
            ),
            weakest_factors=(
                f"Areas of concern: {factors[-1].name} ({factors[-1].score}/100) "
                f"and {factors[-2].name} ({factors[-2].score}/100)"
            ),
            recommendations=(
                "Recommendation: Verify this information with additional authoritative sources before sharing or relying on it."
                if overall < 60
                else "Recommendation: This information appears reliable based on source analysis."
            ),
        )
