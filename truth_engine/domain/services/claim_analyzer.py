"""Verdicts for claims, model-driven with a narrow pattern fallback."""

import logging
import re
from datetime import datetime
from typing import Optional, Sequence

from ..errors import ModelTimeoutError, ModelUnavailableError, ParseError
from ..models.evidence import EvidenceDocument
from ..models.run_context import RunContext
from ..models.verdict import Verdict, VerdictStatus
from .fallback_analyzer import FallbackClaimAnalyzer
from .json_response import parse_json_object
from .model_gateway import ModelGateway

logger = logging.getLogger(__name__)

EVIDENCE_SEPARATOR = "\n\n---\n\n"
DEFAULT_EVIDENCE_CHARS = 5000
ANALYSIS_TEMPERATURE = 0.1

NO_SOURCES_LABEL = "No reliable sources found"
TIMEOUT_SOURCE_LABEL = "Fallback due to timeout"

_BIRTH_CLAIM = re.compile(r"born|birth|birthdate", re.IGNORECASE)

BIRTH_PROMPT = """
You are verifying a BIRTH DATE or BIRTH YEAR claim. The claim is: "{claim}".
Current date: {reference_time}

The search results below contain information about this specific birth claim:
\"\"\"
{evidence}
\"\"\"

IMPORTANT INSTRUCTIONS:
1. Focus ONLY on whether the birth date or year in the claim is correct.
2. Look for explicit birth information in reliable sources such as encyclopedias, biographies or official sources.
3. Extract the EXACT birth information found in the search results.
4. Do not introduce unrelated information about other topics.
5. For "status" use "Confirms" if the claimed date matches, "Refutes" if it does not, "Uncertain" if the results do not say.
6. Return your analysis in this exact JSON format:

{{
  "verifiedFact": "The exact birth information found (e.g. 'Born on June 14, 1946')",
  "source": "The source website domain (e.g. 'en.wikipedia.org')",
  "status": "Confirms",
  "reasoning": "Brief explanation of how you verified this birth information"
}}

Only output the JSON object, nothing else."""

GENERAL_PROMPT = """
You are a fact-checker verifying this claim: "{claim}"
Current date: {reference_time}

The search results contain information about this claim:
\"\"\"
{evidence}
\"\"\"

IMPORTANT INSTRUCTIONS:
1. Focus ONLY on this specific claim: "{claim}"
2. Look for facts that DIRECTLY address this claim.
3. For the "status" field use ONLY:
   - "Confirms" if the search results prove the claim is true
   - "Refutes" if the search results prove the claim is false
   - "Outdated" if the claim was once true but newer information supersedes it
   - "Unrelated" if the search results do not address the claim
   - "Uncertain" if there is insufficient evidence
4. For "verifiedFact", extract the most relevant fact from the search results, or "Not Found".
5. Return your analysis in this exact JSON format:

{{
  "verifiedFact": "The most relevant fact found in the search results",
  "source": "The source domain (e.g. 'reuters.com')",
  "status": "Confirms/Refutes/Outdated/Unrelated/Uncertain",
  "reasoning": "Brief explanation of your verification process"
}}

Only output the JSON object, nothing else."""


def render_evidence(documents: Sequence[EvidenceDocument]) -> str:
    """Concatenate evidence documents into the analysis prompt format."""
    return EVIDENCE_SEPARATOR.join(
        f"Source: {doc.url or 'N/A'}\nTitle: {doc.title}\nContent:\n{doc.content}"
        for doc in documents
    )


class ClaimAnalyzer:
    """Judges a claim against rendered evidence."""

    def __init__(
        self,
        gateway: ModelGateway,
        fallback: Optional[FallbackClaimAnalyzer] = None,
        evidence_chars: int = DEFAULT_EVIDENCE_CHARS,
    ):
        """Initialize the analyzer.

        Args:
            gateway: Language-model gateway
            fallback: Analyzer used when the model is unreachable
            evidence_chars: Evidence length cap in the prompt
        """
        self._gateway = gateway
        self._fallback = fallback or FallbackClaimAnalyzer()
        self._evidence_chars = evidence_chars

    async def analyze(
        self,
        claim_text: str,
        evidence_text: str,
        reference_time: Optional[datetime] = None,
        context: Optional[RunContext] = None,
    ) -> Optional[Verdict]:
        """Produce a verdict, or None when no usable verdict can be obtained.

        Args:
            claim_text: Claim under analysis
            evidence_text: Evidence rendered with ``render_evidence``
            reference_time: Time the run started
            context: Run context receiving log entries

        Returns:
            Verdict or None
        """
        context = context or RunContext.start()
        reference_time = reference_time or context.reference_time
        context.log("info", f'Analyzing search results for claim: "{claim_text}"')

        if not evidence_text or not evidence_text.strip():
            context.log("warn", "No search result text to analyze.")
            return Verdict(
                verified_fact=claim_text,
                source=NO_SOURCES_LABEL,
                status=VerdictStatus.UNCERTAIN,
                reasoning="Insufficient data available to verify this claim.",
            )

        if not await self._gateway.is_available():
            context.log("warn", "Language model unavailable, using fallback analyzer")
            return self._fallback.analyze(claim_text, evidence_text, context)

        template = BIRTH_PROMPT if _BIRTH_CLAIM.search(claim_text) else GENERAL_PROMPT
        prompt = template.format(
            claim=claim_text,
            reference_time=reference_time.isoformat(),
            evidence=evidence_text[:self._evidence_chars],
        )
        try:
            response = await self._gateway.generate(prompt, temperature=ANALYSIS_TEMPERATURE)
        except ModelTimeoutError as e:
            context.log("warn", f"Model request timed out: {e}")
            return Verdict(
                verified_fact=claim_text,
                source=TIMEOUT_SOURCE_LABEL,
                status=VerdictStatus.UNCERTAIN,
                reasoning="Analysis timed out. Using original claim as fallback.",
            )
        except (ModelUnavailableError, ParseError) as e:
            context.log("error", f"Model result analysis error: {e}")
            return None

        try:
            verdict = self._parse_verdict(response)
        except ParseError as e:
            context.log("error", f"Could not parse model verdict: {e}")
            logger.debug(f"Raw response: {response[:200]}...")
            return None

        preview = verdict.verified_fact[:50] + ("..." if len(verdict.verified_fact) > 50 else "")
        context.log("success", f"Model analysis successful: Status - {verdict.status.value}, Fact - {preview}")
        return verdict

    @staticmethod
    def _parse_verdict(response: str) -> Verdict:
        data = parse_json_object(response)
        fields = ("verifiedFact", "source", "status")
        if not all(isinstance(data.get(name), str) for name in fields):
            raise ParseError("Result missing required fields")
        status = VerdictStatus.parse(data["status"])
        if status is None:
            raise ParseError(f"Unknown verdict status: {data['status']!r}")
        reasoning = data.get("reasoning")
        return Verdict(
            verified_fact=data["verifiedFact"],
            source=data["source"],
            status=status,
            reasoning=reasoning if isinstance(reasoning, str) else None,
        )
