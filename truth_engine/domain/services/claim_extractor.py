"""Claim extraction from free text, model-driven with a pattern fallback."""

import logging
import re
from datetime import datetime
from typing import Any, List, Optional

from pydantic import ValidationError

from ..errors import ModelTimeoutError, ModelUnavailableError, ParseError
from ..models.claim import Claim
from ..models.run_context import RunContext
from .json_response import parse_json_object
from .model_gateway import ModelGateway
from .text_utils import query_terms, split_statements

logger = logging.getLogger(__name__)

MAX_FALLBACK_CLAIMS = 3
MIN_SENTENCE_LENGTH = 20
MAX_SENTENCE_LENGTH = 300

_FACTUAL_STATEMENT = re.compile(
    r"\d+%?|\b(in|on|at|by|from|to)\b|[0-9]{4}|\b(is|are|was|were|has|have|had)\b",
    re.IGNORECASE,
)

EXTRACTION_PROMPT = """
You are an expert fact-checker analyzing content. The current date and time is {reference_time}.

CONTENT:
"{content}"

Instructions:
1. Identify ALL distinct factual claims made in the content that could be verified through web search. Claims can be numerical, statistical, or statements of fact.
2. For each claim, copy the exact text segment representing the claim.
3. For each claim, write 2-3 diverse and specific search queries that would find authoritative information to verify or refute it. Consider the current date for relevance (e.g. add "current", "latest" or "{year}" where appropriate).
4. Output the result strictly as a JSON object of this shape:

{{
  "claims": [
    {{
      "claimText": "The exact text segment of the claim from the content.",
      "searchQueries": ["Specific search query 1", "Specific search query 2"]
    }}
  ]
}}

Output ONLY the JSON object, with no introductory text or explanations."""


class ClaimExtractor:
    """Produces claims and search queries from submitted text."""

    def __init__(self, gateway: ModelGateway, max_fallback_claims: int = MAX_FALLBACK_CLAIMS):
        """Initialize the extractor.

        Args:
            gateway: Language-model gateway
            max_fallback_claims: Cap on claims from the pattern fallback
        """
        self._gateway = gateway
        self._max_fallback_claims = max_fallback_claims

    async def extract(
        self,
        text: str,
        reference_time: Optional[datetime] = None,
        context: Optional[RunContext] = None,
    ) -> List[Claim]:
        """Ask the model for claims.

        Returns an empty list when the model is unavailable or its output
        cannot be parsed, leaving the fallback decision to the caller.
        """
        context = context or RunContext.start()
        reference_time = reference_time or context.reference_time
        prompt = EXTRACTION_PROMPT.format(
            reference_time=reference_time.isoformat(),
            year=reference_time.year,
            content=text,
        )
        try:
            response = await self._gateway.generate(prompt)
        except (ModelUnavailableError, ModelTimeoutError) as e:
            context.log("warn", f"Model unavailable for claim extraction: {e}")
            return []
        except ParseError as e:
            context.log("warn", f"Model returned a malformed reply for claim extraction: {e}")
            return []

        try:
            data = parse_json_object(response)
        except ParseError as e:
            context.log("warn", f"Model response did not contain valid JSON for claims: {e}")
            return []
        items = data.get("claims")
        if not isinstance(items, list):
            context.log("warn", "Model response has no claims array")
            return []
        return self._to_claims(items, context)

    @staticmethod
    def _to_claims(items: List[Any], context: RunContext) -> List[Claim]:
        claims = []
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                claim = Claim.model_validate(item)
            except ValidationError as e:
                context.log("warn", f"Ignoring malformed claim from model: {e.error_count()} errors")
                continue
            if not claim.claim_text.strip():
                continue
            queries = [q.strip() for q in claim.search_queries if isinstance(q, str) and q.strip()]
            claims.append(Claim(claim_text=claim.claim_text.strip(), search_queries=queries))
        return claims

    def extract_fallback(self, text: str, context: Optional[RunContext] = None) -> List[Claim]:
        """Pick factual-looking sentences without a model.

        Keeps sentences of reasonable length that contain a number, a
        preposition or a being/having verb, up to the configured cap.
        """
        context = context or RunContext.start()
        statements = [
            s for s in split_statements(text)
            if MIN_SENTENCE_LENGTH <= len(s) < MAX_SENTENCE_LENGTH and _FACTUAL_STATEMENT.search(s)
        ]
        claims = [
            Claim(claim_text=statement, search_queries=self._fallback_queries(statement))
            for statement in statements[:self._max_fallback_claims]
        ]
        context.log("info", f"Basic claim extractor found {len(claims)} potential claims")
        return claims

    @staticmethod
    def _fallback_queries(statement: str) -> List[str]:
        keywords = query_terms(statement)
        queries = [
            " ".join(keywords[:5]),
            f'"{statement[:40]}"',
            " ".join(keywords[:3] + ["fact check"]),
        ]
        return [q for q in queries if q]

