"""Rewrites text so a claim segment carries its verified fact."""

import logging
from datetime import datetime
from typing import Optional

from ..errors import ModelTimeoutError, ModelUnavailableError, ParseError
from ..models.run_context import RunContext
from .model_gateway import ModelGateway

logger = logging.getLogger(__name__)

REWRITE_PROMPT = """
You are assisting with factual content correction. The current date is {reference_time}.

ORIGINAL CONTENT:
"{content}"

CLAIM TO UPDATE:
"{claim}"

VERIFIED FACT:
"{fact}"

SOURCE:
"{source}"

INSTRUCTIONS:
1. Precisely identify where the claim exists in the original content.
2. Update that portion of the content with the verified fact.
3. Do not add commentary, explanations, or source citations in parentheses.
4. Preserve all original formatting, spacing, and style.
5. Only modify the text where the claim appears - leave all other content untouched.
6. The output must contain the entire content, with the claim updated.

Return only the revised content with no other explanation or notes."""


def replace_claim(text: str, claim: str, fact: str, source: str) -> str:
    """Replace the first literal occurrence of the claim with a cited fact."""
    if not claim:
        return text
    return text.replace(claim, f"{fact} (Source: {source})", 1)


def _unwrap(response: str, original: str) -> str:
    text = response.strip()
    if text.startswith("```") and text.endswith("```"):
        text = text.strip("`").partition("\n")[2].strip()
    if len(text) > 1 and text[0] == text[-1] == '"' and not original.strip().startswith('"'):
        text = text[1:-1].strip()
    return text


class ContentRewriter:
    """Model-driven rewriting with a literal-replacement fallback.

    Always returns text; callers detect a change by comparing with the input.
    """

    def __init__(self, gateway: ModelGateway):
        self._gateway = gateway

    async def rewrite(
        self,
        text: str,
        claim: str,
        fact: str,
        source: str,
        reference_time: Optional[datetime] = None,
        context: Optional[RunContext] = None,
    ) -> str:
        """Return ``text`` with the claim segment replaced by the fact."""
        context = context or RunContext.start()
        reference_time = reference_time or context.reference_time

        if not await self._gateway.is_available():
            context.log("warn", "Language model unavailable for rewriting. Using fallback rewriter.")
            return replace_claim(text, claim, fact, source)

        prompt = REWRITE_PROMPT.format(
            reference_time=reference_time.isoformat(),
            content=text,
            claim=claim,
            fact=fact,
            source=source,
        )
        try:
            response = await self._gateway.generate(prompt)
        except (ModelUnavailableError, ModelTimeoutError, ParseError) as e:
            context.log("error", f"Content rewriting error: {e}")
            return replace_claim(text, claim, fact, source)

        rewritten = _unwrap(response, text)
        if not rewritten or rewritten == text.strip():
            context.log("warn", "Model rewrite was empty or unchanged. Using fallback rewriter.")
            return replace_claim(text, claim, fact, source)
        return rewritten
