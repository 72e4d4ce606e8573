"""Extraction of readable text from HTML documents."""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Comment

from ..models.evidence import ExtractedContent
from .text_utils import domain_of, extract_keywords, split_sentences

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 50000
MAX_RELEVANT_SENTENCES = 10

# Tried in order; the first non-empty region wins
MAIN_REGION_SELECTORS = ("article", "main", "#content", "div.main", "body")
NOISE_TAGS = ["script", "style", "iframe", "noscript"]

_WHITESPACE = re.compile(r"\s+")


class ContentExtractor:
    """Turns a raw document into title, plain text and site name."""

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH):
        self._max_length = max_length

    def extract(
        self,
        raw: str,
        url: str,
        claim: Optional[str] = None,
        max_length: Optional[int] = None,
    ) -> ExtractedContent:
        """Extract readable content.

        Never raises: on any internal failure an empty extraction carrying
        the URL's domain as site name is returned.

        Args:
            raw: Raw document text
            url: Source URL
            claim: Optional claim used to pick relevant sentences
            max_length: Content length cap

        Returns:
            Extracted content
        """
        limit = max_length or self._max_length
        try:
            return self._extract(raw, url, claim, limit)
        except Exception as e:
            logger.error(f"❌ Content extraction error for {url}: {e}")
            return ExtractedContent(title="", content="", site_name=domain_of(url))

    def _extract(self, raw: str, url: str, claim: Optional[str], limit: int) -> ExtractedContent:
        if not isinstance(raw, str):
            raise TypeError(f"Expected document text, got {type(raw).__name__}")
        soup = BeautifulSoup(raw, "html.parser")

        title = self._clean(soup.title.get_text()) if soup.title else ""
        site_meta = soup.find("meta", attrs={"property": "og:site_name"})
        site_name = site_meta.get("content", "").strip() if site_meta else ""

        for tag in soup(NOISE_TAGS):
            tag.decompose()
        for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()

        plain_text = ""
        for selector in MAIN_REGION_SELECTORS:
            region = soup.select_one(selector)
            if region is not None:
                plain_text = self._clean(region.get_text(" "))
                if plain_text:
                    break
        if not plain_text:
            plain_text = self._clean(soup.get_text(" "))

        relevant = None
        if claim:
            keywords = extract_keywords(claim)
            relevant = []
            for sentence in split_sentences(plain_text):
                lowered = sentence.lower()
                if any(keyword in lowered for keyword in keywords):
                    relevant.append(sentence)
                    if len(relevant) >= MAX_RELEVANT_SENTENCES:
                        break

        return ExtractedContent(
            title=title,
            content=plain_text[:limit],
            site_name=site_name or domain_of(url),
            relevant_sentences=relevant,
        )

    @staticmethod
    def _clean(text: str) -> str:
        return _WHITESPACE.sub(" ", text).strip()
