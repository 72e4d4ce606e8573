"""Test configuration and common fixtures."""

import asyncio
from typing import Callable, Dict, List, Optional, Union

import pytest

from truth_engine.domain.errors import HttpStatusError, ModelUnavailableError, NetworkError
from truth_engine.domain.ports.language_model import (
    GenerationOptions,
    GenerationResult,
    ModelInfo,
)
from truth_engine.domain.services.claim_analyzer import ClaimAnalyzer
from truth_engine.domain.services.claim_extractor import ClaimExtractor
from truth_engine.domain.services.content_rewriter import ContentRewriter
from truth_engine.domain.services.evidence_scraper import EvidenceScraper, ScrapeConfig
from truth_engine.domain.services.model_gateway import ModelGateway
from truth_engine.domain.services.verification_cache import VerificationCache
from truth_engine.domain.services.verification_service import VerificationOrchestrator
from truth_engine.infrastructure.ledger.memory_ledger import (
    InMemoryBlobStore,
    InMemoryVerificationLedger,
)

Responder = Callable[[str], str]


class FakeLanguageModel:
    """Language-model provider answering from a callable or a queue of replies."""

    def __init__(
        self,
        responses: Union[Responder, List[str], None] = None,
        models: Optional[List[str]] = None,
        available: bool = True,
        delay: float = 0.0,
    ):
        self._responses = responses if responses is not None else []
        self.models = models if models is not None else ["qwen2.5:7b"]
        self.available = available
        self.delay = delay
        self.prompts: List[str] = []
        self.options: List[Optional[GenerationOptions]] = []

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def list_models(self) -> List[ModelInfo]:
        if not self.available:
            raise ModelUnavailableError("Fake model offline")
        return [ModelInfo(name=name) for name in self.models]

    async def generate(
        self,
        model: str,
        prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        if not self.available:
            raise ModelUnavailableError("Fake model offline")
        self.prompts.append(prompt)
        self.options.append(options)
        if self.delay:
            await asyncio.sleep(self.delay)
        if callable(self._responses):
            text = self._responses(prompt)
        else:
            text = self._responses.pop(0) if self._responses else ""
        return GenerationResult(text=text, model=model)

    async def is_available(self) -> bool:
        return self.available

    @property
    def provider_name(self) -> str:
        return "Fake"

    @property
    def default_model(self) -> str:
        return self.models[0] if self.models else "fake"


class FakeFetcher:
    """Fetcher serving canned pages; unknown URLs answer 404."""

    def __init__(
        self,
        pages: Optional[Dict[str, Union[str, Exception]]] = None,
        default: Optional[Union[str, Exception]] = None,
    ):
        self.pages = pages or {}
        self.default = default
        self.calls: List[str] = []

    async def fetch(self, url: str, timeout_ms: Optional[int] = None) -> str:
        self.calls.append(url)
        page = self.pages.get(url, self.default)
        if page is None:
            raise HttpStatusError(url, 404)
        if isinstance(page, Exception):
            raise page
        return page


def html_page(title: str, body: str) -> str:
    """Minimal article page."""
    return (
        f"<html><head><title>{title}</title></head>"
        f"<body><nav>Menu</nav><article><p>{body}</p></article>"
        f"<script>var tracking = 1;</script></body></html>"
    )


@pytest.fixture
def fake_model() -> FakeLanguageModel:
    """Available model without scripted replies."""
    return FakeLanguageModel()


@pytest.fixture
def offline_model() -> FakeLanguageModel:
    """Model whose backend is unreachable."""
    return FakeLanguageModel(available=False)


@pytest.fixture
def offline_fetcher() -> FakeFetcher:
    """Fetcher failing every request."""
    return FakeFetcher(default=NetworkError("Connection refused"))


@pytest.fixture
def verification_cache() -> VerificationCache:
    """Cache over the in-memory ledger and blob store."""
    return VerificationCache(InMemoryVerificationLedger(), InMemoryBlobStore())


@pytest.fixture
def make_orchestrator() -> Callable[..., VerificationOrchestrator]:
    """Build an orchestrator wired to the given fakes."""

    def _make(
        model: FakeLanguageModel,
        fetcher: FakeFetcher,
        cache: Optional[VerificationCache] = None,
        scrape_config: Optional[ScrapeConfig] = None,
        timeout_seconds: float = 2.0,
    ) -> VerificationOrchestrator:
        gateway = ModelGateway(model, timeout_seconds=timeout_seconds)
        return VerificationOrchestrator(
            claim_extractor=ClaimExtractor(gateway),
            scraper=EvidenceScraper(fetcher, config=scrape_config),
            analyzer=ClaimAnalyzer(gateway),
            rewriter=ContentRewriter(gateway),
            cache=cache,
            scrape_config=scrape_config,
        )

    return _make
