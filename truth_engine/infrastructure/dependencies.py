"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from ..domain.services.claim_analyzer import ClaimAnalyzer
from ..domain.services.claim_extractor import ClaimExtractor
from ..domain.services.content_rewriter import ContentRewriter
from ..domain.services.evidence_scraper import EvidenceScraper
from ..domain.services.model_gateway import ModelGateway
from ..domain.services.source_ranker import SourceRanker
from ..domain.services.trust_scorer import TrustScorer
from ..domain.services.verification_cache import VerificationCache
from ..domain.services.verification_service import VerificationOrchestrator
from .http.httpx_fetcher import FetcherConfig, HttpxFetcher
from .ledger.memory_ledger import InMemoryBlobStore, InMemoryVerificationLedger
from .llm.factory import LanguageModelFactory
from .llm.ollama_adapter import OllamaAdapter
from .settings import EngineSettings, get_settings

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        """Initialize service container."""
        self._settings = settings or get_settings()
        self._services: Dict[str, Any] = {}
        self._llm_factory = LanguageModelFactory(self._settings)
        self._setup_services()

    def _setup_services(self) -> None:
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")
        settings = self._settings

        fetcher = HttpxFetcher(FetcherConfig(timeout_ms=settings.fetch_timeout_ms))
        gateway = ModelGateway(
            provider=None,
            preferred_model=settings.preferred_model,
            timeout_seconds=settings.model_timeout_seconds,
        )
        ranker = SourceRanker()
        trust_scorer = TrustScorer(ranker)
        scrape_config = settings.scrape_config()
        scraper = EvidenceScraper(
            fetcher,
            ranker=ranker,
            trust_scorer=trust_scorer,
            config=scrape_config,
        )

        cache = None
        if settings.ledger_enabled:
            cache = VerificationCache(InMemoryVerificationLedger(), InMemoryBlobStore())
        else:
            logger.warning("⚠️ Verification cache disabled")

        verification_service = VerificationOrchestrator(
            claim_extractor=ClaimExtractor(gateway),
            scraper=scraper,
            analyzer=ClaimAnalyzer(gateway, evidence_chars=settings.analysis_evidence_chars),
            rewriter=ContentRewriter(gateway),
            cache=cache,
            scrape_config=scrape_config,
        )

        self._services = {
            'fetcher': fetcher,
            'model_gateway': gateway,
            'trust_scorer': trust_scorer,
            'evidence_scraper': scraper,
            'verification_cache': cache,
            'verification_service': verification_service,
        }
        logger.info("✅ Service container setup completed")

    async def startup(self) -> None:
        """Initialize network clients and the language-model provider.

        Provider failures are logged only; the pipeline then runs on its
        fallback paths.
        """
        await self.get('fetcher').initialize()
        name = self._settings.llm_provider
        try:
            provider = await self._llm_factory.create_provider(name)
        except Exception as e:
            logger.warning(f"⚠️ Failed to set up language-model provider '{name}': {e}")
            return
        self.get_model_gateway().use_provider(provider)

        if isinstance(provider, OllamaAdapter):
            try:
                await provider.ensure_model()
            except Exception as e:
                logger.warning(f"⚠️ Could not check Ollama models: {e}")

    async def shutdown(self) -> None:
        """Close network clients and providers."""
        await self._llm_factory.shutdown()
        self.get_model_gateway().use_provider(None)
        await self.get('fetcher').shutdown()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_model_gateway(self) -> ModelGateway:
        return self.get('model_gateway')

    def get_trust_scorer(self) -> TrustScorer:
        return self.get('trust_scorer')

    def get_evidence_scraper(self) -> EvidenceScraper:
        return self.get('evidence_scraper')

    def get_verification_cache(self) -> Optional[VerificationCache]:
        """Get the verification cache, None when disabled."""
        return self.get('verification_cache')

    def get_verification_service(self) -> VerificationOrchestrator:
        return self.get('verification_service')


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance."""
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_verification_service() -> VerificationOrchestrator:
    """FastAPI dependency for the verification pipeline."""
    return get_service_container().get_verification_service()


def get_trust_scorer() -> TrustScorer:
    """FastAPI dependency for source trust scoring."""
    return get_service_container().get_trust_scorer()


def get_evidence_scraper() -> EvidenceScraper:
    """FastAPI dependency for the evidence scraper."""
    return get_service_container().get_evidence_scraper()


def get_verification_cache() -> Optional[VerificationCache]:
    """FastAPI dependency for the verification cache."""
    return get_service_container().get_verification_cache()


def get_engine_settings() -> EngineSettings:
    """FastAPI dependency for engine settings."""
    return get_service_container().settings
