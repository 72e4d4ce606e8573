"""Factory for creating and managing language-model providers."""

import logging
from typing import Callable, Dict, Optional

from ...domain.ports.language_model import LanguageModelProvider
from ..settings import EngineSettings
from .ollama_adapter import OllamaAdapter, OllamaConfig
from .openai_adapter import OpenAIAdapter, OpenAIConfig

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[[EngineSettings], LanguageModelProvider]


def _build_ollama(settings: EngineSettings) -> OllamaAdapter:
    return OllamaAdapter(
        OllamaConfig(
            base_url=settings.ollama_url,
            model=settings.ollama_model,
            timeout=settings.model_timeout_seconds,
            auto_pull=settings.ollama_auto_pull,
        )
    )


def _build_openai(settings: EngineSettings) -> OpenAIAdapter:
    return OpenAIAdapter(
        OpenAIConfig(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            timeout=settings.model_timeout_seconds,
        )
    )


class LanguageModelFactory:
    """Factory for creating and managing language-model providers."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        """Initialize the factory."""
        self._settings = settings or EngineSettings()
        self._builders: Dict[str, ProviderBuilder] = {}
        self._instances: Dict[str, LanguageModelProvider] = {}

        self.register_provider("ollama", _build_ollama)
        self.register_provider("openai", _build_openai)

    def register_provider(self, name: str, builder: ProviderBuilder) -> None:
        """Register a provider builder.

        Args:
            name: Provider name
            builder: Callable building an uninitialized provider from settings
        """
        self._builders[name] = builder

    def build_provider(self, name: str) -> LanguageModelProvider:
        """Build a provider without initializing it.

        Raises:
            ValueError: If provider not found
        """
        if name not in self._builders:
            raise ValueError(f"Provider '{name}' not found")
        return self._builders[name](self._settings)

    async def create_provider(self, name: str) -> LanguageModelProvider:
        """Create and initialize a provider instance, reusing an existing one.

        Args:
            name: Provider name

        Returns:
            Initialized provider instance

        Raises:
            ValueError: If provider not found
        """
        if name not in self._instances:
            provider = self.build_provider(name)
            await provider.initialize()
            self._instances[name] = provider
            logger.info(f"✅ Language-model provider '{name}' ready")
        return self._instances[name]

    def get_provider(self, name: str) -> Optional[LanguageModelProvider]:
        """Get an existing provider instance, None if not created yet."""
        return self._instances.get(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Registered providers and whether an instance exists."""
        return {name: name in self._instances for name in self._builders}

    async def shutdown(self) -> None:
        """Shutdown all provider instances."""
        for provider in self._instances.values():
            await provider.shutdown()
        self._instances.clear()
