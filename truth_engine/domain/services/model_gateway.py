"""Bounded, model-selecting access to the language-model provider."""

import asyncio
import logging
from typing import List, Optional

from ..errors import ModelTimeoutError, ModelUnavailableError
from ..ports.language_model import GenerationOptions, LanguageModelProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "qwen2.5:7b"
PREFERRED_MODELS = ("qwen2.5:7b", "llama3:8b", "mistral:7b")
MODEL_FAMILIES = ("qwen", "llama", "mistral")
EMBEDDING_MARKER = "embed"


def choose_model(available: List[str], preferred: Optional[str] = None) -> str:
    """Pick a text-generation model from the backend's list.

    Embedding models are never chosen. Exact preferred names win, then a
    known model family, then any other model, then the default name.
    """
    generators = [name for name in available if EMBEDDING_MARKER not in name.lower()]
    for name in ((preferred,) if preferred else ()) + PREFERRED_MODELS:
        if name in generators:
            return name
    for family in MODEL_FAMILIES:
        for name in generators:
            if family in name.lower():
                return name
    if generators:
        return generators[0]
    if preferred and EMBEDDING_MARKER not in preferred.lower():
        return preferred
    return DEFAULT_MODEL


class ModelGateway:
    """Wraps a provider with availability probing, model selection and timeouts.

    Every call is bounded by ``timeout_seconds``; an expired call raises
    ``ModelTimeoutError`` instead of blocking the run.
    """

    def __init__(
        self,
        provider: Optional[LanguageModelProvider],
        preferred_model: Optional[str] = None,
        timeout_seconds: float = 30.0,
    ):
        """Initialize the gateway.

        Args:
            provider: Language-model provider, None when not configured
            preferred_model: Model to use when the backend offers it
            timeout_seconds: Upper bound for every backend call
        """
        self._provider = provider
        self._preferred_model = preferred_model
        self._timeout = timeout_seconds

    def use_provider(self, provider: Optional[LanguageModelProvider]) -> None:
        """Swap the backing provider, None marks the model as unavailable."""
        self._provider = provider

    @property
    def provider_name(self) -> str:
        return self._provider.provider_name if self._provider else "none"

    async def _list_model_names(self) -> List[str]:
        if self._provider is None:
            raise ModelUnavailableError("No language-model provider configured")
        try:
            models = await asyncio.wait_for(self._provider.list_models(), timeout=self._timeout)
        except asyncio.TimeoutError:
            raise ModelUnavailableError(f"Model listing timed out after {self._timeout}s")
        return [model.name for model in models]

    async def is_available(self) -> bool:
        """Probe the backend by listing its models."""
        try:
            await self._list_model_names()
            return True
        except ModelUnavailableError as e:
            logger.warning(f"⚠️ Language model unavailable: {e}")
            return False

    async def select_model(self) -> str:
        """Pick a model among those the backend offers.

        Raises:
            ModelUnavailableError: If the backend cannot be reached
        """
        model = choose_model(await self._list_model_names(), self._preferred_model)
        logger.info(f"🤖 Using model: {model}")
        return model

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """Complete a prompt.

        Args:
            prompt: Prompt text
            temperature: Sampling temperature
            model: Model name, selected automatically when omitted

        Returns:
            Raw generated text

        Raises:
            ModelUnavailableError: If the backend cannot be reached
            ModelTimeoutError: If the request exceeds the timeout
        """
        if self._provider is None:
            raise ModelUnavailableError("No language-model provider configured")
        model = model or await self.select_model()
        options = GenerationOptions(temperature=temperature)
        try:
            result = await asyncio.wait_for(
                self._provider.generate(model, prompt, options),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            raise ModelTimeoutError(f"Model request timed out after {self._timeout}s")
        return result.text
