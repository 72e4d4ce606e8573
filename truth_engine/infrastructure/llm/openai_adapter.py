"""OpenAI-compatible implementation of the language-model provider interface."""

import logging
from typing import List, Optional

from openai import APIError, APITimeoutError, AsyncOpenAI
from pydantic import BaseModel, Field

from ...domain.errors import ModelTimeoutError, ModelUnavailableError
from ...domain.ports.language_model import GenerationOptions, GenerationResult, ModelInfo

logger = logging.getLogger(__name__)


class OpenAIConfig(BaseModel):
    """Configuration for the OpenAI adapter."""

    api_key: str = Field(default="", description="OpenAI API key")
    base_url: Optional[str] = Field(None, description="Alternative OpenAI-compatible endpoint")
    model: str = Field(default="gpt-4o-mini", description="Preferred model")
    timeout: float = Field(default=30.0, description="API timeout in seconds")
    max_tokens: int = Field(default=1000, description="Maximum tokens per response")


class OpenAIAdapter:
    """Chat-completions backend reached through the ``openai`` SDK."""

    def __init__(
        self,
        config: Optional[OpenAIConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize the adapter."""
        self._config = config or OpenAIConfig()
        self._client = client

    async def initialize(self) -> None:
        """Create the SDK client when an API key is configured."""
        if self._client is not None:
            return
        if not self._config.api_key:
            logger.warning("⚠️ OPENAI_API_KEY not set, OpenAI provider stays unavailable")
            return
        self._client = AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            timeout=self._config.timeout,
        )
        logger.info("🤖 OpenAI provider initialized")

    async def shutdown(self) -> None:
        """Close the SDK client."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    def _require_client(self) -> AsyncOpenAI:
        if self._client is None:
            raise ModelUnavailableError("OpenAI provider not initialized")
        return self._client

    async def list_models(self) -> List[ModelInfo]:
        """List models the API key can use."""
        client = self._require_client()
        try:
            page = await client.models.list()
        except APITimeoutError as e:
            raise ModelUnavailableError(f"OpenAI model listing timed out: {e}")
        except APIError as e:
            raise ModelUnavailableError(f"OpenAI API not available: {e}")
        return [ModelInfo(name=model.id) for model in page.data]

    async def generate(
        self,
        model: str,
        prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Complete a prompt as a single user message."""
        client = self._require_client()
        options = options or GenerationOptions()
        kwargs = {"max_tokens": options.max_tokens or self._config.max_tokens}
        if options.temperature is not None:
            kwargs["temperature"] = options.temperature
        try:
            response = await client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )
        except APITimeoutError as e:
            raise ModelTimeoutError(f"OpenAI request timed out: {e}")
        except APIError as e:
            raise ModelUnavailableError(f"OpenAI request failed: {e}")

        text = (response.choices[0].message.content or "") if response.choices else ""
        return GenerationResult(text=text, model=response.model or model)

    async def is_available(self) -> bool:
        """Check if the API answers."""
        try:
            await self.list_models()
            return True
        except ModelUnavailableError:
            return False

    @property
    def provider_name(self) -> str:
        return "OpenAI"

    @property
    def default_model(self) -> str:
        return self._config.model
