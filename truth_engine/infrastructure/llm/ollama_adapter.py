"""Ollama implementation of the language-model provider interface."""

import logging
from typing import List, Optional

import httpx
from cachetools import TTLCache
from pydantic import BaseModel, Field

from ...domain.errors import ModelTimeoutError, ModelUnavailableError, ParseError
from ...domain.ports.language_model import GenerationOptions, GenerationResult, ModelInfo

logger = logging.getLogger(__name__)

_TAGS_KEY = "tags"


class OllamaConfig(BaseModel):
    """Configuration for the Ollama adapter."""

    base_url: str = Field(default="http://localhost:11434", description="Ollama server URL")
    model: str = Field(default="qwen2.5:7b", description="Preferred model")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    tags_cache_ttl: float = Field(default=30.0, description="Seconds the model list is cached")
    auto_pull: bool = Field(default=False, description="Pull the preferred model when missing")
    pull_timeout: float = Field(default=600.0, description="Timeout for model pulls in seconds")


class OllamaAdapter:
    """Talks to a local Ollama server over its REST API."""

    def __init__(
        self,
        config: Optional[OllamaConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the adapter."""
        self._config = config or OllamaConfig()
        self._client = client
        self._owns_client = client is None
        self._tags_cache: TTLCache = TTLCache(maxsize=1, ttl=self._config.tags_cache_ttl)

    async def initialize(self) -> None:
        """Create the HTTP client. The server itself may still be down."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
            )
            self._owns_client = True
        logger.info(f"🤖 Ollama provider configured for {self._config.base_url}")

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        self._tags_cache.clear()

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ModelUnavailableError("Ollama provider not initialized")
        return self._client

    async def list_models(self) -> List[ModelInfo]:
        """List models installed on the server."""
        if _TAGS_KEY in self._tags_cache:
            return self._tags_cache[_TAGS_KEY]
        client = self._require_client()
        try:
            response = await client.get("/api/tags")
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise ModelUnavailableError(f"Ollama model listing timed out: {e}")
        except (httpx.HTTPError, ValueError) as e:
            raise ModelUnavailableError(f"Ollama API not available: {e}")

        models = [
            ModelInfo(name=item["name"], size=item.get("size"))
            for item in payload.get("models") or []
            if isinstance(item, dict) and item.get("name")
        ]
        self._tags_cache[_TAGS_KEY] = models
        return models

    async def generate(
        self,
        model: str,
        prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Complete a prompt through ``/api/generate``."""
        client = self._require_client()
        body = {"model": model, "prompt": prompt, "stream": False}
        if options is not None and options.temperature is not None:
            body["options"] = {"temperature": options.temperature}
        if options is not None and options.max_tokens is not None:
            body.setdefault("options", {})["num_predict"] = options.max_tokens

        try:
            response = await client.post("/api/generate", json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise ModelTimeoutError(f"Ollama request timed out: {e}")
        except (httpx.HTTPError, ValueError) as e:
            raise ModelUnavailableError(f"Ollama request failed: {e}")

        text = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            raise ParseError("Invalid response format from Ollama")
        return GenerationResult(
            text=text,
            model=model,
            metadata={key: payload[key] for key in ("total_duration", "eval_count") if key in payload},
        )

    async def is_available(self) -> bool:
        """Check if the server answers."""
        try:
            await self.list_models()
            return True
        except ModelUnavailableError:
            return False

    async def ensure_model(self, name: Optional[str] = None) -> bool:
        """Make sure a model is installed, pulling it when allowed.

        Args:
            name: Model name, defaults to the configured model

        Returns:
            True if the model is installed after the call
        """
        name = name or self._config.model
        installed = [model.name for model in await self.list_models()]
        if name in installed:
            logger.info(f"✅ Model {name} is available")
            return True
        if not self._config.auto_pull:
            logger.warning(f"⚠️ Model {name} not installed, available: {', '.join(installed) or 'none'}")
            return False

        logger.info(f"📥 Pulling model {name}...")
        client = self._require_client()
        try:
            response = await client.post(
                "/api/pull",
                json={"name": name, "stream": False},
                timeout=self._config.pull_timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"❌ Failed to pull model {name}: {e}")
            return False
        self._tags_cache.clear()
        logger.info(f"✅ Model {name} pulled")
        return True

    @property
    def provider_name(self) -> str:
        return "Ollama"

    @property
    def default_model(self) -> str:
        return self._config.model
