"""Language-model provider interface."""

from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field


class ModelInfo(BaseModel):
    """A model exposed by the backend."""

    name: str = Field(..., description="Model identifier")
    size: Optional[int] = Field(None, description="Model size in bytes, when reported")


class GenerationOptions(BaseModel):
    """Sampling options for a completion request."""

    temperature: Optional[float] = Field(None, description="Sampling temperature")
    max_tokens: Optional[int] = Field(None, description="Upper bound on generated tokens")


class GenerationResult(BaseModel):
    """Text produced by a completion request."""

    text: str = Field(..., description="Raw generated text")
    model: str = Field(..., description="Model that produced the text")
    metadata: Dict[str, Any] = Field(default_factory=dict)


class LanguageModelProvider(Protocol):
    """Prompt-in/text-out completion service.

    Implementations translate transport failures into
    ``ModelUnavailableError`` and expired requests into ``ModelTimeoutError``.
    """

    async def initialize(self) -> None:
        """Prepare clients. Must not fail when the backend is down."""
        ...

    async def shutdown(self) -> None:
        """Release clients."""
        ...

    async def list_models(self) -> List[ModelInfo]:
        """List models known to the backend."""
        ...

    async def generate(
        self,
        model: str,
        prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Complete a prompt with the given model."""
        ...

    async def is_available(self) -> bool:
        """Probe the backend."""
        ...

    @property
    def provider_name(self) -> str:
        """Human readable provider name."""
        ...

    @property
    def default_model(self) -> str:
        """Configured model identifier."""
        ...
