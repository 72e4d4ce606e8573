"""Environment-driven engine configuration."""

import logging
import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..domain.services.evidence_scraper import ScrapeConfig

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"⚠️ Ignoring non-integer {name}={value!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"⚠️ Ignoring non-numeric {name}={value!r}, using {default}")
        return default


class EngineSettings(BaseModel):
    """Runtime configuration of the verification engine."""

    llm_provider: str = Field(default="ollama", description="Language-model provider: ollama or openai")
    ollama_url: str = Field(default="http://localhost:11434", description="Ollama server URL")
    ollama_model: str = Field(default="qwen2.5:7b", description="Preferred Ollama model")
    ollama_auto_pull: bool = Field(default=False, description="Pull the Ollama model at startup when missing")
    openai_api_key: str = Field(default="", description="OpenAI API key")
    openai_base_url: Optional[str] = Field(None, description="OpenAI-compatible endpoint")
    openai_model: str = Field(default="gpt-4o-mini", description="Preferred OpenAI model")
    model_timeout_seconds: float = Field(default=30.0, gt=0, description="Bound on each model call")
    fetch_timeout_ms: int = Field(default=15000, ge=1, description="Bound on each document fetch")
    max_search_results: int = Field(default=5, ge=1, description="Evidence documents per claim")
    max_content_length: int = Field(default=50000, ge=1, description="Extracted content cap")
    max_parallel_fetches: int = Field(default=1, ge=1, description="Concurrent fetches per query")
    analysis_evidence_chars: int = Field(default=5000, ge=1, description="Evidence cap in analysis prompts")
    ledger_enabled: bool = Field(default=True, description="Use the verification cache")
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    @property
    def preferred_model(self) -> str:
        """Model identifier for the selected provider."""
        return self.openai_model if self.llm_provider == "openai" else self.ollama_model

    def scrape_config(self) -> ScrapeConfig:
        """Scrape limits derived from these settings."""
        return ScrapeConfig(
            max_results=self.max_search_results,
            max_length=self.max_content_length,
            timeout_ms=self.fetch_timeout_ms,
            max_parallel=self.max_parallel_fetches,
        )

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from the environment and an optional ``.env`` file."""
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "ollama").strip().lower() or "ollama",
            ollama_url=os.getenv("OLLAMA_URL", "http://localhost:11434"),
            ollama_model=os.getenv("OLLAMA_MODEL", "qwen2.5:7b"),
            ollama_auto_pull=_env_bool("OLLAMA_AUTO_PULL", False),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            model_timeout_seconds=_env_float("MODEL_TIMEOUT_SECONDS", 30.0),
            fetch_timeout_ms=_env_int("FETCH_TIMEOUT_MS", 15000),
            max_search_results=_env_int("MAX_SEARCH_RESULTS", 5),
            max_content_length=_env_int("MAX_CONTENT_LENGTH", 50000),
            max_parallel_fetches=_env_int("MAX_PARALLEL_FETCHES", 1),
            analysis_evidence_chars=_env_int("ANALYSIS_EVIDENCE_CHARS", 5000),
            ledger_enabled=_env_bool("LEDGER_ENABLED", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()] or ["*"],
        )


@lru_cache()
def get_settings() -> EngineSettings:
    """Get the process-wide settings."""
    return EngineSettings.from_env()
