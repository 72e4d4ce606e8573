"""Tests for environment-driven settings."""

from truth_engine.infrastructure.settings import EngineSettings


def test_defaults(monkeypatch):
    for name in ("LLM_PROVIDER", "OLLAMA_MODEL", "MAX_SEARCH_RESULTS", "LEDGER_ENABLED", "CORS_ORIGINS",
                 "MAX_PARALLEL_FETCHES", "FETCH_TIMEOUT_MS", "MAX_CONTENT_LENGTH"):
        monkeypatch.delenv(name, raising=False)

    settings = EngineSettings.from_env()

    assert settings.llm_provider == "ollama"
    assert settings.preferred_model == settings.ollama_model
    assert settings.ledger_enabled is True
    assert settings.cors_origins == ["*"]
    config = settings.scrape_config()
    assert (config.max_results, config.max_length, config.timeout_ms, config.max_parallel) == (5, 50000, 15000, 1)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "OpenAI")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    monkeypatch.setenv("MAX_SEARCH_RESULTS", "3")
    monkeypatch.setenv("MAX_PARALLEL_FETCHES", "4")
    monkeypatch.setenv("MODEL_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("LEDGER_ENABLED", "no")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    settings = EngineSettings.from_env()

    assert settings.llm_provider == "openai"
    assert settings.preferred_model == "gpt-4o"
    assert settings.max_search_results == 3
    assert settings.scrape_config().max_parallel == 4
    assert settings.model_timeout_seconds == 12.5
    assert settings.ledger_enabled is False
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("MAX_SEARCH_RESULTS", "many")
    monkeypatch.setenv("MODEL_TIMEOUT_SECONDS", "soon")

    settings = EngineSettings.from_env()

    assert settings.max_search_results == 5
    assert settings.model_timeout_seconds == 30.0
