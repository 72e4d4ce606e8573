"""Tests for the FastAPI application."""

import json

import pytest
from fastapi.testclient import TestClient

from conftest import FakeFetcher, FakeLanguageModel, html_page
from truth_engine.api.app import app
from truth_engine.domain.services.evidence_scraper import EvidenceScraper
from truth_engine.domain.services.trust_scorer import TrustScorer
from truth_engine.infrastructure.dependencies import (
    get_engine_settings,
    get_evidence_scraper,
    get_trust_scorer,
    get_verification_cache,
    get_verification_service,
)
from truth_engine.infrastructure.settings import EngineSettings

TEXT = "The Eiffel Tower is 330 meters tall and stands in Paris."
CLAIM = "The Eiffel Tower is 330 meters tall"
PAGE = html_page("Eiffel Tower", "The Eiffel Tower is 330 meters tall including its antennas.")


def supporting_model() -> FakeLanguageModel:
    def respond(prompt: str) -> str:
        if "expert fact-checker" in prompt:
            return json.dumps({"claims": [{"claimText": CLAIM, "searchQueries": ["Eiffel Tower height"]}]})
        if "fact-checker verifying" in prompt:
            return json.dumps({"verifiedFact": CLAIM, "source": "britannica.com", "status": "Unrelated"})
        return ""

    return FakeLanguageModel(responses=respond)


@pytest.fixture
def client(make_orchestrator, verification_cache):
    """Test client with in-process fakes for every dependency."""
    orchestrator = make_orchestrator(supporting_model(), FakeFetcher(default=PAGE), cache=verification_cache)
    scraper = EvidenceScraper(FakeFetcher({"https://www.reuters.com/article": PAGE}))

    app.dependency_overrides[get_verification_service] = lambda: orchestrator
    app.dependency_overrides[get_verification_cache] = lambda: verification_cache
    app.dependency_overrides[get_trust_scorer] = lambda: TrustScorer()
    app.dependency_overrides[get_evidence_scraper] = lambda: scraper
    app.dependency_overrides[get_engine_settings] = lambda: EngineSettings(ledger_enabled=True)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["ledgerEnabled"] is True
    assert data["timestamp"]


@pytest.mark.parametrize("body", [{}, {"content": ""}, {"content": "   "}])
def test_verify_requires_content(client, body):
    response = client.post("/verify", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == "Content is required"


def test_verify_without_body(client):
    assert client.post("/verify").status_code == 400


@pytest.mark.parametrize("path", ["/verify", "/api/verify"])
def test_verify_returns_run(client, path):
    response = client.post(path, json={"content": TEXT})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "completed"
    assert data["progress"] == 100
    assert data["originalContent"] == TEXT
    assert data["verifiedContent"] == TEXT
    assert data["results"] == []
    assert data["claims"][0]["claimText"] == CLAIM
    assert data["logs"]


def test_verify_unexpected_failure(client):
    class Exploding:
        async def verify(self, content):
            raise RuntimeError("boom")

    app.dependency_overrides[get_verification_service] = lambda: Exploding()

    response = client.post("/verify", json={"content": TEXT})

    assert response.status_code == 500
    assert response.json()["detail"] == "RuntimeError: boom"


def test_sources_trust(client):
    response = client.post(
        "/sources/trust",
        json={"sources": [
            {"url": "https://www.reuters.com/world/story", "title": "Story"},
            {"url": "https://random-blog.example/post"},
        ]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["sourceCount"] == 2
    assert [detail["domain"] for detail in data["sourceDetails"]] == ["www.reuters.com", "random-blog.example"]
    assert 0 <= data["overall"] <= 100


def test_scraper_probe_requires_url(client):
    response = client.post("/scraper/test", json={"claim": "anything"})

    assert response.status_code == 400
    assert response.json()["detail"] == "URL is required"


@pytest.mark.parametrize("path", ["/scraper/test", "/api/test-scraper"])
def test_scraper_probe(client, path):
    response = client.post(path, json={"url": "https://www.reuters.com/article", "claim": "Eiffel Tower height"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["extraction"]["title"] == "Eiffel Tower"
    assert data["authorityScore"] == 95


def test_scraper_probe_reports_fetch_error(client):
    response = client.post("/scraper/test", json={"url": "https://unknown.example/"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert "404" in data["error"]


def test_ledger_status(client):
    assert client.get("/ledger/status").json() == {"enabled": True, "provider": "memory"}


def test_ledger_store_and_lookup(client):
    assert client.post("/ledger/lookup", json={"content": TEXT}).json()["exists"] is False

    run = client.post("/verify", json={"content": TEXT}).json()
    stored = client.post("/ledger/store", json={"verificationResult": run})

    assert stored.status_code == 200
    assert stored.json()["success"] is True
    assert stored.json()["alreadyStored"] is False
    again = client.post("/ledger/store", json={"verificationResult": run})
    assert again.json()["alreadyStored"] is True

    found = client.post("/ledger/lookup", json={"content": TEXT}).json()
    assert found["exists"] is True
    assert found["verification"]["data"]["originalContent"] == TEXT


def test_ledger_store_validation(client):
    assert client.post("/ledger/store", json={}).status_code == 400
    response = client.post("/ledger/store", json={"verificationResult": {"claims": []}})
    assert response.status_code == 400
    malformed = {"originalContent": TEXT, "trustScore": "high"}
    assert client.post("/ledger/store", json={"verificationResult": malformed}).status_code == 400


def test_ledger_disabled(client):
    app.dependency_overrides[get_verification_cache] = lambda: None

    assert client.get("/ledger/status").json() == {"enabled": False, "provider": None}
    assert client.post("/ledger/lookup", json={"content": TEXT}).status_code == 503
