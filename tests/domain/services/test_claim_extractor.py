"""Tests for claim extraction."""

import json

import pytest

from conftest import FakeLanguageModel
from truth_engine.domain.models.run_context import RunContext
from truth_engine.domain.services.claim_extractor import ClaimExtractor
from truth_engine.domain.services.model_gateway import ModelGateway

TEXT = (
    "Apple's market share reached 23.4% in the smartphone market last quarter. "
    "Wow! The company was founded in 1976 by Steve Jobs and Steve Wozniak. "
    "Tim Cook has been the chief executive since 2011. Revenue grew strongly in Europe this year."
)


def extractor_for(model: FakeLanguageModel) -> ClaimExtractor:
    return ClaimExtractor(ModelGateway(model))


@pytest.mark.asyncio
async def test_extracts_claims_from_model_json():
    reply = json.dumps({
        "claims": [
            {"claimText": " Apple's market share reached 23.4% ", "searchQueries": ["Apple market share", " "]},
            {"claimText": "", "searchQueries": ["ignored"]},
            "not an object",
            {"claimText": "Apple was founded in 1976"},
        ]
    })
    model = FakeLanguageModel(responses=[f"Here are the claims:\n```json\n{reply}\n```"])
    context = RunContext.start()

    claims = await extractor_for(model).extract(TEXT, context=context)

    assert [c.claim_text for c in claims] == ["Apple's market share reached 23.4%", "Apple was founded in 1976"]
    assert claims[0].search_queries == ["Apple market share"]
    assert claims[1].search_queries == []
    assert str(context.reference_time.year) in model.prompts[0]
    assert TEXT in model.prompts[0]


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["I cannot help with that.", '{"result": []}', '{"claims": "none"}', ""])
async def test_unusable_model_output_yields_no_claims(reply):
    claims = await extractor_for(FakeLanguageModel(responses=[reply])).extract(TEXT)
    assert claims == []


@pytest.mark.asyncio
async def test_unavailable_model_yields_no_claims(offline_model):
    assert await extractor_for(offline_model).extract(TEXT) == []


def test_fallback_extraction(offline_model):
    claims = extractor_for(offline_model).extract_fallback(TEXT)

    assert len(claims) == 3
    assert claims[0].claim_text == "Apple's market share reached 23.4% in the smartphone market last quarter"
    assert "Wow" not in [c.claim_text for c in claims]
    for claim in claims:
        assert claim.search_queries
        assert all(query.strip() for query in claim.search_queries)
    assert claims[0].search_queries == [
        "Apple's market share reached 23.4%",
        '"Apple\'s market share reached 23.4% in th"',
        "Apple's market share fact check",
    ]


def test_fallback_respects_length_bounds(offline_model):
    extractor = extractor_for(offline_model)
    assert extractor.extract_fallback("Short is 1. " + "x" * 400 + " is long.") == []
    assert extractor.extract_fallback("") == []
