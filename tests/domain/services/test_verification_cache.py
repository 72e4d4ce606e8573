"""Tests for the verification cache."""

import asyncio

import pytest

from truth_engine.domain.errors import InputValidationError
from truth_engine.domain.services.fingerprint import content_fingerprint, normalize_content
from truth_engine.domain.services.verification_cache import VerificationCache

RUN = {
    "originalContent": "Apple's market share reached 23.4%.",
    "verifiedContent": "Apple's market share was 21.8%.",
    "claims": [{"claimText": "Apple's market share reached 23.4%", "searchQueries": ["q"]}],
    "results": [],
    "trustScore": 88,
}


def test_fingerprint_normalizes_whitespace():
    assert normalize_content("  a \n\t b  ") == "a b"
    assert content_fingerprint("a  b") == content_fingerprint(" a b\n")
    assert content_fingerprint("a b") != content_fingerprint("a c")
    assert content_fingerprint("a").startswith("0x")


@pytest.mark.asyncio
async def test_store_then_lookup(verification_cache: VerificationCache):
    stored = await verification_cache.store(RUN)
    record = await verification_cache.lookup("Apple's   market share reached 23.4%.")

    assert stored.already_stored is False
    assert stored.transaction_id
    assert record.content_hash == stored.content_hash == content_fingerprint(RUN["originalContent"])
    assert record.results_hash == stored.results_hash
    assert record.trust_score == 88
    assert record.claim_count == 1
    assert record.data == RUN
    assert "data" not in record.summary()


@pytest.mark.asyncio
async def test_lookup_miss(verification_cache: VerificationCache):
    assert await verification_cache.lookup("never stored") is None


@pytest.mark.asyncio
async def test_second_store_keeps_first_record(verification_cache: VerificationCache):
    first = await verification_cache.store(RUN)
    second = await verification_cache.store({**RUN, "trustScore": 10})

    assert second.already_stored is True
    assert second.results_hash == first.results_hash
    assert (await verification_cache.lookup(RUN["originalContent"])).trust_score == 88


@pytest.mark.asyncio
async def test_concurrent_stores_have_one_winner(verification_cache: VerificationCache):
    results = await asyncio.gather(*(verification_cache.store({**RUN, "trustScore": n}) for n in range(5)))

    assert sum(1 for r in results if not r.already_stored) == 1
    assert len({r.results_hash for r in results}) == 1


@pytest.mark.asyncio
async def test_store_requires_original_content(verification_cache: VerificationCache):
    with pytest.raises(InputValidationError):
        await verification_cache.store({"trustScore": 50})


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [{"trustScore": "high"}, {"trustScore": 150}, {"claims": "many"}])
async def test_store_rejects_malformed_summary(verification_cache, overrides):
    with pytest.raises(InputValidationError):
        await verification_cache.store({**RUN, **overrides})
    assert await verification_cache.lookup(RUN["originalContent"]) is None
