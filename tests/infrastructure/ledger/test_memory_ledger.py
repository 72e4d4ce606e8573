"""Tests for the in-memory ledger and blob store."""

import pytest

from truth_engine.domain.errors import DuplicateRecordError
from truth_engine.infrastructure.ledger.memory_ledger import InMemoryBlobStore, InMemoryVerificationLedger


@pytest.mark.asyncio
async def test_ledger_put_get():
    ledger = InMemoryVerificationLedger(verifier="tester")

    receipt = await ledger.put("0xabc", "blob-1", 75, 2)
    record = await ledger.get("0xabc")

    assert receipt.transaction_id.startswith("0x")
    assert await ledger.exists("0xabc") is True
    assert record.results_hash == "blob-1"
    assert record.trust_score == 75
    assert record.claim_count == 2
    assert record.verifier == "tester"
    assert record.timestamp
    assert len(ledger) == 1


@pytest.mark.asyncio
async def test_ledger_rejects_second_writer():
    ledger = InMemoryVerificationLedger()
    await ledger.put("0xabc", "blob-1", 75, 2)

    with pytest.raises(DuplicateRecordError):
        await ledger.put("0xabc", "blob-2", 10, 1)
    assert (await ledger.get("0xabc")).results_hash == "blob-1"


@pytest.mark.asyncio
async def test_ledger_miss():
    ledger = InMemoryVerificationLedger()
    assert await ledger.exists("0xnone") is False
    assert await ledger.get("0xnone") is None


@pytest.mark.asyncio
async def test_blob_store_is_content_addressed():
    store = InMemoryBlobStore()

    first = await store.put({"b": 1, "a": [1, 2]})
    second = await store.put({"a": [1, 2], "b": 1})
    other = await store.put({"a": [1, 2], "b": 2})

    assert first == second
    assert first != other
    assert await store.get(first) == {"a": [1, 2], "b": 1}
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_blob_store_returns_copies():
    store = InMemoryBlobStore()
    payload = {"items": [1]}
    blob_id = await store.put(payload)

    payload["items"].append(2)
    fetched = await store.get(blob_id)
    fetched["items"].append(3)

    assert await store.get(blob_id) == {"items": [1]}
