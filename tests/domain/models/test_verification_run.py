"""Tests for verification run state."""

import logging

from truth_engine.domain.models.claim import Claim
from truth_engine.domain.models.run_context import RunContext
from truth_engine.domain.models.verdict import VerdictStatus
from truth_engine.domain.models.verification_run import ClaimResult, RunStatus, VerificationRun


def make_run() -> VerificationRun:
    return VerificationRun(original_content="Text", verified_content="Text")


def test_progress_is_monotonic_and_capped():
    run = make_run()
    run.advance(50)
    run.advance(20)
    assert run.progress == 50
    run.advance(150)
    assert run.progress == 100


def test_completion_and_error():
    run = make_run()
    run.results.append(ClaimResult("c", "1", "2", "s", VerdictStatus.REFUTES, 80))
    run.mark_completed()
    assert run.status == RunStatus.COMPLETED
    assert run.progress == 100
    assert run.changes == 1
    assert run.is_terminal

    failed = make_run()
    failed.advance(50)
    failed.mark_error("boom")
    assert failed.status == RunStatus.ERROR
    assert failed.progress == 50
    assert failed.to_dict()["error"] == "boom"


def test_wire_format():
    run = make_run()
    run.claims = [Claim(claim_text="Claim", search_queries=["q"])]
    data = run.to_dict()
    assert data == {
        "originalContent": "Text",
        "verifiedContent": "Text",
        "status": "analyzing",
        "progress": 0,
        "claims": [{"claimText": "Claim", "searchQueries": ["q"]}],
        "changes": 0,
        "results": [],
        "trustScore": 0,
        "logs": [],
        "ledgerVerified": False,
    }


def test_apply_cached():
    run = make_run()
    run.apply_cached(
        {
            "verifiedContent": "Fixed",
            "claims": [{"claimText": "Claim", "searchQueries": ["q"]}, {"bad": True}],
            "results": [{"claim": "Claim", "verifiedValue": "Fact", "source": "a.org", "status": "refutes"}],
        },
        {"contentHash": "0xabc", "trustScore": 80},
    )
    assert run.status == RunStatus.COMPLETED
    assert run.progress == 100
    assert run.verified_content == "Fixed"
    assert [c.claim_text for c in run.claims] == ["Claim"]
    assert run.results[0].status == VerdictStatus.REFUTES
    assert run.results[0].original_value == "Claim"
    assert run.trust_score == 80
    assert run.ledger_verified is True
    assert run.to_dict()["ledgerData"] == {"contentHash": "0xabc", "trustScore": 80}


def test_claim_result_round_trip_keeps_optional_report():
    result = ClaimResult("c", "23.4%", "21.8%", "a.org", VerdictStatus.CONFIRMS, 70)
    data = result.to_dict()
    assert "trustReport" not in data
    assert ClaimResult.from_dict(data) == result


def test_run_context_logs_in_order(caplog):
    context = RunContext.start()
    with caplog.at_level(logging.INFO):
        context.log("info", "first")
        context.log("warn", "second")
    assert [(e.type, e.message) for e in context.logs] == [("info", "first"), ("warn", "second")]
    assert context.logs[0].timestamp <= context.logs[1].timestamp
    assert "second" in caplog.text
    assert context.reference_timestamp == context.reference_time.isoformat()
