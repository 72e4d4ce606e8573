"""Tests for domain authority ranking."""

import pytest

from truth_engine.domain.services.source_ranker import (
    DEFAULT_AUTHORITY,
    HIGH_AUTHORITY_SOURCES,
    LOW_AUTHORITY_SOURCES,
    SourceRanker,
    normalize_domain,
)


@pytest.fixture
def ranker() -> SourceRanker:
    return SourceRanker()


def test_high_authority_scores_in_band(ranker: SourceRanker):
    """Every curated high-authority domain scores between 60 and 95."""
    for entry in HIGH_AUTHORITY_SOURCES:
        assert 60 <= ranker.rank(entry.domain) <= 95, entry.domain


def test_low_authority_scores_in_band(ranker: SourceRanker):
    """Every curated low-authority domain scores between 15 and 50."""
    for entry in LOW_AUTHORITY_SOURCES:
        assert 15 <= ranker.rank(entry.domain) <= 50, entry.domain


@pytest.mark.parametrize(
    "domain,expected",
    [
        ("reuters.com", 95),
        ("www.Reuters.com", 95),
        ("en.wikipedia.org", 75),
        ("news.ox.ac.uk", 85),
        ("infowars.com", 15),
        ("energy.gov", 85),
        ("example.com", 60),
        ("example.org", 65),
        ("localhost", DEFAULT_AUTHORITY),
    ],
)
def test_rank(ranker: SourceRanker, domain: str, expected: int):
    """Curated entries, subdomains and TLD heuristics."""
    assert ranker.rank(domain) == expected


def test_specific_entries_win_over_suffix_categories(ranker: SourceRanker):
    """bbc.co.uk keeps its own score instead of a generic suffix score."""
    assert ranker.rank("bbc.co.uk") == 90
    assert ranker.category("bbc.co.uk") == "Public Broadcaster"


@pytest.mark.parametrize("domain", ["", "   ", "not a domain", "::::", "a" * 300])
def test_rank_is_total(ranker: SourceRanker, domain: str):
    """Odd input never raises and always yields a score."""
    score = ranker.rank(domain)
    assert 0 <= score <= 100
    assert ranker.rank(domain) == score


def test_rank_url(ranker: SourceRanker):
    assert ranker.rank_url("https://www.nature.com/articles/123") == 95
    assert ranker.rank_url("not a url") == DEFAULT_AUTHORITY


def test_normalize_domain():
    assert normalize_domain("WWW.Example.COM:8080") == "example.com"
    assert normalize_domain("https://www.bbc.com/news") == "bbc.com"
    assert normalize_domain("example.com.") == "example.com"
