"""Tests for the similarity scorer."""

import pytest

from arbitrage_scanner.models import Venue
from arbitrage_scanner.similarity import NO_MATCH, score_similarity, score_titles


def test_shared_event_scores_95(make_listing):
    """Test that a shared event label is an immediate match."""
    kalshi = make_listing(Venue.KALSHI, "Fed Rate Cut in 2025", 0.40)
    poly = make_listing(Venue.POLYMARKET, "Will the Fed cut rates in 2025?", 0.50)

    assert score_similarity(kalshi, poly) == (95, "fed-rate-cut")


def test_conflicting_party_scores_zero():
    """Test party veto with otherwise identical tokens."""
    assert score_titles("Republican Senate seat", "Democrat Senate seat") == NO_MATCH


def test_conflicting_state_scores_zero():
    """Test state veto."""
    result = score_titles("Who will win the Ohio Senate race?", "Who will win the Texas Senate race?")
    assert result == NO_MATCH


def test_conflicting_quarter_scores_zero():
    """Test time frame veto."""
    assert score_titles("GDP growth above 3% in Q1 2025", "GDP growth above 3% in Q2 2025").score == 0


def test_different_year_scores_zero():
    """Test year veto after token overlap."""
    result = score_titles(
        "Will the Lakers make the playoffs in 2025?",
        "Will the Lakers make the playoffs in 2026?",
    )
    assert result == NO_MATCH


def test_different_price_target_scores_zero():
    """Test number veto."""
    assert score_titles("Will Bitcoin close above 90k?", "Will Bitcoin close above 95k?").score == 0


def test_low_overlap_scores_zero():
    """Test the Jaccard floor."""
    assert score_titles("Will inflation exceed expectations?", "Inflation report surprise") == NO_MATCH


def test_named_entity_boost():
    """Test that a shared name adds to the lexical score."""
    result = score_titles(
        "Will Trump win the 2028 presidential election?",
        "Donald Trump wins 2028 presidential election",
    )
    # 4 shared of 6 tokens -> 67, plus one shared name
    assert result.score == 82
    assert result.reason == "match: trump"


def test_unanchored_match_reason():
    """Test the reason for a match without a shared name."""
    result = score_titles("Will the Lakers make the playoffs in 2025?", "Lakers make the playoffs in 2025")

    assert result.score == 100
    assert result.reason == "similar: 2025, lakers, make, playoffs"


@pytest.mark.parametrize("title_a,title_b", [
    ("Fed Rate Cut in 2025", "Will the Fed cut rates in 2025?"),
    ("Republican Senate seat", "Democrat Senate seat"),
    ("Will Trump win the 2028 presidential election?", "Donald Trump wins 2028 presidential election"),
])
def test_score_is_symmetric(title_a, title_b):
    """Test that argument order does not change the score."""
    assert score_titles(title_a, title_b).score == score_titles(title_b, title_a).score


def test_identical_titles_score_100():
    """Test that an identical anchor-free title scores 100 on overlap alone."""
    title = "Will the Lakers make the playoffs in 2025?"

    assert score_titles(title, title).score == 100


def test_stop_words_only_scores_zero():
    """Test titles with no meaningful tokens."""
    assert score_titles("Will it be?", "Will it be?") == NO_MATCH


def test_different_states_with_shared_word_score_zero():
    """Test West Virginia against Virginia."""
    assert score_titles("West Virginia Senate race 2026", "Virginia Senate race 2026") == NO_MATCH


def test_event_match_with_different_years_scores_zero():
    """Test that the year veto applies before event patterns."""
    assert score_titles("Fed Rate Cut in 2025", "Fed Rate Cut in 2026") == NO_MATCH
    assert score_titles("Fed Rate Cut in 2025", "Will the Fed cut rates in 2025?").score == 95


def test_quarter_phrasings_are_equivalent():
    """Test that Q1 and first quarter are the same time frame."""
    result = score_titles(
        "GDP growth above 3% in Q1 2025",
        "GDP growth above 3% in the first quarter of 2025",
    )
    # 4 shared of 6 tokens -> 67, plus the shared quarter
    assert result.score == 77
