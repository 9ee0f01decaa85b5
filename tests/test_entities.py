"""Tests for title entity extraction."""

from arbitrage_scanner.entities import (
    extract_entities,
    extract_numbers,
    extract_party,
    extract_states,
    extract_time_frames,
)
from arbitrage_scanner.models import EntityBag


def test_extract_entities_empty_title():
    """Test that empty or missing titles give an empty bag."""
    assert extract_entities("") == EntityBag()
    assert extract_entities(None) == EntityBag()


def test_extract_entities_crypto_title():
    """Test years, expanded numbers and names."""
    bag = extract_entities("Will Bitcoin hit 100k in 2025?")

    assert bag.years == frozenset({"2025"})
    assert "100000" in bag.numbers
    assert bag.names == frozenset({"bitcoin"})
    assert bag.party is None


def test_extract_numbers_k_suffix():
    """Test k suffix expansion and single digit filtering."""
    assert extract_numbers("above 2.5k") == frozenset({"2500"})
    assert extract_numbers("top 5 finish") == frozenset()
    assert extract_numbers("above 150k") == frozenset({"150000"})


def test_extract_party():
    """Test party detection and ambiguity."""
    assert extract_party("gop wins the house") == "republican"
    assert extract_party("democrats hold the senate") == "democrat"
    assert extract_party("republican vs democrat turnout") is None
    assert extract_party("fed rate cut") is None


def test_extract_states():
    """Test full names and multi-word states."""
    assert extract_states("ohio senate race") == frozenset({"ohio"})
    assert extract_states("new york governor") == frozenset({"new york"})
    assert extract_states("CA ballot measure") == frozenset({"california"})


def test_extract_time_frames():
    """Test quarter and month codes."""
    assert extract_time_frames("gdp growth in q1 2025") == frozenset({"q1"})
    assert extract_time_frames("cpi for september") == frozenset({"sep"})
    assert extract_time_frames("first quarter earnings") == frozenset({"q1"})
    assert extract_time_frames("quarter 3 results") == frozenset({"q3"})


def test_extract_entities_names_and_states():
    """Test franchise names alongside the state they contain."""
    bag = extract_entities("Kansas City Chiefs win Super Bowl")

    assert bag.names == frozenset({"chiefs"})
    assert "kansas" in bag.states


def test_extract_entities_is_case_insensitive():
    """Test that casing does not change the bag."""
    assert extract_entities("ELON MUSK in Q3") == extract_entities("elon musk in q3")


def test_extract_states_prefers_longest_variant():
    """Test that a multi-word state does not also tag the shorter one inside it."""
    assert extract_states("west virginia senate race 2026") == frozenset({"west virginia"})
    assert extract_states("virginia senate race 2026") == frozenset({"virginia"})
    assert extract_states("virginia and west virginia") == frozenset({"virginia", "west virginia"})
