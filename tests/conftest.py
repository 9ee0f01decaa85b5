"""Shared fixtures."""

import pytest

from arbitrage_scanner.models import MarketListing, Venue


@pytest.fixture
def make_listing():
    """Factory for listings with sensible defaults."""
    counter = {"n": 0}

    def _make(venue=Venue.KALSHI, title="Test market", price_yes=0.5, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("market_id", f"{venue.value.lower()}-{counter['n']}")
        return MarketListing(venue=venue, title=title, price_yes=price_yes, **kwargs)

    return _make
