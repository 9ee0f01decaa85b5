"""Tests for the command line entry point."""

import asyncio
import json

from arbitrage_scanner import main
from arbitrage_scanner.models import MarketListing, Venue


def test_parse_args_defaults():
    """Test CLI defaults."""
    args = main.parse_args([])

    assert args.venues == ["kalshi", "polymarket", "predictit"]
    assert args.min_roi == 0.0
    assert args.order_type is None


def test_resolve_venues():
    """Test aliases, duplicates and venues without a collector."""
    assert main.resolve_venues(["kalshi", "poly", "Kalshi", "ibkr", "bogus"]) == [
        Venue.KALSHI,
        Venue.POLYMARKET,
    ]


def test_gather_all_data_tolerates_failures(monkeypatch):
    """Test that one failing venue does not sink the others."""
    async def fake_collect(venue, limit=None):
        if venue is Venue.PREDICTIT:
            raise RuntimeError("boom")
        return [MarketListing(venue, venue.value, "Fed Rate Cut in 2025", 0.4)]

    monkeypatch.setattr(main, "collect_venue", fake_collect)

    listings = asyncio.run(main.gather_all_data([Venue.KALSHI, Venue.POLYMARKET, Venue.PREDICTIT]))

    assert [m.venue for m in listings] == [Venue.KALSHI, Venue.POLYMARKET]


def test_run_saves_results(monkeypatch, tmp_path):
    """Test a full scan writing its JSON report."""
    async def fake_gather(venues, limit=None):
        return [
            MarketListing(Venue.KALSHI, "K", "Fed Rate Cut in 2025", 0.40),
            MarketListing(Venue.POLYMARKET, "P", "Will the Fed cut rates in 2025?", 0.50),
        ]

    monkeypatch.setattr(main, "gather_all_data", fake_gather)
    output = tmp_path / "results.json"

    opportunities = asyncio.run(main.run(main.parse_args(["--output", str(output)])))

    assert len(opportunities) == 1
    saved = json.loads(output.read_text())
    assert saved[0]["match_reason"] == "fed-rate-cut"
    assert "timestamp" in saved[0]


def test_run_needs_two_venues():
    """Test that a single venue is rejected."""
    assert asyncio.run(main.run(main.parse_args(["--venues", "kalshi"]))) == []
