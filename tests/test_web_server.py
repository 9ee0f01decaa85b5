"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from arbitrage_scanner import web_server
from arbitrage_scanner.models import MarketListing, Venue


@pytest.fixture
def listings():
    return [
        MarketListing(Venue.KALSHI, "FED-25", "Fed Rate Cut in 2025", 0.40, volume=100),
        MarketListing(Venue.POLYMARKET, "77", "Will the Fed cut rates in 2025?", 0.50, volume=50),
    ]


@pytest.fixture
def client(monkeypatch, listings):
    calls = []

    async def fake_gather(venues, limit=None):
        calls.append(venues)
        return listings

    web_server.market_cache.clear()
    monkeypatch.setattr(web_server, "gather_all_data", fake_gather)
    client = TestClient(web_server.app)
    client.gather_calls = calls
    yield client
    web_server.market_cache.clear()


def test_health(client):
    """Test health check."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_arbitrage_opportunities(client):
    """Test ranked opportunities over the cached snapshot."""
    response = client.get("/api/arbitrage-opportunities")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["match_score"] == 95
    assert body[0]["market_a"]["venue"] == "Kalshi"
    assert body[0]["roi"] == pytest.approx(11.11, abs=0.01)


def test_arbitrage_opportunities_filters(client):
    """Test minRoi and the title filter."""
    assert client.get("/api/arbitrage-opportunities", params={"minRoi": 50}).json() == []
    assert client.get("/api/arbitrage-opportunities", params={"q": "bitcoin"}).json() == []


def test_snapshot_is_cached(client):
    """Test that a second request reuses the snapshot."""
    client.get("/api/arbitrage-opportunities")
    client.get("/api/arbitrage-opportunities")
    assert len(client.gather_calls) == 1

    client.get("/api/arbitrage-opportunities", params={"refresh": True})
    assert len(client.gather_calls) == 2


def test_markets_venue_filter(client):
    """Test listing search by venue."""
    body = client.get("/api/markets", params={"venue": "polymarket"}).json()

    assert [m["market_id"] for m in body] == ["77"]
    assert client.get("/api/markets", params={"venue": "nowhere"}).status_code == 400


def test_market_stats(client):
    """Test per-venue counts."""
    body = client.get("/api/market-stats").json()

    assert body["total"] == 2
    assert body["venues"]["Kalshi"] == 1


def test_fees(client):
    """Test fee quotes."""
    body = client.get("/api/fees", params={"venue": "Kalshi", "price": 0.5, "contracts": 10}).json()

    assert body["amount"] == pytest.approx(0.175)
    assert body["order_type"] == "Taker"


def test_calculator(client):
    """Test Maker vs Taker ROI."""
    response = client.post("/api/calculator", json={
        "site_a_name": "Kalshi",
        "site_a_yes_price": 0.52,
        "site_b_name": "Polymarket",
        "site_b_yes_price": 0.56,
        "investment": 100,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["maker"]["contracts"] == 104
    assert body["taker"]["contracts"] == 102
    assert body["fee_savings"] > 0


def test_calculator_rejects_bad_price(client):
    """Test request validation."""
    response = client.post("/api/calculator", json={
        "site_a_name": "Kalshi",
        "site_a_yes_price": 1.5,
        "site_b_name": "Polymarket",
        "site_b_yes_price": 0.56,
    })

    assert response.status_code == 422


def test_watchlist_scan(client):
    """Test watchlist scanning with cent prices."""
    response = client.post("/api/watchlist/scan", json=[
        {"market_name": "Fed cut", "site_a_name": "Kalshi", "site_b_name": "Polymarket",
         "site_a_yes_price": 52, "site_b_yes_price": 56, "investment": 100},
        {"market_name": "Paused", "site_a_name": "Kalshi", "site_b_name": "Polymarket",
         "site_a_yes_price": 52, "site_b_yes_price": 56, "is_active": False},
    ])

    body = response.json()
    assert [s["market_name"] for s in body] == ["Fed cut"]
    assert body[0]["should_alert"] is True
