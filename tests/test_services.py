"""Tests for venue collectors, with the HTTP session mocked out."""

from unittest.mock import MagicMock

import pytest
import requests

from arbitrage_scanner.models import Venue
from arbitrage_scanner.services import (
    COLLECTORS,
    KalshiCollector,
    PolymarketCollector,
    PredictItCollector,
)
from arbitrage_scanner.services import base
from arbitrage_scanner.services.polymarket import _is_past, parse_outcome_prices


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        error = requests.exceptions.HTTPError(f"{status_code} error")
        error.response = response
        response.raise_for_status.side_effect = error
    return response


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(base.time, "sleep", lambda _: None)
    monkeypatch.delenv("KALSHI_API_KEY", raising=False)


def test_collectors_registry():
    """Test every collectable venue has a collector."""
    assert set(COLLECTORS) == {Venue.KALSHI, Venue.POLYMARKET, Venue.PREDICTIT}


def test_get_json_retries_on_rate_limit():
    """Test backoff on 429 followed by success."""
    collector = PredictItCollector()
    collector.session.get = MagicMock(side_effect=[_response({}, 429), _response({"markets": []})])

    assert collector._get_json("https://example.test") == {"markets": []}
    assert collector.session.get.call_count == 2


def test_get_json_gives_up():
    """Test the error surfaces after the last attempt."""
    collector = PredictItCollector()
    collector.session.get = MagicMock(side_effect=requests.exceptions.ConnectionError("down"))

    with pytest.raises(requests.exceptions.ConnectionError):
        collector._get_json("https://example.test")
    assert collector.session.get.call_count == 3


def test_get_json_does_not_retry_client_errors():
    """Test that a 404 fails immediately."""
    collector = PredictItCollector()
    collector.session.get = MagicMock(return_value=_response({}, 404))

    with pytest.raises(requests.exceptions.HTTPError):
        collector._get_json("https://example.test")
    assert collector.session.get.call_count == 1


def test_kalshi_parse_market_cents():
    """Test Kalshi cent prices and URL building."""
    listing = KalshiCollector()._parse_market({
        "ticker": "FED-25DEC-CUT",
        "event_ticker": "FED-25DEC",
        "title": "Fed Rate Cut in 2025",
        "yes_ask": 40,
        "no_ask": 62,
        "volume": 1500,
    })

    assert listing.venue is Venue.KALSHI
    assert listing.price_yes == pytest.approx(0.40)
    assert listing.price_no == pytest.approx(0.62)
    assert listing.volume == 1500
    assert listing.url == "https://kalshi.com/markets/fed-25dec/fed-rate-cut-in-2025/fed-25dec-cut"


def test_kalshi_parse_market_without_price():
    """Test that unpriced markets are skipped."""
    assert KalshiCollector()._parse_market({"ticker": "X", "title": "No quotes"}) is None


def test_kalshi_fetch_active_markets():
    """Test a single-page fetch."""
    collector = KalshiCollector()
    collector.session.get = MagicMock(return_value=_response({
        "markets": [
            {"ticker": "A", "title": "Market A", "yes_price": 30},
            {"ticker": "B", "title": "Market B"},
        ],
        "cursor": "",
    }))

    listings = collector.fetch_active_markets()

    assert [m.market_id for m in listings] == ["A"]


def test_kalshi_fetch_failure_returns_empty():
    """Test that network failure yields no listings."""
    collector = KalshiCollector()
    collector.session.get = MagicMock(side_effect=requests.exceptions.Timeout("slow"))

    assert collector.fetch_active_markets() == []


def test_kalshi_api_key_header(monkeypatch):
    """Test the optional bearer token."""
    monkeypatch.setenv("KALSHI_API_KEY", "secret")

    assert KalshiCollector().session.headers["Authorization"] == "Bearer secret"


def test_parse_outcome_prices():
    """Test list and JSON-string outcome prices."""
    assert parse_outcome_prices('["0.4", "0.6"]') == [0.4, 0.6]
    assert parse_outcome_prices([0.3, 0.7]) == [0.3, 0.7]
    assert parse_outcome_prices("not json") == []
    assert parse_outcome_prices(None) == []


def test_is_past():
    """Test end date filtering."""
    assert _is_past("2000-01-01T00:00:00Z") is True
    assert _is_past("2999-01-01T00:00:00Z") is False
    assert _is_past(None) is False
    assert _is_past("soon") is False


def test_polymarket_fetch_active_markets():
    """Test event flattening and closed-market filtering."""
    collector = PolymarketCollector()
    collector.session.get = MagicMock(return_value=_response([
        {
            "title": "Fed decision",
            "slug": "fed-decision",
            "markets": [
                {"id": "1", "question": "Will the Fed cut rates in 2025?",
                 "outcomePrices": '["0.5", "0.5"]', "volume": "1200"},
                {"id": "2", "question": "Closed market", "closed": True,
                 "outcomePrices": '["0.1", "0.9"]'},
                {"id": "3", "question": "Unpriced market"},
            ],
        }
    ]))

    listings = collector.fetch_active_markets()

    assert len(listings) == 1
    assert listings[0].market_id == "1"
    assert listings[0].volume == 1200
    assert listings[0].url == "https://polymarket.com/event/fed-decision"


def test_predictit_fetch_active_markets():
    """Test one listing per contract with the market name in the title."""
    collector = PredictItCollector()
    collector.session.get = MagicMock(return_value=_response({
        "markets": [
            {
                "id": 7,
                "name": "Which party will win the Senate in 2026?",
                "url": "https://www.predictit.org/markets/detail/7",
                "contracts": [
                    {"id": 1, "name": "Republican", "lastTradePrice": 0.62},
                    {"id": 2, "name": "Democratic", "lastTradePrice": 0.0, "bestBuyYesCost": None},
                ],
            }
        ]
    }))

    listings = collector.fetch_active_markets()

    assert len(listings) == 1
    assert listings[0].market_id == "7-1"
    assert listings[0].title == "Which party will win the Senate in 2026?: Republican"
    assert listings[0].price_no == pytest.approx(0.38)
