"""
Polymarket collector for the Gamma API.

Gamma groups markets under events; every market of an open event that has
not closed and does not end in the past becomes one listing.
"""

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Iterator, List, Optional

import requests

from .. import config
from ..models import MarketListing, Venue
from .base import BaseCollector, JsonDict, as_float

logger = logging.getLogger(__name__)


def _is_past(end_date: Optional[str]) -> bool:
    """True when an ISO end date lies in the past; unparseable dates are kept."""
    if not end_date:
        return False
    try:
        end_dt = datetime.fromisoformat(end_date.replace('Z', '+00:00'))
    except ValueError:
        return False
    if end_dt.tzinfo is None:
        end_dt = end_dt.replace(tzinfo=timezone.utc)
    return end_dt < datetime.now(timezone.utc)


def parse_outcome_prices(raw: Any) -> List[float]:
    """Outcome prices arrive as a list or as a JSON-encoded list of strings."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []
    if not isinstance(raw, list):
        return []
    try:
        return [float(p) for p in raw]
    except (TypeError, ValueError):
        return []


def is_tradable(market: JsonDict) -> bool:
    if market.get("closed") is True or market.get("active") is False:
        return False
    return not _is_past(market.get("end_date_iso") or market.get("endDate"))


class PolymarketCollector(BaseCollector):
    venue_name = Venue.POLYMARKET.value

    def __init__(self, timeout: int = config.REQUEST_TIMEOUT_SECONDS):
        super().__init__(timeout=timeout)
        self.base_url = config.GAMMA_API_BASE

    def _iter_events(self) -> Iterator[JsonDict]:
        """Yield open events page by page; a short page is the last one."""
        page_size = config.POLYMARKET_PAGE_SIZE
        for page in range(config.POLYMARKET_MAX_PAGES):
            if page:
                time.sleep(config.POLYMARKET_PAGE_DELAY_SECONDS)

            events = self._get_json(f"{self.base_url}/events", params={
                "active": "true",
                "closed": "false",
                "limit": page_size,
                "offset": page * page_size,
            })
            if not events:
                return
            yield from events

            if len(events) < page_size:
                return

    def fetch_active_markets(self, limit: Optional[int] = None) -> List[MarketListing]:
        """
        Fetch tradable Polymarket markets.

        Args:
            limit: Stop after this many listings (None = every page)

        Returns:
            List of MarketListing objects; empty if the API is unreachable
        """
        listings: List[MarketListing] = []
        logger.info("Fetching active Polymarket markets...")

        try:
            for event in self._iter_events():
                for market in event.get("markets") or []:
                    if not is_tradable(market):
                        continue
                    try:
                        listing = self._parse_market(market, event)
                    except (AssertionError, TypeError, ValueError) as e:
                        logger.warning(f"Skipping Polymarket market {market.get('id')}: {e}")
                        continue
                    if listing:
                        listings.append(listing)

                if limit and len(listings) >= limit:
                    break
        except requests.exceptions.RequestException as e:
            logger.error(f"Polymarket collection aborted: {e}")
            return []

        logger.info(f"Fetched {len(listings)} active Polymarket markets")
        return self._truncate(listings, limit)

    def _parse_market(self, market: JsonDict, event: JsonDict) -> Optional[MarketListing]:
        """Listing for one Gamma market, or None without id, question or price."""
        market_id = market.get("id") or market.get("conditionId")
        title = market.get("question") or event.get("title")
        if not market_id or not title:
            return None

        # Outcome 0 is Yes, outcome 1 is No
        prices = parse_outcome_prices(market.get("outcomePrices"))
        if len(prices) >= 2:
            price_yes, price_no = prices[0], prices[1]
        elif market.get("price") is not None:
            price_yes, price_no = float(market["price"]), None
        else:
            return None

        slug = event.get("slug") or market.get("slug")
        return MarketListing(
            venue=Venue.POLYMARKET,
            market_id=str(market_id),
            title=title,
            price_yes=price_yes,
            price_no=price_no,
            volume=as_float(market.get("volume")),
            category=market.get("category") or event.get("category"),
            url=f"https://polymarket.com/event/{slug}" if slug else f"https://polymarket.com/market/{market_id}",
        )
