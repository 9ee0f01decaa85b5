"""
Kalshi collector.

Reads open markets from the public trade API (cursor paginated). An API key
in ``KALSHI_API_KEY`` is sent as a bearer token when present; public market
data does not need one.
"""

import logging
import os
import re
import time
from typing import Iterator, List, Optional

import requests

from .. import config
from ..models import MarketListing, Venue
from .base import BaseCollector, JsonDict, as_float, cents_to_price

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r'[^a-z0-9]+')

# Quote fields in order of preference, all in cents
_YES_FIELDS = ("yes_price", "last_price", "yes_ask")
_NO_FIELDS = ("no_price", "no_ask")


def market_url(ticker: str, event_ticker: Optional[str], title: str) -> str:
    """Public page of a market: /markets/{event}/{title slug}/{ticker}."""
    if not event_ticker:
        return f"https://kalshi.com/markets/{ticker.lower()}"
    slug = _SLUG_PATTERN.sub('-', title.lower()).strip('-')[:100]
    return f"https://kalshi.com/markets/{event_ticker.lower()}/{slug}/{ticker.lower()}"


def _first_quote(market: JsonDict, fields) -> Optional[float]:
    for name in fields:
        price = cents_to_price(market.get(name))
        if price is not None:
            return price
    return None


class KalshiCollector(BaseCollector):
    venue_name = Venue.KALSHI.value

    def __init__(self, api_key: Optional[str] = None, timeout: int = config.REQUEST_TIMEOUT_SECONDS):
        super().__init__(timeout=timeout)
        self.base_url = config.KALSHI_API_BASE
        self.api_key = api_key or os.getenv("KALSHI_API_KEY")

        if self.api_key:
            self.session.headers["Authorization"] = f"Bearer {self.api_key}"
        logger.debug("Kalshi collector ready (%s)", "authenticated" if self.api_key else "public")

    def _iter_pages(self) -> Iterator[List[JsonDict]]:
        """Yield raw market pages until the cursor runs out or the page cap is hit."""
        cursor = None
        for page in range(config.KALSHI_MAX_PAGES):
            if page:
                time.sleep(config.KALSHI_PAGE_DELAY_SECONDS)

            params = {"status": "open", "limit": config.KALSHI_PAGE_SIZE}
            if cursor:
                params["cursor"] = cursor

            data = self._get_json(f"{self.base_url}/markets", params=params)
            yield data.get("markets", [])

            cursor = data.get("cursor")
            if not cursor:
                return

    def fetch_active_markets(self, limit: Optional[int] = None) -> List[MarketListing]:
        """
        Fetch open Kalshi markets.

        Args:
            limit: Stop after this many listings (None = every page)

        Returns:
            List of MarketListing objects; empty if the API is unreachable
        """
        listings: List[MarketListing] = []
        logger.info("Fetching Kalshi markets...")

        try:
            for page in self._iter_pages():
                for raw in page:
                    try:
                        listing = self._parse_market(raw)
                    except (AssertionError, TypeError, ValueError) as e:
                        logger.warning(f"Skipping Kalshi market {raw.get('ticker')}: {e}")
                        continue
                    if listing:
                        listings.append(listing)

                if limit and len(listings) >= limit:
                    break
        except requests.exceptions.RequestException as e:
            logger.error(f"Kalshi collection aborted: {e}")
            return []

        logger.info(f"Fetched {len(listings)} Kalshi markets")
        return self._truncate(listings, limit)

    def _parse_market(self, market: JsonDict) -> Optional[MarketListing]:
        """Listing for one API market, or None without ticker, title or YES quote."""
        ticker = market.get("ticker")
        title = market.get("title") or market.get("subtitle")
        price_yes = _first_quote(market, _YES_FIELDS)
        if not ticker or not title or price_yes is None:
            return None

        return MarketListing(
            venue=Venue.KALSHI,
            market_id=ticker,
            title=title,
            price_yes=price_yes,
            price_no=_first_quote(market, _NO_FIELDS),
            volume=as_float(market.get("volume")),
            category=market.get("category"),
            url=market_url(ticker, market.get("event_ticker"), title),
        )
