"""
PredictIt collector.

The public endpoint returns every market and its contracts in one call:
https://www.predictit.org/api/marketdata/all/
"""

import logging
from typing import List, Optional

import requests

from .. import config
from ..models import MarketListing, Venue
from .base import BaseCollector, JsonDict

logger = logging.getLogger(__name__)


class PredictItCollector(BaseCollector):
    """Each contract of a PredictIt market becomes one listing."""

    venue_name = Venue.PREDICTIT.value

    def __init__(self, timeout: int = config.REQUEST_TIMEOUT_SECONDS):
        super().__init__(timeout=timeout)
        self.url = config.PREDICTIT_API_URL

    def fetch_active_markets(self, limit: Optional[int] = None) -> List[MarketListing]:
        try:
            data = self._get_json(self.url)
        except requests.exceptions.RequestException as e:
            logger.error(f"PredictIt collection aborted: {e}")
            return []

        markets = data.get("markets", []) if isinstance(data, dict) else []
        listings: List[MarketListing] = []

        for market in markets:
            for contract in market.get("contracts") or []:
                try:
                    listing = self._parse_contract(market, contract)
                except (AssertionError, TypeError, ValueError) as e:
                    logger.warning(f"Skipping PredictIt contract {contract.get('id')}: {e}")
                    continue
                if listing:
                    listings.append(listing)

        logger.info(f"Fetched {len(listings)} PredictIt contracts from {len(markets)} markets")
        return self._truncate(listings, limit)

    def _parse_contract(self, market: JsonDict, contract: JsonDict) -> Optional[MarketListing]:
        """
        Parse one contract of a PredictIt market.

        The full market name is kept in the title so matching sees the
        question, not just the contract's candidate name.
        """
        name = market.get("name")
        if not name or market.get("id") is None or contract.get("id") is None:
            return None

        price_yes = contract.get("lastTradePrice") or contract.get("bestBuyYesCost")
        if not price_yes:
            return None

        contract_name = contract.get("name") or contract.get("shortName")
        return MarketListing(
            venue=Venue.PREDICTIT,
            market_id=f"{market['id']}-{contract['id']}",
            title=f"{name}: {contract_name}" if contract_name else name,
            price_yes=float(price_yes),
            category="Politics",
            url=market.get("url") or f"https://www.predictit.org/markets/detail/{market['id']}",
        )
