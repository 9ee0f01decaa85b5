"""
Snapshot cache for venue listings.

Owned by the retrieval layer (CLI, web server). The matching engine never
reads it: callers fetch a snapshot here and pass the listings in explicitly.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from . import config
from .models import MarketListing, Venue

logger = logging.getLogger(__name__)


@dataclass
class MarketCache:
    """Whole-snapshot cache with a time-to-live, replaced on every put."""

    ttl_seconds: float = config.CACHE_TTL_SECONDS
    _listings: List[MarketListing] = field(default_factory=list, init=False, repr=False)
    _fetched_at: Optional[float] = field(default=None, init=False)

    def get(self, now: Optional[float] = None) -> Optional[List[MarketListing]]:
        """Cached listings, or None when empty or older than the TTL."""
        if self.is_stale(now):
            return None
        logger.debug("Using cached market data (%d listings)", len(self._listings))
        return list(self._listings)

    def put(self, listings: List[MarketListing], now: Optional[float] = None) -> None:
        """Replace the snapshot wholesale."""
        self._listings = list(listings)
        self._fetched_at = time.time() if now is None else now
        logger.info("Cached %d listings", len(self._listings))

    def is_stale(self, now: Optional[float] = None) -> bool:
        if self._fetched_at is None:
            return True
        now = time.time() if now is None else now
        return now - self._fetched_at >= self.ttl_seconds

    def clear(self) -> None:
        self._listings = []
        self._fetched_at = None

    def stats(self) -> Dict[str, Any]:
        """Listing counts per venue and the snapshot time."""
        counts = {venue.value: 0 for venue in Venue}
        for listing in self._listings:
            counts[listing.venue.value] += 1

        last_updated = ""
        if self._fetched_at is not None:
            last_updated = datetime.fromtimestamp(self._fetched_at, tz=timezone.utc).isoformat()

        return {
            "venues": counts,
            "total": len(self._listings),
            "last_updated": last_updated,
        }
