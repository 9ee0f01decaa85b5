"""
Watchlist evaluation: re-price tracked venue pairs and decide on alerts.

Storing the watchlist and delivering alerts belong to the host application;
this module only turns an item into Maker/Taker ROI figures.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from . import config
from .models import ArbitrageOpportunity, BestRoi, OrderType
from .roi import best_roi

logger = logging.getLogger(__name__)


def _as_probability(price: float) -> float:
    """Accept prices typed in cents (52) as well as probabilities (0.52)."""
    return price / 100 if price > 1 else price


@dataclass
class WatchlistItem:
    market_name: str
    site_a_name: str
    site_b_name: str
    site_a_yes_price: float
    site_b_yes_price: float
    investment: float = config.DEFAULT_INVESTMENT
    alert_threshold: float = config.DEFAULT_ALERT_THRESHOLD
    is_active: bool = True

    def __post_init__(self):
        self.site_a_yes_price = _as_probability(self.site_a_yes_price)
        self.site_b_yes_price = _as_probability(self.site_b_yes_price)

    @classmethod
    def from_opportunity(
        cls,
        opportunity: ArbitrageOpportunity,
        investment: float = config.DEFAULT_INVESTMENT,
        alert_threshold: float = config.DEFAULT_ALERT_THRESHOLD,
    ) -> "WatchlistItem":
        """Track a discovered opportunity; venue A is its YES leg."""
        a, b = opportunity.market_a, opportunity.market_b
        return cls(
            market_name=a.title,
            site_a_name=a.venue.value,
            site_b_name=b.venue.value,
            site_a_yes_price=a.price_yes,
            site_b_yes_price=b.price_yes,
            investment=investment,
            alert_threshold=alert_threshold,
        )


@dataclass
class WatchlistScan:
    item: WatchlistItem
    maker: BestRoi
    taker: BestRoi
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def should_alert(self) -> bool:
        return self.maker.roi >= self.item.alert_threshold

    @property
    def scenario_description(self) -> str:
        a, b = self.item.site_a_name, self.item.site_b_name
        if self.maker.scenario == 1:
            return f"Buy YES on {a} + Buy NO on {b}"
        return f"Buy NO on {a} + Buy YES on {b}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "market_name": self.item.market_name,
            "checked_at": self.checked_at.isoformat(),
            "maker": self.maker.to_dict(),
            "taker": self.taker.to_dict(),
            "should_alert": self.should_alert,
            "scenario": self.scenario_description,
        }


def scan_item(item: WatchlistItem) -> WatchlistScan:
    """Maker and Taker best ROI for one watchlist item."""
    args = (
        item.site_a_name, item.site_a_yes_price,
        item.site_b_name, item.site_b_yes_price,
        item.investment,
    )
    scan = WatchlistScan(
        item=item,
        maker=best_roi(*args, order_type=OrderType.MAKER),
        taker=best_roi(*args, order_type=OrderType.TAKER),
    )
    if scan.should_alert:
        logger.info(
            "Alert: %s at %.2f%% ROI (%s)",
            item.market_name, scan.maker.roi, scan.scenario_description,
        )
    return scan


def scan_watchlist(items: Iterable[WatchlistItem]) -> List[WatchlistScan]:
    """Scan every active item."""
    scans = [scan_item(item) for item in items if item.is_active]
    logger.info(
        "Scanned %d watchlist items, %d above threshold",
        len(scans), sum(1 for s in scans if s.should_alert),
    )
    return scans
