"""Services package for data collection."""

from .base import BaseCollector
from .kalshi import KalshiCollector
from .polymarket import PolymarketCollector
from .predictit import PredictItCollector

from ..models import Venue

COLLECTORS = {
    Venue.KALSHI: KalshiCollector,
    Venue.POLYMARKET: PolymarketCollector,
    Venue.PREDICTIT: PredictItCollector,
}

__all__ = [
    "BaseCollector",
    "COLLECTORS",
    "KalshiCollector",
    "PolymarketCollector",
    "PredictItCollector",
]
