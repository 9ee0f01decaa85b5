"""
Cross-venue arbitrage scanner for binary prediction markets.

Matches the same question across venues and prices the complementary
YES/NO purchase net of each venue's fees.
"""

from .entities import extract_entities
from .fees import compute_fee
from .matcher import MarketMatcher, find_opportunities
from .models import ArbitrageOpportunity, EntityBag, MarketListing, OrderType, Venue
from .roi import best_roi
from .similarity import score_similarity

__version__ = "1.0.0"

__all__ = [
    "ArbitrageOpportunity",
    "EntityBag",
    "MarketListing",
    "MarketMatcher",
    "OrderType",
    "Venue",
    "best_roi",
    "compute_fee",
    "extract_entities",
    "find_opportunities",
    "score_similarity",
]
