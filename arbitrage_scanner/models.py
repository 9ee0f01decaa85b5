"""
Data models for the Arbitrage Scanner.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, NamedTuple, Optional, Tuple


class Venue(str, Enum):
    """Supported trading venues."""

    KALSHI = "Kalshi"
    POLYMARKET = "Polymarket"
    PREDICTIT = "PredictIt"
    IBKR = "IBKR ForecastEx"

    @classmethod
    def parse(cls, name: Any) -> Optional["Venue"]:
        """Resolve a venue from a display name or alias, None if unknown."""
        if isinstance(name, Venue):
            return name
        if not isinstance(name, str):
            return None
        return _VENUE_ALIASES.get(name.strip().lower())


_VENUE_ALIASES: Dict[str, Venue] = {
    "kalshi": Venue.KALSHI,
    "polymarket": Venue.POLYMARKET,
    "poly": Venue.POLYMARKET,
    "predictit": Venue.PREDICTIT,
    "ibkr": Venue.IBKR,
    "ibkr forecast": Venue.IBKR,
    "ibkr forecastex": Venue.IBKR,
    "forecastex": Venue.IBKR,
}


class OrderType(str, Enum):
    """Order style; some venues only charge Taker orders."""

    MAKER = "Maker"
    TAKER = "Taker"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MarketListing:
    """Normalized snapshot of one venue's binary market."""
    venue: Venue
    market_id: str                  # Venue specific ID
    title: str                      # Raw title as listed by the venue
    price_yes: float                # 0.00 ~ 1.00
    price_no: Optional[float] = None  # Defaults to 1 - price_yes
    volume: float = 0.0             # 0 when the venue does not report it
    category: Optional[str] = None
    last_updated: datetime = field(default_factory=_utcnow)
    url: Optional[str] = None

    def __post_init__(self):
        """Validate data after initialization."""
        if self.price_no is None:
            object.__setattr__(self, "price_no", 1.0 - self.price_yes)
        assert isinstance(self.venue, Venue), f"Invalid venue: {self.venue}"
        assert 0.0 <= self.price_yes <= 1.0, f"Invalid price_yes: {self.price_yes}"
        assert 0.0 <= self.price_no <= 1.0, f"Invalid price_no: {self.price_no}"
        assert self.volume >= 0, f"Invalid volume: {self.volume}"

    @property
    def key(self) -> Tuple[str, str]:
        return (self.venue.value, self.market_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "venue": self.venue.value,
            "market_id": self.market_id,
            "title": self.title,
            "category": self.category,
            "price_yes": self.price_yes,
            "price_no": self.price_no,
            "volume": self.volume,
            "last_updated": self.last_updated.isoformat(),
            "url": self.url,
        }


@dataclass(frozen=True)
class EntityBag:
    """Typed signals extracted from a market title."""
    years: FrozenSet[str] = frozenset()
    numbers: FrozenSet[str] = frozenset()
    party: Optional[str] = None     # 'republican', 'democrat' or None
    states: FrozenSet[str] = frozenset()
    time_frames: FrozenSet[str] = frozenset()
    names: FrozenSet[str] = frozenset()


class MatchResult(NamedTuple):
    """Similarity verdict for two listings."""
    score: int
    reason: str


@dataclass
class MatchCandidatePair:
    """Two listings from different venues with their similarity score."""

    market_a: MarketListing
    market_b: MarketListing
    score: int
    reason: str

    def __post_init__(self):
        assert self.market_a.venue != self.market_b.venue, (
            f"Pair must span two venues, got {self.market_a.venue.value} twice"
        )


@dataclass
class ArbitrageOpportunity:
    """Arbitrage opportunity between two markets.

    ``market_a`` is the YES leg and ``market_b`` the NO leg.
    """

    market_a: MarketListing
    market_b: MarketListing
    combined_cost: float    # Pre-fee cost of one YES + one NO contract
    potential_profit: float
    roi: float              # Percent
    match_score: int
    match_reason: str

    def __post_init__(self):
        assert self.combined_cost < 1.0, f"Invalid combined_cost: {self.combined_cost}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roi": self.roi,
            "potential_profit": self.potential_profit,
            "combined_cost": self.combined_cost,
            "match_score": self.match_score,
            "match_reason": self.match_reason,
            "market_a": self.market_a.to_dict(),
            "market_b": self.market_b.to_dict(),
        }

    def __str__(self):
        return (
            f"Arbitrage Opportunity (ROI: {self.roi:.2f}%)\n"
            f"  YES on {self.market_a.venue.value}: {self.market_a.title[:50]}\n"
            f"  NO on {self.market_b.venue.value}: {self.market_b.title[:50]}\n"
            f"  Match Score: {self.match_score} ({self.match_reason})\n"
            f"  Combined Cost: ${self.combined_cost:.4f}\n"
            f"  Profit: ${self.potential_profit:.4f}\n"
        )


@dataclass(frozen=True)
class FeeQuote:
    """Fee charged by a venue for one order."""
    venue: str
    price: float
    contracts: int
    order_type: OrderType
    amount: float


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of buying ``contracts`` paired legs at the given prices."""
    price_a: float
    price_b: float
    base_cost: float
    contracts: int = 0
    fee_a: float = 0.0
    fee_b: float = 0.0
    total_invested: float = 0.0
    payout: float = 0.0
    net_profit: float = 0.0
    roi: float = 0.0


@dataclass(frozen=True)
class BestRoi:
    """Better of the two complementary scenarios for a venue pair."""
    roi: float
    scenario: int   # 1 = YES on A + NO on B, 2 = NO on A + YES on B
    fee_a: float
    fee_b: float
    contracts: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roi": self.roi,
            "scenario": self.scenario,
            "fee_a": self.fee_a,
            "fee_b": self.fee_b,
            "contracts": self.contracts,
        }
