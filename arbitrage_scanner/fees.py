"""
Per-venue fee models.

Each venue has its own fee schedule:
  Kalshi:          0.07 * P * (1 - P) * C, Taker orders only
  PredictIt:       10% of per-contract profit, (1 - P) * C * 0.10
  IBKR ForecastEx: $0.01 per contract, any price or order type
  Polymarket:      effectively zero for event markets
where P is the execution price (0 to 1) and C the number of contracts.

Every model must be non-decreasing in the contract count: the ROI search in
``roi.py`` walks the count down from a fee-naive upper bound and stops at the
first affordable value, which is only the true maximum under that condition.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Protocol, Union, runtime_checkable

from . import config
from .models import FeeQuote, OrderType, Venue

logger = logging.getLogger(__name__)


@runtime_checkable
class FeeModel(Protocol):
    """Minimal interface for a venue's fee model."""

    @property
    def venue(self) -> Venue:
        ...

    def fee(self, price: float, contracts: int, order_type: OrderType) -> float:
        """Total fee in dollars for ``contracts`` contracts at ``price``."""
        ...


@dataclass(frozen=True)
class KalshiFeeModel:
    """Sliding-scale taker fee, highest at P=0.50 (1.75 cents per contract)."""

    factor: float = config.KALSHI_FEE_FACTOR

    @property
    def venue(self) -> Venue:
        return Venue.KALSHI

    def fee(self, price: float, contracts: int, order_type: OrderType) -> float:
        if order_type == OrderType.MAKER:
            return 0.0
        return self.factor * price * (1 - price) * contracts


@dataclass(frozen=True)
class PredictItFeeModel:
    """Cut of the winnings: a share of (1 - P) on every contract."""

    profit_share: float = config.PREDICTIT_PROFIT_FEE

    @property
    def venue(self) -> Venue:
        return Venue.PREDICTIT

    def fee(self, price: float, contracts: int, order_type: OrderType) -> float:
        return (1.0 - price) * contracts * self.profit_share


@dataclass(frozen=True)
class IbkrFeeModel:
    """Flat exchange fee per contract."""

    per_contract: float = config.IBKR_FEE_PER_CONTRACT

    @property
    def venue(self) -> Venue:
        return Venue.IBKR

    def fee(self, price: float, contracts: int, order_type: OrderType) -> float:
        return self.per_contract * contracts


@dataclass(frozen=True)
class PolymarketFeeModel:
    """Event markets trade without a fee; sub-cent taker charges are ignored."""

    @property
    def venue(self) -> Venue:
        return Venue.POLYMARKET

    def fee(self, price: float, contracts: int, order_type: OrderType) -> float:
        return 0.0


FEE_MODELS: Mapping[Venue, FeeModel] = MappingProxyType({
    Venue.KALSHI: KalshiFeeModel(),
    Venue.POLYMARKET: PolymarketFeeModel(),
    Venue.PREDICTIT: PredictItFeeModel(),
    Venue.IBKR: IbkrFeeModel(),
})


def resolve_order_type(order_type: Union[OrderType, str]) -> OrderType:
    """Map "maker"/"Maker" to MAKER, anything else to TAKER."""
    if isinstance(order_type, OrderType):
        return order_type
    if isinstance(order_type, str) and order_type.strip().lower() == "maker":
        return OrderType.MAKER
    return OrderType.TAKER


def compute_fee(
    venue: Union[Venue, str],
    price: float,
    contracts: int,
    order_type: Union[OrderType, str] = OrderType.TAKER,
) -> float:
    """
    Compute the fee a venue charges for an order.

    Args:
        venue: Venue enum or display name ("Kalshi", "ibkr", ...)
        price: Execution price in dollars (0-1)
        contracts: Number of contracts
        order_type: Maker or Taker (strings accepted, unknown -> Taker)

    Returns:
        Fee in dollars; 0 for unknown venues
    """
    resolved = Venue.parse(venue)
    if resolved is None:
        logger.debug("No fee model for venue %r, assuming zero fee", venue)
        return 0.0
    return FEE_MODELS[resolved].fee(price, contracts, resolve_order_type(order_type))


def quote_fee(
    venue: Union[Venue, str],
    price: float,
    contracts: int,
    order_type: Union[OrderType, str] = OrderType.TAKER,
) -> FeeQuote:
    """Same as ``compute_fee`` but returns the inputs alongside the amount."""
    resolved = Venue.parse(venue)
    return FeeQuote(
        venue=resolved.value if resolved else str(venue),
        price=price,
        contracts=contracts,
        order_type=resolve_order_type(order_type),
        amount=compute_fee(venue, price, contracts, order_type),
    )
