"""
Fee-aware ROI calculator for paired YES/NO purchases across two venues.

Contracts are bought in whole units, so the largest affordable count is
found by walking down from the fee-naive bound ``floor(investment / cost)``
until the fee-inclusive total fits the budget. This relies on every fee model
being non-decreasing in the contract count (see ``fees.py``).
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

from .fees import compute_fee, resolve_order_type
from .models import BestRoi, OrderType, ScenarioResult, Venue

logger = logging.getLogger(__name__)

VenueLike = Union[Venue, str]

# Float slack when comparing a total against the budget
_BUDGET_EPSILON = 1e-9


@dataclass(frozen=True)
class OrderTypeComparison:
    """Best ROI with Maker orders (gross) and Taker orders (net)."""
    maker: BestRoi
    taker: BestRoi

    @property
    def fee_savings(self) -> float:
        """ROI points gained by placing Maker instead of Taker orders."""
        return self.maker.roi - self.taker.roi


def _total_cost(
    venue_a: VenueLike, price_a: float,
    venue_b: VenueLike, price_b: float,
    base_cost: float, contracts: int, order_type: OrderType,
):
    fee_a = compute_fee(venue_a, price_a, contracts, order_type)
    fee_b = compute_fee(venue_b, price_b, contracts, order_type)
    return base_cost * contracts + fee_a + fee_b, fee_a, fee_b


def max_contracts(
    venue_a: VenueLike, price_a: float,
    venue_b: VenueLike, price_b: float,
    investment: float,
    order_type: Union[OrderType, str] = OrderType.TAKER,
) -> int:
    """
    Largest whole number of paired contracts affordable including fees.

    Returns:
        Contract count, 0 when no pair is affordable or the pair costs >= 1
    """
    base_cost = price_a + price_b
    if base_cost >= 1.0 or base_cost <= 0 or investment <= 0:
        return 0

    contracts = math.floor(investment / base_cost)
    while contracts > 0:
        total, _, _ = _total_cost(
            venue_a, price_a, venue_b, price_b, base_cost, contracts, order_type
        )
        if total <= investment + _BUDGET_EPSILON:
            break
        contracts -= 1
    return contracts


def scenario_roi(
    venue_a: VenueLike, price_a: float,
    venue_b: VenueLike, price_b: float,
    investment: float,
    order_type: Union[OrderType, str] = OrderType.TAKER,
) -> ScenarioResult:
    """
    ROI of buying one leg at ``price_a`` on venue A and one at ``price_b`` on B.

    Args:
        venue_a: Venue of the first leg
        price_a: Price paid for the first leg (YES or NO price)
        venue_b: Venue of the second leg
        price_b: Price paid for the second leg
        investment: Budget in dollars
        order_type: Maker or Taker

    Returns:
        ScenarioResult; roi is 0 when the pair costs >= 1, the budget is not
        positive or no whole contract fits the budget
    """
    base_cost = price_a + price_b
    empty = ScenarioResult(price_a=price_a, price_b=price_b, base_cost=base_cost)

    contracts = max_contracts(venue_a, price_a, venue_b, price_b, investment, order_type)
    if contracts <= 0:
        return empty

    total_invested, fee_a, fee_b = _total_cost(
        venue_a, price_a, venue_b, price_b, base_cost, contracts, order_type
    )
    payout = float(contracts)  # Each pair pays out $1
    net_profit = payout - total_invested

    return ScenarioResult(
        price_a=price_a,
        price_b=price_b,
        base_cost=base_cost,
        contracts=contracts,
        fee_a=fee_a,
        fee_b=fee_b,
        total_invested=total_invested,
        payout=payout,
        net_profit=net_profit,
        roi=net_profit / total_invested * 100,
    )


def best_roi(
    venue_a: VenueLike, yes_price_a: float,
    venue_b: VenueLike, yes_price_b: float,
    investment: float,
    order_type: Union[OrderType, str] = OrderType.TAKER,
) -> BestRoi:
    """
    Better of the two complementary scenarios for a venue pair.

    Scenario 1: Buy YES on A + Buy NO on B
    Scenario 2: Buy NO on A + Buy YES on B

    Args:
        venue_a: First venue
        yes_price_a: YES price on venue A
        venue_b: Second venue
        yes_price_b: YES price on venue B
        investment: Budget in dollars
        order_type: Maker or Taker

    Returns:
        BestRoi with the winning scenario (ties go to scenario 1) and its
        fee breakdown at the affordable contract count
    """
    order_type = resolve_order_type(order_type)
    scenario_1 = scenario_roi(
        venue_a, yes_price_a, venue_b, 1 - yes_price_b, investment, order_type
    )
    scenario_2 = scenario_roi(
        venue_a, 1 - yes_price_a, venue_b, yes_price_b, investment, order_type
    )

    best, number = (scenario_1, 1) if scenario_1.roi >= scenario_2.roi else (scenario_2, 2)

    logger.debug(
        "Best ROI %s/%s (%s): scenario %d, %.2f%% on %d contracts",
        getattr(venue_a, "value", venue_a),
        getattr(venue_b, "value", venue_b),
        order_type.value,
        number,
        best.roi,
        best.contracts,
    )

    return BestRoi(
        roi=best.roi,
        scenario=number,
        fee_a=best.fee_a,
        fee_b=best.fee_b,
        contracts=best.contracts,
    )


def compare_order_types(
    venue_a: VenueLike, yes_price_a: float,
    venue_b: VenueLike, yes_price_b: float,
    investment: float,
) -> OrderTypeComparison:
    """Evaluate ``best_roi`` with Maker and with Taker orders."""
    return OrderTypeComparison(
        maker=best_roi(venue_a, yes_price_a, venue_b, yes_price_b, investment, OrderType.MAKER),
        taker=best_roi(venue_a, yes_price_a, venue_b, yes_price_b, investment, OrderType.TAKER),
    )


def unit_roi(
    venue_a: VenueLike, price_a: float,
    venue_b: VenueLike, price_b: float,
    order_type: Optional[OrderType] = None,
) -> float:
    """
    ROI percent of a single paired contract.

    With ``order_type=None`` fees are ignored and the result is the gross
    price-only ROI ``(1 - cost) / cost * 100``.

    Returns:
        ROI percent, 0 when the pair costs >= 1 (before or after fees)
    """
    base_cost = price_a + price_b
    if base_cost >= 1.0 or base_cost <= 0:
        return 0.0
    total = base_cost
    if order_type is not None:
        total += compute_fee(venue_a, price_a, 1, order_type)
        total += compute_fee(venue_b, price_b, 1, order_type)
    if total >= 1.0:
        return 0.0
    return (1.0 - total) / total * 100
