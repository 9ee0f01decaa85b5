"""
Command line scan: collect listings from every selected venue concurrently,
match the same question across venues, price the complementary YES/NO
purchases, then print the best opportunities and save them as JSON.

Usage:
    python -m arbitrage_scanner --min-roi 1.0 --output results.json
"""

import argparse
import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from . import config
from .matcher import find_opportunities
from .models import ArbitrageOpportunity, MarketListing, OrderType, Venue
from .services import COLLECTORS
from .utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def collect_venue(venue: Venue, limit: Optional[int] = None) -> List[MarketListing]:
    """Run one blocking collector in the default executor."""
    loop = asyncio.get_running_loop()
    collector = COLLECTORS[venue]()
    return await loop.run_in_executor(None, collector.fetch_active_markets, limit)


async def gather_all_data(
    venues: Sequence[Venue] = tuple(COLLECTORS),
    limit: Optional[int] = None,
) -> List[MarketListing]:
    """
    Gather listings from the given venues concurrently.

    A venue whose collector fails contributes no listings; the others are
    still returned.

    Args:
        venues: Venues to collect from
        limit: Maximum listings per venue (None = all)

    Returns:
        Combined listing snapshot
    """
    logger.info("Starting data collection from %d venues...", len(venues))

    results = await asyncio.gather(
        *(collect_venue(venue, limit) for venue in venues),
        return_exceptions=True,
    )

    listings: List[MarketListing] = []
    for venue, result in zip(venues, results):
        if isinstance(result, Exception):
            logger.error(f"{venue.value} collection failed: {result}")
            continue
        if not result:
            logger.warning(f"No {venue.value} data collected")
        listings.extend(result)

    logger.info("Collected %d listings", len(listings))
    return listings


def save_results(opportunities: List[ArbitrageOpportunity], filename: str = config.RESULTS_FILENAME):
    """Write opportunities, stamped with the save time, as a JSON list."""
    timestamp = datetime.now(timezone.utc).isoformat()
    results = [dict(opp.to_dict(), timestamp=timestamp) for opp in opportunities]

    with open(filename, 'w') as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {filename}")


def print_summary(opportunities: List[ArbitrageOpportunity], top_n: int = config.SUMMARY_TOP_N):
    """Print the top opportunities, YES leg first."""
    print("\n" + "=" * 80)
    print("CROSS-VENUE ARBITRAGE SCAN")
    print("=" * 80)

    if not opportunities:
        print("\nNo arbitrage opportunities found.")
        return

    print(f"\n{len(opportunities)} opportunities across matched venue pairs\n")

    for i, opp in enumerate(opportunities[:top_n], 1):
        print(f"\n[{i}] {opp.match_reason}")
        print(f"ROI: {opp.roi:.2f}%")
        print(f"Profit per pair: ${opp.potential_profit:.4f}")
        print(f"Combined Cost: ${opp.combined_cost:.4f}")
        print(f"Match Score: {opp.match_score}/100")
        for side, listing in (("YES", opp.market_a), ("NO", opp.market_b)):
            print(f"\nBuy {side} on {listing.venue.value}:")
            print(f"  Title: {listing.title[:60]}")
            print(f"  YES: ${listing.price_yes:.4f} | NO: ${listing.price_no:.4f}")
            print(f"  URL: {listing.url}")

    if len(opportunities) > top_n:
        print(f"\n... and {len(opportunities) - top_n} more opportunities")

    print("\n" + "=" * 80)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scan prediction market venues for cross-venue arbitrage"
    )
    parser.add_argument(
        "--venues",
        nargs="+",
        default=config.DEFAULT_VENUES,
        help=f"Venues to scan (default: {' '.join(config.DEFAULT_VENUES)})",
    )
    parser.add_argument(
        "--min-roi",
        type=float,
        default=0.0,
        help="Minimum ROI percent to report (default: 0)",
    )
    parser.add_argument(
        "--order-type",
        choices=[o.value.lower() for o in OrderType],
        default=None,
        help="Rank on ROI after fees for this order type (default: price-only ROI)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum listings per venue (default: all)",
    )
    parser.add_argument(
        "--output",
        default=config.RESULTS_FILENAME,
        help=f"JSON output file (default: {config.RESULTS_FILENAME})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def resolve_venues(names: Sequence[str]) -> List[Venue]:
    """Collectable venues among ``names``; unknown names are logged and skipped."""
    venues = []
    for name in names:
        venue = Venue.parse(name)
        if venue is None or venue not in COLLECTORS:
            logger.warning(f"Skipping unsupported venue: {name}")
            continue
        if venue not in venues:
            venues.append(venue)
    return venues


async def run(args: argparse.Namespace) -> List[ArbitrageOpportunity]:
    """Collect, match, report."""
    venues = resolve_venues(args.venues)
    if len(venues) < 2:
        logger.error("At least two venues are required for cross-venue arbitrage")
        return []

    listings = await gather_all_data(venues, limit=args.limit)

    order_type = OrderType(args.order_type.capitalize()) if args.order_type else None
    opportunities = find_opportunities(listings, min_roi=args.min_roi, order_type=order_type)

    print_summary(opportunities)
    if opportunities:
        save_results(opportunities, args.output)

    return opportunities


def main(argv: Optional[Sequence[str]] = None):
    """Main execution function."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        asyncio.run(run(args))
        logger.info("Scan complete")
    except Exception as e:
        logger.error(f"Scan failed: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
