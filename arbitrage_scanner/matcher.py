"""
Matching engine for identifying the same market across venues.

Listings are bucketed by coarse keys (topic-year compounds and named
entities) so only plausible cross-venue pairs get scored, then every matched
pair is priced for both complementary YES/NO scenarios.
"""

import functools
import logging
import re
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Pattern, Sequence, Set, Tuple

from rapidfuzz import fuzz, process

from . import config
from .models import ArbitrageOpportunity, MarketListing, MatchCandidatePair, OrderType, Venue
from .roi import unit_roi
from .similarity import score_similarity

logger = logging.getLogger(__name__)

PairKey = FrozenSet[Tuple[str, str]]


class MarketMatcher:
    """Candidate indexing, similarity filtering and opportunity ranking."""

    def __init__(
        self,
        min_match_score: int = config.MIN_MATCH_SCORE,
        max_bucket_size: int = config.MAX_BUCKET_SIZE,
        topics: Sequence[str] = config.INDEX_TOPICS,
        years: Sequence[str] = config.INDEX_YEARS,
        entity_patterns: Sequence[Tuple[str, str]] = config.INDEX_ENTITY_PATTERNS,
    ):
        """
        Initialize market matcher.

        Args:
            min_match_score: Minimum similarity score (0-100) to consider a match
            max_bucket_size: Listings kept per index bucket, highest volume first
            topics: First half of the compound topic-year keys
            years: Second half of the compound topic-year keys
            entity_patterns: (key, regex) pairs for single-entity buckets
        """
        self.min_match_score = min_match_score
        self.max_bucket_size = max_bucket_size
        self.topics = tuple(topics)
        self.years = tuple(years)
        self.entity_patterns: Tuple[Tuple[str, Pattern], ...] = tuple(
            (name, re.compile(pattern, re.IGNORECASE)) for name, pattern in entity_patterns
        )

    def _index_keys(self, title: str) -> List[str]:
        """Bucket keys a title belongs to."""
        title = title.lower()
        keys = []

        # Compound keys: topic + year
        for topic in self.topics:
            if topic in title:
                keys.extend(f"{topic}-{year}" for year in self.years if year in title)

        # Entity keys, whole word
        keys.extend(name for name, pattern in self.entity_patterns if pattern.search(title))
        return keys

    def build_index(self, listings: Iterable[MarketListing]) -> Dict[str, List[MarketListing]]:
        """
        Build keyword buckets over the listing universe.

        Buckets holding a single venue are dropped; the rest are sorted by
        volume descending and truncated to ``max_bucket_size``.

        Returns:
            Mapping of bucket key to listings, in first-seen key order
        """
        buckets: Dict[str, List[MarketListing]] = defaultdict(list)
        for listing in listings:
            for key in self._index_keys(listing.title):
                buckets[key].append(listing)

        index: Dict[str, List[MarketListing]] = {}
        for key, members in buckets.items():
            if len({m.venue for m in members}) < 2:
                continue
            ranked = sorted(members, key=lambda m: m.volume or 0, reverse=True)
            index[key] = ranked[:self.max_bucket_size]
            logger.debug("Bucket %s: %d listings (%d before cap)", key, len(index[key]), len(members))

        return index

    def iter_candidate_pairs(
        self, listings: Iterable[MarketListing]
    ) -> Iterator[Tuple[MarketListing, MarketListing]]:
        """Yield each cross-venue pair sharing a bucket exactly once."""
        seen: Set[PairKey] = set()

        for members in self.build_index(listings).values():
            for i, market_a in enumerate(members):
                for market_b in members[i + 1:]:
                    if market_a.venue == market_b.venue:
                        continue

                    pair_key = frozenset((market_a.key, market_b.key))
                    if pair_key in seen:
                        continue
                    seen.add(pair_key)

                    yield market_a, market_b

    def find_matches(self, listings: Iterable[MarketListing]) -> List[MatchCandidatePair]:
        """
        Find listings on different venues that describe the same question.

        Args:
            listings: Snapshot of listings from all venues

        Returns:
            Candidate pairs scoring at least ``min_match_score``
        """
        listings = list(listings)
        logger.info("Matching %d listings across %d venues...",
                    len(listings), len({m.venue for m in listings}))

        matches = []
        compared = 0
        for market_a, market_b in self.iter_candidate_pairs(listings):
            compared += 1
            score, reason = score_similarity(market_a, market_b)
            if score <= 0 or score < self.min_match_score:
                continue
            matches.append(MatchCandidatePair(market_a, market_b, score, reason))

        logger.info("Compared %d candidate pairs, found %d matching pairs", compared, len(matches))
        return matches

    def calculate_arbitrage(
        self,
        matches: Iterable[MatchCandidatePair],
        min_roi: float = 0.0,
        order_type: Optional[OrderType] = None,
    ) -> List[ArbitrageOpportunity]:
        """
        Calculate arbitrage opportunities from matched pairs.

        Strategy: Buy Yes on one venue, No on the other.
        Combined cost must be < 1.0 to guarantee profit.

        Args:
            matches: Matched listing pairs
            min_roi: Minimum ROI percent to keep a scenario
            order_type: None for the price-only ROI; Maker or Taker to charge
                each venue's fee on one contract per leg

        Returns:
            List of ArbitrageOpportunity objects, ranked by ``rank_opportunities``
        """
        opportunities = []

        for pair in matches:
            a, b = pair.market_a, pair.market_b

            # Scenario 1: YES on A + NO on B; Scenario 2: YES on B + NO on A
            for yes_leg, no_leg in ((a, b), (b, a)):
                cost = yes_leg.price_yes + no_leg.price_no
                if cost >= 1.0:
                    continue

                roi = unit_roi(yes_leg.venue, yes_leg.price_yes,
                               no_leg.venue, no_leg.price_no, order_type)
                if roi <= 0 or roi < min_roi:
                    continue

                opportunity = ArbitrageOpportunity(
                    market_a=yes_leg,
                    market_b=no_leg,
                    combined_cost=cost,
                    potential_profit=1.0 - cost,
                    roi=roi,
                    match_score=pair.score,
                    match_reason=pair.reason,
                )
                opportunities.append(opportunity)
                logger.info(
                    "Arbitrage found! ROI=%.2f%%, Cost=$%.4f, YES on %s + NO on %s",
                    roi, cost, yes_leg.venue.value, no_leg.venue.value,
                )

        ranked = rank_opportunities(opportunities)
        logger.info("Found %d arbitrage opportunities", len(ranked))
        return ranked

    def find_opportunities(
        self,
        listings: Iterable[MarketListing],
        min_roi: float = 0.0,
        order_type: Optional[OrderType] = None,
    ) -> List[ArbitrageOpportunity]:
        """Match a listing snapshot and price every matched pair."""
        return self.calculate_arbitrage(self.find_matches(listings), min_roi, order_type)


def _compare_opportunities(a: ArbitrageOpportunity, b: ArbitrageOpportunity) -> int:
    if abs(a.roi - b.roi) > config.ROI_TIE_TOLERANCE:
        return -1 if a.roi > b.roi else 1
    return b.match_score - a.match_score


def rank_opportunities(opportunities: Iterable[ArbitrageOpportunity]) -> List[ArbitrageOpportunity]:
    """Sort by ROI descending; within 0.1 ROI points by match score descending."""
    return sorted(opportunities, key=functools.cmp_to_key(_compare_opportunities))


def find_opportunities(
    listings: Iterable[MarketListing],
    min_roi: float = 0.0,
    order_type: Optional[OrderType] = None,
) -> List[ArbitrageOpportunity]:
    """
    Ranked cross-venue arbitrage opportunities in a listing snapshot.

    Args:
        listings: Listings from every venue (one ingestion cycle)
        min_roi: Minimum ROI percent
        order_type: None (default) ranks on price-only ROI; pass Maker or
            Taker to rank on ROI after each venue's fees

    Returns:
        Opportunities sorted by ROI, then match score
    """
    return MarketMatcher().find_opportunities(listings, min_roi, order_type)


def search_listings(
    listings: Sequence[MarketListing],
    query: str,
    limit: int = config.SEARCH_RESULT_LIMIT,
    exclude_venue: Optional[Venue] = None,
    min_score: float = 60.0,
) -> List[MarketListing]:
    """
    Fuzzy title search, e.g. to pick the counterpart of a manual pair.

    Args:
        listings: Listings to search
        query: Free-text query; empty returns the highest-volume listings
        limit: Maximum number of results
        exclude_venue: Skip listings from this venue
        min_score: Minimum rapidfuzz partial ratio (0-100)

    Returns:
        Best-matching listings, best first
    """
    candidates = [m for m in listings if exclude_venue is None or m.venue != exclude_venue]
    query = (query or "").strip()
    if not query:
        return sorted(candidates, key=lambda m: m.volume or 0, reverse=True)[:limit]

    results = process.extract(
        query.lower(),
        [m.title.lower() for m in candidates],
        scorer=fuzz.partial_ratio,
        score_cutoff=min_score,
        limit=limit,
    )
    return [candidates[index] for _, _, index in results]
