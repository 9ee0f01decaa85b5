"""
Similarity scoring between two market listings.

Combines curated event patterns, entity-conflict vetoes and token-set
(Jaccard) overlap into a 0-100 confidence score plus a readable reason.
"""

import logging
import math
from typing import AbstractSet

from . import config
from .entities import extract_entities
from .events import shared_event
from .models import MarketListing, MatchResult
from .utils.text_processing import extract_tokens, jaccard_similarity

logger = logging.getLogger(__name__)

NO_MATCH = MatchResult(0, "")


def _conflicting(set_a: AbstractSet[str], set_b: AbstractSet[str]) -> bool:
    """Both sides are specific and share nothing."""
    return bool(set_a) and bool(set_b) and not (set_a & set_b)


def score_titles(title_a: str, title_b: str) -> MatchResult:
    """
    Score how likely two titles describe the same real-world question.

    Args:
        title_a: First market title
        title_b: Second market title

    Returns:
        MatchResult(score, reason); score 0 means "different events"
    """
    entities_a = extract_entities(title_a)
    entities_b = extract_entities(title_b)

    # Different years never describe the same question, shared event or not
    if _conflicting(entities_a.years, entities_b.years):
        return NO_MATCH

    # Method 1: curated event patterns
    event = shared_event(title_a, title_b)
    if event:
        return MatchResult(config.EVENT_MATCH_SCORE, event)

    # Republican vs Democrat, Ohio vs Texas, Q1 vs Q2
    if entities_a.party and entities_b.party and entities_a.party != entities_b.party:
        return NO_MATCH
    if _conflicting(entities_a.states, entities_b.states):
        return NO_MATCH
    if _conflicting(entities_a.time_frames, entities_b.time_frames):
        return NO_MATCH

    # Method 2: entity-anchored token overlap
    tokens_a = extract_tokens(title_a)
    tokens_b = extract_tokens(title_b)
    jaccard = jaccard_similarity(tokens_a, tokens_b)
    if jaccard < config.MIN_JACCARD:
        return NO_MATCH

    # Same wording, different price target
    if _conflicting(entities_a.numbers, entities_b.numbers):
        return NO_MATCH

    shared_names = sorted(entities_a.names & entities_b.names)

    score = math.floor(jaccard * 100 + 0.5)  # Half-up rounding
    if shared_names:
        score = min(config.MAX_SCORE, score + len(shared_names) * config.ENTITY_BOOST)
    if entities_a.time_frames & entities_b.time_frames:
        score = min(config.MAX_SCORE, score + config.TIME_FRAME_BOOST)

    if not shared_names and score < config.MIN_UNANCHORED_SCORE:
        return NO_MATCH

    if shared_names:
        reason = f"match: {', '.join(shared_names)}"
    else:
        common = sorted(tokens_a & tokens_b)[:config.MAX_REASON_TOKENS]
        reason = f"similar: {', '.join(common)}"

    return MatchResult(score, reason)


def score_similarity(listing_a: MarketListing, listing_b: MarketListing) -> MatchResult:
    """Score two listings by their titles (see ``score_titles``)."""
    result = score_titles(listing_a.title, listing_b.title)
    if result.score:
        logger.debug(
            "Scored %d (%s): %s <-> %s",
            result.score,
            result.reason,
            listing_a.title[:40],
            listing_b.title[:40],
        )
    return result
