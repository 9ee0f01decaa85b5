"""
Curated event patterns for high-confidence cross-venue matches.

Each entry is a conjunction of regexes: a title carries the event label only
if every regex in the entry matches. Broad single-topic patterns (e.g. any
2028 presidential race) are not listed: they match unrelated races.
"""

import re
from typing import FrozenSet, NamedTuple, Pattern, Tuple


class EventPattern(NamedTuple):
    label: str
    patterns: Tuple[Pattern, ...]

    def matches(self, title: str) -> bool:
        return all(p.search(title) for p in self.patterns)


def _event(label: str, *patterns: str) -> EventPattern:
    return EventPattern(label, tuple(re.compile(p, re.IGNORECASE) for p in patterns))


EVENT_PATTERNS: Tuple[EventPattern, ...] = (
    # Economic indicators
    _event("recession-2025", r"recession", r"2025"),
    _event("recession-2026", r"recession", r"2026"),
    _event("fed-rate-cut", r"fed|federal reserve", r"rate", r"cut"),
    _event("fed-rate-hike", r"fed|federal reserve", r"rate", r"hike|raise"),

    # Crypto price targets, same target required
    _event("bitcoin-100k", r"bitcoin|btc", r"100.*k|100,?000"),
    _event("bitcoin-150k", r"bitcoin|btc", r"150.*k|150,?000"),
    _event("bitcoin-200k", r"bitcoin|btc", r"200.*k|200,?000"),

    # Policy
    _event("trump-tariffs-china", r"trump", r"tariff", r"china"),
    _event("trump-deportation-million", r"trump", r"deport", r"million"),
    _event("doge-employees", r"doge|musk", r"federal.*employee|employee.*federal"),

    # Sports, specific matchup or event
    _event("superbowl-chiefs", r"super bowl", r"chiefs"),
    _event("superbowl-eagles", r"super bowl", r"eagles"),
    _event("worldcup-usa-2026", r"world cup", r"usa|united states", r"2026"),

    # Stock market targets
    _event("sp500-6000", r"s&p|sp500", r"6000"),
    _event("sp500-7000", r"s&p|sp500", r"7000"),
)


def extract_events(title: str) -> FrozenSet[str]:
    """Return every event label whose patterns all match the title."""
    return frozenset(entry.label for entry in EVENT_PATTERNS if entry.matches(title))


def shared_event(title_a: str, title_b: str) -> str:
    """
    First event label (in table order) carried by both titles.

    Returns:
        The label, or an empty string when the titles share no event
    """
    events_b = extract_events(title_b)
    for entry in EVENT_PATTERNS:
        if entry.label in events_b and entry.matches(title_a):
            return entry.label
    return ""
