"""
Entity extraction for market titles.

Turns a free-text title into an EntityBag of typed signals (years, numbers,
party, US states, time frames and known names). The similarity scorer uses
the bags to veto pairs that share vocabulary but describe different events,
e.g. the same candidate in two different years or states.
"""

import re
from functools import lru_cache
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Pattern, Tuple

from .models import EntityBag

_YEAR_PATTERN = re.compile(r'\b(202[4-9]|203[0-9])\b')
_NUMBER_PATTERN = re.compile(r'\b\d+(?:\.\d+)?%?k?\b')

_REPUBLICAN_PATTERN = re.compile(r'\b(?:republicans?|gop|rnc|r)\b')
_DEMOCRAT_PATTERN = re.compile(r'\b(?:democrat\w*|dems?|dnc|d)\b')

_QUARTER_PATTERN = re.compile(
    r'\b(?:q([1-4])|quarter\s*([1-4])|(first|second|third|fourth)\s*quarter)\b'
)
_QUARTER_ORDINALS = {'first': '1', 'second': '2', 'third': '3', 'fourth': '4'}
_MONTH_PATTERN = re.compile(
    r'\b(january|february|march|april|may|june|july|august|september'
    r'|october|november|december|jan|feb|mar|apr|jun|jul|aug|sep|sept'
    r'|oct|nov|dec)\b'
)

MONTH_CODES: Mapping[str, str] = MappingProxyType({
    'january': 'jan', 'february': 'feb', 'march': 'mar', 'april': 'apr',
    'may': 'may', 'june': 'jun', 'july': 'jul', 'august': 'aug',
    'september': 'sep', 'sept': 'sep', 'october': 'oct',
    'november': 'nov', 'december': 'dec',
})

STATE_VARIANTS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    'alabama': ('alabama', 'al'),
    'alaska': ('alaska', 'ak'),
    'arizona': ('arizona', 'az'),
    'arkansas': ('arkansas', 'ar'),
    'california': ('california', 'ca', 'calif'),
    'colorado': ('colorado', 'co', 'colo'),
    'connecticut': ('connecticut', 'ct', 'conn'),
    'delaware': ('delaware', 'de', 'del'),
    'florida': ('florida', 'fl', 'fla'),
    'georgia': ('georgia', 'ga'),
    'hawaii': ('hawaii', 'hi'),
    'idaho': ('idaho', 'id'),
    'illinois': ('illinois', 'il', 'ill'),
    'indiana': ('indiana', 'in', 'ind'),
    'iowa': ('iowa', 'ia'),
    'kansas': ('kansas', 'ks', 'kan'),
    'kentucky': ('kentucky', 'ky'),
    'louisiana': ('louisiana', 'la'),
    'maine': ('maine', 'me'),
    'maryland': ('maryland', 'md'),
    'massachusetts': ('massachusetts', 'ma', 'mass'),
    'michigan': ('michigan', 'mi', 'mich'),
    'minnesota': ('minnesota', 'mn', 'minn'),
    'mississippi': ('mississippi', 'ms', 'miss'),
    'missouri': ('missouri', 'mo'),
    'montana': ('montana', 'mt', 'mont'),
    'nebraska': ('nebraska', 'ne', 'neb'),
    'nevada': ('nevada', 'nv', 'nev'),
    'new hampshire': ('new hampshire', 'nh', 'n h'),
    'new jersey': ('new jersey', 'nj', 'n j'),
    'new mexico': ('new mexico', 'nm', 'n m'),
    'new york': ('new york', 'ny', 'n y'),
    'north carolina': ('north carolina', 'nc', 'n c'),
    'north dakota': ('north dakota', 'nd', 'n d'),
    'ohio': ('ohio', 'oh'),
    'oklahoma': ('oklahoma', 'ok', 'okla'),
    'oregon': ('oregon', 'or', 'ore'),
    'pennsylvania': ('pennsylvania', 'pa', 'penn'),
    'rhode island': ('rhode island', 'ri', 'r i'),
    'south carolina': ('south carolina', 'sc', 's c'),
    'south dakota': ('south dakota', 'sd', 's d'),
    'tennessee': ('tennessee', 'tn', 'tenn'),
    'texas': ('texas', 'tx', 'tex'),
    'utah': ('utah', 'ut'),
    'vermont': ('vermont', 'vt'),
    'virginia': ('virginia', 'va'),
    'washington': ('washington', 'wa', 'wash'),
    'west virginia': ('west virginia', 'wv', 'w va'),
    'wisconsin': ('wisconsin', 'wi', 'wis'),
    'wyoming': ('wyoming', 'wy', 'wyo'),
})

NAME_VARIANTS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    # Politicians and public figures
    'trump': ('trump', 'donald trump'),
    'biden': ('biden', 'joe biden'),
    'harris': ('harris', 'kamala harris', 'kamala'),
    'desantis': ('desantis', 'ron desantis'),
    'newsom': ('newsom', 'gavin newsom'),
    'musk': ('musk', 'elon musk', 'elon'),
    'vance': ('vance', 'jd vance'),
    'pence': ('pence', 'mike pence'),
    'haley': ('haley', 'nikki haley'),
    'ramaswamy': ('ramaswamy', 'vivek ramaswamy', 'vivek'),
    'cruz': ('cruz', 'ted cruz'),
    'rubio': ('rubio', 'marco rubio'),
    'warren': ('warren', 'elizabeth warren'),
    'sanders': ('sanders', 'bernie sanders', 'bernie'),
    'buttigieg': ('buttigieg', 'pete buttigieg', 'pete'),
    'ocasio-cortez': ('ocasio-cortez', 'aoc', 'alexandria ocasio-cortez'),
    # Cryptocurrencies
    'bitcoin': ('bitcoin', 'btc'),
    'ethereum': ('ethereum', 'eth'),
    'solana': ('solana', 'sol'),
    # Sports franchises
    'chiefs': ('chiefs', 'kansas city chiefs', 'kc chiefs'),
    'eagles': ('eagles', 'philadelphia eagles'),
    'bills': ('bills', 'buffalo bills'),
    'lions': ('lions', 'detroit lions'),
    'cowboys': ('cowboys', 'dallas cowboys'),
    'packers': ('packers', 'green bay packers'),
    '49ers': ('49ers', 'niners', 'san francisco 49ers'),
})


def _whole_word_pattern(variants: Tuple[str, ...]) -> Pattern:
    alternatives = '|'.join(re.escape(v) for v in variants)
    return re.compile(rf'\b(?:{alternatives})\b', re.IGNORECASE)


# One pattern per variant, longest first, so "west virginia" is consumed
# before "virginia" is tried
_STATE_PATTERNS: Tuple[Tuple[str, Pattern], ...] = tuple(
    (state, _whole_word_pattern((variant,)))
    for variant, state in sorted(
        ((v, s) for s, variants in STATE_VARIANTS.items() for v in variants),
        key=lambda pair: -len(pair[0]),
    )
)
_NAME_PATTERNS: Tuple[Tuple[str, Pattern], ...] = tuple(
    (name, _whole_word_pattern(variants)) for name, variants in NAME_VARIANTS.items()
)


def _normalize_number(token: str) -> str:
    if not token.endswith('k'):
        return token
    value = float(token[:-1]) * 1000
    if value.is_integer():
        return str(int(value))
    return str(value)


def extract_years(text: str) -> FrozenSet[str]:
    return frozenset(_YEAR_PATTERN.findall(text))


def extract_numbers(text: str) -> FrozenSet[str]:
    """Numbers longer than one character, with ``k`` suffixes expanded."""
    return frozenset(
        _normalize_number(token)
        for token in _NUMBER_PATTERN.findall(text)
        if len(token) > 1
    )


def extract_party(text: str) -> Optional[str]:
    """
    Detect the political party a title refers to.

    A title naming both parties is ambiguous (e.g. "Republican vs Democrat
    turnout") and yields None, the same as a title naming neither.
    """
    republican = _REPUBLICAN_PATTERN.search(text) is not None
    democrat = _DEMOCRAT_PATTERN.search(text) is not None
    if republican and not democrat:
        return 'republican'
    if democrat and not republican:
        return 'democrat'
    return None


def extract_states(text: str) -> FrozenSet[str]:
    """States named in the text; each matched span is blanked before shorter variants are tried."""
    states = set()
    for state, pattern in _STATE_PATTERNS:
        text, hits = pattern.subn(' ', text)
        if hits:
            states.add(state)
    return frozenset(states)


def extract_time_frames(text: str) -> FrozenSet[str]:
    """Quarter codes (``q1``..``q4``, whatever the phrasing) and 3-letter month codes."""
    frames = {
        f"q{digit or number or _QUARTER_ORDINALS[ordinal]}"
        for digit, number, ordinal in _QUARTER_PATTERN.findall(text)
    }
    frames.update(MONTH_CODES.get(m, m) for m in _MONTH_PATTERN.findall(text))
    return frozenset(frames)


def extract_names(text: str) -> FrozenSet[str]:
    return frozenset(name for name, pattern in _NAME_PATTERNS if pattern.search(text))


@lru_cache(maxsize=65536)
def extract_entities(title: str) -> EntityBag:
    """
    Parse a market title into an EntityBag.

    Never raises; categories that are absent from the title come back as
    empty sets (or None for the party).

    Args:
        title: Raw market title

    Returns:
        EntityBag with canonical values
    """
    text = (title or '').lower()
    return EntityBag(
        years=extract_years(text),
        numbers=extract_numbers(text),
        party=extract_party(text),
        states=extract_states(text),
        time_frames=extract_time_frames(text),
        names=extract_names(text),
    )
