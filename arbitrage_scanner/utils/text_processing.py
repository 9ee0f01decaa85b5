"""
Text processing utilities for market title normalization.
"""

import re
from typing import AbstractSet, FrozenSet, List, Pattern, Tuple

# Common words to ignore
STOP_WORDS: FrozenSet[str] = frozenset({
    'will', 'the', 'a', 'an', 'be', 'is', 'are', 'was', 'were', 'in', 'on',
    'at', 'to', 'for', 'of', 'by', 'with', 'or', 'and', 'more', 'than',
    'less', 'yes', 'no', 'win', 'who', 'what', 'when', 'where', 'how',
})

# Applied in order, on the lowercased title
_CANONICAL_TERMS: List[Tuple[Pattern, str]] = [
    (re.compile(r'\b(?:january|jan)\b'), 'jan'),
    (re.compile(r'\b(?:february|feb)\b'), 'feb'),
    (re.compile(r'\b(?:march|mar)\b'), 'mar'),
    (re.compile(r'\b(?:april|apr)\b'), 'apr'),
    (re.compile(r'\b(?:june|jun)\b'), 'jun'),
    (re.compile(r'\b(?:july|jul)\b'), 'jul'),
    (re.compile(r'\b(?:august|aug)\b'), 'aug'),
    (re.compile(r'\b(?:september|sept|sep)\b'), 'sep'),
    (re.compile(r'\b(?:october|oct)\b'), 'oct'),
    (re.compile(r'\b(?:november|nov)\b'), 'nov'),
    (re.compile(r'\b(?:december|dec)\b'), 'dec'),
    (re.compile(r'\b(?:republicans?|gop|rnc)\b'), 'republican'),
    (re.compile(r'\b(?:democratic|dems?|dnc)\b'), 'democratic'),
    (re.compile(r'\bmidterm elections?\b'), 'midterms'),
    (re.compile(r'(?:\bunited states\b|\bu\.s\.(?!\w)|\busa\b)'), 'us'),
]


def normalize_title(title: str) -> str:
    """
    Normalize market title for cross-venue matching.

    Steps:
    1. Convert to lowercase
    2. Canonicalize month names, party names, midterms and US variants
    3. Remove special characters (keep alphanumeric and spaces)
    4. Collapse whitespace and strip

    Args:
        title: Raw market title

    Returns:
        Normalized title string
    """
    normalized = title.lower()

    for pattern, replacement in _CANONICAL_TERMS:
        normalized = pattern.sub(replacement, normalized)

    normalized = re.sub(r'[^\w\s]', ' ', normalized)
    normalized = normalized.replace('_', ' ')
    normalized = re.sub(r'\s+', ' ', normalized)

    return normalized.strip()


def extract_tokens(title: str) -> FrozenSet[str]:
    """
    Extract meaningful tokens from a title.

    Args:
        title: Market title

    Returns:
        Set of normalized tokens longer than two characters, without stop words
    """
    words = normalize_title(title).split()
    return frozenset(w for w in words if len(w) > 2 and w not in STOP_WORDS)


def jaccard_similarity(set_a: AbstractSet[str], set_b: AbstractSet[str]) -> float:
    """Intersection size over union size, 0 when both sets are empty."""
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)
