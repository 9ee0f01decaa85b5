"""
Configuration module for the Arbitrage Scanner.

Contains API endpoints, collector limits, matching thresholds, index
vocabularies, fee constants and default parameters.
"""

from typing import List, Tuple

# API Base URLs
KALSHI_API_BASE = "https://api.elections.kalshi.com/trade-api/v2"
GAMMA_API_BASE = "https://gamma-api.polymarket.com"
PREDICTIT_API_URL = "https://www.predictit.org/api/marketdata/all/"

USER_AGENT = "ArbitrageScanner/1.0"
REQUEST_TIMEOUT_SECONDS = 30

# Pagination
KALSHI_PAGE_SIZE = 200
KALSHI_MAX_PAGES = 20
POLYMARKET_PAGE_SIZE = 100
POLYMARKET_MAX_PAGES = 250

# Rate limiting
KALSHI_PAGE_DELAY_SECONDS = 0.5
POLYMARKET_PAGE_DELAY_SECONDS = 0.05
RETRY_ATTEMPTS = 3  # Number of attempts for rate-limited requests
RETRY_BACKOFF_BASE = 2.0  # 2s, 4s, 8s

# Snapshot cache
CACHE_TTL_SECONDS = 5 * 60

# Similarity scoring
EVENT_MATCH_SCORE = 95
MIN_JACCARD = 0.25
ENTITY_BOOST = 15  # Per shared named entity
TIME_FRAME_BOOST = 10
MIN_UNANCHORED_SCORE = 60  # Without a shared named entity
MAX_SCORE = 100
MAX_REASON_TOKENS = 4

# Opportunity discovery
MIN_MATCH_SCORE = 60
ROI_TIE_TOLERANCE = 0.1

# Candidate index: compound topic-year keys
INDEX_TOPICS: Tuple[str, ...] = (
    "senate", "house", "president", "governor",
    "bitcoin", "btc", "ethereum",
    "recession", "fed",
    "super bowl", "nba", "nfl", "world cup", "olympics",
)
INDEX_YEARS: Tuple[str, ...] = ("2025", "2026", "2027", "2028")

# Candidate index: single named-entity keys (regex, whole word)
INDEX_ENTITY_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("trump", r"\btrump\b"),
    ("biden", r"\bbiden\b"),
    ("harris", r"\bharris\b"),
    ("desantis", r"\bdesantis\b"),
    ("newsom", r"\bnewsom\b"),
    ("musk", r"\bmusk\b"),
    ("vance", r"\bvance\b"),
    ("buttigieg", r"\bbuttigieg\b"),
    ("ocasio-cortez", r"\bocasio.?cortez\b"),
)

MAX_BUCKET_SIZE = 500  # Highest-volume listings are kept

# Fees
KALSHI_FEE_FACTOR = 0.07
PREDICTIT_PROFIT_FEE = 0.10
IBKR_FEE_PER_CONTRACT = 0.01

# Calculator / watchlist defaults
DEFAULT_INVESTMENT = 500.0
DEFAULT_ALERT_THRESHOLD = 3.0  # ROI percent
SEARCH_RESULT_LIMIT = 20

# CLI
DEFAULT_VENUES: List[str] = ["kalshi", "polymarket", "predictit"]
RESULTS_FILENAME = "arbitrage_results.json"
SUMMARY_TOP_N = 10

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
