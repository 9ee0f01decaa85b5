"""
Shared HTTP plumbing for venue collectors.
"""

import logging
import time
from typing import Any, Dict, List, Mapping, Optional

import requests

from .. import config
from ..models import MarketListing

logger = logging.getLogger(__name__)

JsonDict = Dict[str, Any]

# Worth another attempt: rate limits and transient server errors
RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class BaseCollector:
    """Session setup and retrying GET shared by the venue collectors."""

    venue_name = "venue"

    def __init__(self, timeout: int = config.REQUEST_TIMEOUT_SECONDS):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": config.USER_AGENT,
            "Accept": "application/json",
        })

    def _should_retry(self, error: requests.exceptions.RequestException, attempt: int) -> bool:
        if attempt >= config.RETRY_ATTEMPTS - 1:
            return False
        if isinstance(error, requests.exceptions.HTTPError):
            response = error.response
            return response is not None and response.status_code in RETRY_STATUS_CODES
        return True

    def _get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        GET a JSON document, backing off 2s, 4s, 8s... on rate limits,
        5xx responses and connection errors.

        Raises:
            requests.RequestException: Non-retryable error or retries exhausted
        """
        attempt = 0
        while True:
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()
            except requests.exceptions.RequestException as e:
                if not self._should_retry(e, attempt):
                    logger.error(f"{self.venue_name} request to {url} failed: {e}")
                    raise
                delay = config.RETRY_BACKOFF_BASE * (2 ** attempt)
                attempt += 1
                logger.warning(
                    f"{self.venue_name} request failed ({e}), retry "
                    f"{attempt}/{config.RETRY_ATTEMPTS - 1} in {delay:.0f}s"
                )
                time.sleep(delay)

    def fetch_active_markets(self, limit: Optional[int] = None) -> List[MarketListing]:
        """Listings currently open for trading; empty when the venue is unreachable."""
        raise NotImplementedError

    @staticmethod
    def _truncate(listings: List[MarketListing], limit: Optional[int]) -> List[MarketListing]:
        return listings[:limit] if limit else listings


def as_float(value: Any, default: float = 0.0) -> float:
    """Lenient float for numeric fields venues send as strings or nulls."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def cents_to_price(value: Any) -> Optional[float]:
    """Convert a 0-100 cent quote to a 0-1 price; missing or zero quotes give None."""
    if not value:
        return None
    return float(value) / 100.0

