#!/usr/bin/env python3
"""
FastAPI Web Server for the Arbitrage Scanner

Exposes market listings, ranked opportunities, fee quotes and the ROI
calculator as JSON endpoints.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from . import config
from .cache import MarketCache
from .fees import quote_fee, resolve_order_type
from .main import gather_all_data
from .matcher import find_opportunities, search_listings
from .models import MarketListing, Venue
from .roi import compare_order_types
from .services import COLLECTORS
from .watchlist import WatchlistItem, scan_watchlist

logger = logging.getLogger(__name__)

app = FastAPI(title="Arbitrage Scanner", version="1.0.0")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Snapshot of the last full collection
market_cache = MarketCache()


class CalculatorRequest(BaseModel):
    site_a_name: str
    site_a_yes_price: float = Field(..., gt=0, lt=1)
    site_b_name: str
    site_b_yes_price: float = Field(..., gt=0, lt=1)
    investment: float = Field(config.DEFAULT_INVESTMENT, gt=0)


class WatchlistItemRequest(BaseModel):
    market_name: str
    site_a_name: str
    site_b_name: str
    site_a_yes_price: float = Field(..., gt=0, le=100)
    site_b_yes_price: float = Field(..., gt=0, le=100)
    investment: float = Field(config.DEFAULT_INVESTMENT, gt=0)
    alert_threshold: float = config.DEFAULT_ALERT_THRESHOLD
    is_active: bool = True


async def get_listings(refresh: bool = False) -> List[MarketListing]:
    """Cached snapshot, collecting from every venue when stale or forced."""
    if not refresh:
        cached = market_cache.get()
        if cached is not None:
            return cached

    logger.info("Fetching fresh market data from all venues...")
    listings = await gather_all_data(tuple(COLLECTORS))
    market_cache.put(listings)
    return listings


@app.get("/api/markets")
async def markets(
    q: Optional[str] = None,
    venue: Optional[str] = None,
    limit: int = Query(config.SEARCH_RESULT_LIMIT, gt=0),
):
    """Listings, optionally fuzzy-filtered by title and venue."""
    listings = await get_listings()

    if venue:
        wanted = Venue.parse(venue)
        if wanted is None:
            raise HTTPException(status_code=400, detail=f"Unknown venue: {venue}")
        listings = [m for m in listings if m.venue == wanted]

    return [m.to_dict() for m in search_listings(listings, q or "", limit=limit)]


@app.get("/api/arbitrage-opportunities")
async def arbitrage_opportunities(
    q: Optional[str] = None,
    min_roi: float = Query(0.0, alias="minRoi"),
    order_type: Optional[str] = Query(None, alias="orderType"),
    refresh: bool = False,
):
    """Ranked cross-venue opportunities in the current snapshot."""
    try:
        listings = await get_listings(refresh)
        if q:
            needle = q.lower()
            listings = [m for m in listings if needle in m.title.lower()]

        opportunities = find_opportunities(
            listings,
            min_roi=min_roi,
            order_type=resolve_order_type(order_type) if order_type else None,
        )
    except Exception as e:
        logger.error(f"Failed to find arbitrage opportunities: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to find arbitrage opportunities")

    return [opp.to_dict() for opp in opportunities]


@app.get("/api/market-stats")
async def market_stats(refresh: bool = False):
    """Listing counts per venue in the cached snapshot."""
    if refresh or market_cache.is_stale():
        await get_listings(refresh=True)
    return market_cache.stats()


@app.get("/api/fees")
async def fees(
    venue: str,
    price: float = Query(..., ge=0, le=1),
    contracts: int = Query(1, ge=0),
    order_type: str = Query("Taker", alias="orderType"),
):
    """Fee a venue charges for an order; unknown venues quote zero."""
    quote = quote_fee(venue, price, contracts, order_type)
    return {
        "venue": quote.venue,
        "price": quote.price,
        "contracts": quote.contracts,
        "order_type": quote.order_type.value,
        "amount": quote.amount,
    }


@app.post("/api/calculator")
async def calculator(request: CalculatorRequest):
    """Best Maker and Taker ROI for a venue pair."""
    comparison = compare_order_types(
        request.site_a_name, request.site_a_yes_price,
        request.site_b_name, request.site_b_yes_price,
        request.investment,
    )
    return {
        "maker": comparison.maker.to_dict(),
        "taker": comparison.taker.to_dict(),
        "fee_savings": comparison.fee_savings,
    }


@app.post("/api/watchlist/scan")
async def watchlist_scan(items: List[WatchlistItemRequest]):
    """Re-price watchlist items and flag the ones above their threshold."""
    scans = scan_watchlist(WatchlistItem(**item.model_dump()) for item in items)
    return [scan.to_dict() for scan in scans]


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn

    from .utils.logging_setup import setup_logging

    setup_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)
