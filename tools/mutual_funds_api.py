"""
Mutual Funds API Integration
Paginated instrument list and AI enriched fund details from the PaisaWise backend
"""
import logging
import os
from datetime import datetime
from functools import lru_cache
from typing import Optional
from urllib.parse import quote

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from models.schemas import FundDetails, FundPage

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api"
CACHE_TTL_SECONDS = 5 * 60


class MutualFundsAPI:
    """
    Client for the fund endpoints

    GET /mf/instruments?page=&size=
    GET /mf/instruments/{symbol}/details
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        cache_ttl: float = CACHE_TTL_SECONDS
    ):
        self.base_url = (base_url or os.getenv("API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.client = client or httpx.Client(timeout=15.0)
        self.cache_ttl = cache_ttl
        self._cache: dict[tuple, tuple[datetime, object]] = {}

    def _get_json(self, endpoint: str, params: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.error("Mutual funds API request failed: %s %s", url, e)
            raise

    def _cached(self, key: tuple):
        entry = self._cache.get(key)
        if entry and (datetime.now() - entry[0]).total_seconds() < self.cache_ttl:
            return entry[1]
        return None

    def _store(self, key: tuple, value) -> None:
        self._cache[key] = (datetime.now(), value)

    def get_mutual_funds(self, page: int = 0, size: int = 20) -> FundPage:
        """Fetch one page of instruments"""
        if page < 0:
            raise ValueError("Page cannot be negative")
        if size <= 0:
            raise ValueError("Page size must be greater than 0")

        key = ("instruments", page, size)
        cached = self._cached(key)
        if cached is not None:
            return cached

        data = self._get_json("/mf/instruments", params={"page": page, "size": size})
        try:
            result = FundPage.model_validate(data)
        except ValidationError as e:
            logger.error("Unexpected instruments payload for page %s: %s", page, e)
            raise

        self._store(key, result)
        return result

    def get_fund_details(self, symbol: str) -> FundDetails:
        """Fetch overview plus AI insights for one fund"""
        symbol = (symbol or "").strip()
        if not symbol:
            raise ValueError("Trading symbol is required")

        key = ("details", symbol)
        cached = self._cached(key)
        if cached is not None:
            return cached

        data = self._get_json(f"/mf/instruments/{quote(symbol, safe='')}/details")
        try:
            result = FundDetails.model_validate(data)
        except ValidationError as e:
            logger.error("Unexpected details payload for %s: %s", symbol, e)
            raise

        self._store(key, result)
        return result

    def clear_cache(self) -> None:
        self._cache.clear()

    def close(self):
        """Close HTTP client"""
        self.client.close()

    def __enter__(self) -> "MutualFundsAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@lru_cache(maxsize=1)
def default_api() -> MutualFundsAPI:
    """Process-wide client so the response cache survives between calls"""
    return MutualFundsAPI()


# Convenience functions for tool usage
def list_mutual_funds(page: int = 0, size: int = 20) -> dict:
    """List mutual funds - wrapper for LangGraph tool"""
    try:
        return default_api().get_mutual_funds(page, size).model_dump()
    except (httpx.HTTPError, ValidationError, ValueError) as e:
        return {"error": f"Could not fetch mutual funds: {e}"}


def fetch_fund_details(symbol: str) -> dict:
    """Fund details - wrapper for LangGraph tool"""
    try:
        return default_api().get_fund_details(symbol).model_dump()
    except (httpx.HTTPError, ValidationError, ValueError) as e:
        return {"error": f"Could not fetch details for {symbol}: {e}"}
