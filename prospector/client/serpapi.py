"""
SerpApi client with retry logic and normalization.
"""
import logging
from typing import Any, Optional

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from ..config import get_config
from ..errors import ProviderError
from ..models.listing import Listing
from ..models.pagination import PageResult


logger = logging.getLogger(__name__)


class SerpApiClient:
    """
    Wrapper around the SerpApi HTTP endpoint.
    Returns Listing models instead of raw dicts.
    """

    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None):
        config = get_config().serpapi
        self.api_key = api_key or config.api_key
        self.base_url = config.base_url
        self.engine = config.engine
        self.timeout = config.timeout
        self.signal_results = config.signal_results
        self.session = session or requests.Session()

        if not self.api_key:
            logger.warning("No SerpApi key configured")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
        before_sleep=lambda retry_state: logger.warning(
            f"Retry attempt {retry_state.attempt_number}"
        ),
    )
    def _get(self, params: dict[str, Any]) -> dict[str, Any]:
        """Fetch one response from SerpApi."""
        if not self.api_key:
            raise ProviderError("SerpApi key not configured (SERPAPI_KEY)")

        response = self.session.get(
            self.base_url,
            params={**params, "api_key": self.api_key},
            timeout=self.timeout,
        )
        data = response.json()

        if isinstance(data, dict) and data.get("error"):
            logger.error(f"SerpApi error: {data['error']}")
            raise ProviderError(data["error"])

        response.raise_for_status()
        return data

    @staticmethod
    def build_query(query: str, location: Optional[str] = None) -> str:
        """Combine query and location, e.g. "refacciones motosierra en Durango"."""
        return f"{query} en {location}" if location else query

    def search_places(
        self,
        query: str,
        location: Optional[str] = None,
        continuation: Optional[dict[str, Any]] = None,
    ) -> PageResult:
        """
        Search Google Maps and return one page of listings.

        Args:
            query: Search term
            location: Optional place name appended to the query
            continuation: Either {"next_page_token": ...} or {"start": ...}

        Returns:
            PageResult with listings and the provider's continuation token
        """
        params: dict[str, Any] = {
            "engine": self.engine,
            "type": "search",
            "q": self.build_query(query, location),
        }
        if continuation:
            params.update(continuation)

        logger.info(f"Searching for: {params['q']}")
        data = self._get(params)

        listings = []
        for raw in data.get("local_results") or []:
            listing = self._normalize_raw_listing(raw)
            if listing is not None:
                listings.append(listing)

        token = (data.get("serpapi_pagination") or {}).get("next_page_token")
        logger.info(f"Page returned {len(listings)} listings (token: {bool(token)})")
        return PageResult(listings=listings, next_page_token=token)

    def search_signals(self, listing: Listing) -> dict[str, Any]:
        """Web-search a business by name and address for enrichment signals."""
        params = {
            "engine": "google",
            "q": f"{listing.title} {listing.address or ''}".strip(),
            "num": self.signal_results,
        }
        return self._get(params)

    def _normalize_raw_listing(self, raw: Any) -> Optional[Listing]:
        """Normalize a raw local result to a Listing model."""
        if not isinstance(raw, dict):
            return None
        try:
            return Listing.from_provider(raw)
        except ValueError as e:
            logger.warning(f"Failed to normalize listing: {e}")
            return None
