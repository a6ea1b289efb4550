"""Place-search provider client."""

from .serpapi import SerpApiClient

__all__ = ["SerpApiClient"]
