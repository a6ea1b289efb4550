"""Static niche configuration."""

from .niches import NICHES, get_niche

__all__ = ["NICHES", "get_niche"]
