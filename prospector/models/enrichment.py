"""
Enrichment models - digital presence signals and premium ranking.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PremiumRank(str, Enum):
    """Premium tier derived from the enrichment score."""
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    DIAMOND = "Diamond"


class EnrichmentSignals(BaseModel):
    """Raw signals gathered for one listing. Not a classification."""
    has_active_ads: bool = False
    ads_count: int = Field(default=0, ge=0)
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    rating: Optional[float] = None
    reviews: int = Field(default=0, ge=0)
    has_website: bool = False


class EnrichmentRecord(BaseModel):
    """
    Premium analysis of a listing. At most one exists per listing id in a
    session and it is never recomputed.
    """
    last_data_check: datetime = Field(default_factory=datetime.now)

    # Investment
    has_active_ads: bool = False
    ads_count: int = 0

    # Reviews
    owner_responds: bool = Field(
        default=False,
        description="Not gathered yet; always False"
    )

    # Social identity
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None

    # Calculated ranking
    premium_score: int = Field(ge=0, le=100)
    premium_rank: PremiumRank
    analysis_reason: list[str] = Field(default_factory=list)
