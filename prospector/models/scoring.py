"""
Scoring models - intrinsic quality scores and ranked result rows.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .listing import Listing
from .classification import LexicalMatchResult, MergedClassification, MatchStatus
from .enrichment import EnrichmentRecord


class QualityTier(str, Enum):
    """Coarse tier derived from the quality total."""
    PREMIUM = "Premium"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class QualityScore(BaseModel):
    """Quality score breakdown computed from a listing's own fields."""
    rating_score: int = Field(ge=0, le=40)
    review_score: int = Field(ge=0, le=20)
    website_score: int = Field(ge=0, le=15)
    phone_score: int = Field(ge=0, le=15)
    photo_score: int = Field(ge=0, le=10)
    total: int = Field(ge=0, le=100)
    tier: QualityTier


class SortMode(str, Enum):
    """Ordering applied to the displayed collection."""
    RELEVANCE = "relevance"
    QUALITY = "quality"


class RankedListing(BaseModel):
    """A listing with everything derived for it, in display order."""
    position: int = Field(description="Arrival order within the search")
    listing: Listing
    quality: QualityScore

    # Niche classification (None when no niche is active and no AI verdict)
    lexical: Optional[LexicalMatchResult] = None
    classification: Optional[MergedClassification] = None

    # Premium analysis
    enrichment: Optional[EnrichmentRecord] = None

    @property
    def key(self) -> Optional[str]:
        return self.listing.key

    @property
    def status(self) -> Optional[MatchStatus]:
        """Merged status, if any classification exists."""
        if self.classification is None:
            return None
        return self.classification.status

    @property
    def is_enriched(self) -> bool:
        return self.enrichment is not None
