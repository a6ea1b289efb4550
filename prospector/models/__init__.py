"""
Pydantic models for Prospector.
All data contracts are defined here for strict validation.
"""

from .listing import Listing, GpsCoordinates
from .niche import Niche, Vocabulary
from .enrichment import EnrichmentSignals, EnrichmentRecord, PremiumRank
from .classification import (
    MatchStatus,
    Verdict,
    ClassificationSource,
    LexicalMatchResult,
    AIVerdict,
    MergedClassification,
)
from .scoring import QualityScore, QualityTier, SortMode, RankedListing
from .pagination import PaginationStatus, PaginationState, PageResult

__all__ = [
    # Listing
    "Listing",
    "GpsCoordinates",
    # Niche
    "Niche",
    "Vocabulary",
    # Enrichment
    "EnrichmentSignals",
    "EnrichmentRecord",
    "PremiumRank",
    # Classification
    "MatchStatus",
    "Verdict",
    "ClassificationSource",
    "LexicalMatchResult",
    "AIVerdict",
    "MergedClassification",
    # Scoring
    "QualityScore",
    "QualityTier",
    "SortMode",
    "RankedListing",
    # Pagination
    "PaginationStatus",
    "PaginationState",
    "PageResult",
]
