"""
Enrichment ranker - turn digital presence signals into a premium rank.
"""
import logging
from typing import Any, Optional

from ..models.listing import Listing
from ..models.enrichment import EnrichmentSignals, EnrichmentRecord, PremiumRank


logger = logging.getLogger(__name__)


HIGH_RATING = 4.5
ACTIVE_REVIEW_COUNT = 40

# (bucket, cap)
BUCKET_CAPS = {
    "investment": 35,
    "social": 25,
    "reputation": 20,
    "activity": 20,
    "web": 10,
}

RANK_THRESHOLDS = (
    (80, PremiumRank.DIAMOND),
    (60, PremiumRank.GOLD),
    (30, PremiumRank.SILVER),
)

NO_SIGNAL_REASON = "Sin señales digitales claras detectadas"


def premium_rank(score: int) -> PremiumRank:
    for threshold, rank in RANK_THRESHOLDS:
        if score >= threshold:
            return rank
    return PremiumRank.BRONZE


def _factors(signals: EnrichmentSignals) -> list[tuple[str, int, str]]:
    """Factors in evaluation order as (bucket, points, reason)."""
    return [
        ("investment", 35 if signals.has_active_ads else 0,
         "Invierte en Publicidad (Google Ads)"),
        ("social", 15 if signals.facebook_url else 0,
         "Marca activa en Facebook"),
        ("social", 10 if signals.instagram_url else 0,
         "Presencia en Instagram"),
        ("reputation", 20 if (signals.rating or 0) >= HIGH_RATING else 0,
         "Reputación Excelente (Top 10%)"),
        ("activity", 20 if signals.reviews > ACTIVE_REVIEW_COUNT else 0,
         f"Flujo constante de clientes (+{ACTIVE_REVIEW_COUNT} reviews)"),
        ("web", 10 if signals.has_website else 0,
         "Infraestructura Web Propia"),
    ]


def rank_enrichment(signals: EnrichmentSignals) -> EnrichmentRecord:
    """
    Score enrichment signals and derive the premium rank.

    Args:
        signals: Signals gathered for one listing

    Returns:
        EnrichmentRecord with score, rank and one reason per contributing
        factor, in evaluation order
    """
    buckets = {name: 0 for name in BUCKET_CAPS}
    reasons = []

    for bucket, points, reason in _factors(signals):
        if not points:
            continue
        buckets[bucket] = min(buckets[bucket] + points, BUCKET_CAPS[bucket])
        reasons.append(reason)

    score = min(sum(buckets.values()), 100)

    if not reasons:
        reasons.append(NO_SIGNAL_REASON)

    return EnrichmentRecord(
        has_active_ads=signals.has_active_ads,
        ads_count=signals.ads_count,
        facebook_url=signals.facebook_url,
        instagram_url=signals.instagram_url,
        premium_score=score,
        premium_rank=premium_rank(score),
        analysis_reason=reasons,
    )


def extract_signals(
    listing: Listing,
    search_response: Optional[dict[str, Any]] = None,
) -> EnrichmentSignals:
    """
    Build enrichment signals from a web search response and the listing.

    The search response is a Google web-search payload (``ads`` and
    ``organic_results``). When it is missing, only the listing's own
    rating, reviews and website are used.
    """
    ads: list = []
    facebook_url = None
    instagram_url = None

    if search_response:
        ads = search_response.get("ads") or []
        for result in search_response.get("organic_results") or []:
            link = (result or {}).get("link") or ""
            if "facebook.com" in link and not facebook_url:
                facebook_url = link
            if "instagram.com" in link and not instagram_url:
                instagram_url = link

    # A Facebook page used as website counts as social identity
    if not facebook_url and listing.website and "facebook.com" in listing.website:
        facebook_url = listing.website

    return EnrichmentSignals(
        has_active_ads=len(ads) > 0,
        ads_count=len(ads),
        facebook_url=facebook_url,
        instagram_url=instagram_url,
        rating=listing.rating,
        reviews=listing.reviews,
        has_website=bool(listing.website),
    )
