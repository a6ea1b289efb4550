"""
Quality score - intrinsic listing quality from the listing's own fields.
"""
import math

from ..models.listing import Listing
from ..models.scoring import QualityScore, QualityTier


MAX_RATING_SCORE = 40
MAX_REVIEW_SCORE = 20
WEBSITE_SCORE = 15
PHONE_SCORE = 15
PHOTO_SCORE = 10

TIER_THRESHOLDS = (
    (80, QualityTier.PREMIUM),
    (60, QualityTier.HIGH),
    (40, QualityTier.MEDIUM),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def quality_tier(total: int) -> QualityTier:
    for threshold, tier in TIER_THRESHOLDS:
        if total >= threshold:
            return tier
    return QualityTier.LOW


def score_quality(listing: Listing) -> QualityScore:
    """
    Score a listing 0-100.

    Rating (0-5) is worth up to 40 points, 8 per star. Reviews are
    logarithmic up to 20 points: 10 reviews = 5, 100 = 10, 1000 = 15,
    10000+ = 20. Website and phone are 15 each and a photo is 10.
    """
    rating = listing.rating or 0
    rating_score = min(_round_half_up(rating * 8), MAX_RATING_SCORE)

    reviews = listing.reviews or 0
    review_score = min(_round_half_up(math.log10(reviews + 1) * 5), MAX_REVIEW_SCORE)

    website_score = WEBSITE_SCORE if listing.website else 0
    phone_score = PHONE_SCORE if listing.phone else 0
    photo_score = PHOTO_SCORE if listing.has_photo else 0

    total = min(
        rating_score + review_score + website_score + phone_score + photo_score,
        100,
    )

    return QualityScore(
        rating_score=rating_score,
        review_score=review_score,
        website_score=website_score,
        phone_score=phone_score,
        photo_score=photo_score,
        total=total,
        tier=quality_tier(total),
    )
