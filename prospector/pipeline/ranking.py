"""
Ranking - deterministic ordering of scored listings.
"""
import logging
from typing import Optional, Union

from ..models.classification import MatchStatus
from ..models.niche import Niche
from ..models.scoring import RankedListing, SortMode


logger = logging.getLogger(__name__)


BUCKET_ORDER = {
    MatchStatus.RELEVANT: 0,
    MatchStatus.NEUTRAL: 1,
    MatchStatus.DISCARD: 2,
}
UNCLASSIFIED_BUCKET = BUCKET_ORDER[MatchStatus.NEUTRAL]


def _quality_key(row: RankedListing) -> tuple:
    return (-row.quality.total, row.position)


def _relevance_key(row: RankedListing) -> tuple:
    status = row.status
    bucket = BUCKET_ORDER.get(status, UNCLASSIFIED_BUCKET) if status else UNCLASSIFIED_BUCKET

    if row.is_enriched:
        enriched_rank = 0
        strength = row.enrichment.premium_score
    else:
        enriched_rank = 1
        strength = row.lexical.score if row.lexical else 0

    return (bucket, enriched_rank, -strength, row.position)


def sort_listings(
    rows: list[RankedListing],
    mode: Union[SortMode, str] = SortMode.RELEVANCE,
    niche: Optional[Niche] = None,
) -> list[RankedListing]:
    """
    Order rows for display.

    Quality mode sorts by quality total. Relevance mode groups by
    classification bucket, puts enriched rows first within a bucket and
    then sorts by premium score (enriched) or lexical score. Without an
    active niche, relevance mode keeps arrival order. Ties always fall
    back to arrival order.

    Args:
        rows: Scored rows in any order
        mode: Sort mode
        niche: Active niche, if any

    Returns:
        New list in display order
    """
    mode = SortMode(mode)

    if mode == SortMode.QUALITY:
        return sorted(rows, key=_quality_key)

    if niche is None:
        return sorted(rows, key=lambda r: r.position)

    return sorted(rows, key=_relevance_key)
