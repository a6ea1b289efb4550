"""Pipeline modules for qualification and ranking."""

from .vocabulary import build_vocabulary
from .matcher import LexicalMatcher, match_listing
from .quality import score_quality
from .enrichment import rank_enrichment, extract_signals
from .merge import merge_verdict
from .ranking import sort_listings
from .pagination import advance_pagination, continuation_params
from .stores import ListingStore
from .orchestrator import recompute, ProspectSession

__all__ = [
    "build_vocabulary",
    "LexicalMatcher",
    "match_listing",
    "score_quality",
    "rank_enrichment",
    "extract_signals",
    "merge_verdict",
    "sort_listings",
    "advance_pagination",
    "continuation_params",
    "ListingStore",
    "recompute",
    "ProspectSession",
]
