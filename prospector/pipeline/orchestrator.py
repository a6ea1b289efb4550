"""
Pipeline orchestrator - derive the ranked view and own the session state.
"""
import logging
from typing import Iterable, Optional, Union

import requests

from ..config import get_config
from ..errors import ProviderError
from ..models.listing import Listing
from ..models.niche import Niche
from ..models.classification import AIVerdict
from ..models.enrichment import EnrichmentRecord
from ..models.pagination import PageResult, PaginationState
from ..models.scoring import RankedListing, SortMode

from .vocabulary import build_vocabulary
from .matcher import match_listing
from .quality import score_quality
from .enrichment import extract_signals, rank_enrichment
from .merge import merge_verdict
from .ranking import sort_listings
from .pagination import advance_pagination, continuation_params
from .stores import ListingStore


logger = logging.getLogger(__name__)


def recompute(
    listings: list[Listing],
    ai_store: Union[ListingStore[AIVerdict], dict[str, AIVerdict], None] = None,
    enrichment_store: Union[ListingStore[EnrichmentRecord], dict[str, EnrichmentRecord], None] = None,
    niche: Optional[Niche] = None,
    sort_mode: Union[SortMode, str] = SortMode.RELEVANCE,
) -> list[RankedListing]:
    """
    Derive the full ranked view from the current store contents.

    Pure: the output depends only on the arguments, never on the order in
    which verdicts or enrichments arrived. Safe to call after every change.

    Args:
        listings: Listings in arrival order
        ai_store: AI verdicts by listing key
        enrichment_store: Enrichment records by listing key
        niche: Active niche, if any
        sort_mode: Display ordering

    Returns:
        Ranked rows in display order
    """
    ai_store = ai_store if ai_store is not None else {}
    enrichment_store = enrichment_store if enrichment_store is not None else {}

    vocabulary = build_vocabulary(niche) if niche else None
    negatives = niche.negative_keywords if niche else ()

    rows = []
    for position, listing in enumerate(listings):
        key = listing.key
        lexical = match_listing(listing, vocabulary, negatives) if vocabulary is not None else None

        ai_verdict = ai_store.get(key) if key is not None else None
        enrichment = enrichment_store.get(key) if key is not None else None

        rows.append(RankedListing(
            position=position,
            listing=listing,
            quality=score_quality(listing),
            lexical=lexical,
            classification=merge_verdict(lexical, ai_verdict, enrichment),
            enrichment=enrichment,
        ))

    return sort_listings(rows, sort_mode, niche)


class ProspectSession:
    """
    One search and everything learned about its results.

    Owns the listing collection, the AI verdict and enrichment stores, the
    selection set and the pagination cursor. Results of external calls are
    applied with the search generation they were requested under; results
    from an older search are discarded.
    """

    def __init__(
        self,
        search_client=None,
        classifier=None,
        niche: Optional[Niche] = None,
        sort_mode: Union[SortMode, str, None] = None,
    ):
        config = get_config()
        self.search_client = search_client
        self.classifier = classifier
        self.niche = niche
        self.sort_mode = SortMode(sort_mode or config.ranking.default_sort_mode)
        self.page_size = config.serpapi.page_size

        self.generation = 0
        self.query = ""
        self.location: Optional[str] = None
        self.listings: list[Listing] = []
        self.verdicts: ListingStore[AIVerdict] = ListingStore("ai_verdicts")
        self.enrichments: ListingStore[EnrichmentRecord] = ListingStore("enrichments", write_once=True)
        self.selected: set[str] = set()
        self.pagination = PaginationState(page_size=self.page_size)
        self._pending_enrichment: set[str] = set()

    # =========================================================================
    # Search and pagination
    # =========================================================================

    def reset(self, query: str = "", location: Optional[str] = None) -> int:
        """Start a new search generation, dropping all derived state."""
        self.generation += 1
        self.query = query
        self.location = location
        self.listings = []
        self.verdicts.clear()
        self.enrichments.clear()
        self.selected = set()
        self.pagination = PaginationState(page_size=self.page_size)
        self._pending_enrichment = set()
        return self.generation

    def search(self, query: str, location: Optional[str] = None) -> list[RankedListing]:
        """Run a new search and return the ranked first page."""
        generation = self.reset(query, location)
        page = self.search_client.search_places(query, location)
        self.apply_page(generation, page)
        return self.ranked()

    def load_more(self) -> list[RankedListing]:
        """
        Fetch the next page and append it.

        Raises:
            PaginationError: If there is nothing to continue from; raised
                before any request is made
        """
        params = continuation_params(self.pagination)
        generation = self.generation
        page = self.search_client.search_places(self.query, self.location, continuation=params)
        self.apply_page(generation, page)
        return self.ranked()

    @property
    def has_more(self) -> bool:
        return self.pagination.has_more

    def apply_page(self, generation: int, page: PageResult) -> bool:
        """Append a fetched page; returns False if it belongs to an old search."""
        if generation != self.generation:
            logger.warning(f"Discarding page from stale search generation {generation}")
            return False

        known = {l.key for l in self.listings if l.key is not None}
        added = 0
        for listing in page.listings:
            key = listing.key
            if key is None:
                logger.warning(f"Listing without id cannot receive AI or enrichment data: {listing.title!r}")
            elif key in known:
                continue
            else:
                known.add(key)
            self.listings.append(listing)
            added += 1

        self.pagination = advance_pagination(self.pagination, page)
        logger.info(f"Added {added} listings ({len(self.listings)} total)")
        return True

    # =========================================================================
    # AI verdicts
    # =========================================================================

    def _current_keys(self) -> set[str]:
        return {l.key for l in self.listings if l.key is not None}

    def apply_verdicts(self, generation: int, verdicts: dict[str, AIVerdict]) -> int:
        """
        Merge a verdict batch into the store.

        Returns:
            Number of verdicts applied; 0 for a stale batch
        """
        if generation != self.generation:
            logger.warning(f"Discarding {len(verdicts)} AI verdicts from stale search generation {generation}")
            return 0

        current = self._current_keys()
        accepted = {k: v for k, v in verdicts.items() if k in current}
        if len(accepted) < len(verdicts):
            logger.warning(f"Ignored {len(verdicts) - len(accepted)} AI verdicts for unknown listings")
        return self.verdicts.update(accepted)

    def classify(self, listings: Optional[list[Listing]] = None) -> int:
        """
        Run one AI classification batch for the active niche.

        By default the batch is the listings that have no verdict yet.
        A malformed response raises and leaves the stores untouched.
        """
        if self.niche is None:
            raise ValueError("An active niche is required for AI classification")

        generation = self.generation
        if listings is None:
            listings = [l for l in self.listings if l.key is not None and not self.verdicts.has(l.key)]
        if not listings:
            logger.info("No listings pending AI classification")
            return 0

        verdicts = self.classifier.classify(listings, self.niche)
        return self.apply_verdicts(generation, verdicts)

    # =========================================================================
    # Enrichment
    # =========================================================================

    def find(self, key: str) -> Optional[Listing]:
        return next((l for l in self.listings if l.key == key), None)

    def apply_enrichment(self, generation: int, key: str, record: EnrichmentRecord) -> bool:
        """Store an enrichment record unless stale or already present."""
        self._pending_enrichment.discard(key)
        if generation != self.generation:
            logger.warning(f"Discarding enrichment for {key} from stale search generation {generation}")
            return False
        if key not in self._current_keys():
            logger.warning(f"Discarding enrichment for unknown listing {key}")
            return False
        return self.enrichments.set(key, record)

    def enrich(self, key: str) -> Optional[EnrichmentRecord]:
        """
        Enrich one listing. Already enriched or in-flight ids are no-ops
        and return the existing record, if any.
        """
        if self.enrichments.has(key) or key in self._pending_enrichment:
            return self.enrichments.get(key)

        listing = self.find(key)
        if listing is None:
            logger.warning(f"Cannot enrich unknown listing {key}")
            return None

        generation = self.generation
        self._pending_enrichment.add(key)
        try:
            try:
                search_response = self.search_client.search_signals(listing)
            except (requests.RequestException, ProviderError) as e:
                logger.warning(f"Signal search failed for {key}, using local signals only: {e}")
                search_response = None
            record = rank_enrichment(extract_signals(listing, search_response))
        finally:
            self._pending_enrichment.discard(key)

        self.apply_enrichment(generation, key, record)
        return self.enrichments.get(key)

    # =========================================================================
    # Selection
    # =========================================================================

    def toggle_selection(self, key: str) -> bool:
        """Toggle a listing in the selection; returns the new state."""
        if key in self.selected:
            self.selected.discard(key)
            return False
        if key not in self._current_keys():
            return False
        self.selected.add(key)
        return True

    def select_all(self) -> None:
        """Select every trackable listing, or clear if all are selected."""
        keys = self._current_keys()
        self.selected = set() if self.selected == keys else keys

    def selected_listings(self) -> list[Listing]:
        return [l for l in self.listings if l.key in self.selected]

    # =========================================================================
    # Views
    # =========================================================================

    def set_niche(self, niche: Optional[Niche]) -> None:
        self.niche = niche

    def set_sort_mode(self, mode: Union[SortMode, str]) -> None:
        self.sort_mode = SortMode(mode)

    def ranked(self) -> list[RankedListing]:
        """Current display order, recomputed from the stores."""
        return recompute(
            self.listings,
            self.verdicts,
            self.enrichments,
            self.niche,
            self.sort_mode,
        )

    def top_keys(self, n: int, rows: Optional[Iterable[RankedListing]] = None) -> list[str]:
        """Keys of the first n trackable rows in display order."""
        rows = rows if rows is not None else self.ranked()
        return [r.key for r in rows if r.key is not None][:n]
