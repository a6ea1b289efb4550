"""
Tests for ranking and recomputation.
Order must depend only on store contents.
"""
import pytest

from prospector.models.listing import Listing
from prospector.models.classification import AIVerdict, MatchStatus, Verdict
from prospector.models.enrichment import EnrichmentRecord, PremiumRank
from prospector.models.scoring import SortMode
from prospector.pipeline.orchestrator import recompute
from prospector.pipeline.quality import score_quality
from prospector.pipeline.ranking import sort_listings
from prospector.models.scoring import RankedListing


def _record(score: int) -> EnrichmentRecord:
    return EnrichmentRecord(premium_score=score, premium_rank=PremiumRank.BRONZE)


class TestQualityMode:
    """Tests for quality ordering."""

    def test_descending_by_total(self):
        listings = [
            Listing(place_id="a", website="w"),
            Listing(place_id="b", rating=5.0, website="w"),
            Listing(place_id="c"),
        ]
        rows = recompute(listings, sort_mode=SortMode.QUALITY)
        assert [r.key for r in rows] == ["b", "a", "c"]

    def test_equal_totals_keep_arrival_order(self):
        listings = [
            Listing(place_id="first", website="w", phone="p"),
            Listing(place_id="top", rating=5.0),
            Listing(place_id="second", website="w", phone="p"),
            Listing(place_id="third", phone="p", website="w"),
        ]
        rows = recompute(listings, sort_mode="quality")
        assert [r.key for r in rows] == ["top", "first", "second", "third"]

    def test_sort_listings_directly(self):
        rows = [
            RankedListing(position=i, listing=l, quality=score_quality(l))
            for i, l in enumerate([Listing(place_id="x"), Listing(place_id="y", phone="p")])
        ]
        assert [r.key for r in sort_listings(rows, SortMode.QUALITY)] == ["y", "x"]


class TestRelevanceMode:
    """Tests for relevance ordering with an active niche."""

    @pytest.fixture
    def listings(self) -> list[Listing]:
        return [
            Listing(place_id="cafe", title="Cafetería Central", rating=5.0, website="w"),
            Listing(place_id="partial", title="Distribuidora Norte", type="Refacciones para motosierras"),
            Listing(place_id="best", title="Refacciones y Motosierras del Norte"),
            Listing(place_id="good", title="Motosierras Durango", type="Tienda de refacciones"),
        ]

    def test_without_niche_keeps_arrival_order(self, listings):
        rows = recompute(listings, niche=None, sort_mode=SortMode.RELEVANCE)

        assert [r.key for r in rows] == ["cafe", "partial", "best", "good"]
        assert all(r.classification is None for r in rows)
        assert all(r.quality is not None for r in rows)

    def test_buckets_then_lexical_score(self, listings, chainsaw_niche):
        rows = recompute(listings, niche=chainsaw_niche)

        assert [r.key for r in rows] == ["best", "good", "partial", "cafe"]
        assert [r.status for r in rows] == [
            MatchStatus.RELEVANT,
            MatchStatus.RELEVANT,
            MatchStatus.NEUTRAL,
            MatchStatus.DISCARD,
        ]

    def test_enriched_rows_first_within_bucket(self, listings, chainsaw_niche):
        rows = recompute(listings, enrichment_store={"good": _record(10)}, niche=chainsaw_niche)
        assert [r.key for r in rows] == ["good", "best", "partial", "cafe"]

    def test_enriched_rows_by_premium_score(self, listings, chainsaw_niche):
        enrichments = {"good": _record(10), "best": _record(65)}
        rows = recompute(listings, enrichment_store=enrichments, niche=chainsaw_niche)
        assert [r.key for r in rows][:2] == ["best", "good"]

    def test_enrichment_does_not_cross_buckets(self, listings, chainsaw_niche):
        rows = recompute(listings, enrichment_store={"cafe": _record(100)}, niche=chainsaw_niche)
        assert rows[-1].key == "cafe"
        assert rows[-1].enrichment.premium_score == 100

    def test_ai_verdict_moves_listing_between_buckets(self, listings, chainsaw_niche):
        verdicts = {
            "best": AIVerdict(verdict=Verdict.IRRELEVANT, reason="No es del giro"),
            "cafe": AIVerdict(verdict=Verdict.PROSPECT, reason="Vende equipo forestal"),
        }
        rows = recompute(listings, ai_store=verdicts, niche=chainsaw_niche)
        assert [r.key for r in rows] == ["good", "cafe", "partial", "best"]

    def test_order_independent_of_arrival_of_verdicts(self, listings, chainsaw_niche):
        first = {
            "partial": AIVerdict(verdict=Verdict.PROSPECT),
            "good": AIVerdict(verdict=Verdict.UNCERTAIN),
        }
        second = dict(reversed(list(first.items())))

        rows_a = recompute(listings, ai_store=first, niche=chainsaw_niche)
        rows_b = recompute(listings, ai_store=second, niche=chainsaw_niche)
        assert [r.key for r in rows_a] == [r.key for r in rows_b]

    def test_listing_without_id_is_still_ranked(self, chainsaw_niche):
        listings = [
            Listing(title="Refacciones y Motosierras sin id"),
            Listing(place_id="x", title="Cafetería"),
        ]
        rows = recompute(listings, niche=chainsaw_niche)

        assert rows[0].key is None
        assert rows[0].status == MatchStatus.RELEVANT
        assert rows[0].enrichment is None

    def test_recompute_does_not_mutate_listings(self, listings, chainsaw_niche):
        before = [l.model_dump() for l in listings]
        recompute(listings, niche=chainsaw_niche, sort_mode=SortMode.QUALITY)
        assert [l.model_dump() for l in listings] == before
