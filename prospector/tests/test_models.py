"""
Tests for Pydantic models.
"""
import pytest
from pydantic import ValidationError

from prospector.data import NICHES, get_niche
from prospector.models.listing import Listing
from prospector.models.niche import Niche
from prospector.models.pagination import PaginationState, PaginationStatus


class TestListingModel:
    """Tests for the Listing model."""

    def test_from_provider_with_complete_data(self):
        """Test Listing creation from a SerpApi local result."""
        listing = Listing.from_provider({
            "place_id": "ChIJ123",
            "data_id": "0x1:0x2",
            "title": "Refacciones Forestales del Norte",
            "type": "Tienda de refacciones",
            "address": "Av. Juárez 100, Durango",
            "phone": "+52 618 123 4567",
            "website": "https://forestales.mx",
            "rating": 4.7,
            "reviews": 152,
            "thumbnail": "https://img/1.jpg",
            "gps_coordinates": {"latitude": 24.02, "longitude": -104.65},
        })

        assert listing.key == "ChIJ123"
        assert listing.rating == 4.7
        assert listing.reviews == 152
        assert listing.has_photo is True
        assert listing.gps_coordinates.latitude == 24.02

    def test_rating_parsing_string(self):
        """Test rating parsing from a comma-decimal string."""
        assert Listing(rating="4,6").rating == 4.6

    def test_rating_clamped_to_five_stars(self):
        assert Listing(rating=7).rating == 5.0
        assert Listing(rating=-1).rating == 0.0

    def test_rating_unparseable_is_none(self):
        assert Listing(rating="n/a").rating is None

    def test_review_count_parsing(self):
        """Test review count parsing from provider formats."""
        assert Listing(reviews="(1,234)").reviews == 1234
        assert Listing(reviews=None).reviews == 0
        assert Listing(reviews=-5).reviews == 0

    def test_key_falls_back_to_search_id(self):
        listing = Listing(place_id_search="search-42", title="Taller")
        assert listing.key == "search-42"

    def test_key_absent_when_no_ids(self):
        assert Listing(title="Sin id").key is None

    def test_search_text_combines_fields(self):
        listing = Listing(
            title="Motosierras STIHL",
            type="Tienda",
            description="Venta y Reparación",
            address="Centro",
        )
        assert listing.search_text == "motosierras stihl tienda venta y reparación centro"

    def test_missing_fields_default_to_falsy(self):
        listing = Listing.from_provider({})
        assert listing.title == ""
        assert listing.reviews == 0
        assert listing.rating is None
        assert listing.has_photo is False

    def test_photos_from_dict_entries(self):
        listing = Listing(photos=[{"image": "https://img/a.jpg"}, {"other": 1}])
        assert listing.photos == ["https://img/a.jpg"]
        assert listing.has_photo is True


class TestNicheModels:
    """Tests for niche configuration."""

    def test_niche_is_immutable(self):
        niche = Niche(id="x", name="X", keywords=("a b",))
        with pytest.raises(ValidationError):
            niche.name = "Y"

    def test_get_niche_by_id(self):
        niche = get_niche("dealer_specialist")
        assert niche is not None
        assert "Refacciones para motosierras profesionales" in niche.keywords

    def test_get_unknown_niche(self):
        assert get_niche("unknown") is None
        assert get_niche(None) is None

    def test_all_niches_have_keywords(self):
        for niche in NICHES:
            assert niche.keywords
            assert niche.description


class TestPaginationModels:
    """Tests for pagination state."""

    def test_initial_state_is_idle(self):
        state = PaginationState()
        assert state.status == PaginationStatus.IDLE
        assert state.has_more is False
        assert state.page_size == 20
