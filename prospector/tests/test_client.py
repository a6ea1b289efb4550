"""
Tests for the SerpApi client using a mocked HTTP session.
"""
from unittest.mock import MagicMock

import pytest

from prospector.client.serpapi import SerpApiClient
from prospector.errors import ProviderError
from prospector.models.listing import Listing


def _session(payload: dict) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    session = MagicMock()
    session.get.return_value = response
    return session


class TestSerpApiClient:
    """Tests for SerpApiClient."""

    def test_build_query(self):
        assert SerpApiClient.build_query("motosierras", "Durango") == "motosierras en Durango"
        assert SerpApiClient.build_query("motosierras") == "motosierras"

    def test_search_places_parses_page(self):
        session = _session({
            "local_results": [
                {"place_id": "a", "title": "Motosierras Durango", "rating": 4.6, "reviews": 120},
                {"place_id": "b", "title": "Taller Forestal"},
                "basura",
            ],
            "serpapi_pagination": {"next_page_token": "tok"},
        })
        client = SerpApiClient(api_key="key", session=session)
        page = client.search_places("motosierras", "Durango")

        assert [l.key for l in page.listings] == ["a", "b"]
        assert page.listings[0].rating == 4.6
        assert page.next_page_token == "tok"

        params = session.get.call_args.kwargs["params"]
        assert params["q"] == "motosierras en Durango"
        assert params["engine"] == "google_maps"
        assert params["api_key"] == "key"

    def test_continuation_params_forwarded(self):
        session = _session({"local_results": []})
        client = SerpApiClient(api_key="key", session=session)
        page = client.search_places("motosierras", continuation={"start": 20})

        assert session.get.call_args.kwargs["params"]["start"] == 20
        assert page.listings == []
        assert page.next_page_token is None

    def test_error_payload_raises(self):
        session = _session({"error": "Invalid API key."})
        client = SerpApiClient(api_key="bad", session=session)
        with pytest.raises(ProviderError):
            client.search_places("motosierras")

    def test_missing_key_raises(self):
        session = _session({})
        client = SerpApiClient(api_key="", session=session)
        client.api_key = None
        with pytest.raises(ProviderError):
            client.search_places("motosierras")
        session.get.assert_not_called()

    def test_search_signals_query(self):
        session = _session({"ads": [], "organic_results": []})
        client = SerpApiClient(api_key="key", session=session)
        client.search_signals(Listing(place_id="a", title="Motosierras Durango", address="Av. 5 de Febrero"))

        params = session.get.call_args.kwargs["params"]
        assert params["engine"] == "google"
        assert params["q"] == "Motosierras Durango Av. 5 de Febrero"
