"""
Unit tests for agents/AttractionAgent.py
"""
import pytest
from unittest.mock import MagicMock, patch

import requests

import AttractionAgent as aa


FSQ_PAYLOAD = {
    "results": [
        {
            "fsq_id": "abc",
            "name": "Louvre Museum",
            "location": {"formatted_address": "Rue de Rivoli, 75001 Paris"},
            "categories": [{"name": "Art Museum"}],
            "geocodes": {"main": {"latitude": 48.86, "longitude": 2.33}},
        },
        {"fsq_id": "noname", "name": ""},
    ]
}


def _resp(payload, ok=True):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = 200 if ok else 401
    resp.reason = "OK" if ok else "Unauthorized"
    resp.json.return_value = payload
    return resp


@pytest.fixture(autouse=True)
def clear_cache():
    aa._attraction_cache.clear()
    yield
    aa._attraction_cache.clear()


class TestFetchLocalAttractions:
    def test_no_key_returns_sample(self):
        with patch("AttractionAgent.requests.get") as mock_get:
            attractions, source = aa.fetch_local_attractions("Paris")
        mock_get.assert_not_called()
        assert source == "sample"
        assert attractions[0]["name"] == "Eiffel Tower"

    def test_foursquare_results_mapped(self):
        with patch("AttractionAgent.requests.get", return_value=_resp(FSQ_PAYLOAD)) as mock_get:
            attractions, source = aa.fetch_local_attractions("Paris", api_key="fsq")

        assert source == "foursquare"
        assert attractions == [{
            "name": "Louvre Museum",
            "address": "Rue de Rivoli, 75001 Paris",
            "category": "Art Museum",
            "latitude": 48.86,
            "longitude": 2.33,
            "fsq_id": "abc",
        }]
        assert mock_get.call_args.kwargs["headers"]["Authorization"] == "fsq"
        assert mock_get.call_args.kwargs["params"]["near"] == "Paris"

    def test_results_cached_per_destination_and_category(self):
        with patch("AttractionAgent.requests.get", return_value=_resp(FSQ_PAYLOAD)) as mock_get:
            aa.fetch_local_attractions("Paris", api_key="fsq")
            aa.fetch_local_attractions(" paris ", api_key="fsq")
            aa.fetch_local_attractions("Paris", api_key="fsq", category="restaurants")
        assert mock_get.call_count == 2

    def test_api_error_falls_back_to_sample(self):
        with patch("AttractionAgent.requests.get", return_value=_resp({}, ok=False)):
            attractions, source = aa.fetch_local_attractions("Tokyo", api_key="bad")
        assert source == "sample"
        assert attractions[0]["name"] == "Tokyo Skytree"

    def test_network_error_falls_back_to_sample(self):
        with patch("AttractionAgent.requests.get", side_effect=requests.ConnectionError("down")):
            _, source = aa.fetch_local_attractions("Paris", api_key="fsq")
        assert source == "sample"


class TestAttractionNames:
    def test_live_names(self):
        with patch("AttractionAgent.requests.get", return_value=_resp(FSQ_PAYLOAD)):
            assert aa.attraction_names("Paris", api_key="fsq") == ["Louvre Museum"]

    def test_sample_data_never_grounds_prompts(self):
        assert aa.attraction_names("Paris") == []
