"""
Unit tests for agents/EnrichAgent.py

All HTTP lookups are mocked.
"""
import random
from datetime import date
from unittest.mock import MagicMock, patch

import requests

import EnrichAgent as ea
from Itinerary import Activity, Day, Itinerary, SourceTag, TimeOfDay


def _ok(payload):
    resp = MagicMock()
    resp.ok = True
    resp.json.return_value = payload
    return resp


def _itinerary(*names, preferences=None):
    activities = [
        Activity(name=n, time_of_day=ea.TimeOfDay.MORNING, order_index=i)
        for i, n in enumerate(names)
    ]
    return Itinerary(
        destination="Paris",
        start_date=date(2024, 5, 1),
        duration=1,
        days=[Day(day_number=1, date=date(2024, 5, 1), activities=activities)],
        preferences=preferences or [],
        source_tag=SourceTag.PROVIDER_A,
    )


_NO_LOOKUPS = ea.Lookups(place={"location": "", "address": ""})


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

class TestFetchPlaceInfo:
    def test_parses_first_result(self):
        payload = [{"display_name": "Louvre, Rue de Rivoli, Paris", "lat": "48.86", "lon": "2.33"}]
        with patch("EnrichAgent.requests.get", return_value=_ok(payload)):
            info = ea.fetch_place_info("Louvre Paris")
        assert info["location"] == "Louvre"
        assert info["address"] == "Louvre, Rue de Rivoli, Paris"

    def test_network_error_degrades(self):
        with patch("EnrichAgent.requests.get", side_effect=requests.ConnectionError("down")):
            assert ea.fetch_place_info("Louvre Paris") == {"location": "Louvre Paris", "address": ""}


class TestFetchWikiSummary:
    def test_returns_extract(self):
        with patch("EnrichAgent.requests.get", return_value=_ok({"extract": "A museum."})) as mock_get:
            assert ea.fetch_wiki_summary("Louvre Museum") == "A museum."
        assert mock_get.call_args.args[0].endswith("Louvre_Museum")

    def test_timeout_degrades(self):
        with patch("EnrichAgent.requests.get", side_effect=requests.Timeout()):
            assert ea.fetch_wiki_summary("Louvre") == ""


class TestFetchUnsplashPhoto:
    def test_no_key_makes_no_request(self):
        with patch("EnrichAgent.requests.get") as mock_get:
            assert ea.fetch_unsplash_photo("Louvre") == ""
        mock_get.assert_not_called()

    def test_returns_small_url(self):
        payload = {"results": [{"urls": {"small": "https://img/1.jpg"}}]}
        with patch("EnrichAgent.requests.get", return_value=_ok(payload)):
            assert ea.fetch_unsplash_photo("Louvre", access_key="k") == "https://img/1.jpg"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

class TestTemplates:
    def test_category_from_name(self):
        assert ea.infer_category("Musée d'Orsay Museum", []) == "Museum/Gallery"
        assert ea.infer_category("Luxembourg Garden", []) == "Park/Garden"

    def test_category_from_preferences(self):
        assert ea.infer_category("City Zoo", ["wildlife"]) == "Wildlife"
        assert ea.infer_category("Somewhere", []) == "Attraction"

    def test_booking_link_slug(self):
        assert ea.booking_link("Louvre Museum!", "New York") == "https://www.newyork.com/visit/louvre-museum"

    def test_description_by_kind(self):
        text = ea.templated_description("Le Petit Cafe", TimeOfDay.EVENING, "Paris")
        assert "dining spot in Paris" in text
        assert "evening" in text

    def test_tip_bucket_priorities(self):
        assert ea._tip_bucket(TimeOfDay.MORNING, ["photography", "budget"]) == "photography_morning"
        assert ea._tip_bucket(TimeOfDay.EVENING, ["budget"]) == "budget"
        assert ea._tip_bucket(TimeOfDay.AFTERNOON, []) == "afternoon"


# ---------------------------------------------------------------------------
# ActivityEnricher
# ---------------------------------------------------------------------------

class TestActivityEnricher:
    def test_assemble_fills_every_field(self):
        enricher = ea.ActivityEnricher(rng=random.Random(3))
        act = Activity(name="Louvre Museum", time_of_day=TimeOfDay.AFTERNOON)
        lookups = ea.Lookups(place={"location": "Louvre", "address": "Rue de Rivoli"},
                             summary="Famous museum.", photo_url="https://img/l.jpg")
        out = enricher.assemble(act, lookups, "Paris", ["museums"])

        assert out.description == "Famous museum."
        assert out.location == "Louvre"
        assert out.address == "Rue de Rivoli"
        assert 90 <= out.duration_minutes <= 150
        assert out.transportation in ea.TRANSPORT_OPTIONS
        assert out.categories == "Museum/Gallery"
        assert out.photo_url == "https://img/l.jpg"
        assert out.local_tip in ea.LOCAL_TIPS["afternoon"]
        assert out.booking_link == "https://www.paris.com/visit/louvre-museum"

    def test_assemble_keeps_provider_values(self):
        enricher = ea.ActivityEnricher(rng=random.Random(3))
        act = Activity(name="Louvre", time_of_day=TimeOfDay.MORNING, description="Given.",
                       location="Given place", duration_minutes=45, local_tip="Given tip")
        out = enricher.assemble(act, _NO_LOOKUPS, "Paris", [])
        assert out.description == "Given."
        assert out.location == "Given place"
        assert out.duration_minutes == 45
        assert out.local_tip == "Given tip"

    def test_failed_lookups_fall_back_to_templates(self):
        enricher = ea.ActivityEnricher(rng=random.Random(3))
        act = Activity(name="Hidden Spot", time_of_day=TimeOfDay.EVENING)
        out = enricher.assemble(act, _NO_LOOKUPS, "Paris", [])
        assert out.description.startswith("Hidden Spot is a must-visit attraction in Paris")
        assert out.location == "Hidden Spot"
        assert out.address is None
        assert out.photo_url is None

    def test_wiki_skipped_when_description_present(self):
        enricher = ea.ActivityEnricher()
        act = Activity(name="Louvre", time_of_day=TimeOfDay.MORNING, description="Known.")
        with patch("EnrichAgent.fetch_place_info", return_value={"location": "L", "address": "A"}), \
             patch("EnrichAgent.fetch_wiki_summary") as mock_wiki, \
             patch("EnrichAgent.fetch_unsplash_photo", return_value=""):
            lookups = enricher.lookup(act, "Paris")
        mock_wiki.assert_not_called()
        assert lookups.place == {"location": "L", "address": "A"}

    def test_enrich_itinerary_preserves_structure(self):
        enricher = ea.ActivityEnricher(rng=random.Random(5), max_workers=2)
        itinerary = _itinerary("A", "B", "C")
        with patch.object(enricher, "lookup", return_value=_NO_LOOKUPS):
            out = enricher.enrich_itinerary(itinerary)

        assert [a.name for a in out.days[0].activities] == ["A", "B", "C"]
        assert [a.order_index for a in out.days[0].activities] == [0, 1, 2]
        assert out.source_tag is SourceTag.PROVIDER_A
        assert all(a.local_tip for a in out.days[0].activities)
        # input is left untouched
        assert itinerary.days[0].activities[0].local_tip is None

    def test_enrich_itinerary_survives_lookup_crash(self):
        enricher = ea.ActivityEnricher(rng=random.Random(5))
        with patch.object(enricher, "lookup", side_effect=RuntimeError("boom")):
            out = enricher.enrich_itinerary(_itinerary("A"))
        assert out.days[0].activities[0].location == "A"

    def test_seeded_enrichment_is_repeatable(self):
        itinerary = _itinerary("A", "B", "C", "D")
        outs = []
        for _ in range(2):
            enricher = ea.ActivityEnricher(rng=random.Random(11), max_workers=4)
            with patch.object(enricher, "lookup", return_value=_NO_LOOKUPS):
                outs.append(enricher.enrich_itinerary(itinerary))
        assert outs[0] == outs[1]

    def test_per_call_rng_is_repeatable(self):
        enricher = ea.ActivityEnricher(max_workers=2)
        itinerary = _itinerary("A", "B", "C")
        with patch.object(enricher, "lookup", return_value=_NO_LOOKUPS):
            first = enricher.enrich_itinerary(itinerary, rng=random.Random(21))
            second = enricher.enrich_itinerary(itinerary, rng=random.Random(21))
        assert first == second
