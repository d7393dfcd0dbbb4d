"""
Best-effort activity enrichment from free public lookups.

For each skeleton activity (name + time of day) this adds an address
(OpenStreetMap Nominatim), a summary (Wikipedia REST), a photo (Unsplash,
only when UNSPLASH_ACCESS_KEY is set), plus a category, local tip,
transportation mode, visit duration and booking link.

Every lookup degrades to an empty value on failure; enrichment never
raises and never blocks the itinerary.

Usage (from planning_agent):
    enricher = ActivityEnricher(rng=random.Random(7))
    itinerary = enricher.enrich_itinerary(itinerary)
"""

from __future__ import annotations

import dataclasses
import logging
import random
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import requests

from Itinerary import Activity, Itinerary, TimeOfDay

log = logging.getLogger(__name__)

_NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
_WIKI_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/"
_UNSPLASH_SEARCH_URL = "https://api.unsplash.com/search/photos"
_HEADERS = {"User-Agent": "Wanderplan/1.0", "Accept-Language": "en-US,en;q=0.9"}
_LOOKUP_TIMEOUT = 10

TRANSPORT_OPTIONS = ("Walk", "Taxi", "Subway", "Bus", "Tram", "Bike Share")

# Two phrasings per bucket; one is picked at random.
LOCAL_TIPS: dict[str, tuple[str, str]] = {
    "photography_morning": (
        "The morning light here creates perfect photography conditions. Bring your camera!",
        "Arrive before the crowds for clean, uncluttered shots in soft morning light.",
    ),
    "photography_afternoon": (
        "Look for shaded angles; the midday sun can be harsh on photos here.",
        "Afternoon is a good time to scout compositions for a return visit at golden hour.",
    ),
    "photography_evening": (
        "The golden hour lighting just before sunset makes this spot a photographer's dream.",
        "Stay for blue hour; the lights coming on make for striking long exposures.",
    ),
    "budget": (
        "Ask about discounted tickets or free entry hours.",
        "Consider purchasing a city pass for better value if visiting multiple attractions.",
    ),
    "family": (
        "This place is particularly family-friendly, with activities for all ages.",
        "Check for family tickets; children often get reduced or free entry.",
    ),
    "morning": (
        "Visit early to avoid the crowds. This place gets busy after 11am.",
        "Visit early to avoid the crowds. Morning light makes for great photos here.",
    ),
    "afternoon": (
        "The ideal time to visit is 2-4pm when tour groups are less frequent.",
        "Consider booking in advance as this is a popular afternoon spot.",
    ),
    "evening": (
        "In the evening, the atmosphere becomes more intimate and relaxed.",
        "Check their website for evening events or special hours.",
    ),
}

_CATEGORY_KEYWORDS = (
    (("museum", "gallery"), "Museum/Gallery"),
    (("park", "garden"), "Park/Garden"),
    (("restaurant", "café", "cafe"), "Restaurant/Café"),
    (("beach", "shore"), "Beach/Waterfront"),
    (("market", "shop"), "Shopping"),
    (("trail", "hike"), "Hiking/Outdoors"),
    (("temple", "church", "mosque"), "Religious Site"),
    (("monument", "memorial"), "Monument"),
)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def fetch_place_info(query: str) -> dict:
    """Resolve a place name to ``{location, address, lat, lon}`` via Nominatim."""
    try:
        resp = requests.get(
            _NOMINATIM_URL,
            params={"format": "json", "limit": 1, "q": query},
            headers=_HEADERS,
            timeout=_LOOKUP_TIMEOUT,
        )
        if resp.ok:
            data = resp.json()
            if isinstance(data, list) and data:
                top = data[0]
                display = top.get("display_name", "")
                return {
                    "location": display.split(",")[0] or query,
                    "address": display,
                    "lat": top.get("lat"),
                    "lon": top.get("lon"),
                }
    except (requests.RequestException, ValueError) as exc:
        log.warning("Place lookup failed for %s: %s", query, exc)
    return {"location": query, "address": ""}


def fetch_wiki_summary(title: str) -> str:
    """First paragraph of the matching Wikipedia article, or ''."""
    formatted = re.sub(r"[^\w\s]", "", re.sub(r"\s+", "_", title.strip()))
    if not formatted:
        return ""
    try:
        resp = requests.get(_WIKI_SUMMARY_URL + quote(formatted), headers=_HEADERS,
                            timeout=_LOOKUP_TIMEOUT)
        if resp.ok:
            extract = resp.json().get("extract", "")
            return extract if isinstance(extract, str) else ""
    except (requests.RequestException, ValueError) as exc:
        log.warning("Wikipedia lookup failed for %s: %s", title, exc)
    return ""


def fetch_unsplash_photo(query: str, access_key: str = "") -> str:
    """Small photo URL for *query*; '' when no key is configured or nothing matched."""
    if not access_key:
        return ""
    try:
        resp = requests.get(
            _UNSPLASH_SEARCH_URL,
            params={"query": query, "per_page": 1},
            headers={"Authorization": f"Client-ID {access_key}"},
            timeout=_LOOKUP_TIMEOUT,
        )
        if resp.ok:
            results = resp.json().get("results") or []
            if results:
                return results[0].get("urls", {}).get("small", "")
    except (requests.RequestException, ValueError) as exc:
        log.warning("Unsplash lookup failed for %s: %s", query, exc)
    return ""


# ---------------------------------------------------------------------------
# Deterministic templates
# ---------------------------------------------------------------------------

def templated_description(name: str, time_of_day: TimeOfDay, destination: str) -> str:
    lowered = name.lower()
    when = time_of_day.value.lower()
    if any(k in lowered for k in ("restaurant", "café", "cafe")):
        return (f"{name} is a popular dining spot in {destination}, known for its local cuisine. "
                f"It's especially vibrant during the {when}.")
    if any(k in lowered for k in ("museum", "gallery")):
        return (f"{name} is a fascinating cultural venue showcasing {destination}'s heritage "
                f"through impressive exhibits and collections.")
    if any(k in lowered for k in ("park", "garden")):
        return (f"{name} offers a peaceful retreat from the bustle of {destination}, "
                f"with beautiful scenery and walking paths to enjoy.")
    return f"{name} is a must-visit attraction in {destination}, particularly enjoyable during the {when}."


def infer_category(name: str, preferences: list[str]) -> str:
    lowered = name.lower()
    for keywords, category in _CATEGORY_KEYWORDS:
        if any(k in lowered for k in keywords):
            return category

    for pref in preferences:
        if "museum" in pref and "history" in lowered:
            return "Museum/Gallery"
        if "hiking" in pref and ("mountain" in lowered or "peak" in lowered):
            return "Hiking/Outdoors"
        if "wildlife" in pref and ("zoo" in lowered or "sanctuary" in lowered):
            return "Wildlife"
        if "shopping" in pref and ("mall" in lowered or "center" in lowered):
            return "Shopping"
    return "Attraction"


def booking_link(name: str, destination: str) -> str:
    slug = re.sub(r"\s+", "-", re.sub(r"[^\w\s]", "", name.lower()).strip())
    host = re.sub(r"\s+", "", destination.lower())
    return f"https://www.{host}.com/visit/{slug}"


def _tip_bucket(time_of_day: TimeOfDay, preferences: list[str]) -> str:
    if any("photography" in p for p in preferences):
        return f"photography_{time_of_day.value.lower()}"
    if any("budget" in p for p in preferences):
        return "budget"
    if any("family" in p for p in preferences):
        return "family"
    return time_of_day.value.lower()


# ---------------------------------------------------------------------------
# Enricher
# ---------------------------------------------------------------------------

@dataclass
class Lookups:
    place: dict
    summary: str = ""
    photo_url: str = ""


_EMPTY_PLACE = {"location": "", "address": ""}


class ActivityEnricher:
    """Adds descriptive and logistic detail to skeleton activities.

    Random choices (tip phrasing, transportation, visit length) come from
    the per-call ``rng`` (else the injected one) and are drawn in activity
    order after all lookups have returned, so a seeded rng gives repeatable
    output.
    """

    def __init__(self, rng: Optional[random.Random] = None, unsplash_access_key: str = "",
                 max_workers: int = 6):
        self.rng = rng or random.Random()
        self.unsplash_access_key = unsplash_access_key
        self.max_workers = max(1, max_workers)

    def local_tip(self, time_of_day: TimeOfDay, preferences: list[str],
                  rng: Optional[random.Random] = None) -> str:
        return (rng or self.rng).choice(LOCAL_TIPS[_tip_bucket(time_of_day, preferences)])

    def lookup(self, activity: Activity, destination: str) -> Lookups:
        """Run the independent lookups for one activity concurrently."""
        query = f"{activity.name} {destination}"
        with ThreadPoolExecutor(max_workers=3) as pool:
            place_f = pool.submit(fetch_place_info, query)
            summary_f = None
            if not activity.description:
                summary_f = pool.submit(fetch_wiki_summary, activity.name)
            photo_f = pool.submit(fetch_unsplash_photo, query, self.unsplash_access_key)
            return Lookups(
                place=place_f.result(),
                summary=summary_f.result() if summary_f else "",
                photo_url=photo_f.result(),
            )

    def assemble(self, activity: Activity, lookups: Lookups, destination: str,
                 preferences: list[str], rng: Optional[random.Random] = None) -> Activity:
        rng = rng or self.rng
        description = (activity.description or lookups.summary
                       or templated_description(activity.name, activity.time_of_day, destination))
        return dataclasses.replace(
            activity,
            description=description,
            location=activity.location or lookups.place.get("location") or activity.name,
            address=activity.address or lookups.place.get("address") or None,
            duration_minutes=activity.duration_minutes or rng.randint(90, 150),
            booking_link=activity.booking_link or booking_link(activity.name, destination),
            transportation=activity.transportation or rng.choice(TRANSPORT_OPTIONS),
            categories=activity.categories or infer_category(activity.name, preferences),
            photo_url=activity.photo_url or lookups.photo_url or None,
            local_tip=activity.local_tip or self.local_tip(activity.time_of_day, preferences, rng),
        )

    def enrich(self, activity: Activity, destination: str, preferences: list[str],
               rng: Optional[random.Random] = None) -> Activity:
        try:
            lookups = self.lookup(activity, destination)
        except Exception as exc:
            log.warning("Enrichment lookups failed for %s: %s", activity.name, exc)
            lookups = Lookups(place=dict(_EMPTY_PLACE))
        return self.assemble(activity, lookups, destination, preferences, rng)

    def enrich_itinerary(self, itinerary: Itinerary, rng: Optional[random.Random] = None) -> Itinerary:
        """Enrich every activity; lookups fan out across activities, then join."""
        flat = [(d, a) for d, day in enumerate(itinerary.days) for a in range(len(day.activities))]
        if not flat:
            return itinerary

        results: dict[tuple[int, int], Lookups] = {}
        with ThreadPoolExecutor(max_workers=min(len(flat), self.max_workers)) as pool:
            futures = {
                pool.submit(self.lookup, itinerary.days[d].activities[a], itinerary.destination): (d, a)
                for d, a in flat
            }
            for future in as_completed(futures):
                key = futures[future]
                try:
                    results[key] = future.result()
                except Exception as exc:
                    log.warning("Enrichment failed for day %d activity %d: %s",
                                key[0] + 1, key[1], exc)
                    results[key] = Lookups(place=dict(_EMPTY_PLACE))

        days = []
        for d, day in enumerate(itinerary.days):
            activities = [
                self.assemble(activity, results[(d, a)], itinerary.destination, itinerary.preferences, rng)
                for a, activity in enumerate(day.activities)
            ]
            days.append(dataclasses.replace(day, activities=activities))
        return dataclasses.replace(itinerary, days=days)
