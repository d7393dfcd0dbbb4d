"""
Popular-attraction listings for a destination (Foursquare Places).

Falls back to the sample listings in mock_data when FOURSQUARE_API_KEY is
not configured. Live results ground the provider prompts in real venue names;
the /local-attractions endpoint serves either.
"""

from __future__ import annotations

import logging
import threading

import requests

from mock_data import get_sample_attractions

log = logging.getLogger(__name__)

_FOURSQUARE_SEARCH_URL = "https://api.foursquare.com/v3/places/search"

# (destination|category) -> results
_attraction_cache: dict[str, list[dict]] = {}
_cache_lock = threading.Lock()


def _foursquare_search(api_key: str, destination: str, category: str, limit: int) -> list[dict]:
    resp = requests.get(
        _FOURSQUARE_SEARCH_URL,
        params={"query": category, "near": destination, "limit": limit, "sort": "POPULARITY"},
        headers={"Accept": "application/json", "Authorization": api_key},
        timeout=10,
    )
    if not resp.ok:
        log.warning("Foursquare API error: %s %s", resp.status_code, resp.reason)
        return []

    results = []
    for place in resp.json().get("results", []):
        main = (place.get("geocodes") or {}).get("main") or {}
        categories = place.get("categories") or [{}]
        results.append({
            "name": place.get("name", ""),
            "address": (place.get("location") or {}).get("formatted_address", ""),
            "category": categories[0].get("name", category),
            "latitude": main.get("latitude"),
            "longitude": main.get("longitude"),
            "fsq_id": place.get("fsq_id"),
        })
    return [r for r in results if r["name"]]


def fetch_local_attractions(
    destination: str,
    api_key: str = "",
    category: str = "attractions",
    limit: int = 10,
) -> tuple[list[dict], str]:
    """Return ``(attractions, source)`` where source is "foursquare" or "sample"."""
    if not api_key:
        return get_sample_attractions(destination), "sample"

    cache_key = f"{destination.strip().lower()}|{category}"
    with _cache_lock:
        cached = _attraction_cache.get(cache_key)
    if cached:
        return list(cached), "foursquare"

    try:
        results = _foursquare_search(api_key, destination, category, limit)
    except (requests.RequestException, ValueError) as exc:
        log.warning("Foursquare lookup failed for %s: %s", destination, exc)
        results = []

    if not results:
        return get_sample_attractions(destination), "sample"

    with _cache_lock:
        _attraction_cache[cache_key] = list(results)
    log.info("Found %d attractions for %s", len(results), destination)
    return results, "foursquare"


def attraction_names(destination: str, api_key: str = "", limit: int = 10) -> list[str]:
    """Live attraction names for prompt grounding; empty without live results."""
    attractions, source = fetch_local_attractions(destination, api_key=api_key, limit=limit)
    if source != "foursquare":
        return []
    return [a["name"] for a in attractions][:limit]
