"""
Reconcile the shapes different providers return into one ``Itinerary``.

Accepted variations:
  * ``days`` or the legacy ``itinerary`` key for the day list
  * ``day`` / ``dayNumber`` / ``day_number`` for the day number, else position
  * explicit day ``date`` (kept only when it agrees with the request)
  * ``name`` or ``title`` for the activity name
  * loose time-of-day strings ("morning", "Late Afternoon", "Morning/Afternoon")

Anything that cannot be made well-formed raises ``InvalidSchema``; callers
never see a partially-trusted object.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

try:
    from .errors import InvalidSchema
except ImportError:
    from errors import InvalidSchema  # type: ignore

from Itinerary import TIME_SLOTS, Activity, Day, Itinerary, SourceTag, TimeOfDay
from ItineraryRequest import ItineraryRequest

logger = logging.getLogger(__name__)

_DAY_NUMBER_KEYS = ("day", "dayNumber", "day_number")
_TEXT_FIELDS = {
    "location": "location",
    "address": "address",
    "bookingLink": "booking_link",
    "transportation": "transportation",
    "photoUrl": "photo_url",
    "localTip": "local_tip",
}


def _day_list(parsed: dict[str, Any]) -> list:
    days = parsed.get("days")
    if not isinstance(days, list):
        days = parsed.get("itinerary")
    if not isinstance(days, list):
        raise InvalidSchema("missing 'days' or 'itinerary' array")
    if not days:
        raise InvalidSchema("'days' array is empty")
    return days


def _day_number(entry: dict, position: int) -> int:
    for key in _DAY_NUMBER_KEYS:
        value = entry.get(key)
        if value in (None, "", 0):
            continue
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            raise InvalidSchema(f"day number {value!r} is not an integer")
        if number < 1:
            raise InvalidSchema(f"day number {number} is below 1")
        return number
    return position


def _resolve_date(entry: dict, day_number: int, request: ItineraryRequest) -> date:
    derived = request.date_for_day(day_number)
    explicit = entry.get("date")
    if not explicit:
        return derived
    try:
        given = date.fromisoformat(str(explicit)[:10])
    except ValueError:
        logger.warning("Day %d: unparsable date %r, using %s", day_number, explicit, derived)
        return derived
    if given != derived:
        logger.warning("Day %d: date %s disagrees with trip start, using %s",
                       day_number, given, derived)
        return derived
    return given


def _time_of_day(value: Any, position: int) -> TimeOfDay:
    if isinstance(value, str):
        lowered = value.strip().lower()
        for slot in TIME_SLOTS:
            if lowered.startswith(slot.value.lower()):
                return slot
        for slot in TIME_SLOTS:
            if slot.value.lower() in lowered:
                return slot
        if "night" in lowered:
            return TimeOfDay.EVENING
    return TIME_SLOTS[min(position, len(TIME_SLOTS) - 1)]


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value if v)
    text = str(value).strip()
    return text or None


def _positive_int(value: Any) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number > 0 else None


def _activity(entry: Any, index: int, day_number: int) -> Activity:
    if not isinstance(entry, dict):
        raise InvalidSchema(f"day {day_number} activity {index} is not an object")
    name = _clean_text(entry.get("name")) or _clean_text(entry.get("title"))
    if not name:
        raise InvalidSchema(f"day {day_number} activity {index} has no name")

    activity = Activity(
        name=name,
        time_of_day=_time_of_day(entry.get("timeOfDay") or entry.get("time_of_day"), index),
        description=_clean_text(entry.get("description")) or "",
        order_index=index,
        duration_minutes=_positive_int(entry.get("durationMinutes") or entry.get("duration_minutes")),
        categories=_clean_text(entry.get("categories") or entry.get("category")),
    )
    for key, attr in _TEXT_FIELDS.items():
        value = _clean_text(entry.get(key))
        if value:
            setattr(activity, attr, value)
    return activity


def normalize(parsed: Any, request: ItineraryRequest,
              source: SourceTag = SourceTag.MOCK) -> Itinerary:
    """Turn a parsed provider object into a well-formed ``Itinerary``."""
    if not isinstance(parsed, dict):
        raise InvalidSchema("top-level value is not an object")

    numbered: list[tuple[int, dict]] = []
    for position, entry in enumerate(_day_list(parsed), start=1):
        if not isinstance(entry, dict):
            raise InvalidSchema(f"day entry {position} is not an object")
        numbered.append((_day_number(entry, position), entry))

    numbered.sort(key=lambda pair: pair[0])
    numbers = [n for n, _ in numbered]
    if numbers != list(range(1, len(numbers) + 1)):
        raise InvalidSchema(f"day numbers {numbers} are not contiguous from 1")

    if len(numbered) < request.duration:
        raise InvalidSchema(
            f"got {len(numbered)} days, expected {request.duration}"
        )
    if len(numbered) > request.duration:
        logger.warning("Dropping %d extra day(s) beyond the requested %d",
                       len(numbered) - request.duration, request.duration)
        numbered = numbered[: request.duration]

    days: list[Day] = []
    for day_number, entry in numbered:
        raw_activities = entry.get("activities")
        if raw_activities is None:
            raw_activities = entry.get("items")
        if not isinstance(raw_activities, list) or not raw_activities:
            raise InvalidSchema(f"day {day_number} has no activities")
        activities = [
            _activity(act, idx, day_number) for idx, act in enumerate(raw_activities)
        ]
        days.append(Day(
            day_number=day_number,
            date=_resolve_date(entry, day_number, request),
            activities=activities,
        ))

    return Itinerary(
        destination=request.destination,
        start_date=request.start_date,
        duration=request.duration,
        days=days,
        preferences=list(request.preferences),
        source_tag=source,
    )
