"""Canonical itinerary value types shared by every stage of the planner.

Serialised field names are camelCase (``dayNumber``, ``timeOfDay``,
``orderIndex`` ...) so the HTTP layer can hand ``PlanResult.to_dict()``
straight to the client.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from dataclasses_json import LetterCase, config, dataclass_json


class TimeOfDay(Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"


TIME_SLOTS: tuple[TimeOfDay, ...] = (TimeOfDay.MORNING, TimeOfDay.AFTERNOON, TimeOfDay.EVENING)


class SourceTag(Enum):
    PROVIDER_A = "provider-A"
    PROVIDER_B = "provider-B"
    MOCK = "mock"


def _optional():
    # Optional fields are omitted from the serialised form when unset.
    return field(default=None, metadata=config(exclude=lambda v: v is None))


_iso_date = config(encoder=date.isoformat, decoder=date.fromisoformat)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Activity:
    name: str
    time_of_day: TimeOfDay
    description: str = ""
    order_index: int = 0
    location: Optional[str] = _optional()
    address: Optional[str] = _optional()
    duration_minutes: Optional[int] = _optional()
    booking_link: Optional[str] = _optional()
    transportation: Optional[str] = _optional()
    categories: Optional[str] = _optional()
    photo_url: Optional[str] = _optional()
    local_tip: Optional[str] = _optional()


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Day:
    day_number: int
    date: date = field(metadata=_iso_date)
    activities: list[Activity] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Itinerary:
    destination: str
    start_date: date = field(metadata=_iso_date)
    duration: int
    days: list[Day] = field(default_factory=list)
    preferences: list[str] = field(default_factory=list)
    source_tag: SourceTag = SourceTag.MOCK

    def is_well_formed(self) -> bool:
        """True when days are 1..duration, each non-empty with orderIndex 0..n-1."""
        if len(self.days) != self.duration:
            return False
        for expected, day in enumerate(self.days, start=1):
            if day.day_number != expected or not day.activities:
                return False
            if [a.order_index for a in day.activities] != list(range(len(day.activities))):
                return False
        return True


@dataclass
class PlanResult:
    itinerary: Itinerary
    source: SourceTag
    # (source tag, error kind) for every provider attempt that failed
    failures: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "itinerary": self.itinerary.to_dict(encode_json=True),
            "source": self.source.value,
        }
