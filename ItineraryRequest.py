from dataclasses import dataclass, field
from datetime import date, timedelta

from dataclasses_json import LetterCase, config, dataclass_json

MIN_DURATION = 1
MAX_DURATION = 14

# Tag identifier -> human description used in prompts.
PREFERENCE_DESCRIPTIONS: dict[str, str] = {
    "beach": "Beach vacations and coastal activities",
    "hiking": "Hiking trails and outdoor adventures",
    "nightlife": "Bars, clubs and evening entertainment",
    "museums": "Museums and art galleries",
    "food_wine": "Culinary experiences and wine tasting",
    "shopping": "Shopping districts and markets",
    "wildlife": "Animal watching and wildlife reserves",
    "photography": "Scenic spots perfect for photos",
    "adventure": "Thrilling and adventurous activities",
    "history": "Historical sites and landmarks",
    "culture": "Local traditions and cultural experiences",
    "relaxation": "Spas and wellness retreats",
    "family": "Family-friendly activities",
    "romantic": "Perfect for couples",
    "budget": "Affordable travel options",
}


class RequestValidationError(ValueError):
    """Raised when an itinerary request is missing or has malformed fields."""


def describe_preferences(tags: list[str]) -> list[str]:
    """Map tag identifiers to their descriptions, keeping unknown tags verbatim."""
    return [PREFERENCE_DESCRIPTIONS.get(tag, tag) for tag in tags]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class ItineraryRequest:
    destination: str
    start_date: date = field(
        metadata=config(encoder=date.isoformat, decoder=date.fromisoformat)
    )
    duration: int
    preferences: tuple[str, ...] = ()

    def __post_init__(self):
        if not self.destination or not self.destination.strip():
            raise RequestValidationError("destination must be a non-empty string")
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise RequestValidationError("duration must be an integer")
        if not MIN_DURATION <= self.duration <= MAX_DURATION:
            raise RequestValidationError(
                f"duration must be between {MIN_DURATION} and {MAX_DURATION} days"
            )

    @classmethod
    def from_payload(cls, payload: dict) -> "ItineraryRequest":
        """Build a validated request from a loosely-typed JSON body."""
        if not isinstance(payload, dict):
            raise RequestValidationError("request body must be a JSON object")

        missing = [k for k in ("destination", "startDate", "duration") if not payload.get(k)]
        if missing:
            raise RequestValidationError(f"Missing required fields: {', '.join(missing)}")

        destination = payload["destination"]
        if not isinstance(destination, str):
            raise RequestValidationError("destination must be a non-empty string")

        try:
            start = date.fromisoformat(str(payload["startDate"])[:10])
        except ValueError:
            raise RequestValidationError("startDate must be an ISO date (YYYY-MM-DD)")

        raw_duration = payload["duration"]
        if isinstance(raw_duration, bool):
            raise RequestValidationError("duration must be an integer")
        try:
            duration = int(raw_duration)
        except (TypeError, ValueError):
            raise RequestValidationError("duration must be an integer")
        if isinstance(raw_duration, float) and raw_duration != duration:
            raise RequestValidationError("duration must be an integer")

        prefs = payload.get("preferences") or []
        if isinstance(prefs, str):
            prefs = [p.strip() for p in prefs.split(",")]
        if not isinstance(prefs, (list, tuple)):
            raise RequestValidationError("preferences must be a list of tag identifiers")

        # De-duplicate while keeping the caller's order.
        tags: list[str] = []
        for p in prefs:
            tag = str(p).strip()
            if tag and tag not in tags:
                tags.append(tag)

        return cls(
            destination=destination.strip(),
            start_date=start,
            duration=duration,
            preferences=tuple(tags),
        )

    def date_for_day(self, day_number: int) -> date:
        """Calendar date of the given 1-based day of the trip."""
        return self.start_date + timedelta(days=day_number - 1)

    def preference_descriptions(self) -> list[str]:
        return describe_preferences(list(self.preferences))
