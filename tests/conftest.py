import sys
import os
import random
import pytest
from datetime import date

# Project root: needed for Itinerary, ItineraryRequest, mock_data, etc.
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
# agents/ subdir, imported directly so planning_agent, normalizer, response_parser
# can be imported by name in tests without going through the package.
_agents_dir = os.path.join(_root, "agents")
for _p in (_root, _agents_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

from ItineraryRequest import ItineraryRequest


@pytest.fixture
def paris_request():
    return ItineraryRequest(
        destination="Paris",
        start_date=date(2024, 5, 1),
        duration=3,
        preferences=("museums", "food_wine"),
    )


@pytest.fixture
def one_day_request():
    return ItineraryRequest(
        destination="Paris",
        start_date=date(2024, 5, 1),
        duration=1,
        preferences=(),
    )


@pytest.fixture
def rng():
    """Seeded generator so mock content and enrichment picks are repeatable."""
    return random.Random(1234)
