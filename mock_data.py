"""
Mock data - offline itinerary content and sample attraction listings.

Used when every text-generation provider has failed (or no key is set),
and when no attraction-listing key is configured.
"""
import copy
import logging
import random
from typing import Optional

from Itinerary import TIME_SLOTS, Activity, Day, Itinerary, SourceTag
from ItineraryRequest import ItineraryRequest

logger = logging.getLogger(__name__)

# Thematic activity pools: (name, description)
ACTIVITY_POOLS = {
    "nature": [
        ("Hiking in the local trails",
         "Explore the beautiful natural landscapes and hiking trails around the area. Perfect for nature enthusiasts and photographers."),
        ("Visit to the Botanical Garden",
         "Discover exotic plants and flowers in this beautifully maintained garden. A peaceful retreat from the busy city."),
        ("Picnic in the Central Park",
         "Enjoy a relaxing picnic surrounded by greenery. Bring some local snacks and drinks for a perfect outdoor meal."),
        ("Wildlife Sanctuary Tour",
         "Observe local wildlife in their natural habitat. Guided tours available with knowledgeable naturalists."),
    ],
    "history": [
        ("National History Museum Visit",
         "Explore artifacts and exhibits showcasing the rich history of the region. Allow at least 2-3 hours for a thorough visit."),
        ("Guided Tour of the Old Town",
         "Walk through historic streets with a knowledgeable guide explaining the architectural and cultural significance of landmarks."),
        ("Art Gallery Exhibition",
         "View contemporary and classic art pieces from local and international artists. The gallery often rotates special exhibitions."),
        ("Archaeological Site Exploration",
         "Discover ancient ruins and learn about the civilizations that once thrived in this area."),
    ],
    "food": [
        ("Culinary Walking Tour",
         "Sample local delicacies while walking through food districts. A great way to taste multiple specialties in one go."),
        ("Cooking Class with Local Chef",
         "Learn to prepare traditional dishes with fresh, local ingredients. Take home recipes to recreate the flavors."),
        ("Wine Tasting at Regional Vineyard",
         "Sample locally produced wines with expert commentary on flavor profiles and production methods."),
        ("Street Food Market Exploration",
         "Wander through bustling food stalls offering authentic local cuisine at affordable prices."),
    ],
    "adventure": [
        ("White Water Rafting Experience",
         "Navigate through exciting rapids with experienced guides. Suitable for beginners and advanced rafters alike."),
        ("Mountain Biking on Scenic Trails",
         "Ride through challenging terrain with breathtaking views. Bikes and safety equipment available for rent."),
        ("Rock Climbing Adventure",
         "Scale natural rock formations with professional instructors ensuring safety while providing an adrenaline rush."),
        ("Paragliding over the Valley",
         "Soar through the skies and enjoy a bird's eye view of the spectacular landscape below."),
    ],
    "shopping": [
        ("Local Artisan Market",
         "Browse handcrafted goods made by local artisans. Perfect for finding unique souvenirs and gifts."),
        ("Luxury Shopping District",
         "Explore high-end boutiques and designer stores for premium shopping experience."),
        ("Antique Shop Hopping",
         "Hunt for vintage treasures and collectibles in charming antique shops scattered throughout the old district."),
        ("Farmers Market Visit",
         "Purchase fresh local produce, artisanal foods, and handmade crafts directly from producers."),
    ],
    "wellness": [
        ("Day Spa Treatment",
         "Indulge in massages, facials, and body treatments using local ingredients and techniques."),
        ("Yoga Session by the Beach",
         "Find inner peace with a guided yoga session against the soothing backdrop of waves."),
        ("Hot Springs Relaxation",
         "Soak in natural thermal waters known for their therapeutic properties and mineral content."),
        ("Meditation Retreat",
         "Join a guided meditation session in a tranquil setting to rejuvenate your mind and spirit."),
    ],
    "nightlife": [
        ("Live Music at Jazz Club",
         "Enjoy performances by talented musicians in an intimate setting with great acoustics."),
        ("Rooftop Bar with City Views",
         "Sip craft cocktails while taking in panoramic views of the city skyline illuminated at night."),
        ("Cultural Dance Performance",
         "Watch traditional dance performances that tell stories of local culture and history."),
        ("Night Food Market Tour",
         "Experience the vibrant atmosphere of night markets offering local delicacies and street food."),
    ],
    "photography": [
        ("Sunrise Photography at Scenic Overlook",
         "Capture the golden light of dawn illuminating the landscape from a perfect vantage point."),
        ("Architectural Photography Tour",
         "Focus on capturing the unique architectural elements that define the city's character."),
        ("Wildlife Photography Excursion",
         "Photograph local wildlife in their natural habitat with guidance from experienced nature photographers."),
        ("Night Photography Session",
         "Learn techniques for capturing city lights, stars, and night scenes with long exposure photography."),
    ],
}

# Used when there are no preferences or a tag has no pool
DEFAULT_ACTIVITIES = [
    ("City Sightseeing Tour",
     "Explore the main attractions and landmarks of the city with a knowledgeable guide providing historical context."),
    ("Local Cuisine Tasting",
     "Sample authentic dishes that represent the culinary traditions of the region at a well-regarded local restaurant."),
    ("Cultural Heritage Site Visit",
     "Discover the historical and cultural significance of one of the area's most important landmarks."),
    ("Scenic Nature Walk",
     "Enjoy a leisurely stroll through beautiful natural surroundings, perfect for taking in the local flora and fauna."),
    ("Shopping at Local Markets",
     "Browse through stalls offering everything from handcrafted souvenirs to fresh local produce."),
    ("Relaxation Time at Popular Beach",
     "Unwind on sandy shores with the sound of waves providing a peaceful backdrop for relaxation."),
]

# Preference tags that share a pool with a differently-named theme
POOL_ALIASES = {
    "hiking": "nature",
    "wildlife": "nature",
    "museums": "history",
    "culture": "history",
    "food_wine": "food",
    "relaxation": "wellness",
}


def pool_for_tag(tag: str) -> Optional[list[tuple[str, str]]]:
    """Activity pool for a preference tag, or None when the tag has none."""
    key = tag.strip().lower()
    return ACTIVITY_POOLS.get(POOL_ALIASES.get(key, key))


class MockItineraryGenerator:
    """Offline itinerary: three activities per day, content drawn at random.

    Cannot fail and performs no I/O. Pass a seeded ``random.Random`` to pin
    the content in tests; the structure is fixed regardless of the seed.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _pick(self, preferences: tuple[str, ...], rng: random.Random) -> tuple[str, str]:
        if preferences:
            tag = rng.choice(preferences)
            pool = pool_for_tag(tag)
            if pool:
                return rng.choice(pool)
        return rng.choice(DEFAULT_ACTIVITIES)

    def generate(self, request: ItineraryRequest, rng: Optional[random.Random] = None) -> Itinerary:
        rng = rng or self.rng
        preferences = tuple(request.preferences)
        days = []
        for day_number in range(1, request.duration + 1):
            activities = []
            for order_index, slot in enumerate(TIME_SLOTS):
                name, description = self._pick(preferences, rng)
                activities.append(Activity(
                    name=f"{name} in {request.destination}",
                    time_of_day=slot,
                    description=description,
                    order_index=order_index,
                ))
            days.append(Day(
                day_number=day_number,
                date=request.date_for_day(day_number),
                activities=activities,
            ))

        logger.info("Built mock itinerary for %s (%d days)", request.destination, request.duration)
        return Itinerary(
            destination=request.destination,
            start_date=request.start_date,
            duration=request.duration,
            days=days,
            preferences=list(request.preferences),
            source_tag=SourceTag.MOCK,
        )


def generate_mock_itinerary(request: ItineraryRequest, rng: Optional[random.Random] = None) -> Itinerary:
    """Convenience wrapper around ``MockItineraryGenerator``."""
    return MockItineraryGenerator(rng).generate(request)


# ---------------------------------------------------------------------------
# Sample attraction listings (used when FOURSQUARE_API_KEY is not set)
# ---------------------------------------------------------------------------

SAMPLE_ATTRACTIONS = {
    "paris": [
        {"name": "Eiffel Tower", "address": "Champ de Mars, 5 Avenue Anatole France, 75007 Paris, France", "category": "Landmark", "latitude": 48.8584, "longitude": 2.2945},
        {"name": "Louvre Museum", "address": "Rue de Rivoli, 75001 Paris, France", "category": "Museum", "latitude": 48.8606, "longitude": 2.3376},
        {"name": "Notre-Dame Cathedral", "address": "6 Parvis Notre-Dame - Pl. Jean-Paul II, 75004 Paris, France", "category": "Historical Site", "latitude": 48.8530, "longitude": 2.3499},
        {"name": "Arc de Triomphe", "address": "Place Charles de Gaulle, 75008 Paris, France", "category": "Monument", "latitude": 48.8738, "longitude": 2.2950},
        {"name": "Montmartre", "address": "75018 Paris, France", "category": "District", "latitude": 48.8867, "longitude": 2.3431},
    ],
    "new york": [
        {"name": "Empire State Building", "address": "20 W 34th St, New York, NY 10001, USA", "category": "Skyscraper", "latitude": 40.7484, "longitude": -73.9857},
        {"name": "Central Park", "address": "New York, NY, USA", "category": "Park", "latitude": 40.7812, "longitude": -73.9665},
        {"name": "Statue of Liberty", "address": "New York, NY 10004, USA", "category": "Monument", "latitude": 40.6892, "longitude": -74.0445},
        {"name": "Times Square", "address": "Manhattan, NY 10036, USA", "category": "Plaza", "latitude": 40.7580, "longitude": -73.9855},
        {"name": "Metropolitan Museum of Art", "address": "1000 5th Ave, New York, NY 10028, USA", "category": "Museum", "latitude": 40.7794, "longitude": -73.9632},
    ],
    "tokyo": [
        {"name": "Tokyo Skytree", "address": "1 Chome-1-2 Oshiage, Sumida City, Tokyo 131-0045, Japan", "category": "Tower", "latitude": 35.7101, "longitude": 139.8107},
        {"name": "Senso-ji Temple", "address": "2 Chome-3-1 Asakusa, Taito City, Tokyo 111-0032, Japan", "category": "Temple", "latitude": 35.7147, "longitude": 139.7966},
        {"name": "Shinjuku Gyoen National Garden", "address": "11 Naitomachi, Shinjuku City, Tokyo 160-0014, Japan", "category": "Garden", "latitude": 35.6852, "longitude": 139.7100},
        {"name": "Meiji Shrine", "address": "1-1 Yoyogikamizonocho, Shibuya City, Tokyo 151-8557, Japan", "category": "Shrine", "latitude": 35.6764, "longitude": 139.6993},
        {"name": "Tokyo Disneyland", "address": "1-1 Maihama, Urayasu, Chiba 279-0031, Japan", "category": "Theme Park", "latitude": 35.6329, "longitude": 139.8804},
    ],
}


def get_sample_attractions(destination: str) -> list[dict]:
    """Sample listing for a destination; three generic entries when unknown."""
    dest = destination.strip().lower()
    for key, attractions in SAMPLE_ATTRACTIONS.items():
        if key in dest or dest in key:
            return copy.deepcopy(attractions)
    return [
        {"name": f"{destination} Main Square", "address": f"City Center, {destination}",
         "category": "Plaza", "latitude": None, "longitude": None},
        {"name": f"{destination} Historical Museum", "address": f"Museum District, {destination}",
         "category": "Museum", "latitude": None, "longitude": None},
        {"name": f"{destination} Central Park", "address": f"Green Zone, {destination}",
         "category": "Park", "latitude": None, "longitude": None},
    ]
