#!/usr/bin/env python3
"""Seed the document store with sample tours and destinations."""

import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from oyow_tours.core.config import settings  # noqa: E402
from oyow_tours.core.database import close_store, create_client, get_database  # noqa: E402
from oyow_tours.models import Destination, Tour  # noqa: E402
from oyow_tours.models.document import utcnow  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_TOURS = [
    {
        "title": "Mountain Adventure",
        "description": "Explore the beautiful mountain ranges with our experienced guides",
        "price": 299,
        "duration": 3,
        "location": "Mount Kenya, Kenya",
        "image": "/assets/mountain-adventure.jpg",
        "highlights": ["Mountain Climbing", "Scenic Views", "Expert Guides", "Equipment Included"],
        "rating": 4.8,
    },
    {
        "title": "City Tour",
        "description": "Discover the hidden gems of the city with our local experts",
        "price": 149,
        "duration": 1,
        "location": "Nairobi, Kenya",
        "image": "/assets/city-tour.jpg",
        "highlights": ["Local Culture", "Historical Sites", "Food Tasting", "Transport Included"],
        "rating": 4.5,
    },
    {
        "title": "Beach Paradise",
        "description": "Relax and enjoy the pristine beaches and crystal clear waters",
        "price": 399,
        "duration": 4,
        "location": "Diani Beach, Kenya",
        "image": "/assets/beach-paradise.jpg",
        "highlights": ["Beach Activities", "Water Sports", "Luxury Resort", "All Inclusive"],
        "rating": 4.9,
    },
    {
        "title": "Safari Adventure",
        "description": "Experience the wild beauty of African wildlife in their natural habitat",
        "price": 599,
        "duration": 5,
        "location": "Maasai Mara, Kenya",
        "image": "/assets/safari-adventure.jpg",
        "highlights": ["Big Five Safari", "Luxury Lodges", "Expert Guides", "Photography"],
        "rating": 4.9,
    },
]

SAMPLE_DESTINATIONS = [
    {"name": "Maasai Mara", "location": "Narok, Kenya", "rating": 4.9, "price": 450,
     "description": "Savannah reserve known for the Great Migration"},
    {"name": "Lamu Old Town", "location": "Lamu, Kenya", "rating": 4.6, "price": 220,
     "description": "Swahili stone town on the northern coast"},
    {"name": "Hell's Gate", "location": "Naivasha, Kenya", "rating": 4.4, "price": 90,
     "description": "Gorges and geothermal springs, explored on foot or by bike"},
]


async def seed_database(database) -> dict[str, int]:
    """
    Replace the tours and destinations collections with the sample data.

    Returns:
        Number of documents inserted per collection
    """
    now = utcnow()
    tours = [Tour(**tour, created_at=now, updated_at=now).to_document() for tour in SAMPLE_TOURS]
    destinations = [Destination(**destination).to_document() for destination in SAMPLE_DESTINATIONS]

    inserted = {}
    for collection, documents in ((Tour.collection, tours), (Destination.collection, destinations)):
        await database[collection].delete_many({})
        logger.info("Cleared existing %s", collection)
        result = await database[collection].insert_many(documents)
        inserted[collection] = len(result.inserted_ids)
        logger.info("Inserted %d %s", inserted[collection], collection)
    return inserted


async def main() -> int:
    client = create_client(settings)
    try:
        await seed_database(get_database(client, settings))
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        await close_store(client)

    logger.info("Database seeded successfully!")
    logger.info("Start the API with: cd server && python -m oyow_tours.main")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
