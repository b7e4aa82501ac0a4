"""Static tour catalog served when the document store cannot provide tours."""

from typing import Optional

from ..models.tour import Tour

STATIC_CATALOG: tuple[Tour, ...] = (
    Tour(
        id="1",
        title="Mountain Adventure",
        description="Explore the beautiful mountain ranges with our experienced guides",
        price=299,
        duration=3,
        location="Mount Kenya, Kenya",
        image="/assets/mountain-adventure.jpg",
        highlights=["Mountain Climbing", "Scenic Views", "Expert Guides"],
        rating=4.8,
    ),
    Tour(
        id="2",
        title="City Tour",
        description="Discover the hidden gems of the city with our local experts",
        price=149,
        duration=1,
        location="Nairobi, Kenya",
        image="/assets/city-tour.jpg",
        highlights=["Local Culture", "Historical Sites", "Food Tasting"],
        rating=4.5,
    ),
    Tour(
        id="3",
        title="Beach Paradise",
        description="Relax and enjoy the pristine beaches and crystal clear waters",
        price=399,
        duration=4,
        location="Diani Beach, Kenya",
        image="/assets/beach-paradise.jpg",
        highlights=["Beach Activities", "Water Sports", "Luxury Resort"],
        rating=4.9,
    ),
)


def catalog_tours() -> list[Tour]:
    """Return copies of the catalog tours so callers cannot mutate the originals."""
    return [tour.model_copy(deep=True) for tour in STATIC_CATALOG]


def find_catalog_tour(tour_id: str) -> Optional[Tour]:
    for tour in STATIC_CATALOG:
        if tour.id == tour_id:
            return tour.model_copy(deep=True)
    return None
