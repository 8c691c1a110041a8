"""
HiddenHeu Backend — Place Record
==================================

A place references a City and a Category by id. The store indexes places
by both keys (and by the featured flag) when they are created.

review_count is a counter, not a derived query: it starts at 0 and the
store bumps it once per `create_review` that targets this place.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Place:
    """A hidden gem inside a city."""

    id: int
    name: str
    description: str
    address: str
    city_id: int
    category_id: int
    latitude: str
    longitude: str
    image_url: Optional[str] = None
    rating: Optional[int] = None
    review_count: int = 0
    is_featured: bool = False
    tags: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"<Place(id={self.id}, name='{self.name}', "
            f"city_id={self.city_id}, category_id={self.category_id})>"
        )
