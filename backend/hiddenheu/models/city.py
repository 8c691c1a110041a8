"""HiddenHeu Backend — City Record."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class City:
    """
    A destination city.

    rating is on a 0–50 scale (45 means 4.5 stars). Coordinates are decimal
    strings, kept as text so seed values round-trip exactly.
    """

    id: int
    name: str
    state: str
    description: str
    latitude: str
    longitude: str
    image_url: Optional[str] = None
    rating: Optional[int] = None
