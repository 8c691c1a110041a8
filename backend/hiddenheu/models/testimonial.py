"""HiddenHeu Backend — Testimonial Record (marketing content, no foreign keys)."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Testimonial:
    id: int
    name: str
    location: str
    comment: str
    rating: int
    avatar_initials: Optional[str] = None
