"""HiddenHeu Backend — Review Record."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Review:
    """A user's 1–5 star review of a place."""

    id: int
    user_id: int
    place_id: int
    rating: int
    created_at: datetime
    comment: Optional[str] = None
