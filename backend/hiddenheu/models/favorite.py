"""
HiddenHeu Backend — Favorite Record
=====================================

Join record between a user and a place. At most one favorite should exist
per (user_id, place_id); FavoriteService checks `is_favorite` before
`add_favorite` while holding the store lock.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Favorite:
    id: int
    user_id: int
    place_id: int
    created_at: datetime
