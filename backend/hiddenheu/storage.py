"""
HiddenHeu Backend — In-Memory Repository Store
================================================

What:  The single source of truth for users, cities, categories, places,
       reviews, testimonials and favorites for the lifetime of the process.
Why:   The service has no database; every collection lives in memory and is
       re-seeded identically on each start.
How:   One dict per entity keyed by an auto-incrementing integer id, plus
       secondary indices maintained on insert/delete so the "by city",
       "by category", "by user" and "by place" queries touch only the rows
       they return.
Who:   Services receive the store through the `get_storage` dependency.

Contract:
    - Lookups on a missing id or name return None; list queries return [].
    - Creates always succeed. The store does NOT check uniqueness of
      usernames, emails or favorites; AuthService and FavoriteService do,
      while holding `store.lock`.
    - Ids start at 1 per entity and are never reused, even after a favorite
      is removed.
    - `create_review` bumps the referenced place's review_count and silently
      skips the bump when the place does not exist.

Indices:
    places_by_city      city_id      → [place_id, ...]   (insertion order)
    places_by_category  category_id  → [place_id, ...]
    featured_places     {place_id, ...}
    reviews_by_place    place_id     → [review_id, ...]
    favorites_by_user   user_id      → {favorite_id, ...} (ordered)
    favorites_by_pair   (user, place)→ [favorite_id, ...]
    users_by_username   lower(name)  → user_id           (first wins)
    users_by_email      lower(email) → user_id           (first wins)
    cities_by_name      lower(name)  → city_id           (first wins)

Thread Safety:
    Every public method runs under one re-entrant lock. Callers that need a
    check-then-act sequence (is_favorite → add_favorite) take `store.lock`
    themselves; the RLock lets them call back into the store while holding it.
"""

import itertools
import logging
import threading
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from hiddenheu.models import Category, City, Favorite, Place, Review, Testimonial, User

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemStorage:
    """
    In-memory implementation of the repository store.

    Args:
        seed: Load the sample cities, categories, places and testimonials
              (see hiddenheu.seed) right after construction.
    """

    def __init__(self, seed: bool = True):
        self.lock = threading.RLock()

        # ── Primary collections ───────────────────────────────────────────
        self._users: Dict[int, User] = {}
        self._cities: Dict[int, City] = {}
        self._categories: Dict[int, Category] = {}
        self._places: Dict[int, Place] = {}
        self._reviews: Dict[int, Review] = {}
        self._testimonials: Dict[int, Testimonial] = {}
        self._favorites: Dict[int, Favorite] = {}

        # ── Id counters (start at 1, never reused) ────────────────────────
        self._user_ids = itertools.count(1)
        self._city_ids = itertools.count(1)
        self._category_ids = itertools.count(1)
        self._place_ids = itertools.count(1)
        self._review_ids = itertools.count(1)
        self._testimonial_ids = itertools.count(1)
        self._favorite_ids = itertools.count(1)

        # ── Secondary indices ─────────────────────────────────────────────
        self._places_by_city: Dict[int, List[int]] = defaultdict(list)
        self._places_by_category: Dict[int, List[int]] = defaultdict(list)
        # dict used as an insertion-ordered set
        self._featured_places: Dict[int, None] = {}
        self._reviews_by_place: Dict[int, List[int]] = defaultdict(list)
        self._favorites_by_user: Dict[int, Dict[int, None]] = defaultdict(dict)
        self._favorites_by_pair: Dict[Tuple[int, int], List[int]] = defaultdict(list)
        self._users_by_username: Dict[str, int] = {}
        self._users_by_email: Dict[str, int] = {}
        self._cities_by_name: Dict[str, int] = {}

        if seed:
            from hiddenheu.seed import load_sample_data
            load_sample_data(self)

    # ══════════════════════════════════════════════════════════════════════
    # Users
    # ══════════════════════════════════════════════════════════════════════

    def get_user(self, user_id: int) -> Optional[User]:
        with self.lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive exact match on username."""
        with self.lock:
            user_id = self._users_by_username.get(username.lower())
            return self._users.get(user_id) if user_id is not None else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive exact match on email."""
        with self.lock:
            user_id = self._users_by_email.get(email.lower())
            return self._users.get(user_id) if user_id is not None else None

    def create_user(self, data: Mapping[str, Any]) -> User:
        """
        Store a new user. Assigns id and created_at; profile_picture starts as None.

        Uniqueness is NOT checked here. If a caller skips AuthService and
        inserts a duplicate username, lookups keep returning the first one.
        """
        with self.lock:
            user = User(
                id=next(self._user_ids),
                created_at=_utcnow(),
                **{**data, "profile_picture": None},
            )
            self._users[user.id] = user
            # setdefault: the earliest user keeps the index slot
            self._users_by_username.setdefault(user.username.lower(), user.id)
            self._users_by_email.setdefault(user.email.lower(), user.id)
            return user

    # ══════════════════════════════════════════════════════════════════════
    # Cities
    # ══════════════════════════════════════════════════════════════════════

    def get_cities(self) -> List[City]:
        with self.lock:
            return list(self._cities.values())

    def get_city(self, city_id: int) -> Optional[City]:
        with self.lock:
            return self._cities.get(city_id)

    def get_city_by_name(self, name: str) -> Optional[City]:
        with self.lock:
            city_id = self._cities_by_name.get(name.lower())
            return self._cities.get(city_id) if city_id is not None else None

    def create_city(self, data: Mapping[str, Any]) -> City:
        with self.lock:
            city = City(id=next(self._city_ids), **data)
            self._cities[city.id] = city
            self._cities_by_name.setdefault(city.name.lower(), city.id)
            return city

    # ══════════════════════════════════════════════════════════════════════
    # Categories
    # ══════════════════════════════════════════════════════════════════════

    def get_categories(self) -> List[Category]:
        with self.lock:
            return list(self._categories.values())

    def get_category(self, category_id: int) -> Optional[Category]:
        with self.lock:
            return self._categories.get(category_id)

    def create_category(self, data: Mapping[str, Any]) -> Category:
        with self.lock:
            category = Category(id=next(self._category_ids), **data)
            self._categories[category.id] = category
            return category

    # ══════════════════════════════════════════════════════════════════════
    # Places
    # ══════════════════════════════════════════════════════════════════════

    def _resolve_places(self, place_ids: Iterable[int]) -> List[Place]:
        return [self._places[pid] for pid in place_ids if pid in self._places]

    def get_places(self) -> List[Place]:
        with self.lock:
            return list(self._places.values())

    def get_places_by_city(self, city_id: int) -> List[Place]:
        with self.lock:
            return self._resolve_places(self._places_by_city.get(city_id, ()))

    def get_places_by_category(self, category_id: int) -> List[Place]:
        with self.lock:
            return self._resolve_places(self._places_by_category.get(category_id, ()))

    def get_places_by_city_and_category(self, city_id: int, category_id: int) -> List[Place]:
        """
        Places matching both keys, in insertion order.

        Walks the smaller of the two index buckets and filters on the other
        key, so cost is O(min(|city bucket|, |category bucket|)).
        """
        with self.lock:
            by_city = self._places_by_city.get(city_id, [])
            by_category = self._places_by_category.get(category_id, [])
            if len(by_city) <= len(by_category):
                candidates = self._resolve_places(by_city)
                return [p for p in candidates if p.category_id == category_id]
            candidates = self._resolve_places(by_category)
            return [p for p in candidates if p.city_id == city_id]

    def get_featured_places(self) -> List[Place]:
        with self.lock:
            return self._resolve_places(self._featured_places)

    def get_place(self, place_id: int) -> Optional[Place]:
        with self.lock:
            return self._places.get(place_id)

    def create_place(self, data: Mapping[str, Any]) -> Place:
        """Store a new place with review_count 0 and index it by city, category and featured flag."""
        with self.lock:
            fields = dict(data)
            fields["review_count"] = 0
            fields["tags"] = list(fields.get("tags") or [])
            if fields.get("is_featured") is None:
                fields["is_featured"] = False
            place = Place(id=next(self._place_ids), **fields)
            self._places[place.id] = place
            self._places_by_city[place.city_id].append(place.id)
            self._places_by_category[place.category_id].append(place.id)
            if place.is_featured:
                self._featured_places[place.id] = None
            return place

    # ══════════════════════════════════════════════════════════════════════
    # Reviews
    # ══════════════════════════════════════════════════════════════════════

    def get_reviews(self, place_id: int) -> List[Review]:
        with self.lock:
            return [self._reviews[rid] for rid in self._reviews_by_place.get(place_id, ())]

    def create_review(self, data: Mapping[str, Any]) -> Review:
        """
        Store a review and bump the place's review_count.

        A review for an unknown place_id is still stored but no counter
        changes. ReviewService rejects that case before calling here.
        """
        with self.lock:
            review = Review(id=next(self._review_ids), created_at=_utcnow(), **data)
            self._reviews[review.id] = review
            self._reviews_by_place[review.place_id].append(review.id)

            place = self._places.get(review.place_id)
            if place is not None:
                place.review_count = (place.review_count or 0) + 1
            else:
                logger.debug(
                    "Review %d references unknown place %d; review_count untouched",
                    review.id,
                    review.place_id,
                )
            return review

    # ══════════════════════════════════════════════════════════════════════
    # Testimonials
    # ══════════════════════════════════════════════════════════════════════

    def get_testimonials(self) -> List[Testimonial]:
        with self.lock:
            return list(self._testimonials.values())

    def create_testimonial(self, data: Mapping[str, Any]) -> Testimonial:
        with self.lock:
            testimonial = Testimonial(id=next(self._testimonial_ids), **data)
            self._testimonials[testimonial.id] = testimonial
            return testimonial

    # ══════════════════════════════════════════════════════════════════════
    # Favorites
    # ══════════════════════════════════════════════════════════════════════

    def get_user_favorites(self, user_id: int) -> List[Place]:
        """
        The user's favorite places, oldest favorite first.

        Favorites whose place does not resolve are dropped rather than
        returned as nulls.
        """
        with self.lock:
            favorite_ids = self._favorites_by_user.get(user_id, {})
            place_ids = [self._favorites[fid].place_id for fid in favorite_ids]
            return self._resolve_places(place_ids)

    def add_favorite(self, data: Mapping[str, Any]) -> Favorite:
        """Store a favorite. Does not check whether the pair already exists."""
        with self.lock:
            favorite = Favorite(id=next(self._favorite_ids), created_at=_utcnow(), **data)
            self._favorites[favorite.id] = favorite
            self._favorites_by_user[favorite.user_id][favorite.id] = None
            self._favorites_by_pair[(favorite.user_id, favorite.place_id)].append(favorite.id)
            return favorite

    def remove_favorite(self, user_id: int, place_id: int) -> bool:
        """Delete the oldest favorite for (user_id, place_id). Returns whether one existed."""
        with self.lock:
            pair = (user_id, place_id)
            ids = self._favorites_by_pair.get(pair)
            if not ids:
                return False

            favorite_id = ids.pop(0)
            if not ids:
                del self._favorites_by_pair[pair]
            del self._favorites[favorite_id]

            user_favorites = self._favorites_by_user.get(user_id)
            if user_favorites is not None:
                user_favorites.pop(favorite_id, None)
                if not user_favorites:
                    del self._favorites_by_user[user_id]
            return True

    def is_favorite(self, user_id: int, place_id: int) -> bool:
        with self.lock:
            return bool(self._favorites_by_pair.get((user_id, place_id)))

    # ══════════════════════════════════════════════════════════════════════
    # Introspection
    # ══════════════════════════════════════════════════════════════════════

    def counts(self) -> Dict[str, int]:
        """Row count per collection, reported by GET /health."""
        with self.lock:
            return {
                "users": len(self._users),
                "cities": len(self._cities),
                "categories": len(self._categories),
                "places": len(self._places),
                "reviews": len(self._reviews),
                "testimonials": len(self._testimonials),
                "favorites": len(self._favorites),
            }


# ── Process-wide instance ─────────────────────────────────────────────────
# Built lazily so importing this module never loads seed data as a side effect.
_storage: Optional[MemStorage] = None
_storage_lock = threading.Lock()


def get_storage() -> MemStorage:
    """
    FastAPI dependency returning the process-wide store.

    Tests override this dependency with a fresh MemStorage per test.
    """
    global _storage
    if _storage is None:
        with _storage_lock:
            if _storage is None:
                from hiddenheu.config import settings
                _storage = MemStorage(seed=settings.seed_sample_data)
                logger.info("In-memory store initialized: %s", _storage.counts())
    return _storage
