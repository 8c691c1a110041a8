"""
HiddenHeu Backend — MemStorage Unit Tests
===========================================

What we test:
    ✅ Id assignment and case-insensitive user lookups
    ✅ City / category / combined place filters and their intersection rule
    ✅ review_count bookkeeping, including reviews for unknown places
    ✅ Favorite add / remove / check and the dangling-place filter
    ✅ Ids are never reused, and racing duplicate favorites leave one row
    ✅ Seed data shape
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from hiddenheu.exceptions import ConflictError
from hiddenheu.models import Favorite
from hiddenheu.services.favorite_service import favorite_service
from hiddenheu.storage import MemStorage


def _city(store, name):
    return store.create_city(
        {"name": name, "state": "State", "description": f"{name} city", "latitude": "0", "longitude": "0"}
    )


def _category(store, name):
    return store.create_category({"name": name, "description": f"{name} places", "icon": "fa-star"})


def _place(store, name, city_id, category_id, **extra):
    data = {
        "name": name,
        "description": f"{name} description",
        "address": f"{name} road",
        "city_id": city_id,
        "category_id": category_id,
        "latitude": "28.6",
        "longitude": "77.2",
    }
    data.update(extra)
    return store.create_place(data)


def _user(store, username, email):
    return store.create_user({"username": username, "password": "hash", "email": email})


class TestUsers:

    def setup_method(self):
        self.store = MemStorage(seed=False)

    def test_ids_start_at_one_and_increase(self):
        """Each created user gets the next id."""
        first = _user(self.store, "alice", "alice@x.com")
        second = _user(self.store, "bob", "bob@x.com")
        assert (first.id, second.id) == (1, 2)

    def test_lookup_is_case_insensitive(self):
        """Username and email lookups ignore case."""
        user = _user(self.store, "Alice", "Alice@X.com")
        assert self.store.get_user_by_username("alice") is user
        assert self.store.get_user_by_username("ALICE") is user
        assert self.store.get_user_by_email("alice@x.com") is user

    def test_store_does_not_reject_duplicates(self):
        """Uniqueness belongs to the calling layer; the first user keeps the lookup slot."""
        first = _user(self.store, "alice", "alice@x.com")
        second = _user(self.store, "Alice", "other@y.com")
        assert second.id == 2
        assert self.store.get_user_by_username("ALICE") is first

    def test_profile_picture_starts_empty(self):
        """New users never carry a profile picture."""
        user = self.store.create_user(
            {"username": "carol", "password": "h", "email": "c@x.com", "profile_picture": "x.png"}
        )
        assert user.profile_picture is None
        assert user.preferred_language == "english"
        assert user.created_at is not None

    def test_missing_user_returns_none(self):
        assert self.store.get_user(99) is None
        assert self.store.get_user_by_username("ghost") is None


class TestPlaceFilters:

    def setup_method(self):
        self.store = MemStorage(seed=False)
        delhi = _city(self.store, "Delhi")
        mumbai = _city(self.store, "Mumbai")
        food = _category(self.store, "Food")
        nature = _category(self.store, "Nature")
        self.a = _place(self.store, "A", delhi.id, food.id)
        self.b = _place(self.store, "B", delhi.id, nature.id)
        self.c = _place(self.store, "C", mumbai.id, food.id)

    def test_delhi_mumbai_scenario(self):
        """City, category and combined filters return the expected places in insertion order."""
        assert self.store.get_places_by_city(1) == [self.a, self.b]
        assert self.store.get_places_by_category(1) == [self.a, self.c]
        assert self.store.get_places_by_city_and_category(1, 1) == [self.a]

    @pytest.mark.parametrize("city_id", [1, 2, 3])
    @pytest.mark.parametrize("category_id", [1, 2, 3])
    def test_combined_filter_is_intersection(self, city_id, category_id):
        """The combined filter equals the intersection of the single filters."""
        by_category = self.store.get_places_by_category(category_id)
        expected = [p for p in self.store.get_places_by_city(city_id) if p in by_category]
        assert self.store.get_places_by_city_and_category(city_id, category_id) == expected

    def test_unknown_keys_return_empty(self):
        assert self.store.get_places_by_city(42) == []
        assert self.store.get_places_by_category(42) == []

    def test_city_by_name(self):
        assert self.store.get_city_by_name("delhi").name == "Delhi"
        assert self.store.get_city_by_name("Pune") is None


class TestPlaces:

    def setup_method(self):
        self.store = MemStorage(seed=False)

    def test_new_place_defaults(self):
        """Places start with zero reviews, not featured, and their own tag list."""
        tags = ["fort"]
        place = _place(self.store, "Fort", 1, 1, tags=tags, review_count=17)
        assert place.review_count == 0
        assert place.is_featured is False
        tags.append("mutated")
        assert place.tags == ["fort"]

    def test_featured_places(self):
        """Only places created with is_featured appear in the featured list."""
        featured = _place(self.store, "F", 1, 1, is_featured=True)
        _place(self.store, "N", 1, 1)
        assert self.store.get_featured_places() == [featured]


class TestReviews:

    def setup_method(self):
        self.store = MemStorage(seed=False)
        self.place = _place(self.store, "Temple", 1, 1)
        self.other = _place(self.store, "Lake", 1, 2)

    def _review(self, place_id, rating=5):
        return self.store.create_review({"user_id": 1, "place_id": place_id, "rating": rating})

    def test_review_increments_count_by_one(self):
        """Each review adds exactly one to its own place's review_count."""
        self._review(self.place.id)
        self._review(self.place.id, rating=3)
        assert self.place.review_count == 2
        assert self.other.review_count == 0

    def test_review_for_missing_place_is_accepted(self):
        """A review for an unknown place neither raises nor touches any count."""
        review = self._review(999)
        assert review.id == 1
        assert self.place.review_count == 0
        assert self.other.review_count == 0

    def test_reviews_listed_in_creation_order(self):
        first = self._review(self.place.id)
        second = self._review(self.place.id)
        assert self.store.get_reviews(self.place.id) == [first, second]
        assert self.store.get_reviews(self.other.id) == []


class TestFavorites:

    def setup_method(self):
        self.store = MemStorage(seed=False)
        self.place = _place(self.store, "Step well", 1, 1)
        self.second = _place(self.store, "Garden", 1, 2)

    def test_add_then_check(self):
        self.store.add_favorite({"user_id": 1, "place_id": self.place.id})
        assert self.store.is_favorite(1, self.place.id) is True
        assert self.store.is_favorite(2, self.place.id) is False

    def test_remove_then_check(self):
        self.store.add_favorite({"user_id": 1, "place_id": self.place.id})
        assert self.store.remove_favorite(1, self.place.id) is True
        assert self.store.is_favorite(1, self.place.id) is False

    def test_remove_missing_pair_returns_false(self):
        """Removing a favorite that does not exist is not an error."""
        assert self.store.remove_favorite(1, self.place.id) is False

    def test_user_favorites_in_order(self):
        self.store.add_favorite({"user_id": 1, "place_id": self.second.id})
        self.store.add_favorite({"user_id": 1, "place_id": self.place.id})
        assert self.store.get_user_favorites(1) == [self.second, self.place]
        assert self.store.get_user_favorites(2) == []

    def test_favorites_skip_places_that_do_not_exist(self):
        """Dangling favorites, including ones injected directly, never surface."""
        self.store.add_favorite({"user_id": 1, "place_id": 404})
        self.store._favorites[99] = Favorite(id=99, user_id=1, place_id=505, created_at=None)
        self.store._favorites_by_user[1][99] = None
        self.store.add_favorite({"user_id": 1, "place_id": self.place.id})
        assert self.store.get_user_favorites(1) == [self.place]

    def test_ids_not_reused_after_removal(self):
        first = self.store.add_favorite({"user_id": 1, "place_id": self.place.id})
        self.store.remove_favorite(1, self.place.id)
        again = self.store.add_favorite({"user_id": 1, "place_id": self.place.id})

        assert first.id == 1
        assert again.id == 2

    def test_concurrent_duplicate_adds_keep_one_row(self):
        """Eight threads race to favorite the same place; exactly one wins."""
        workers = 8
        barrier = threading.Barrier(workers)

        def add():
            barrier.wait(timeout=5)
            try:
                favorite_service.add_favorite(self.store, 1, self.place.id)
            except ConflictError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda _: add(), range(workers)))

        assert results.count(True) == 1
        assert self.store.counts()["favorites"] == 1
        assert self.store.get_user_favorites(1) == [self.place]


class TestSeedData:

    def test_seeded_counts(self, store):
        counts = store.counts()
        assert counts["cities"] == 6
        assert counts["categories"] == 5
        assert counts["places"] == 6
        assert counts["testimonials"] == 3
        assert counts["users"] == 0

    def test_featured_seed_places(self, store):
        assert [p.id for p in store.get_featured_places()] == [1, 2, 3, 4]

    def test_seed_is_deterministic(self):
        """Two stores built from the seed hold identical data."""
        first, second = MemStorage(seed=True), MemStorage(seed=True)
        assert first.get_places() == second.get_places()
        assert first.get_cities() == second.get_cities()
