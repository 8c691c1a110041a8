"""
HiddenHeu Backend — Catalog Service
=====================================

What:  Read side of the catalog: cities, categories, places, testimonials,
       nearby search and place narration.
Why:   Keeps "missing id means 404" and the filter rules out of the routes
       and out of the store.
Who:   Called by routes/cities.py, routes/places.py and routes/testimonials.py.

Place filtering (GET /api/places):
    cityId and categoryId   → get_places_by_city_and_category
    cityId only             → get_places_by_city
    categoryId only         → get_places_by_category
    neither                 → get_places
    A value of 0 counts as "not given".
"""

import logging
from typing import List, Optional, Tuple

from hiddenheu.exceptions import NotFoundError
from hiddenheu.geo import haversine_km, parse_coordinates
from hiddenheu.models import Category, City, Place, Testimonial
from hiddenheu.services.translation_service import TranslationResult, TranslationService
from hiddenheu.storage import MemStorage

logger = logging.getLogger(__name__)


class CatalogService:
    """Stateless; every method receives the store it works on."""

    # ── Cities & Categories ───────────────────────────────────────────────

    def list_cities(self, store: MemStorage) -> List[City]:
        return store.get_cities()

    def get_city(self, store: MemStorage, city_id: int) -> City:
        city = store.get_city(city_id)
        if city is None:
            raise NotFoundError(resource="city", resource_id=city_id)
        return city

    def list_categories(self, store: MemStorage) -> List[Category]:
        return store.get_categories()

    # ── Places ────────────────────────────────────────────────────────────

    def list_places(
        self,
        store: MemStorage,
        city_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[Place]:
        if city_id and category_id:
            return store.get_places_by_city_and_category(city_id, category_id)
        if city_id:
            return store.get_places_by_city(city_id)
        if category_id:
            return store.get_places_by_category(category_id)
        return store.get_places()

    def list_featured_places(self, store: MemStorage) -> List[Place]:
        return store.get_featured_places()

    def get_place(self, store: MemStorage, place_id: int) -> Place:
        place = store.get_place(place_id)
        if place is None:
            raise NotFoundError(resource="place", resource_id=place_id)
        return place

    def nearby_places(
        self,
        store: MemStorage,
        latitude: float,
        longitude: float,
        radius_km: float,
        limit: int = 20,
    ) -> List[Tuple[Place, float]]:
        """
        Places within radius_km of the point, nearest first.

        Returns (place, distance_km) pairs. Places whose stored coordinates
        do not parse are skipped.
        """
        results: List[Tuple[Place, float]] = []
        for place in store.get_places():
            coords = parse_coordinates(place.latitude, place.longitude)
            if coords is None:
                logger.warning("Place %d has unusable coordinates; skipped in nearby search", place.id)
                continue
            distance = haversine_km(latitude, longitude, coords[0], coords[1])
            if distance <= radius_km:
                results.append((place, round(distance, 2)))

        results.sort(key=lambda pair: (pair[1], pair[0].id))
        return results[:limit]

    async def narrate_place(
        self,
        store: MemStorage,
        translator: TranslationService,
        place_id: int,
        language: Optional[str],
    ) -> Tuple[Place, TranslationResult]:
        """Description of a place in the requested language, for the voice guide."""
        place = self.get_place(store, place_id)
        result = await translator.translate(place.description, language)
        return place, result

    # ── Testimonials ──────────────────────────────────────────────────────

    def list_testimonials(self, store: MemStorage) -> List[Testimonial]:
        return store.get_testimonials()


catalog_service = CatalogService()
