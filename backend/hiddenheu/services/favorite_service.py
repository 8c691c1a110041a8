"""
HiddenHeu Backend — Favorite Service
======================================

What:  Manage the signed-in user's favorite places.
Why:   The store does not stop a second favorite for the same
       (user, place) pair. This service does, by running is_favorite and
       add_favorite under `store.lock` so two concurrent requests cannot
       both pass the check.
"""

import logging
from typing import List

from hiddenheu.exceptions import ConflictError, NotFoundError
from hiddenheu.models import Favorite, Place
from hiddenheu.storage import MemStorage

logger = logging.getLogger(__name__)


class FavoriteService:

    def list_favorites(self, store: MemStorage, user_id: int) -> List[Place]:
        return store.get_user_favorites(user_id)

    def add_favorite(self, store: MemStorage, user_id: int, place_id: int) -> Favorite:
        """
        Raises:
            NotFoundError: The place does not exist.
            ConflictError: The place is already in the user's favorites.
        """
        with store.lock:
            if store.get_place(place_id) is None:
                raise NotFoundError(resource="place", resource_id=place_id)
            if store.is_favorite(user_id, place_id):
                raise ConflictError(
                    message="Place is already in favorites",
                    context={"place_id": place_id},
                )
            favorite = store.add_favorite({"user_id": user_id, "place_id": place_id})

        logger.info("User %d favorited place %d", user_id, place_id)
        return favorite

    def remove_favorite(self, store: MemStorage, user_id: int, place_id: int) -> None:
        """
        Raises:
            NotFoundError: The user had not favorited this place.
        """
        if not store.remove_favorite(user_id, place_id):
            raise NotFoundError(
                resource="favorite",
                resource_id=place_id,
                message="Favorite not found",
            )
        logger.info("User %d removed place %d from favorites", user_id, place_id)

    def is_favorite(self, store: MemStorage, user_id: int, place_id: int) -> bool:
        return store.is_favorite(user_id, place_id)


favorite_service = FavoriteService()
