"""
HiddenHeu Backend — Review Service
====================================

What:  Listing and creating reviews for a place.
Why:   The store accepts a review for any place_id and simply skips the
       review_count bump when the place is missing. The API should not
       accept such reviews at all, so the existence check lives here.
"""

import logging
from typing import List

from hiddenheu.exceptions import NotFoundError
from hiddenheu.models import Review
from hiddenheu.schemas.review import ReviewCreate
from hiddenheu.storage import MemStorage

logger = logging.getLogger(__name__)


class ReviewService:

    def list_reviews(self, store: MemStorage, place_id: int) -> List[Review]:
        return store.get_reviews(place_id)

    def create_review(
        self,
        store: MemStorage,
        user_id: int,
        place_id: int,
        payload: ReviewCreate,
    ) -> Review:
        """
        Store a review by user_id for place_id.

        Raises:
            NotFoundError: The place does not exist.
        """
        with store.lock:
            if store.get_place(place_id) is None:
                raise NotFoundError(resource="place", resource_id=place_id)
            review = store.create_review(
                {
                    "user_id": user_id,
                    "place_id": place_id,
                    "rating": payload.rating,
                    "comment": payload.comment,
                }
            )

        logger.info("Review %d created for place %d by user %d", review.id, place_id, user_id)
        return review


review_service = ReviewService()
