"""HiddenHeu Backend — Review Schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from hiddenheu.schemas.base import APIModel


class ReviewCreate(APIModel):
    """Body of POST /api/places/{id}/reviews. userId and placeId come from the session and the URL."""

    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReviewResponse(APIModel):
    id: int
    user_id: int
    place_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime


class ReviewList(APIModel):
    reviews: List[ReviewResponse]


class ReviewEnvelope(APIModel):
    review: ReviewResponse
