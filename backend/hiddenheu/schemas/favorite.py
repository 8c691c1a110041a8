"""HiddenHeu Backend — Favorite Schemas."""

from datetime import datetime
from typing import List

from pydantic import Field

from hiddenheu.schemas.base import APIModel
from hiddenheu.schemas.catalog import PlaceResponse


class FavoriteCreate(APIModel):
    place_id: int = Field(gt=0)


class FavoriteResponse(APIModel):
    id: int
    user_id: int
    place_id: int
    created_at: datetime


class FavoriteCreated(APIModel):
    success: bool = True
    favorite: FavoriteResponse


class FavoritePlaceList(APIModel):
    """GET /api/favorites answers with the favorited places themselves."""

    favorites: List[PlaceResponse]


class FavoriteStatus(APIModel):
    is_favorite: bool
