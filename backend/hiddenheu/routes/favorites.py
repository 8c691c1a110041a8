"""
HiddenHeu Backend — Favorite Route Handlers
=============================================

Every route here requires a session; the user always comes from the
session, never from the request body.
"""

from fastapi import APIRouter, Depends, status

from hiddenheu.dependencies import get_current_user, get_storage
from hiddenheu.models import User
from hiddenheu.schemas.catalog import PlaceResponse
from hiddenheu.schemas.common import ErrorResponse, SuccessResponse
from hiddenheu.schemas.favorite import (
    FavoriteCreate,
    FavoriteCreated,
    FavoritePlaceList,
    FavoriteResponse,
    FavoriteStatus,
)
from hiddenheu.services.favorite_service import favorite_service
from hiddenheu.storage import MemStorage

router = APIRouter(
    prefix="/api/favorites",
    tags=["Favorites"],
    responses={401: {"description": "Not signed in", "model": ErrorResponse}},
)


@router.get("", response_model=FavoritePlaceList, summary="The signed-in user's favorite places")
async def list_favorites(
    user: User = Depends(get_current_user),
    store: MemStorage = Depends(get_storage),
) -> FavoritePlaceList:
    places = favorite_service.list_favorites(store, user.id)
    return FavoritePlaceList(favorites=[PlaceResponse.model_validate(p) for p in places])


@router.post(
    "",
    response_model=FavoriteCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Already a favorite", "model": ErrorResponse},
        404: {"description": "Place not found", "model": ErrorResponse},
    },
    summary="Add a place to favorites",
)
async def add_favorite(
    payload: FavoriteCreate,
    user: User = Depends(get_current_user),
    store: MemStorage = Depends(get_storage),
) -> FavoriteCreated:
    favorite = favorite_service.add_favorite(store, user.id, payload.place_id)
    return FavoriteCreated(favorite=FavoriteResponse.model_validate(favorite))


@router.get("/{place_id}", response_model=FavoriteStatus, summary="Is this place a favorite?")
async def check_favorite(
    place_id: int,
    user: User = Depends(get_current_user),
    store: MemStorage = Depends(get_storage),
) -> FavoriteStatus:
    return FavoriteStatus(is_favorite=favorite_service.is_favorite(store, user.id, place_id))


@router.delete(
    "/{place_id}",
    response_model=SuccessResponse,
    responses={404: {"description": "Favorite not found", "model": ErrorResponse}},
    summary="Remove a place from favorites",
)
async def remove_favorite(
    place_id: int,
    user: User = Depends(get_current_user),
    store: MemStorage = Depends(get_storage),
) -> SuccessResponse:
    favorite_service.remove_favorite(store, user.id, place_id)
    return SuccessResponse()
