"""
HiddenHeu Backend — Place Route Handlers
==========================================

What:  Place listing, detail, nearby search, reviews and narration.
Who:   Called by the web client's explore, place detail and map pages.

Route order matters: /places/featured and /places/nearby are declared
before /places/{place_id} so they are not captured as an id.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from hiddenheu.dependencies import get_current_user, get_storage, get_translation_service
from hiddenheu.models import User
from hiddenheu.schemas.catalog import (
    NarrationResponse,
    NearbyPlaceList,
    NearbyPlaceResponse,
    PlaceEnvelope,
    PlaceList,
    PlaceResponse,
)
from hiddenheu.schemas.common import ErrorResponse
from hiddenheu.schemas.review import ReviewCreate, ReviewEnvelope, ReviewList, ReviewResponse
from hiddenheu.services.catalog_service import catalog_service
from hiddenheu.services.review_service import review_service
from hiddenheu.services.translation_service import TranslationService
from hiddenheu.storage import MemStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/places", tags=["Places"])


@router.get(
    "",
    response_model=PlaceList,
    summary="List places, optionally filtered by city and/or category",
)
async def list_places(
    city_id: Optional[int] = Query(default=None, alias="cityId", description="Only places in this city"),
    category_id: Optional[int] = Query(default=None, alias="categoryId", description="Only places in this category"),
    store: MemStorage = Depends(get_storage),
) -> PlaceList:
    places = catalog_service.list_places(store, city_id=city_id, category_id=category_id)
    return PlaceList(places=[PlaceResponse.model_validate(p) for p in places])


@router.get("/featured", response_model=PlaceList, summary="Places highlighted on the home page")
async def list_featured_places(store: MemStorage = Depends(get_storage)) -> PlaceList:
    places = catalog_service.list_featured_places(store)
    return PlaceList(places=[PlaceResponse.model_validate(p) for p in places])


@router.get(
    "/nearby",
    response_model=NearbyPlaceList,
    summary="Places within a radius of a point, nearest first",
)
async def list_nearby_places(
    lat: float = Query(ge=-90, le=90, description="Latitude in decimal degrees"),
    lng: float = Query(ge=-180, le=180, description="Longitude in decimal degrees"),
    radius_km: float = Query(default=50.0, gt=0, le=20_000, alias="radiusKm"),
    limit: int = Query(default=20, ge=1, le=100),
    store: MemStorage = Depends(get_storage),
) -> NearbyPlaceList:
    pairs = catalog_service.nearby_places(store, lat, lng, radius_km, limit)
    return NearbyPlaceList(
        places=[
            NearbyPlaceResponse.model_validate(
                {**PlaceResponse.model_validate(place).model_dump(), "distance_km": distance}
            )
            for place, distance in pairs
        ]
    )


@router.get(
    "/{place_id}",
    response_model=PlaceEnvelope,
    responses={404: {"description": "Place not found", "model": ErrorResponse}},
    summary="Get a single place",
)
async def get_place(place_id: int, store: MemStorage = Depends(get_storage)) -> PlaceEnvelope:
    place = catalog_service.get_place(store, place_id)
    return PlaceEnvelope(place=PlaceResponse.model_validate(place))


# ── Reviews ───────────────────────────────────────────────────────────────

@router.get("/{place_id}/reviews", response_model=ReviewList, summary="Reviews of a place, oldest first")
async def list_reviews(place_id: int, store: MemStorage = Depends(get_storage)) -> ReviewList:
    reviews = review_service.list_reviews(store, place_id)
    return ReviewList(reviews=[ReviewResponse.model_validate(r) for r in reviews])


@router.post(
    "/{place_id}/reviews",
    response_model=ReviewEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"description": "Not signed in", "model": ErrorResponse},
        404: {"description": "Place not found", "model": ErrorResponse},
    },
    summary="Review a place as the signed-in user",
)
async def create_review(
    place_id: int,
    payload: ReviewCreate,
    user: User = Depends(get_current_user),
    store: MemStorage = Depends(get_storage),
) -> ReviewEnvelope:
    review = review_service.create_review(store, user.id, place_id, payload)
    return ReviewEnvelope(review=ReviewResponse.model_validate(review))


# ── Narration ─────────────────────────────────────────────────────────────

@router.get(
    "/{place_id}/narration",
    response_model=NarrationResponse,
    responses={
        400: {"description": "Unsupported language", "model": ErrorResponse},
        404: {"description": "Place not found", "model": ErrorResponse},
        503: {"description": "Translation unavailable", "model": ErrorResponse},
    },
    summary="Place description for the audio guide, in the requested language",
)
async def get_narration(
    place_id: int,
    language: Optional[str] = Query(default=None, description="Language name; English when omitted"),
    store: MemStorage = Depends(get_storage),
    translator: TranslationService = Depends(get_translation_service),
) -> NarrationResponse:
    place, result = await catalog_service.narrate_place(store, translator, place_id, language)
    return NarrationResponse(
        place_id=place.id,
        language=result.language,
        language_code=result.language_code,
        text=result.text,
        translated=result.translated,
    )
