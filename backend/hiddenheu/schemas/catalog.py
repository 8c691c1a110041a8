"""
HiddenHeu Backend — Catalog Schemas
=====================================

Cities, categories, places and testimonials. List endpoints wrap their
arrays in a named key (`{"cities": [...]}`) and single-item endpoints in a
singular key (`{"city": {...}}`), which is the shape the web client reads.
"""

from typing import List, Optional

from pydantic import Field

from hiddenheu.schemas.base import APIModel


class CityResponse(APIModel):
    id: int
    name: str
    state: str
    description: str
    image_url: Optional[str] = None
    rating: Optional[int] = Field(default=None, description="0–50, i.e. tenths of a star")
    latitude: str
    longitude: str


class CategoryResponse(APIModel):
    id: int
    name: str
    description: str
    icon: str
    color_class: Optional[str] = None


class PlaceResponse(APIModel):
    id: int
    name: str
    description: str
    address: str
    city_id: int
    category_id: int
    image_url: Optional[str] = None
    latitude: str
    longitude: str
    rating: Optional[int] = Field(default=None, description="0–50, i.e. tenths of a star")
    review_count: int = 0
    is_featured: bool = False
    tags: List[str] = Field(default_factory=list)


class NearbyPlaceResponse(PlaceResponse):
    distance_km: float = Field(description="Great-circle distance from the query point")


class TestimonialResponse(APIModel):
    id: int
    name: str
    location: str
    comment: str
    rating: int
    avatar_initials: Optional[str] = None


class CityList(APIModel):
    cities: List[CityResponse]


class CityEnvelope(APIModel):
    city: CityResponse


class CategoryList(APIModel):
    categories: List[CategoryResponse]


class PlaceList(APIModel):
    places: List[PlaceResponse]


class NearbyPlaceList(APIModel):
    places: List[NearbyPlaceResponse]


class PlaceEnvelope(APIModel):
    place: PlaceResponse


class TestimonialList(APIModel):
    testimonials: List[TestimonialResponse]


class NarrationResponse(APIModel):
    """
    Text the client reads aloud for a place.

    language_code is the BCP-47 prefix the browser uses to pick a
    SpeechSynthesis voice (e.g. "hi" for Hindi).
    """

    place_id: int
    language: str
    language_code: str
    text: str
    translated: bool
