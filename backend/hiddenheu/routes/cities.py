"""HiddenHeu Backend — City and Category Route Handlers."""

from fastapi import APIRouter, Depends

from hiddenheu.dependencies import get_storage
from hiddenheu.schemas.catalog import (
    CategoryList,
    CategoryResponse,
    CityEnvelope,
    CityList,
    CityResponse,
)
from hiddenheu.schemas.common import ErrorResponse
from hiddenheu.services.catalog_service import catalog_service
from hiddenheu.storage import MemStorage

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/cities", response_model=CityList, summary="List all cities")
async def list_cities(store: MemStorage = Depends(get_storage)) -> CityList:
    return CityList(
        cities=[CityResponse.model_validate(c) for c in catalog_service.list_cities(store)]
    )


@router.get(
    "/cities/{city_id}",
    response_model=CityEnvelope,
    responses={404: {"description": "City not found", "model": ErrorResponse}},
    summary="Get a single city",
)
async def get_city(city_id: int, store: MemStorage = Depends(get_storage)) -> CityEnvelope:
    city = catalog_service.get_city(store, city_id)
    return CityEnvelope(city=CityResponse.model_validate(city))


@router.get("/categories", response_model=CategoryList, summary="List all categories")
async def list_categories(store: MemStorage = Depends(get_storage)) -> CategoryList:
    return CategoryList(
        categories=[
            CategoryResponse.model_validate(c) for c in catalog_service.list_categories(store)
        ]
    )
