"""HiddenHeu Backend — Testimonial Route Handlers."""

from fastapi import APIRouter, Depends

from hiddenheu.dependencies import get_storage
from hiddenheu.schemas.catalog import TestimonialList, TestimonialResponse
from hiddenheu.services.catalog_service import catalog_service
from hiddenheu.storage import MemStorage

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/testimonials", response_model=TestimonialList, summary="List traveler testimonials")
async def list_testimonials(store: MemStorage = Depends(get_storage)) -> TestimonialList:
    return TestimonialList(
        testimonials=[
            TestimonialResponse.model_validate(t) for t in catalog_service.list_testimonials(store)
        ]
    )
