"""
HiddenHeu Backend — Health Check Route
========================================

What:  Health endpoint for Docker health checks and load balancer checks.
How:   Reports store sizes, live session count and translator state. With
       `?deep=true` it also asks the translation provider for a
       reachability check, which costs a network round trip.

Status levels:
    healthy:   translation is available (or the deep check passed)
    degraded:  translation is unconfigured, unreachable or its circuit is
               open; the catalog, auth and favorites still work
"""

import logging
import time

from fastapi import APIRouter, Depends, Query

from hiddenheu import __version__
from hiddenheu.dependencies import get_sessions, get_storage, get_translation_service
from hiddenheu.schemas.common import HealthResponse
from hiddenheu.security import SessionManager
from hiddenheu.services.translation_service import TranslationService
from hiddenheu.storage import MemStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    deep: bool = Query(default=False, description="Also check the translation provider is reachable"),
    store: MemStorage = Depends(get_storage),
    sessions: SessionManager = Depends(get_sessions),
    translator: TranslationService = Depends(get_translation_service),
) -> HealthResponse:
    provider = translator.provider
    translator_status = provider.status

    if deep and translator_status == "available":
        if not await provider.health_check():
            translator_status = "unavailable"
            logger.warning("Health check: translation provider unreachable")

    overall = "healthy" if translator_status == "available" else "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=store.counts(),
        translator=translator_status,
        active_sessions=len(sessions),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
