"""
HiddenHeu Backend — Translation Route Handler
===============================================

What:  POST /api/translate, used by the audio guide for arbitrary text.
How:   Delegates to TranslationService, which answers from its LRU cache
       when it can and otherwise asks Gemini.

Failure modes:
    Unsupported language        → 400 validation_error
    Gemini failing after retries → 503 translation_service_error
    Circuit breaker open         → 503 service_unavailable (Retry-After set)
"""

from fastapi import APIRouter, Depends

from hiddenheu.dependencies import get_translation_service
from hiddenheu.schemas.common import ErrorResponse
from hiddenheu.schemas.translation import TranslateRequest, TranslateResponse
from hiddenheu.services.translation_service import TranslationService

router = APIRouter(prefix="/api", tags=["Translation"])


@router.post(
    "/translate",
    response_model=TranslateResponse,
    responses={
        400: {"description": "Unsupported language", "model": ErrorResponse},
        503: {"description": "Translation unavailable", "model": ErrorResponse},
    },
    summary="Translate text into a supported Indian language",
)
async def translate(
    payload: TranslateRequest,
    translator: TranslationService = Depends(get_translation_service),
) -> TranslateResponse:
    result = await translator.translate(payload.text, payload.target_language)
    return TranslateResponse(
        translated_text=result.text,
        language=result.language,
        language_code=result.language_code,
        cached=result.cached,
    )
