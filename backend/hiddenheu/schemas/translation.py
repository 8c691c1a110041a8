"""HiddenHeu Backend — Translation Schemas."""

from pydantic import Field

from hiddenheu.schemas.base import APIModel


class TranslateRequest(APIModel):
    text: str = Field(max_length=5000)
    target_language: str = Field(min_length=1, description="Language name, e.g. 'Hindi'")


class TranslateResponse(APIModel):
    translated_text: str
    language: str
    language_code: str
    cached: bool
