"""
HiddenHeu Backend — Translation Service
=========================================

What:  Language lookup, pass-through rules and a bounded LRU cache in front
       of the translation provider.
Why:   The voice guide asks for the same place descriptions in the same
       handful of languages over and over; each Gemini call costs time and
       quota.
How:   (text, language) → cache hit returns immediately; miss calls the
       provider and stores the result, evicting the least recently used
       entry once the cache holds `translation_cache_size` items.

Pass-through (no provider call, nothing cached):
    - empty text
    - target English and the text is pure ASCII
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Tuple

from hiddenheu.config import settings
from hiddenheu.exceptions import ValidationError
from hiddenheu.services.llm_base import TranslationProvider

logger = logging.getLogger(__name__)

# Display name → ISO 639-1 code. Also the BCP-47 prefix the browser uses to
# choose a SpeechSynthesis voice.
LANGUAGE_CODES = {
    "English": "en",
    "Hindi": "hi",
    "Tamil": "ta",
    "Bengali": "bn",
    "Gujarati": "gu",
    "Marathi": "mr",
}


def resolve_language(name: Optional[str]) -> Tuple[str, str]:
    """
    Map a language name in any casing to (display name, code).

    None or "" means English.

    Raises:
        ValidationError: The language is not supported.
    """
    if not name:
        return "English", LANGUAGE_CODES["English"]
    for display, code in LANGUAGE_CODES.items():
        if display.lower() == name.strip().lower():
            return display, code
    raise ValidationError(
        message=f"Unsupported language '{name}'. Supported: {', '.join(LANGUAGE_CODES)}",
        field="language",
    )


@dataclass
class TranslationResult:
    text: str
    language: str
    language_code: str
    cached: bool
    # False when the source text was passed through unchanged
    translated: bool


class LRUCache:
    """Fixed-capacity mapping that evicts the least recently used key."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("LRU cache capacity must be at least 1")
        self.capacity = capacity
        self._data: "OrderedDict[Tuple[str, str], str]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Tuple[str, str]) -> Optional[str]:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def put(self, key: Tuple[str, str], value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.capacity:
                evicted, _ = self._data.popitem(last=False)
                logger.debug("Translation cache evicted entry for %s", evicted[1])

    def __contains__(self, key: Tuple[str, str]) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class TranslationService:
    """
    Cached translation on top of a TranslationProvider.

    Args:
        provider: Backend doing the actual translation.
        cache_size: LRU capacity; defaults to settings.translation_cache_size.
    """

    def __init__(self, provider: TranslationProvider, cache_size: Optional[int] = None):
        self.provider = provider
        self.cache = LRUCache(cache_size or settings.translation_cache_size)

    @staticmethod
    def needs_translation(text: str, language: str) -> bool:
        if not text:
            return False
        if language == "English" and text.isascii():
            return False
        return True

    async def translate(self, text: str, language: Optional[str]) -> TranslationResult:
        """
        Translate text into `language`, consulting the cache first.

        Raises:
            ValidationError: Unsupported language.
            TranslationServiceError / CircuitBreakerOpenError: from the provider.
        """
        display, code = resolve_language(language)

        if not self.needs_translation(text, display):
            return TranslationResult(
                text=text, language=display, language_code=code, cached=False, translated=False
            )

        key = (text, display)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Translation cache hit (%s, %d chars)", display, len(text))
            return TranslationResult(
                text=cached, language=display, language_code=code, cached=True, translated=True
            )

        translated = await self.provider.translate(text, display, code)
        # An empty model reply falls back to the source text
        result_text = translated or text
        self.cache.put(key, result_text)

        return TranslationResult(
            text=result_text, language=display, language_code=code, cached=False, translated=True
        )


_translation_service: Optional[TranslationService] = None


def get_translation_service() -> TranslationService:
    """FastAPI dependency; tests override it with a service wrapping a fake provider."""
    global _translation_service
    if _translation_service is None:
        from hiddenheu.services.gemini_service import gemini_translator
        _translation_service = TranslationService(gemini_translator)
    return _translation_service
