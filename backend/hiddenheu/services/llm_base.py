"""
HiddenHeu Backend — Abstract Translation Provider Interface
=============================================================

What:  Abstract base class for machine-translation backends.
Why:   TranslationService only depends on this contract, so the Gemini
       implementation can be swapped (or faked in tests) without touching
       the cache or the routes.
How:   Concrete providers inherit from TranslationProvider and implement
       translate() and health_check().
"""

from abc import ABC, abstractmethod


class TranslationProvider(ABC):
    """
    Contract:
        - translate() returns the translated text, or "" when the model
          produced nothing (the caller falls back to the source text)
        - Implementations handle their own retries and wrap every
          provider-specific failure in TranslationServiceError
        - CircuitBreakerOpenError is raised when the provider is being
          protected after repeated failures
    """

    @abstractmethod
    async def translate(self, text: str, language_name: str, language_code: str) -> str:
        """
        Translate text into the target language.

        Args:
            text: Source text (usually English place descriptions).
            language_name: Display name of the target language, e.g. "Hindi".
            language_code: ISO 639-1 code of the target language, e.g. "hi".

        Raises:
            TranslationServiceError: The provider failed after all retries.
            CircuitBreakerOpenError: Too many recent failures.
        """
        ...

    @property
    def status(self) -> str:
        """"available", or why the provider cannot serve right now."""
        return "available"

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight reachability check used by GET /health."""
        ...
