"""
HiddenHeu Backend — Google Gemini Translation Provider
========================================================

What:  TranslationProvider backed by the Google Gemini API.
Why:   Place descriptions are written in English; the voice guide reads them
       aloud in the visitor's language.
How:   Sends a translator prompt plus the text to Gemini, with tenacity
       retries and a circuit breaker in front of every call.
Who:   Instantiated once per process; called by TranslationService on a
       cache miss.

Resilience Strategy:
    1. Tenacity retry with exponential backoff + jitter for transient failures
    2. Circuit breaker so a Gemini outage fails fast instead of stacking retries
    3. Per-call timeout
"""

import logging
import time
import uuid
from typing import Optional

import google.generativeai as genai
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from hiddenheu.config import settings
from hiddenheu.exceptions import CircuitBreakerOpenError, TranslationServiceError
from hiddenheu.services.llm_base import TranslationProvider

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Circuit Breaker
# ══════════════════════════════════════════════════════════════════════════

class CircuitBreaker:
    """
    Circuit breaker guarding calls to the translation provider.

    State Machine:
        CLOSED → failures counted; at failure_threshold → OPEN
        OPEN → every call raises CircuitBreakerOpenError until
               recovery_timeout seconds have passed → HALF_OPEN
        HALF_OPEN → one call goes through; success → CLOSED, failure → OPEN

    Not shared across worker processes; each uvicorn worker keeps its own.
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

    def __init__(self, failure_threshold: int = 5, recovery_timeout: int = 60):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time: Optional[float] = None

    def can_execute(self) -> bool:
        """
        Returns True if a call may proceed.

        Raises:
            CircuitBreakerOpenError while OPEN and still inside the recovery window.
        """
        if self.state == self.CLOSED:
            return True

        if self.state == self.OPEN:
            elapsed = time.time() - (self.last_failure_time or 0)
            if elapsed >= self.recovery_timeout:
                logger.info(
                    "Circuit breaker transitioning to HALF_OPEN after %.1fs",
                    elapsed,
                )
                self.state = self.HALF_OPEN
                return True
            remaining = max(int(self.recovery_timeout - elapsed), 1)
            raise CircuitBreakerOpenError(recovery_time=remaining)

        return True

    def record_success(self) -> None:
        if self.state == self.HALF_OPEN:
            logger.info("Circuit breaker transitioning to CLOSED (service recovered)")
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time = None

    def record_failure(self) -> None:
        self.failure_count += 1
        self.last_failure_time = time.time()

        if self.state == self.HALF_OPEN:
            logger.warning("Circuit breaker returning to OPEN (test request failed)")
            self.state = self.OPEN
        elif self.failure_count >= self.failure_threshold:
            logger.warning(
                "Circuit breaker OPENING after %d consecutive failures",
                self.failure_count,
            )
            self.state = self.OPEN


# ══════════════════════════════════════════════════════════════════════════
# Gemini Translator
# ══════════════════════════════════════════════════════════════════════════

class GeminiTranslator(TranslationProvider):
    """
    Gemini-backed translation.

    Error Handling Chain:
        API call fails → tenacity retries (retry_max_attempts, backoff)
        → still failing → circuit breaker failure recorded
        → TranslationServiceError (503) to the caller
        → threshold reached → later calls get CircuitBreakerOpenError instantly
    """

    PROMPT_TEMPLATE = (
        "You are a professional translator. Translate the following text to "
        "{language_name} ({language_code}). Preserve the original meaning, tone, and "
        "style. Only respond with the translated text, nothing else.\n\n{text}"
    )

    def __init__(self):
        self.configured = bool(
            settings.gemini_api_key and settings.gemini_api_key != "your_gemini_api_key_here"
        )
        if self.configured:
            genai.configure(api_key=settings.gemini_api_key)

        self.model = genai.GenerativeModel(settings.gemini_model)

        self.circuit_breaker = CircuitBreaker(
            failure_threshold=settings.cb_failure_threshold,
            recovery_timeout=settings.cb_recovery_timeout,
        )

        logger.info(
            "GeminiTranslator initialized with model=%s, configured=%s, "
            "circuit_breaker(threshold=%d, recovery=%ds)",
            settings.gemini_model,
            self.configured,
            settings.cb_failure_threshold,
            settings.cb_recovery_timeout,
        )

    async def translate(self, text: str, language_name: str, language_code: str) -> str:
        """
        Translate text with Gemini.

        Flow:
            1. Refuse early if no API key is configured
            2. Check circuit breaker → may raise CircuitBreakerOpenError
            3. Call Gemini with retries
            4. Record success/failure in the circuit breaker
        """
        request_id = str(uuid.uuid4())[:8]

        if not self.configured:
            raise TranslationServiceError(
                message="Translation is not configured on this server.",
                context={"reason": "missing_api_key"},
            )

        self.circuit_breaker.can_execute()

        logger.info(
            "[%s] Translating %d chars to %s",
            request_id,
            len(text),
            language_name,
        )

        try:
            result = await self._call_gemini_with_retry(text, language_name, language_code, request_id)
        except Exception as e:
            self.circuit_breaker.record_failure()
            logger.error(
                "[%s] Translation to %s failed after retries: %s",
                request_id,
                language_name,
                str(e),
            )
            raise TranslationServiceError(
                message="Translation failed. Please try again later.",
                retry_after=self.circuit_breaker.recovery_timeout,
                context={"request_id": request_id, "error_type": type(e).__name__},
            ) from e

        self.circuit_breaker.record_success()
        return result

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.retry_min_wait,
            max=settings.retry_max_wait,
            jitter=1,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _call_gemini_with_retry(
        self, text: str, language_name: str, language_code: str, request_id: str
    ) -> str:
        """The retried unit: one Gemini request. Circuit breaker checks stay outside it."""
        start_time = time.time()
        prompt = self.PROMPT_TEMPLATE.format(
            language_name=language_name,
            language_code=language_code,
            text=text,
        )

        try:
            response = await self.model.generate_content_async(
                prompt,
                request_options={"timeout": settings.translation_timeout},
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "[%s] Gemini call failed after %.0fms: %s",
                request_id,
                duration_ms,
                str(e),
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        translated = response.text.strip() if response.text else ""
        logger.info(
            "[%s] Gemini translation completed in %.0fms, %d chars",
            request_id,
            duration_ms,
            len(translated),
        )
        return translated

    async def health_check(self) -> bool:
        """True when the API key works and Gemini answers list_models."""
        if not self.configured:
            return False
        try:
            models = genai.list_models()
            model_names = [m.name for m in models]
            target = f"models/{settings.gemini_model}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False

    @property
    def status(self) -> str:
        """Short status label for GET /health (no network call)."""
        if not self.configured:
            return "not_configured"
        if self.circuit_breaker.state == CircuitBreaker.OPEN:
            return "circuit_open"
        return "available"


gemini_translator = GeminiTranslator()
