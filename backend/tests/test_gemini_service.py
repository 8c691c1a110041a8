"""
HiddenHeu Backend — Gemini Translator Unit Tests (Mocked)
===========================================================

What:  Tests for GeminiTranslator with the Google Generative AI SDK mocked.
Why:   Tests must not make real API calls.

What we test:
    ✅ Successful translation returns the model's text, stripped
    ✅ Failures are recorded by the circuit breaker and surface as 503 errors
    ✅ Circuit breaker state machine (closed → open → half-open → closed)
    ✅ Missing API key refuses without calling Gemini
    ❌ Real API calls
"""

import time
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hiddenheu.exceptions import CircuitBreakerOpenError, TranslationServiceError
from hiddenheu.services.gemini_service import CircuitBreaker, GeminiTranslator


class TestCircuitBreaker:
    """Tests for the CircuitBreaker resilience pattern."""

    def test_initial_state_is_closed(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        assert cb.state == "closed"
        assert cb.failure_count == 0

    def test_stays_closed_under_threshold(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        for _ in range(4):
            cb.record_failure()
        assert cb.state == "closed"
        assert cb.can_execute() is True

    def test_opens_at_threshold(self):
        cb = CircuitBreaker(failure_threshold=3, recovery_timeout=60)
        for _ in range(3):
            cb.record_failure()
        assert cb.state == "open"

    def test_open_circuit_rejects_calls(self):
        """OPEN circuit breaker should reject calls with CircuitBreakerOpenError."""
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=60)
        cb.record_failure()

        with pytest.raises(CircuitBreakerOpenError) as exc_info:
            cb.can_execute()
        assert 1 <= exc_info.value.recovery_time <= 60

    def test_success_resets_failure_count(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        cb.record_failure()
        cb.record_failure()
        assert cb.failure_count == 2

        cb.record_success()
        assert cb.failure_count == 0
        assert cb.state == "closed"

    def test_half_open_after_recovery_timeout(self):
        """After the recovery timeout one trial call is let through."""
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        time.sleep(0.01)

        assert cb.can_execute() is True
        assert cb.state == "half_open"

    def test_failure_in_half_open_reopens(self):
        cb = CircuitBreaker(failure_threshold=3, recovery_timeout=0)
        for _ in range(3):
            cb.record_failure()
        cb.can_execute()
        assert cb.state == "half_open"

        cb.record_failure()
        assert cb.state == "open"

    def test_success_after_half_open_closes(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        time.sleep(0.01)
        cb.can_execute()

        cb.record_success()
        assert cb.state == "closed"
        assert cb.failure_count == 0


class TestGeminiTranslatorMocked:
    """Tests for GeminiTranslator with a mocked Gemini model."""

    @pytest.mark.asyncio
    async def test_translate_success(self):
        with patch("hiddenheu.services.gemini_service.genai"):
            mock_response = MagicMock()
            mock_response.text = "  पराठे वाली गली  \n"
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=mock_response)

            translator = GeminiTranslator()
            translator.model = mock_model

            result = await translator.translate("Paranthe Wali Gali", "Hindi", "hi")

        assert result == "पराठे वाली गली"
        prompt = mock_model.generate_content_async.call_args.args[0]
        assert "Hindi (hi)" in prompt
        assert "Paranthe Wali Gali" in prompt
        assert translator.circuit_breaker.failure_count == 0

    @pytest.mark.asyncio
    async def test_failure_after_retries_raises_service_error(self):
        """A failing call is recorded by the breaker and reported as TranslationServiceError."""
        with patch("hiddenheu.services.gemini_service.genai"):
            translator = GeminiTranslator()
            translator._call_gemini_with_retry = AsyncMock(side_effect=RuntimeError("quota exceeded"))

            with pytest.raises(TranslationServiceError):
                await translator.translate("Hello", "Tamil", "ta")

        assert translator.circuit_breaker.failure_count == 1

    @pytest.mark.asyncio
    async def test_circuit_breaker_open(self):
        """When the circuit is open, calls fail fast without reaching Gemini."""
        with patch("hiddenheu.services.gemini_service.genai"):
            translator = GeminiTranslator()
            translator._call_gemini_with_retry = AsyncMock()

            for _ in range(translator.circuit_breaker.failure_threshold):
                translator.circuit_breaker.record_failure()

            with pytest.raises(CircuitBreakerOpenError):
                await translator.translate("Hello", "Tamil", "ta")

        translator._call_gemini_with_retry.assert_not_called()
        assert translator.status == "circuit_open"

    @pytest.mark.asyncio
    async def test_not_configured_refuses(self):
        with patch("hiddenheu.services.gemini_service.genai"):
            translator = GeminiTranslator()
            translator.configured = False
            translator._call_gemini_with_retry = AsyncMock()

            with pytest.raises(TranslationServiceError) as exc_info:
                await translator.translate("Hello", "Hindi", "hi")

        assert "not configured" in exc_info.value.message
        translator._call_gemini_with_retry.assert_not_called()
        assert translator.status == "not_configured"

    @pytest.mark.asyncio
    async def test_health_check_returns_bool(self):
        with patch("hiddenheu.services.gemini_service.genai") as mock_genai:
            mock_genai.list_models.return_value = [MagicMock()]

            translator = GeminiTranslator()
            result = await translator.health_check()
            assert result is True

    @pytest.mark.asyncio
    async def test_health_check_swallows_api_errors(self):
        with patch("hiddenheu.services.gemini_service.genai") as mock_genai:
            mock_genai.list_models.side_effect = RuntimeError("network down")

            translator = GeminiTranslator()
            assert await translator.health_check() is False
