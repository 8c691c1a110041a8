"""
HiddenHeu Backend — Translation Service Tests
===============================================

What we test:
    ✅ Language names resolve case-insensitively to their codes
    ✅ English ASCII text and empty text skip the provider
    ✅ Repeated (text, language) pairs are served from the cache
    ✅ The LRU cache stays within capacity and evicts the oldest entry
"""

import pytest

from hiddenheu.exceptions import ValidationError
from hiddenheu.services.translation_service import LRUCache, resolve_language


class TestResolveLanguage:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Hindi", ("Hindi", "hi")),
            ("tamil", ("Tamil", "ta")),
            ("BENGALI", ("Bengali", "bn")),
            (" gujarati ", ("Gujarati", "gu")),
            ("Marathi", ("Marathi", "mr")),
            (None, ("English", "en")),
            ("", ("English", "en")),
        ],
    )
    def test_supported(self, name, expected):
        assert resolve_language(name) == expected

    def test_unsupported_language_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve_language("Klingon")
        assert exc_info.value.field == "language"


class TestLRUCache:

    def test_evicts_least_recently_used(self):
        cache = LRUCache(2)
        cache.put(("a", "Hindi"), "1")
        cache.put(("b", "Hindi"), "2")
        # Touch "a" so "b" becomes the oldest
        assert cache.get(("a", "Hindi")) == "1"
        cache.put(("c", "Hindi"), "3")

        assert ("b", "Hindi") not in cache
        assert ("a", "Hindi") in cache
        assert len(cache) == 2

    def test_miss_returns_none(self):
        assert LRUCache(1).get(("x", "Tamil")) is None


class TestTranslationService:

    @pytest.mark.asyncio
    async def test_translates_with_provider(self, translation_service, fake_provider):
        result = await translation_service.translate("Namaste", "Hindi")
        assert result.text == "[hi] Namaste"
        assert result.language_code == "hi"
        assert result.translated is True
        assert result.cached is False
        assert fake_provider.calls == [("Namaste", "Hindi", "hi")]

    @pytest.mark.asyncio
    async def test_second_call_is_cached(self, translation_service, fake_provider):
        """The same text and language reach the provider only once."""
        await translation_service.translate("Old Delhi", "Tamil")
        again = await translation_service.translate("Old Delhi", "tamil")
        assert again.cached is True
        assert again.text == "[ta] Old Delhi"
        assert len(fake_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_english_ascii_passes_through(self, translation_service, fake_provider):
        result = await translation_service.translate("Hidden gems", "English")
        assert result.text == "Hidden gems"
        assert result.translated is False
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_empty_text_passes_through(self, translation_service, fake_provider):
        result = await translation_service.translate("", "Hindi")
        assert result.text == ""
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_non_ascii_to_english_is_translated(self, translation_service, fake_provider):
        result = await translation_service.translate("नमस्ते", None)
        assert result.language == "English"
        assert result.translated is True
        assert len(fake_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_reply_falls_back_to_source(self, translation_service, fake_provider):
        fake_provider.reply = ""
        result = await translation_service.translate("Jaipur", "Marathi")
        assert result.text == "Jaipur"

    @pytest.mark.asyncio
    async def test_cache_is_bounded(self, translation_service, fake_provider):
        """The cache never grows past its capacity (4 in tests)."""
        for i in range(10):
            await translation_service.translate(f"text {i}", "Hindi")
        assert len(translation_service.cache) == 4
