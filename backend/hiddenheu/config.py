"""
HiddenHeu Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments should
    override GEMINI_API_KEY, CORS_ORIGINS and SESSION_COOKIE_SECURE.
    """

    # ── Google Gemini (translation) ───────────────────────────────────────
    # Without a key the catalog still works; only translation returns 503.
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key used for machine translation",
    )
    gemini_model: str = Field(default="gemini-1.5-flash")

    # Seconds to wait for a single Gemini response
    translation_timeout: int = Field(default=30, ge=5, le=120)

    # Max cached (text, language) translations before LRU eviction
    translation_cache_size: int = Field(default=512, ge=1, le=100_000)

    # ── Storage ───────────────────────────────────────────────────────────
    # Load the sample cities/categories/places/testimonials at startup
    seed_sample_data: bool = Field(default=True)

    # ── Sessions ──────────────────────────────────────────────────────────
    session_cookie_name: str = Field(default="hiddenheu_session")
    session_ttl_seconds: int = Field(default=7 * 24 * 3600, ge=60, le=90 * 24 * 3600)
    # HTTPS-only cookie; keep False for local http development
    session_cookie_secure: bool = Field(default=False)

    # PBKDF2 iterations for password hashing
    password_hash_iterations: int = Field(default=100_000, ge=1_000, le=1_000_000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list; the React client runs on a different origin in dev
    cors_origins: str = Field(default="http://localhost:5173,http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Retry Configuration ───────────────────────────────────────────────
    # Tenacity settings for Gemini calls (exponential backoff with jitter)
    retry_max_attempts: int = Field(default=3, ge=1, le=10)
    retry_min_wait: int = Field(default=1, ge=1, le=30)
    retry_max_wait: int = Field(default=10, ge=1, le=120)

    # ── Circuit Breaker ───────────────────────────────────────────────────
    # After N consecutive failures, stop calling Gemini for M seconds
    cb_failure_threshold: int = Field(default=5, ge=1, le=20)
    cb_recovery_timeout: int = Field(default=60, ge=0, le=300)

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Per-IP sliding window
    rate_limit_requests: int = Field(default=1000, ge=10, le=100_000)
    rate_limit_window: int = Field(default=3600, ge=60, le=86400)  # seconds

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        Checks settings that the service can start without but should not run without.

        Raises:
            ValueError listing every problem found.
        """
        errors = []
        if not self.gemini_api_key or self.gemini_api_key == "your_gemini_api_key_here":
            errors.append(
                "GEMINI_API_KEY is not set. Place narration in languages other than "
                "English and POST /api/translate will answer 503."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
