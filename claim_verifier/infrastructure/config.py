"""Runtime configuration loaded from the environment."""

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"⚠️ Ignoring invalid {name}={value!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"⚠️ Ignoring invalid {name}={value!r}, using {default}")
        return default


class VerifierConfig(BaseModel):
    """Configuration for the verification service."""

    max_requests: int = Field(default=5, ge=1, description="Verifications admitted per window")
    window_size_ms: int = Field(default=60_000, gt=0, description="Admission window in milliseconds")
    cache_max_size: int = Field(default=100, ge=1, description="Maximum cached verdicts")
    cache_ttl_ms: int = Field(default=300_000, gt=0, description="Cached verdict lifetime in milliseconds")

    groq_api_key: Optional[str] = Field(default=None, description="Groq API key; AI source disabled if unset")
    groq_model: str = Field(default="groq/compound", description="Groq model name")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="OpenAI-compatible Groq endpoint",
    )
    ai_timeout: float = Field(default=30.0, gt=0, description="Seconds to wait for the AI source")

    google_fact_check_api_key: Optional[str] = Field(
        default=None, description="Google Fact Check Tools API key; database lookup disabled if unset"
    )
    fact_check_timeout: float = Field(default=10.0, gt=0, description="Fact-check request timeout in seconds")

    allowed_origins: List[str] = Field(default_factory=lambda: ["*"], description="CORS origins")

    @classmethod
    def from_env(cls) -> "VerifierConfig":
        """Create configuration from environment variables (and a .env file)."""
        load_dotenv()

        origins = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]
        config = cls(
            max_requests=_env_int("MAX_REQUESTS", 5),
            window_size_ms=_env_int("WINDOW_SIZE_MS", 60_000),
            cache_max_size=_env_int("CACHE_MAX_SIZE", 100),
            cache_ttl_ms=_env_int("CACHE_TTL_MS", 300_000),
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            groq_model=os.getenv("GROQ_MODEL", "groq/compound"),
            groq_base_url=os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
            ai_timeout=_env_float("AI_TIMEOUT", 30.0),
            google_fact_check_api_key=os.getenv("GOOGLE_FACT_CHECK_API_KEY") or None,
            fact_check_timeout=_env_float("FACT_CHECK_TIMEOUT", 10.0),
            allowed_origins=origins or ["*"],
        )

        if config.groq_api_key:
            logger.info(f"✅ Groq API key found ({len(config.groq_api_key)} chars), model: {config.groq_model}")
        else:
            logger.error("❌ GROQ_API_KEY is not set - AI analysis will be unavailable")
        if not config.google_fact_check_api_key:
            logger.warning("⚠️ GOOGLE_FACT_CHECK_API_KEY is not set - fact-check database lookup disabled")

        return config
