import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    DEFAULT_CURRENCY: str = os.getenv("CURRENCY", "USD")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))

    # Histogram (matches the dashboard slider range)
    HISTOGRAM_BINS: int = int(os.getenv("HISTOGRAM_BINS", "20"))
    HISTOGRAM_MIN_BINS: int = int(os.getenv("HISTOGRAM_MIN_BINS", "5"))
    HISTOGRAM_MAX_BINS: int = int(os.getenv("HISTOGRAM_MAX_BINS", "50"))

    # Insight generation
    INSIGHTS_PROVIDER: str = os.getenv("INSIGHTS_PROVIDER", "mock")  # mock | openai | http
    INSIGHTS_BASE_URL: str | None = os.getenv("INSIGHTS_BASE_URL")
    INSIGHTS_TIMEOUT_SECONDS: float = float(os.getenv("INSIGHTS_TIMEOUT_SECONDS", "60"))

    # LLM
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Cache
    USE_REDIS: bool = os.getenv("USE_REDIS", "false").lower() == "true"
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
