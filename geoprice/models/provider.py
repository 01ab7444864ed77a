import logging
import time

from .base import InsightGenerator
from .mock_model import MockInsights
from ..core.config import settings
from ..core.errors import InsightGenerationError
from ..core.metrics import INSIGHT_LATENCY, INSIGHT_REQUESTS
from ..schemas import InsightRequest

logger = logging.getLogger(__name__)

def insights_generator(provider: str | None = None) -> InsightGenerator:
    """
    Factory picks the text-generation backend from settings.
    Falls back to the deterministic mock when the chosen backend is not configured.
    """
    provider = (provider or settings.INSIGHTS_PROVIDER).lower()
    if provider == "openai":
        if settings.OPENAI_API_KEY:
            from .openai_model import OpenAIInsights
            return OpenAIInsights()
        logger.warning("INSIGHTS_PROVIDER=openai but OPENAI_API_KEY is unset; using mock insights")
    elif provider == "http":
        if settings.INSIGHTS_BASE_URL:
            from .http_model import HttpInsights
            return HttpInsights(settings.INSIGHTS_BASE_URL)
        logger.warning("INSIGHTS_PROVIDER=http but INSIGHTS_BASE_URL is unset; using mock insights")
    return MockInsights()

async def run_generator(generator: InsightGenerator, request: InsightRequest) -> str:
    """
    Single call into the text-generation backend with metrics and logging.
    Anything the backend raises comes out as InsightGenerationError.
    """
    provider = getattr(generator, "name", type(generator).__name__)
    start = time.perf_counter()
    try:
        insights = await generator.generate(request)
    except InsightGenerationError:
        INSIGHT_REQUESTS.labels(provider=provider, outcome="error").inc()
        logger.exception("Insight generation failed (provider=%s)", provider)
        raise
    except Exception as exc:
        INSIGHT_REQUESTS.labels(provider=provider, outcome="error").inc()
        logger.exception("Insight generation failed (provider=%s)", provider)
        raise InsightGenerationError() from exc
    finally:
        INSIGHT_LATENCY.labels(provider=provider).observe(time.perf_counter() - start)

    INSIGHT_REQUESTS.labels(provider=provider, outcome="ok").inc()
    logger.info("Generated insights (provider=%s, chars=%d)", provider, len(insights))
    return insights
