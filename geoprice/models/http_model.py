from typing import Optional

import httpx

from .base import InsightGenerator
from ..core.config import settings
from ..core.errors import InsightGenerationError
from ..schemas import InsightRequest

class HttpInsights(InsightGenerator):
    """
    Client for a text-generation service you host.
    POST {base_url}/generate-market-insights with {datasetSummary, userPrompt}
    and expect {"insights": "..."} back.
    """
    name = "http"

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    async def generate(self, request: InsightRequest) -> str:
        body = request.model_dump(by_alias=True, exclude_none=True)
        try:
            async with httpx.AsyncClient(
                timeout=settings.INSIGHTS_TIMEOUT_SECONDS, transport=self.transport
            ) as client:
                r = await client.post(f"{self.base_url}/generate-market-insights", json=body)
                r.raise_for_status()
                insights = r.json()["insights"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            raise InsightGenerationError() from exc

        if not isinstance(insights, str):
            raise InsightGenerationError()
        return insights
