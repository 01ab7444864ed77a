"""OpenAI-backed insight generator."""

from __future__ import annotations

from typing import Any, Optional

from .base import InsightGenerator
from ..core.config import settings
from ..core.errors import InsightGenerationError
from ..schemas import InsightRequest
from ..services.insights import render_prompt


class OpenAIInsights(InsightGenerator):
    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
    ):
        self.model = model or settings.OPENAI_MODEL
        if client is not None:
            self.client = client
            return

        api_key = api_key or settings.OPENAI_API_KEY
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY missing from settings")
        if not self.model:
            raise RuntimeError("OPENAI_MODEL missing from settings")

        try:  # Import lazily so the package remains optional for other providers
            from openai import AsyncOpenAI
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("openai package is required for OpenAIInsights") from exc

        self.client = AsyncOpenAI(api_key=api_key, timeout=settings.INSIGHTS_TIMEOUT_SECONDS)

    async def generate(self, request: InsightRequest) -> str:
        """Call OpenAI's chat completion API with the analyst prompt.

        Parameters
        ----------
        request: InsightRequest
            Formatted dataset summary plus optional user focus.

        Returns
        -------
        str
            The model's commentary, stripped.
        """
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": "You write concise real estate market briefs."},
                    {"role": "user", "content": render_prompt(request)},
                ],
                temperature=0.4,
            )
            content = completion.choices[0].message.content
        except Exception as exc:  # pragma: no cover - network issues
            raise InsightGenerationError() from exc

        if not content or not content.strip():
            raise InsightGenerationError()
        return content.strip()
