import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from geoprice.core.errors import InsightGenerationError
from geoprice.models.http_model import HttpInsights
from geoprice.models.mock_model import MockInsights
from geoprice.models.openai_model import OpenAIInsights
from geoprice.models.provider import insights_generator, run_generator
from geoprice.schemas import InsightRequest

REQUEST = InsightRequest(datasetSummary="- Number of properties: 3\n- Average price: $1.00", userPrompt="condos")


def test_mock_is_deterministic():
    gen = MockInsights()
    first = asyncio.run(gen.generate(REQUEST))
    assert first == asyncio.run(gen.generate(REQUEST))
    assert "Number of properties: 3" in first
    assert "Requested focus: condos" in first


def test_http_generator_posts_wire_format():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"insights": "Prices are rising."})

    gen = HttpInsights("http://insights.local/", transport=httpx.MockTransport(handler))
    assert asyncio.run(gen.generate(REQUEST)) == "Prices are rising."
    assert seen["url"] == "http://insights.local/generate-market-insights"
    assert seen["body"] == {"datasetSummary": REQUEST.dataset_summary, "userPrompt": "condos"}


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="boom"),
    httpx.Response(200, text="not json"),
    httpx.Response(200, json={"other": "x"}),
    httpx.Response(200, json={"insights": 42}),
])
def test_http_generator_failures_are_opaque(response):
    gen = HttpInsights("http://insights.local", transport=httpx.MockTransport(lambda r: response))
    with pytest.raises(InsightGenerationError) as exc:
        asyncio.run(gen.generate(REQUEST))
    assert str(exc.value) == "Error generating insights"


def _fake_openai(content=None, error=None):
    async def create(**kwargs):
        if error:
            raise error
        create.kwargs = kwargs
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


def test_openai_generator_sends_rendered_prompt():
    client, create = _fake_openai(content="  Strong demand.  ")
    gen = OpenAIInsights(model="gpt-test", client=client)
    assert asyncio.run(gen.generate(REQUEST)) == "Strong demand."
    assert create.kwargs["model"] == "gpt-test"
    user_msg = create.kwargs["messages"][-1]["content"]
    assert "User Prompt: condos" in user_msg
    assert REQUEST.dataset_summary in user_msg


def test_openai_generator_empty_answer_fails():
    client, _ = _fake_openai(content="")
    with pytest.raises(InsightGenerationError):
        asyncio.run(OpenAIInsights(model="gpt-test", client=client).generate(REQUEST))


def test_run_generator_wraps_unexpected_errors():
    class Broken:
        name = "broken"

        async def generate(self, request):
            raise RuntimeError("socket closed")

    with pytest.raises(InsightGenerationError) as exc:
        asyncio.run(run_generator(Broken(), REQUEST))
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_factory_falls_back_to_mock(monkeypatch):
    from geoprice.core.config import settings

    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    monkeypatch.setattr(settings, "INSIGHTS_BASE_URL", None)
    assert isinstance(insights_generator("openai"), MockInsights)
    assert isinstance(insights_generator("http"), MockInsights)
    assert isinstance(insights_generator("mock"), MockInsights)


def test_factory_builds_http(monkeypatch):
    from geoprice.core.config import settings

    monkeypatch.setattr(settings, "INSIGHTS_BASE_URL", "http://insights.local")
    gen = insights_generator("http")
    assert isinstance(gen, HttpInsights)
    assert gen.base_url == "http://insights.local"
