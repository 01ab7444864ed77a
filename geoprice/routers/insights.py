from fastapi import APIRouter, Depends, Header, HTTPException, Response
from starlette.status import HTTP_502_BAD_GATEWAY

from ..schemas import InsightRequest, InsightResponse
from ..core.cache import cache
from ..core.errors import InsightGenerationError
from ..core.utils import digest, weak_etag
from ..models.base import InsightGenerator
from ..models.provider import insights_generator, run_generator

router = APIRouter()

def generator_dep() -> InsightGenerator:
    return insights_generator()

@router.post("/insights", response_model=InsightResponse)
async def post_insights(
    body: InsightRequest,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
    generator: InsightGenerator = Depends(generator_dep),
):
    if not body.dataset_summary.strip():
        raise HTTPException(status_code=400, detail="datasetSummary is required")

    # Same summary + focus → same answer until the TTL runs out
    cache_key = f"insights:{digest(body.dataset_summary, body.user_prompt or '')}"
    cached = cache.get_json(cache_key)
    if cached:
        insights, from_cache = cached["insights"], True
    else:
        try:
            insights = await run_generator(generator, body)
        except InsightGenerationError as exc:
            # Generic detail only; the backend's own message is logged, not returned
            raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
        from_cache = False
        cache.set_json(cache_key, {"insights": insights})

    etag = weak_etag(insights.encode("utf-8"))
    if if_none_match and if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})
    response.headers["ETag"] = etag
    return InsightResponse(insights=insights, cached=from_cache, etag=etag)
