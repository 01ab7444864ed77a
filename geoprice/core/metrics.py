import time
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# HTTP surface
REQ_COUNT = Counter("http_requests_total", "Total HTTP requests", ["path","method","code"])
REQ_LATENCY = Histogram("http_request_duration_seconds", "Request latency", ["path","method"])

# CSV loads: outcome is ok | schema_error | empty | parse_error
DATASET_LOADS = Counter("geoprice_dataset_loads_total", "Dataset load attempts", ["outcome"])
ROWS_DROPPED = Counter("geoprice_rows_dropped_total", "CSV rows excluded by validation")

# Insight generation: outcome is ok | error
INSIGHT_REQUESTS = Counter("geoprice_insight_requests_total", "Insight generation calls", ["provider","outcome"])
INSIGHT_LATENCY = Histogram("geoprice_insight_duration_seconds", "Insight generation latency", ["provider"])


def _route_label(request: Request) -> str:
    """Matched route template, so unknown paths collapse into one series."""
    route = request.scope.get("route")
    if route is not None:
        return route.path
    if "endpoint" in request.scope:
        return request.url.path
    return "unmatched"


class PromMiddleware(BaseHTTPMiddleware):
    """Per-route request count and latency for the insight API."""
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = time.perf_counter() - start

        path = _route_label(request)
        REQ_COUNT.labels(path=path, method=request.method, code=str(response.status_code)).inc()
        REQ_LATENCY.labels(path=path, method=request.method).observe(elapsed)
        return response


async def metrics_endpoint(request: Request):
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
