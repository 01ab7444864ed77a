from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers.insights import router as insights_router
from .core.config import settings
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint

API_PREFIX = "/v1"


def _cors_origins() -> list[str]:
    """ALLOW_ORIGINS is a comma list; unset means any dashboard origin."""
    if not settings.ALLOW_ORIGINS:
        return ["*"]
    return [o.strip() for o in settings.ALLOW_ORIGINS.split(",") if o.strip()]


def create_app() -> FastAPI:
    """
    Build the insight service.

    Dataset parsing and charting run next to the dashboard; this app only
    turns a dataset summary (plus an optional focus prompt) into market
    insights through the configured generator.
    """
    configure_logging()

    app = FastAPI(
        title="GeoPrice Insights API",
        version="1.0.0",
        description="Market insight generation for real-estate sale datasets summarized in the browser.",
    )

    # The browser reads ETag for If-None-Match and X-Request-Id for support logs
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["ETag", "X-Request-Id"],
    )
    app.add_middleware(CorrelationIdMiddleware)
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)
        app.add_route(f"{API_PREFIX}/metrics", metrics_endpoint, methods=["GET"])

    @app.get(f"{API_PREFIX}/health", tags=["meta"])
    def health():
        return {"status": "ok", "insights_provider": settings.INSIGHTS_PROVIDER}

    @app.get(f"{API_PREFIX}/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    app.include_router(insights_router, prefix=API_PREFIX, tags=["insights"])
    return app


app = create_app()
