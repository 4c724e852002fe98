"""
FastAPI application factory for the TokenLens web API.

The uploaded dataset is held in app state for the life of the process;
nothing is persisted.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from tokenlens import __version__
from tokenlens.analytics.engine import AnalyticsEngine
from tokenlens.config.loader import load_config
from tokenlens.server.errors import APIError, api_error_handler, error_response

logger = logging.getLogger("tokenlens.server")


def create_app(config: dict = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="TokenLens API",
        description="Usage analytics for LLM usage exports",
        version=__version__,
    )

    app.state.config = config or load_config()
    app.state.records = []
    app.state.engine = AnalyticsEngine()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return error_response(500, "INTERNAL_ERROR", "Internal server error", str(exc))

    from tokenlens.server.routes.health import router as health_router
    from tokenlens.server.routes.upload import router as upload_router
    from tokenlens.server.routes.stats import router as stats_router

    app.include_router(health_router)
    app.include_router(upload_router)
    app.include_router(stats_router)

    return app
