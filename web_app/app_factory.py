"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router, health_router
from .errors import register_exception_handlers
from .middleware.logging import LoggingMiddleware
from .web import web_router


def create_app(
    store_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Identifier store instance
        service_instance: RedirectService instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Short Link Service",
        description="Short identifiers that redirect to long URLs, with per-link visit analytics",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(api_router, prefix="/url", tags=["API"])
    app.include_router(health_router, prefix="/api", tags=["Health"])
    # Catch-all /{short_id} goes last
    app.include_router(web_router, tags=["Redirect"])

    return app
