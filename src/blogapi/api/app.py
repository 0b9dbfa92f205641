"""
blogapi.api.app

FastAPI app factory for the blog service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Connect the persistence gateway at startup and disconnect it at shutdown.
- Provide a single composition root where the gateway is injected into the service.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blogapi import __version__
from blogapi.api.errors import register_error_handlers
from blogapi.api.routers.blogs import router as blogs_router
from blogapi.api.routers.health import router as health_router
from blogapi.db.repositories.blogs import SqlBlogGateway
from blogapi.domain.gateway import BlogGateway
from blogapi.observability.logging import configure_logging, get_logger
from blogapi.observability.middleware import RequestContextMiddleware
from blogapi.services.blog_service import BlogService
from blogapi.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, gateway: BlogGateway | None = None) -> FastAPI:
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, json=settings.log_json
    )
    gateway = gateway if gateway is not None else SqlBlogGateway(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, endpoint=gateway.endpoint)
        # StorageConnectionError propagates: the process must not serve without storage.
        await gateway.connect()
        app.state.gateway = gateway
        app.state.blog_service = BlogService(
            gateway=gateway, default_timeout=settings.request_timeout_seconds
        )
        try:
            yield
        finally:
            await gateway.disconnect()
            log.info("shutdown")

    app = FastAPI(
        title="Blog Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(blogs_router)

    return app
