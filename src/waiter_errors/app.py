"""
Application factory wiring the error pipeline into FastAPI.
"""

import structlog
from fastapi import FastAPI, Request
from prometheus_fastapi_instrumentator import Instrumentator

from waiter_errors.api.error_handlers import EXCEPTION_HANDLERS
from waiter_errors.api.middleware import RequestTracingMiddleware
from waiter_errors.api.responses import json_response
from waiter_errors.config import Settings, settings
from waiter_errors.rendering.assembler import ResponseAssembler, ServerName
from waiter_errors.rendering.templates import TemplateRenderer

logger = structlog.get_logger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Build the application.

    The ServerName cell lives on ``app.state.server_name`` so operators can
    swap the service identity at runtime with ``reset``.
    """
    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Bounded retry and content-negotiated error responses",
        version=app_settings.APP_VERSION,
    )

    server_name = ServerName()
    server_name.reset(app_settings.SERVER_NAME)
    assembler = ResponseAssembler(
        server_name, TemplateRenderer(app_settings.TEMPLATES_DIR)
    )
    app.state.server_name = server_name
    app.state.assembler = assembler
    app.state.support_info = app_settings.SUPPORT_INFO or None

    app.add_middleware(RequestTracingMiddleware)

    # Register exception handlers
    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    @app.on_event("startup")
    async def startup():
        """Application startup."""
        logger.info(
            "Application startup",
            version=app_settings.APP_VERSION,
            environment=app_settings.ENVIRONMENT,
            server_name=server_name.get(),
        )

    @app.on_event("shutdown")
    async def shutdown():
        """Application shutdown."""
        logger.info("Application shutdown")

    @app.get("/")
    async def root(request: Request):
        """Root endpoint with service info."""
        return json_response(
            {
                "service": app_settings.APP_NAME,
                "version": app_settings.APP_VERSION,
                "docs": "/docs",
                "health": "/health",
                "metrics": "/metrics" if app_settings.PROMETHEUS_ENABLED else None,
            },
            request.app.state.server_name,
        )

    @app.get("/health")
    async def health(request: Request):
        """Liveness check."""
        return json_response({"status": "ok"}, request.app.state.server_name)

    # Prometheus metrics instrumentation
    if app_settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    return app
