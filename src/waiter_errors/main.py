"""
FastAPI application entry point for waiter-errors.
"""

from waiter_errors.app import create_app
from waiter_errors.config import settings
from waiter_errors.logging_config import configure_logging

# Configure structured logging before serving
configure_logging(
    settings.LOG_LEVEL,
    settings.ENVIRONMENT,
    service=settings.SERVER_NAME,
    version=settings.APP_VERSION,
)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "waiter_errors.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
