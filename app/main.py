"""
Feedback API - FastAPI application for user feedback and chatbot conversation logs.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from app.api.routes.router import api_router
from app.config import get_settings
from app.core.exceptions import setup_exception_handlers
from app.core.middleware import (
    LoggingMiddleware,
    OriginAllowListMiddleware,
    PrometheusMiddleware,
    TimingMiddleware,
    get_metrics_response,
)
from app.schemas.common import RootInfo
from app.services.database.mongodb_service import close_mongodb_service, get_mongodb_service
from app.utils.logger import setup_logging

# Initialize settings once per process
settings = get_settings()

logger = setup_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager: connect to MongoDB before serving."""
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    try:
        await get_mongodb_service()
        logger.info("✅ MongoDB connected")
    except PyMongoError as e:
        logger.error(f"❌ Failed to connect to the database. Server not started: {e}")
        raise

    if not settings.email_is_configured:
        logger.warning("⚠️ EMAIL_HOST, EMAIL_USER or ADMIN_EMAIL not set; feedback notifications will not be delivered")

    try:
        yield
    finally:
        await close_mongodb_service()
        logger.info(f"🛑 {settings.APP_NAME} stopped")


def create_application() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Collects user feedback and chatbot conversation logs",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # Add middleware
    setup_middleware(app)

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api")

    if settings.ENABLE_METRICS:
        @app.get("/metrics", include_in_schema=False, tags=["Monitoring"])
        async def metrics():
            """Prometheus metrics endpoint."""
            return get_metrics_response()

    @app.get("/", response_model=RootInfo)
    async def root():
        """Root endpoint with version and endpoint listing."""
        return RootInfo(
            message="Welcome to Feedback API",
            version=settings.APP_VERSION,
            endpoints={
                "health": "/api/health",
                "feedback": "/api/feedback",
                "chat": "/api/chat",
            },
        )

    return app


def setup_middleware(app: FastAPI):
    """Setup application middleware. The last one added runs first."""

    # 1. Prometheus metrics
    if settings.ENABLE_METRICS:
        app.add_middleware(PrometheusMiddleware)

    # 2. Timing middleware
    app.add_middleware(TimingMiddleware)

    # 3. CORS headers and preflight replies
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origin_allow_list,
        allow_credentials=settings.ALLOW_CREDENTIALS,
        allow_methods=settings.ALLOWED_METHODS,
        allow_headers=settings.ALLOWED_HEADERS,
    )

    # 4. Origin allow-list gate (rejects before CORS handling and routing)
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.origin_allow_list)

    # 5. Logging middleware (outermost, sees rejected requests too)
    app.add_middleware(LoggingMiddleware)


# Create the FastAPI application
app = create_application()


def run():
    """Run the application with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        workers=settings.WORKERS if not settings.RELOAD else 1,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=settings.is_development,
    )


if __name__ == "__main__":
    run()
