"""
FastAPI application initialization and configuration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.messaging import MessageBus
from database.engine import AsyncSessionLocal, init_db, close_db
from api.routes import (
    health,
    interview_configs,
    interview_reports,
    interview_results,
    interviews,
    questions,
)
from api.routes.resource import outbound_patterns

from core.middleware import (
    ErrorHandlingMiddleware,
    setup_error_handlers,
    StructuredLoggingMiddleware,
    setup_logging,
)

# Setup structured logging (do this first, before anything else)
setup_logging(
    log_level=settings.log_level,
    json_logs=settings.json_logs,
)

logger = logging.getLogger(__name__)

RESOURCE_ROUTES = (
    interview_configs,
    interviews,
    interview_results,
    interview_reports,
    questions,
)


def create_message_bus() -> MessageBus:
    """Build the bus and register every resource's responders and event handlers."""
    bus = MessageBus(
        settings.redis_url,
        request_timeout=settings.message_request_timeout,
        connect_timeout=settings.redis_connect_timeout_ms / 1000,
        retry_attempts=settings.redis_retry_attempts,
        retry_delay=settings.redis_retry_delay_ms / 1000,
    )
    bus.expect_replies(*sorted(outbound_patterns([routes.module for routes in RESOURCE_ROUTES])))
    for routes in RESOURCE_ROUTES:
        routes.register_handlers(bus, AsyncSessionLocal)
    return bus


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    # Startup
    logger.info(f"Starting {settings.app_name} in {settings.app_env} environment")
    await init_db()

    bus = create_message_bus()
    await bus.connect()
    app.state.message_bus = bus
    logger.info(f"{settings.app_name} listening on port {settings.port}")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    await bus.close()
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Interview configurations, interviews, results, reports and question bank",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Setup error handlers (before middleware)
setup_error_handlers(app)

# Add middleware (order matters - they execute in reverse order)
# 1. Error handling middleware (outermost - catches all errors)
app.add_middleware(
    ErrorHandlingMiddleware,
    debug=settings.debug,
)

# 2. Structured logging middleware (logs all requests/responses)
app.add_middleware(StructuredLoggingMiddleware)

# 3. CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router, prefix=settings.api_prefix)
for routes in RESOURCE_ROUTES:
    app.include_router(routes.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
