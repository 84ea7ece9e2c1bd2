"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers exception handlers and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aerotravel.core.database import init_db
from aerotravel.core.logging_config import get_logger, setup_logging
from aerotravel.core.monitoring import initialize_logfire

from .api.v1 import (
    compliance,
    content,
    events,
    facilities,
    health,
    inventory,
    notifications,
    rewards,
    vendors,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.events import register_default_handlers

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Startup configures logging and monitoring, prepares the database and
    subscribes the default event handlers.
    """
    setup_logging()
    initialize_logfire(app)
    logger.info("Starting up AeroTravel Operations API...")
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    register_default_handlers()

    yield

    logger.info("Shutting down AeroTravel Operations API...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    AeroTravel Operations API

    Back-office services for a multi-tenant travel agency: branch inventory and
    vendors, facility templates, guide rewards, license compliance, SEO content
    and the event notifications that tie them together.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

app.add_middleware(LogfireMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(events.router, prefix=f"{constant.API_V1_STR}/events", tags=["events"])
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/notifications", tags=["notifications"])
app.include_router(inventory.router, prefix=f"{constant.API_V1_STR}/inventory", tags=["inventory"])
app.include_router(vendors.router, prefix=f"{constant.API_V1_STR}/vendors", tags=["vendors"])
app.include_router(facilities.router, prefix=f"{constant.API_V1_STR}/facilities", tags=["facilities"])
app.include_router(content.router, prefix=f"{constant.API_V1_STR}/content", tags=["content"])
app.include_router(compliance.router, prefix=f"{constant.API_V1_STR}/compliance", tags=["compliance"])
app.include_router(rewards.router, prefix=f"{constant.API_V1_STR}/rewards", tags=["rewards"])
