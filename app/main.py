import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import settings
from app.core.logging import setup_logging
from app.core.rate_limiter import limiter
from app.middleware.request_logger import RequestLoggerMiddleware

from app.api.availability import router as availability_router
from app.api.booking import router as booking_router
from app.api.cache import router as cache_router
from app.api.calendar import router as calendar_router
from app.api.health import router as health_router
from app.telegram.bot import close_bot


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)

logger.info("Starting application")


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title=settings.project_name,
    description="Room availability and booking requests for the embeddable widget",
    version="0.1.0",
)

# -------------------------------------------------
# Rate Limiting (slowapi)
# -------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggerMiddleware)
# The widget is embedded on other sites through an iframe / script tag
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(availability_router)
app.include_router(booking_router)
app.include_router(cache_router)
app.include_router(calendar_router)


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    logger.info("FastAPI startup")
    if not settings.booking_sheet_id:
        logger.warning("BOOKING_SHEET_ID is not set, availability requests will fail")
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY is not set, booking requests will fail")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("FastAPI shutdown")
    await close_bot()
