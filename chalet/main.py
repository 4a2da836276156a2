import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware

from chalet.core.config import settings
from chalet.core.errors import (
    BookingError,
    DatesUnavailable,
    HistoricalReservationLocked,
    ReservationNotFound,
    StorageError,
    ValidationFailed,
)
from chalet.core.logging import setup_logging
from chalet.core.rate_limiter import limiter
from chalet.middleware.request_logger import RequestLoggerMiddleware

from chalet.api.health import router as health_router
from chalet.api.reservations import router as reservations_router
from chalet.api.site_config import router as site_config_router


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title=settings.app_name,
    description="Chalet booking: pricing, availability and reservations",
    version="0.1.0",
)

# -------------------------------------------------
# Rate Limiting (slowapi)
# -------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggerMiddleware)


# -------------------------------------------------
# Error mapping
# -------------------------------------------------

def status_for(exc: BookingError) -> int:
    if isinstance(exc, ValidationFailed):
        return 422
    if isinstance(exc, (DatesUnavailable, HistoricalReservationLocked)):
        return 409
    if isinstance(exc, ReservationNotFound):
        return 404
    if isinstance(exc, StorageError):
        return 503
    return 400


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    status_code = status_for(exc)
    logger.info(
        f"{request.method} {request.url.path} rejected: {exc.code}",
        extra={"status_code": status_code, "error": exc.code},
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": exc.message},
    )


app.include_router(health_router)
app.include_router(reservations_router)
app.include_router(site_config_router)


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    logger.info("FastAPI startup")

    from chalet.database import init_db

    await init_db()
    logger.info(f"Pricing rules loaded: {settings.pricing}")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("FastAPI shutdown")

    from chalet.database import engine

    await engine.dispose()
