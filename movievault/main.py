"""
=============================================================================
MOVIE VAULT API - personal watchlist and reviews
=============================================================================
Features:
  - Registration / login with opaque session tokens (Bearer header or cookie)
  - Watchlist CRUD scoped to the owner
  - Reviews CRUD, plus moving a watchlist entry into a review
  - JSON logging with request correlation ids
=============================================================================
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import APP_NAME, APP_VERSION, settings
from .core.database import create_schema
from .dependencies import close_resources, init_resources, state
from .exceptions import (
    MovieVaultException,
    app_exception_handler,
    global_exception_handler,
    http_exception_handler,
    rate_limit_exception_handler,
    validation_exception_handler,
)
from .limiter import limiter
from .logging_config import setup_logging
from .middleware import RequestTrackingMiddleware
from .routers import auth_router, health_router, movie_router, review_router

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


# =============================================================================
# STARTUP & SHUTDOWN
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_resources()
    if settings.AUTO_CREATE_SCHEMA:
        await create_schema(state.pg_pool)
    logger.info("All connections initialized")
    try:
        yield
    finally:
        await close_resources()
        logger.info("All connections closed")


app = FastAPI(
    title=APP_NAME,
    description="Personal movie watchlist and reviews",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.state.limiter = limiter

# =============================================================================
# MIDDLEWARE
# =============================================================================
app.add_middleware(RequestTrackingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# ERROR HANDLERS
# =============================================================================
app.add_exception_handler(MovieVaultException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# =============================================================================
# ROUTES
# =============================================================================
app.include_router(health_router.router)
app.include_router(auth_router.router)
app.include_router(movie_router.router)
app.include_router(review_router.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("movievault.main:app", host="0.0.0.0", port=settings.PORT)
