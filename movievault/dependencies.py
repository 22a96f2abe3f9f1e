import logging
from typing import Optional, Union

import asyncpg
import redis.asyncio as redis
from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .core.sessions import RedisSessionRegistry, SessionRegistry
from .exceptions import Unauthenticated, storage_errors
from .repositories.movie_repository import MovieRepository
from .repositories.review_repository import ReviewRepository
from .repositories.user_repository import UserRepository
from .schemas.auth import SessionUser

logger = logging.getLogger(__name__)


# Global state for connections and sessions
class AppState:
    pg_pool: Optional[asyncpg.Pool] = None
    redis_client: Optional[redis.Redis] = None
    sessions: Union[SessionRegistry, RedisSessionRegistry] = SessionRegistry(settings.SESSION_TTL_SECONDS)


state = AppState()


async def init_resources():
    """Initialize all resources"""
    state.pg_pool = await asyncpg.create_pool(
        settings.DATABASE_URL,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=settings.DB_COMMAND_TIMEOUT
    )

    if settings.SESSION_BACKEND == "redis":
        state.redis_client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True
        )
        state.sessions = RedisSessionRegistry(state.redis_client, settings.SESSION_TTL_SECONDS)
    else:
        state.sessions = SessionRegistry(settings.SESSION_TTL_SECONDS)

    logger.info(f"Resources initialized (session backend: {state.sessions.name})")


async def close_resources():
    """Close all resources"""
    if state.redis_client:
        await state.redis_client.aclose()
        state.redis_client = None
    if state.pg_pool:
        await state.pg_pool.close()
        state.pg_pool = None


# Dependencies
async def get_db_pool() -> asyncpg.Pool:
    return state.pg_pool


async def get_session_registry() -> Union[SessionRegistry, RedisSessionRegistry]:
    return state.sessions


async def get_user_repository(db=Depends(get_db_pool)) -> UserRepository:
    return UserRepository(db)


async def get_movie_repository(db=Depends(get_db_pool)) -> MovieRepository:
    return MovieRepository(db)


async def get_review_repository(db=Depends(get_db_pool)) -> ReviewRepository:
    return ReviewRepository(db)


# Auth Dependencies
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


async def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Depends(cookie_scheme),
) -> Optional[str]:
    """Bearer header first, then the session cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return cookie_token or None


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    sessions=Depends(get_session_registry),
) -> SessionUser:
    if not token:
        raise Unauthenticated()

    with storage_errors("resolving session"):
        user = await sessions.resolve(token)
    if user is None:
        raise Unauthenticated()

    request.state.user = user
    return user
