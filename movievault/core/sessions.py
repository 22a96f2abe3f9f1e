"""
Session registry: opaque bearer token -> authenticated user snapshot.

The in-memory registry is the default and lives for the lifetime of the
process; every session is lost on restart. The Redis registry keeps the same
contract but survives restarts and is shared between instances.
"""

import json
import time
from datetime import datetime, timezone
from typing import Dict, Optional

import redis.asyncio as redis

from .security import generate_session_token
from ..schemas.auth import SessionUser


class SessionRegistry:
    """Process-wide in-memory sessions; starts empty."""

    name = "memory"

    def __init__(self, ttl_seconds: Optional[int] = None, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._sessions: Dict[str, dict] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def create(self, user: SessionUser) -> str:
        token = generate_session_token()
        self._sessions[token] = {
            "user": user,
            "created_at": datetime.now(timezone.utc),
            "started": self.clock(),
        }
        return token

    async def resolve(self, token: str) -> Optional[SessionUser]:
        session = self._sessions.get(token)
        if session is None:
            return None
        if self.ttl_seconds is not None and self.clock() - session["started"] >= self.ttl_seconds:
            # expired: evict on read
            self._sessions.pop(token, None)
            return None
        return session["user"]

    async def revoke(self, token: str) -> None:
        self._sessions.pop(token, None)


class RedisSessionRegistry:
    """Sessions stored under session:<token>, with Redis-native expiry when a TTL is set."""

    name = "redis"
    key_prefix = "session:"

    def __init__(self, redis_client: redis.Redis, ttl_seconds: Optional[int] = None):
        self.redis_client = redis_client
        self.ttl_seconds = ttl_seconds

    def _key(self, token: str) -> str:
        return f"{self.key_prefix}{token}"

    async def create(self, user: SessionUser) -> str:
        token = generate_session_token()
        payload = {
            "user": user.model_dump(),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        await self.redis_client.set(self._key(token), json.dumps(payload), ex=self.ttl_seconds)
        return token

    async def resolve(self, token: str) -> Optional[SessionUser]:
        raw = await self.redis_client.get(self._key(token))
        if not raw:
            return None
        return SessionUser(**json.loads(raw)["user"])

    async def revoke(self, token: str) -> None:
        await self.redis_client.delete(self._key(token))
