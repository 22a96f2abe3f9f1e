
import itertools
import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock, MagicMock
from movievault.main import app
from movievault.core.sessions import SessionRegistry
from movievault.dependencies import (
    get_db_pool,
    get_movie_repository,
    get_review_repository,
    get_session_registry,
    get_user_repository,
)
from movievault.repositories.movie_repository import EDITABLE_COLUMNS as MOVIE_COLUMNS
from movievault.repositories.review_repository import EDITABLE_COLUMNS as REVIEW_COLUMNS

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class _Clock:
    """Strictly increasing timestamps so newest-first ordering is deterministic."""
    def __init__(self):
        self._ticks = itertools.count()

    def now(self) -> datetime:
        return BASE_TIME + timedelta(seconds=next(self._ticks))


class FakeUserRepository:
    def __init__(self):
        self.users = []
        self._ids = itertools.count(1)

    async def get_by_username(self, username):
        return next((dict(u) for u in self.users if u["username"] == username), None)

    async def get_by_email(self, email):
        return next((dict(u) for u in self.users if u["email"] == email), None)

    async def create_user(self, **fields):
        user = {"id": next(self._ids), **fields}
        self.users.append(user)
        return user["id"]

    async def count_users(self):
        return len(self.users)


class FakeMovieRepository:
    def __init__(self, clock):
        self.rows = {}
        self.clock = clock

    async def list_by_owner(self, owner_id):
        rows = [dict(r) for r in self.rows.values() if r["added_by"] == owner_id]
        return sorted(rows, key=lambda r: r["added_at"], reverse=True)

    async def create(self, owner_id, fields):
        now = self.clock.now()
        row = {
            "id": uuid.uuid4(),
            **{column: fields[column] for column in MOVIE_COLUMNS},
            "added_by": owner_id,
            "added_at": now,
            "is_watched": False,
            "created_at": now,
            "updated_at": now,
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def get_owned(self, movie_id, owner_id):
        row = self.rows.get(movie_id)
        return dict(row) if row and row["added_by"] == owner_id else None

    async def update_owned(self, movie_id, owner_id, fields):
        row = self.rows.get(movie_id)
        if not row or row["added_by"] != owner_id:
            return None
        row.update({column: fields[column] for column in MOVIE_COLUMNS}, updated_at=self.clock.now())
        return dict(row)

    async def delete_owned(self, movie_id, owner_id):
        row = self.rows.get(movie_id)
        if not row or row["added_by"] != owner_id:
            return False
        del self.rows[movie_id]
        return True


class FakeReviewRepository:
    def __init__(self, clock):
        self.rows = {}
        self.clock = clock

    async def list_by_owner(self, owner_id):
        rows = [dict(r) for r in self.rows.values() if r["reviewed_by"] == owner_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    async def create(self, owner_id, fields, source_movie_id=None):
        now = self.clock.now()
        row = {
            "id": uuid.uuid4(),
            **{column: fields[column] for column in REVIEW_COLUMNS},
            "reviewed_by": owner_id,
            "source_movie_id": source_movie_id,
            "created_at": now,
            "updated_at": now,
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def update_owned(self, review_id, owner_id, fields):
        row = self.rows.get(review_id)
        if not row or row["reviewed_by"] != owner_id:
            return None
        row.update({column: fields[column] for column in REVIEW_COLUMNS}, updated_at=self.clock.now())
        return dict(row)

    async def delete_owned(self, review_id, owner_id):
        row = self.rows.get(review_id)
        if not row or row["reviewed_by"] != owner_id:
            return False
        del self.rows[review_id]
        return True


def registration(username="johndoe", email=None, **overrides):
    payload = {
        "firstName": "John",
        "lastName": "Doe",
        "DOB": "1990-01-01",
        "gender": "male",
        "phone": "1234567890",
        "email": email or f"{username}@example.com",
        "username": username,
        "password": "password123",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def user_payload():
    return registration


@pytest.fixture
def mock_db_pool():
    pool = AsyncMock()
    # Pool.acquire() is sync and returns an async context manager
    conn = AsyncMock()
    pool.acquire = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    return pool


@pytest.fixture
def sessions():
    return SessionRegistry()


@pytest.fixture
def clock():
    return _Clock()


@pytest.fixture
def user_repo():
    return FakeUserRepository()


@pytest.fixture
def movie_repo(clock):
    return FakeMovieRepository(clock)


@pytest.fixture
def review_repo(clock):
    return FakeReviewRepository(clock)


@pytest_asyncio.fixture
async def client(mock_db_pool, sessions, user_repo, movie_repo, review_repo):
    # Override dependencies
    app.dependency_overrides[get_db_pool] = lambda: mock_db_pool
    app.dependency_overrides[get_session_registry] = lambda: sessions
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_movie_repository] = lambda: movie_repo
    app.dependency_overrides[get_review_repository] = lambda: review_repo

    transport = ASGITransport(app=app)
    from movievault.limiter import limiter
    limiter.enabled = False
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True

    app.dependency_overrides = {}


@pytest.fixture
def login_as(client):
    """Register and log in a user; returns Bearer headers. The session cookie is dropped."""
    async def _login(username="johndoe", email=None):
        payload = registration(username, email)
        await client.post("/api/register", json=payload)
        response = await client.post("/api/login", json={
            "username": username,
            "password": payload["password"],
        })
        assert response.status_code == 200
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login
