
import json
import pytest
from httpx import AsyncClient

from movievault.dependencies import get_movie_repository
from movievault.main import app


def movie_payload(**overrides):
    payload = {
        "title": "The Shawshank Redemption",
        "description": "Two imprisoned men bond over a number of years.",
        "genres": ["Drama", "Crime"],
        "releaseYear": 1994,
        "rating": 9.3,
        "posterImage": "https://example.com/shawshank.jpg",
        "ottPlatforms": ["Netflix", "Prime Video"],
        "notes": "Recommended by a friend",
    }
    payload.update(overrides)
    return payload


async def add_movie(client, headers, **overrides):
    response = await client.post("/api/movies", json=movie_payload(**overrides), headers=headers)
    assert response.status_code == 201
    return response.json()["movie"]


@pytest.mark.asyncio
async def test_add_delete_list_scenario(client: AsyncClient, login_as):
    headers = await login_as("johndoe")

    response = await client.post("/api/movies", json=movie_payload(), headers=headers)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    movie = body["movie"]
    assert movie["title"] == "The Shawshank Redemption"
    assert movie["genres"] == ["Drama", "Crime"]
    assert movie["releaseYear"] == 1994
    assert movie["rating"] == 9.3
    assert movie["ottPlatforms"] == ["Netflix", "Prime Video"]
    assert movie["isWatched"] is False
    assert movie["addedBy"] == 1

    deleted = await client.delete(f"/api/movies/{movie['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["success"] is True

    listing = await client.get("/api/movies", headers=headers)
    assert listing.status_code == 200
    assert listing.json() == {"success": True, "movies": []}


@pytest.mark.asyncio
async def test_optional_fields_default(client: AsyncClient, login_as):
    headers = await login_as()
    payload = movie_payload()
    for key in ("rating", "posterImage", "ottPlatforms", "notes"):
        del payload[key]

    response = await client.post("/api/movies", json=payload, headers=headers)
    assert response.status_code == 201
    movie = response.json()["movie"]
    assert movie["rating"] == 0
    assert movie["posterImage"] == ""
    assert movie["ottPlatforms"] == []
    assert movie["notes"] == ""


@pytest.mark.asyncio
async def test_list_is_newest_first(client: AsyncClient, login_as):
    headers = await login_as()
    for title in ("First", "Second", "Third"):
        await add_movie(client, headers, title=title)

    listing = await client.get("/api/movies", headers=headers)
    assert [m["title"] for m in listing.json()["movies"]] == ["Third", "Second", "First"]


@pytest.mark.asyncio
async def test_other_users_cannot_touch_a_movie(client: AsyncClient, login_as):
    owner = await login_as("alice")
    intruder = await login_as("mallory")
    movie = await add_movie(client, owner)

    listing = await client.get("/api/movies", headers=intruder)
    assert listing.json()["movies"] == []

    update = await client.put(f"/api/movies/{movie['id']}", json=movie_payload(title="Hijacked"), headers=intruder)
    delete = await client.delete(f"/api/movies/{movie['id']}", headers=intruder)
    move = await client.post(f"/api/movies/{movie['id']}/move-to-review", json={"ratingStars": 5}, headers=intruder)
    for response in (update, delete, move):
        assert response.status_code == 404
        assert response.json()["success"] is False

    still_there = await client.get("/api/movies", headers=owner)
    assert [m["title"] for m in still_there.json()["movies"]] == ["The Shawshank Redemption"]


@pytest.mark.asyncio
async def test_missing_and_malformed_ids_are_not_found(client: AsyncClient, login_as):
    headers = await login_as()

    unknown = await client.delete("/api/movies/00000000-0000-0000-0000-000000000000", headers=headers)
    malformed = await client.put("/api/movies/not-an-id", json=movie_payload(), headers=headers)

    assert unknown.status_code == 404
    assert unknown.json()["message"] == "Movie not found or you do not have permission to delete it"
    assert malformed.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("override", [
    {"genres": []},
    {"genres": ["A", "B", "C", "D", "E", "F"]},
    {"genres": "Drama"},
    {"releaseYear": 1799},
    {"releaseYear": 2101},
    {"releaseYear": "next year"},
    {"rating": 11.5},
    {"rating": -1},
    {"ottPlatforms": "Netflix"},
    {"title": ""},
    {"description": "x" * 2001},
    {"notes": "x" * 1001},
])
async def test_create_and_update_validation(client: AsyncClient, login_as, movie_repo, override):
    headers = await login_as()
    existing = await add_movie(client, headers)

    created = await client.post("/api/movies", json=movie_payload(**override), headers=headers)
    updated = await client.put(f"/api/movies/{existing['id']}", json=movie_payload(**override), headers=headers)

    assert created.status_code == 400
    assert updated.status_code == 400
    assert len(movie_repo.rows) == 1


@pytest.mark.asyncio
async def test_validation_messages(client: AsyncClient, login_as):
    headers = await login_as()

    genres = await client.post("/api/movies", json=movie_payload(genres=[]), headers=headers)
    year = await client.post("/api/movies", json=movie_payload(releaseYear=1700), headers=headers)

    assert genres.json()["message"] == "Genres must be an array with 1-5 genres"
    assert year.json()["message"] == "Release year must be between 1800 and 2100"


@pytest.mark.asyncio
async def test_boundary_values_are_accepted(client: AsyncClient, login_as):
    headers = await login_as()
    low = await client.post("/api/movies", json=movie_payload(releaseYear=1800, rating=0, genres=["A"]), headers=headers)
    high = await client.post(
        "/api/movies",
        json=movie_payload(releaseYear="2100", rating=11, genres=["A", "B", "C", "D", "E"]),
        headers=headers,
    )
    assert low.status_code == 201
    assert high.status_code == 201
    assert high.json()["movie"]["releaseYear"] == 2100


@pytest.mark.asyncio
async def test_update_replaces_every_field(client: AsyncClient, login_as):
    headers = await login_as()
    movie = await add_movie(client, headers)

    replacement = {
        "title": "Heat",
        "description": "A group of professional bank robbers.",
        "genres": ["Crime"],
        "releaseYear": 1995,
    }
    response = await client.put(f"/api/movies/{movie['id']}", json=replacement, headers=headers)

    assert response.status_code == 200
    updated = response.json()["movie"]
    assert updated["id"] == movie["id"]
    assert updated["title"] == "Heat"
    assert updated["genres"] == ["Crime"]
    assert updated["rating"] == 0
    assert updated["posterImage"] == ""
    assert updated["ottPlatforms"] == []
    assert updated["notes"] == ""
    assert updated["addedBy"] == movie["addedBy"]


@pytest.mark.asyncio
async def test_storage_failure_is_a_500_without_details(client: AsyncClient, login_as):
    headers = await login_as()

    class BrokenRepository:
        async def list_by_owner(self, owner_id):
            raise ConnectionRefusedError("db.internal:5432 refused")

    app.dependency_overrides[get_movie_repository] = lambda: BrokenRepository()

    response = await client.get("/api/movies", headers=headers)
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Server error while fetching movies"
    assert "db.internal" not in response.text


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [float("nan"), float("inf")])
async def test_non_finite_rating_is_rejected(client: AsyncClient, login_as, movie_repo, rating):
    headers = await login_as()
    body = json.dumps(movie_payload(rating=rating))

    response = await client.post(
        "/api/movies", content=body, headers={**headers, "Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("rating:")
    assert movie_repo.rows == {}
