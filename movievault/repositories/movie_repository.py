import uuid
from typing import Any, Dict, List, Optional
from asyncpg import Pool

# Columns a client may set; everything else is owned by the server
EDITABLE_COLUMNS = (
    "title",
    "description",
    "genres",
    "release_year",
    "rating",
    "poster_image",
    "ott_platforms",
    "notes",
)


class MovieRepository:
    """Watchlist entries. Every lookup and mutation is scoped by (id, added_by)."""

    def __init__(self, db: Pool):
        self.db = db

    async def list_by_owner(self, owner_id: int) -> List[Dict]:
        query = """
            SELECT *
            FROM movies
            WHERE added_by = $1
            ORDER BY added_at DESC
        """
        rows = await self.db.fetch(query, owner_id)
        return [dict(row) for row in rows]

    async def create(self, owner_id: int, fields: Dict[str, Any]) -> Dict:
        query = """
            INSERT INTO movies (
                id, title, description, genres, release_year, rating,
                poster_image, ott_platforms, notes, added_by,
                added_at, is_watched, created_at, updated_at
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, NOW(), FALSE, NOW(), NOW())
            RETURNING *
        """
        row = await self.db.fetchrow(
            query,
            uuid.uuid4(),
            *(fields[column] for column in EDITABLE_COLUMNS),
            owner_id
        )
        return dict(row)

    async def get_owned(self, movie_id: uuid.UUID, owner_id: int) -> Optional[Dict]:
        query = "SELECT * FROM movies WHERE id = $1 AND added_by = $2"
        row = await self.db.fetchrow(query, movie_id, owner_id)
        return dict(row) if row else None

    async def update_owned(self, movie_id: uuid.UUID, owner_id: int, fields: Dict[str, Any]) -> Optional[Dict]:
        """Overwrite every editable column; None when no such movie belongs to the owner."""
        query = """
            UPDATE movies
            SET title = $3,
                description = $4,
                genres = $5,
                release_year = $6,
                rating = $7,
                poster_image = $8,
                ott_platforms = $9,
                notes = $10,
                updated_at = NOW()
            WHERE id = $1 AND added_by = $2
            RETURNING *
        """
        row = await self.db.fetchrow(
            query,
            movie_id,
            owner_id,
            *(fields[column] for column in EDITABLE_COLUMNS)
        )
        return dict(row) if row else None

    async def delete_owned(self, movie_id: uuid.UUID, owner_id: int) -> bool:
        query = "DELETE FROM movies WHERE id = $1 AND added_by = $2 RETURNING id"
        deleted_id = await self.db.fetchval(query, movie_id, owner_id)
        return deleted_id is not None
