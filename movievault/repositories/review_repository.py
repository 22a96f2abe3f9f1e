import uuid
from typing import Any, Dict, List, Optional
from asyncpg import Pool

EDITABLE_COLUMNS = (
    "title",
    "description",
    "genres",
    "release_year",
    "poster_image",
    "ott_platforms",
    "review_text",
    "rating_stars",
    "imdb_rating",
    "review_pros",
    "review_cons",
    "is_spoiler",
    "recommended",
)


class ReviewRepository:
    """Reviews. Every lookup and mutation is scoped by (id, reviewed_by)."""

    def __init__(self, db: Pool):
        self.db = db

    async def list_by_owner(self, owner_id: int) -> List[Dict]:
        query = """
            SELECT *
            FROM reviews
            WHERE reviewed_by = $1
            ORDER BY created_at DESC
        """
        rows = await self.db.fetch(query, owner_id)
        return [dict(row) for row in rows]

    async def create(
        self,
        owner_id: int,
        fields: Dict[str, Any],
        source_movie_id: Optional[uuid.UUID] = None
    ) -> Dict:
        query = """
            INSERT INTO reviews (
                id, title, description, genres, release_year, poster_image,
                ott_platforms, review_text, rating_stars, imdb_rating,
                review_pros, review_cons, is_spoiler, recommended,
                reviewed_by, source_movie_id, created_at, updated_at
            )
            VALUES (
                $1, $2, $3, $4, $5, $6, $7, $8, $9, $10,
                $11, $12, $13, $14, $15, $16, NOW(), NOW()
            )
            RETURNING *
        """
        row = await self.db.fetchrow(
            query,
            uuid.uuid4(),
            *(fields[column] for column in EDITABLE_COLUMNS),
            owner_id,
            source_movie_id
        )
        return dict(row)

    async def update_owned(self, review_id: uuid.UUID, owner_id: int, fields: Dict[str, Any]) -> Optional[Dict]:
        query = """
            UPDATE reviews
            SET title = $3,
                description = $4,
                genres = $5,
                release_year = $6,
                poster_image = $7,
                ott_platforms = $8,
                review_text = $9,
                rating_stars = $10,
                imdb_rating = $11,
                review_pros = $12,
                review_cons = $13,
                is_spoiler = $14,
                recommended = $15,
                updated_at = NOW()
            WHERE id = $1 AND reviewed_by = $2
            RETURNING *
        """
        row = await self.db.fetchrow(
            query,
            review_id,
            owner_id,
            *(fields[column] for column in EDITABLE_COLUMNS)
        )
        return dict(row) if row else None

    async def delete_owned(self, review_id: uuid.UUID, owner_id: int) -> bool:
        query = "DELETE FROM reviews WHERE id = $1 AND reviewed_by = $2 RETURNING id"
        deleted_id = await self.db.fetchval(query, review_id, owner_id)
        return deleted_id is not None
