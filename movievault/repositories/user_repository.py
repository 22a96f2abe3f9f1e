
from asyncpg import Pool
from typing import Optional


class UserRepository:
    def __init__(self, db: Pool):
        self.db = db

    async def get_by_username(self, username: str) -> Optional[dict]:
        query = "SELECT * FROM users WHERE username = $1"
        row = await self.db.fetchrow(query, username)
        return dict(row) if row else None

    async def get_by_email(self, email: str) -> Optional[dict]:
        query = "SELECT * FROM users WHERE email = $1"
        row = await self.db.fetchrow(query, email)
        return dict(row) if row else None

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        dob,
        gender: str,
        phone: str,
        email: str,
        username: str,
        hashed_password: str
    ) -> int:
        query = """
            INSERT INTO users (
                first_name, last_name, dob, gender, phone,
                email, username, hashed_password, created_at, updated_at
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, NOW(), NOW())
            RETURNING id
        """
        user_id = await self.db.fetchval(
            query, first_name, last_name, dob, gender, phone, email, username, hashed_password
        )
        return user_id

    async def count_users(self) -> int:
        return await self.db.fetchval("SELECT COUNT(*) FROM users")
