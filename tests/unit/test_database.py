
import pytest
from movievault.core.database import create_schema, schema_statements


def test_schema_creates_tables_in_dependency_order():
    statements = schema_statements()
    tables = [s for s in statements if s.strip().startswith("CREATE TABLE")]

    assert all("IF NOT EXISTS" in s for s in statements)
    order = [next(name for name in ("users", "movies", "reviews") if f"EXISTS {name} " in s) for s in tables]
    assert sorted(order) == ["movies", "reviews", "users"]
    assert order[0] == "users"


def test_schema_has_owner_indexes_and_unique_identity():
    ddl = "\n".join(schema_statements())

    assert "ix_movies_added_by_added_at" in ddl
    assert "ix_reviews_reviewed_by_created_at" in ddl
    assert "CREATE UNIQUE INDEX IF NOT EXISTS ix_users_email" in ddl
    assert "CREATE UNIQUE INDEX IF NOT EXISTS ix_users_username" in ddl


def test_review_source_is_a_weak_reference():
    reviews = next(s for s in schema_statements() if "EXISTS reviews " in s)

    assert "source_movie_id UUID" in reviews
    assert "REFERENCES movies" not in reviews


@pytest.mark.asyncio
async def test_create_schema_runs_every_statement(mock_db_pool):
    conn = mock_db_pool.acquire.return_value.__aenter__.return_value

    await create_schema(mock_db_pool)

    assert conn.execute.await_count == len(schema_statements())
