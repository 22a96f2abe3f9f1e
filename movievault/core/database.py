import logging

from asyncpg import Pool
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex, CreateTable

from ..models.base import Base
# Imported for their side effect of registering tables on Base.metadata
from ..models import user, movie, review  # noqa: F401

logger = logging.getLogger(__name__)


def schema_statements():
    """DDL for every table and index, compiled for PostgreSQL."""
    dialect = postgresql.dialect()
    statements = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)))
        for index in sorted(table.indexes, key=lambda ix: ix.name):
            statements.append(str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)))
    return statements


async def create_schema(db: Pool):
    async with db.acquire() as conn:
        for statement in schema_statements():
            await conn.execute(statement)
    logger.info("Database schema ensured")
