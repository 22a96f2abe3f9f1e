from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from .base import Base


class MovieDB(Base):
    """
    Watchlist entry - one row per movie a user still wants to watch
    """
    __tablename__ = "movies"

    id = Column(UUID(as_uuid=True), primary_key=True)
    title = Column(String, nullable=False)
    description = Column(String(2000), nullable=False)
    genres = Column(ARRAY(String), nullable=False)  # ["Drama", "Crime"]
    release_year = Column(Integer, nullable=False)
    rating = Column(Float, nullable=False, server_default=text("0"))
    poster_image = Column(String, nullable=False, server_default=text("''"))
    ott_platforms = Column(ARRAY(String), nullable=False, server_default=text("'{}'"))
    added_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    added_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    is_watched = Column(Boolean, nullable=False, server_default=text("false"))
    notes = Column(Text, nullable=False, server_default=text("''"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_movies_added_by_added_at", "added_by", "added_at"),
    )
