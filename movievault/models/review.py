from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from .base import Base


class ReviewDB(Base):
    """
    Review - written standalone or produced by moving a watchlist entry
    """
    __tablename__ = "reviews"

    id = Column(UUID(as_uuid=True), primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, server_default=text("''"))
    genres = Column(ARRAY(String), nullable=False, server_default=text("'{}'"))
    release_year = Column(Integer, nullable=False)
    poster_image = Column(String, nullable=False, server_default=text("''"))
    ott_platforms = Column(ARRAY(String), nullable=False, server_default=text("'{}'"))
    review_text = Column(String(5000), nullable=False, server_default=text("''"))
    rating_stars = Column(Integer, nullable=False)
    imdb_rating = Column(Float, nullable=False, server_default=text("0"))
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    # Weak reference: the source movie is deleted once the review exists
    source_movie_id = Column(UUID(as_uuid=True), nullable=True)
    review_pros = Column(String(2000), nullable=False, server_default=text("''"))
    review_cons = Column(String(2000), nullable=False, server_default=text("''"))
    is_spoiler = Column(Boolean, nullable=False, server_default=text("false"))
    recommended = Column(Boolean, nullable=False, server_default=text("true"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_reviews_reviewed_by_created_at", "reviewed_by", "created_at"),
    )
