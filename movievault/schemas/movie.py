from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import FiniteFloat, StringConstraints, field_validator

from .common import CamelModel, check_range, check_release_year

MOVIE_RATING_RANGE = (0, 11)
MAX_GENRES = 5


class MovieIn(CamelModel):
    """Watchlist entry as submitted on create and (full-replace) update."""
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]
    genres: List[str]
    release_year: int
    rating: Optional[FiniteFloat] = None
    poster_image: Optional[str] = None
    ott_platforms: Optional[List[str]] = None
    notes: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]] = None

    @field_validator("genres")
    @classmethod
    def _check_genres(cls, v: List[str]) -> List[str]:
        if not 1 <= len(v) <= MAX_GENRES:
            raise ValueError("Genres must be an array with 1-5 genres")
        return v

    @field_validator("release_year")
    @classmethod
    def _check_release_year(cls, v: int) -> int:
        return check_release_year(v)

    @field_validator("rating")
    @classmethod
    def _check_rating(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return v
        return check_range(v, MOVIE_RATING_RANGE, "Rating must be between 0 and 11")

    def to_fields(self) -> Dict[str, Any]:
        """Column values with defaults applied; every editable column is present."""
        return {
            "title": self.title,
            "description": self.description,
            "genres": self.genres,
            "release_year": self.release_year,
            "rating": self.rating or 0,
            "poster_image": self.poster_image or "",
            "ott_platforms": self.ott_platforms or [],
            "notes": self.notes or "",
        }


class MovieOut(CamelModel):
    id: str
    title: str
    description: str
    genres: List[str]
    release_year: int
    rating: float
    poster_image: str
    ott_platforms: List[str]
    added_by: int
    added_at: datetime
    is_watched: bool
    notes: str
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v):
        return str(v)


class MovieResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    movie: MovieOut


class MovieListResponse(CamelModel):
    success: bool = True
    movies: List[MovieOut]
