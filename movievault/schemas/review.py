from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import FiniteFloat, StringConstraints, field_validator

from .common import CamelModel, check_range, check_release_year, reject_bool

# These three ranges disagree with each other; see DESIGN.md before unifying.
REVIEW_STARS_RANGE = (0, 10)
MOVE_TO_REVIEW_STARS_RANGE = (1, 10)
IMDB_RATING_RANGE = (0, 10)

Text = Annotated[str, StringConstraints(strip_whitespace=True)]
ReviewBody = Annotated[str, StringConstraints(strip_whitespace=True, max_length=5000)]
ProsCons = Annotated[str, StringConstraints(strip_whitespace=True, max_length=2000)]


class ReviewDetails(CamelModel):
    """Fields that only a review has; shared by create/update and move-to-review."""
    review_text: Optional[ReviewBody] = None
    review_pros: Optional[ProsCons] = None
    review_cons: Optional[ProsCons] = None
    is_spoiler: Optional[bool] = None
    recommended: Optional[bool] = None

    def detail_fields(self) -> Dict[str, Any]:
        return {
            "review_text": self.review_text or "",
            "review_pros": self.review_pros or "",
            "review_cons": self.review_cons or "",
            "is_spoiler": bool(self.is_spoiler),
            "recommended": True if self.recommended is None else self.recommended,
        }


class ReviewIn(ReviewDetails):
    """Standalone review as submitted on create and (full-replace) update."""
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    description: Optional[Text] = None
    genres: Optional[List[str]] = None
    release_year: int
    poster_image: Optional[str] = None
    ott_platforms: Optional[List[str]] = None
    rating_stars: int
    imdb_rating: Optional[FiniteFloat] = None

    @field_validator("release_year")
    @classmethod
    def _check_release_year(cls, v: int) -> int:
        return check_release_year(v)

    @field_validator("rating_stars", mode="before")
    @classmethod
    def _reject_bool_stars(cls, v):
        return reject_bool(v, "ratingStars must be 0-10")

    @field_validator("rating_stars")
    @classmethod
    def _check_stars(cls, v: int) -> int:
        return check_range(v, REVIEW_STARS_RANGE, "ratingStars must be 0-10")

    @field_validator("imdb_rating")
    @classmethod
    def _check_imdb(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return v
        return check_range(v, IMDB_RATING_RANGE, "IMDb rating must be between 0 and 10")

    def to_fields(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description or "",
            "genres": self.genres or [],
            "release_year": self.release_year,
            "poster_image": self.poster_image or "",
            "ott_platforms": self.ott_platforms or [],
            "rating_stars": self.rating_stars,
            "imdb_rating": self.imdb_rating or 0,
            **self.detail_fields(),
        }


class MoveToReviewIn(ReviewDetails):
    rating_stars: int

    @field_validator("rating_stars", mode="before")
    @classmethod
    def _reject_bool_stars(cls, v):
        return reject_bool(v, "ratingStars must be an integer between 1 and 10")

    @field_validator("rating_stars")
    @classmethod
    def _check_stars(cls, v: int) -> int:
        return check_range(v, MOVE_TO_REVIEW_STARS_RANGE, "ratingStars must be an integer between 1 and 10")


class ReviewOut(CamelModel):
    id: str
    title: str
    description: str
    genres: List[str]
    release_year: int
    poster_image: str
    ott_platforms: List[str]
    review_text: str
    rating_stars: int
    imdb_rating: float
    reviewed_by: int
    source_movie_id: Optional[str] = None
    review_pros: str
    review_cons: str
    is_spoiler: bool
    recommended: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("id", "source_movie_id", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        return None if v is None else str(v)


class ReviewResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    review: ReviewOut


class ReviewListResponse(CamelModel):
    success: bool = True
    reviews: List[ReviewOut]
