import logging
from typing import List

from ..repositories.movie_repository import MovieRepository
from ..repositories.review_repository import ReviewRepository
from ..schemas.movie import MovieIn, MovieOut
from ..schemas.review import MoveToReviewIn, ReviewOut
from ..exceptions import STORAGE_ERRORS, InternalError, NotFoundOrForbidden, storage_errors
from .utils import parse_entity_id

logger = logging.getLogger(__name__)

UPDATE_NOT_FOUND = "Movie not found or you do not have permission to update it"
DELETE_NOT_FOUND = "Movie not found or you do not have permission to delete it"
MOVE_NOT_FOUND = "Movie not found or you do not have permission to move it"

# Copied verbatim from the watchlist entry into the new review
CARRIED_OVER_FIELDS = ("title", "description", "genres", "release_year", "poster_image", "ott_platforms")


class MovieService:
    def __init__(self, movie_repo: MovieRepository, review_repo: ReviewRepository):
        self.movie_repo = movie_repo
        self.review_repo = review_repo

    async def list_movies(self, owner_id: int) -> List[MovieOut]:
        with storage_errors("fetching movies"):
            rows = await self.movie_repo.list_by_owner(owner_id)
        return [MovieOut.model_validate(row) for row in rows]

    async def add_movie(self, owner_id: int, movie: MovieIn) -> MovieOut:
        with storage_errors("adding movie"):
            row = await self.movie_repo.create(owner_id, movie.to_fields())
        logger.info("Movie added to watchlist", extra={"user_id": owner_id, "entity_id": str(row["id"])})
        return MovieOut.model_validate(row)

    async def update_movie(self, owner_id: int, movie_id: str, movie: MovieIn) -> MovieOut:
        movie_uuid = parse_entity_id(movie_id, UPDATE_NOT_FOUND)
        with storage_errors("updating movie"):
            row = await self.movie_repo.update_owned(movie_uuid, owner_id, movie.to_fields())
        if row is None:
            raise NotFoundOrForbidden(UPDATE_NOT_FOUND)
        logger.info("Movie updated", extra={"user_id": owner_id, "entity_id": movie_id})
        return MovieOut.model_validate(row)

    async def delete_movie(self, owner_id: int, movie_id: str) -> None:
        movie_uuid = parse_entity_id(movie_id, DELETE_NOT_FOUND)
        with storage_errors("deleting movie"):
            deleted = await self.movie_repo.delete_owned(movie_uuid, owner_id)
        if not deleted:
            raise NotFoundOrForbidden(DELETE_NOT_FOUND)
        logger.info("Movie removed from watchlist", extra={"user_id": owner_id, "entity_id": movie_id})

    async def move_to_review(self, owner_id: int, movie_id: str, details: MoveToReviewIn) -> ReviewOut:
        """
        Turn a watchlist entry into a review.

        The review is written before the movie is deleted, so a failure part-way
        leaves the movie in place. There is no rollback: if the delete fails the
        review stays and the caller gets a 500.
        """
        movie_uuid = parse_entity_id(movie_id, MOVE_NOT_FOUND)

        # 1. Ownership-scoped lookup
        with storage_errors("moving movie to reviews"):
            movie = await self.movie_repo.get_owned(movie_uuid, owner_id)
        if movie is None:
            raise NotFoundOrForbidden(MOVE_NOT_FOUND)

        # 2. Project the movie into review shape
        fields = {column: movie[column] for column in CARRIED_OVER_FIELDS}
        fields.update(
            rating_stars=details.rating_stars,
            imdb_rating=0,
            **details.detail_fields(),
        )

        # 3. Create the review
        with storage_errors("moving movie to reviews"):
            review = await self.review_repo.create(owner_id, fields, source_movie_id=movie["id"])

        # 4. Delete the source movie
        try:
            await self.movie_repo.delete_owned(movie_uuid, owner_id)
        except STORAGE_ERRORS as exc:
            logger.error(
                "Review created but source movie was not removed",
                extra={"user_id": owner_id, "entity_id": str(review["id"])},
                exc_info=exc
            )
            raise InternalError("Server error while moving movie to reviews") from exc

        logger.info("Movie moved to reviews", extra={"user_id": owner_id, "entity_id": movie_id})
        return ReviewOut.model_validate(review)
