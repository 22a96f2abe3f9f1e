import logging
from typing import List

from ..repositories.review_repository import ReviewRepository
from ..schemas.review import ReviewIn, ReviewOut
from ..exceptions import NotFoundOrForbidden, storage_errors
from .utils import parse_entity_id

logger = logging.getLogger(__name__)

NOT_FOUND = "Review not found or no permission"


class ReviewService:
    def __init__(self, review_repo: ReviewRepository):
        self.review_repo = review_repo

    async def list_reviews(self, owner_id: int) -> List[ReviewOut]:
        with storage_errors("fetching reviews"):
            rows = await self.review_repo.list_by_owner(owner_id)
        return [ReviewOut.model_validate(row) for row in rows]

    async def create_review(self, owner_id: int, review: ReviewIn) -> ReviewOut:
        with storage_errors("creating review"):
            row = await self.review_repo.create(owner_id, review.to_fields())
        logger.info("Review created", extra={"user_id": owner_id, "entity_id": str(row["id"])})
        return ReviewOut.model_validate(row)

    async def update_review(self, owner_id: int, review_id: str, review: ReviewIn) -> ReviewOut:
        review_uuid = parse_entity_id(review_id, NOT_FOUND)
        with storage_errors("updating review"):
            row = await self.review_repo.update_owned(review_uuid, owner_id, review.to_fields())
        if row is None:
            raise NotFoundOrForbidden(NOT_FOUND)
        logger.info("Review updated", extra={"user_id": owner_id, "entity_id": review_id})
        return ReviewOut.model_validate(row)

    async def delete_review(self, owner_id: int, review_id: str) -> None:
        review_uuid = parse_entity_id(review_id, NOT_FOUND)
        with storage_errors("deleting review"):
            deleted = await self.review_repo.delete_owned(review_uuid, owner_id)
        if not deleted:
            raise NotFoundOrForbidden(NOT_FOUND)
        logger.info("Review deleted", extra={"user_id": owner_id, "entity_id": review_id})
