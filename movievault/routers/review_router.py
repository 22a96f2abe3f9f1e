from fastapi import APIRouter, Depends, status

from ..schemas.auth import SessionUser
from ..schemas.common import MessageResponse
from ..schemas.review import ReviewIn, ReviewListResponse, ReviewResponse
from ..dependencies import get_current_user, get_review_repository
from ..repositories.review_repository import ReviewRepository
from ..services.review_service import ReviewService

router = APIRouter(prefix="/api/reviews")


async def get_review_service(
    review_repo: ReviewRepository = Depends(get_review_repository),
) -> ReviewService:
    return ReviewService(review_repo)


@router.get("", response_model=ReviewListResponse)
async def list_reviews(
    user: SessionUser = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    return ReviewListResponse(reviews=await service.list_reviews(user.id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ReviewResponse)
async def create_review(
    review: ReviewIn,
    user: SessionUser = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """Write a standalone review"""
    created = await service.create_review(user.id, review)
    return ReviewResponse(message="Review added successfully", review=created)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    review: ReviewIn,
    user: SessionUser = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    updated = await service.update_review(user.id, review_id, review)
    return ReviewResponse(message="Review updated successfully", review=updated)


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: str,
    user: SessionUser = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    await service.delete_review(user.id, review_id)
    return MessageResponse(message="Review deleted successfully")
