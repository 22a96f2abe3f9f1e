from fastapi import APIRouter, Depends, status

from ..schemas.auth import SessionUser
from ..schemas.common import MessageResponse
from ..schemas.movie import MovieIn, MovieListResponse, MovieResponse
from ..schemas.review import MoveToReviewIn, ReviewResponse
from ..dependencies import get_current_user, get_movie_repository, get_review_repository
from ..repositories.movie_repository import MovieRepository
from ..repositories.review_repository import ReviewRepository
from ..services.movie_service import MovieService

router = APIRouter(prefix="/api/movies")


async def get_movie_service(
    movie_repo: MovieRepository = Depends(get_movie_repository),
    review_repo: ReviewRepository = Depends(get_review_repository),
) -> MovieService:
    return MovieService(movie_repo, review_repo)


@router.get("", response_model=MovieListResponse)
async def list_movies(
    user: SessionUser = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service)
):
    """Watchlist of the caller, newest first"""
    return MovieListResponse(movies=await service.list_movies(user.id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MovieResponse)
async def add_movie(
    movie: MovieIn,
    user: SessionUser = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service)
):
    created = await service.add_movie(user.id, movie)
    return MovieResponse(message="Movie added to watchlist successfully", movie=created)


@router.put("/{movie_id}", response_model=MovieResponse)
async def update_movie(
    movie_id: str,
    movie: MovieIn,
    user: SessionUser = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service)
):
    """Replace every editable field of a watchlist entry"""
    updated = await service.update_movie(user.id, movie_id, movie)
    return MovieResponse(message="Movie updated successfully", movie=updated)


@router.delete("/{movie_id}", response_model=MessageResponse)
async def delete_movie(
    movie_id: str,
    user: SessionUser = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service)
):
    await service.delete_movie(user.id, movie_id)
    return MessageResponse(message="Movie removed from watchlist successfully")


@router.post("/{movie_id}/move-to-review", status_code=status.HTTP_201_CREATED, response_model=ReviewResponse)
async def move_to_review(
    movie_id: str,
    details: MoveToReviewIn,
    user: SessionUser = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service)
):
    """Move a movie from the watchlist to reviews"""
    review = await service.move_to_review(user.id, movie_id, details)
    return ReviewResponse(message="Movie moved to reviews successfully", review=review)
