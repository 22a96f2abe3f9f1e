
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from ..config import settings
from ..schemas.auth import LoginResponse, UserCreate, UserLogin
from ..schemas.common import MessageResponse
from ..dependencies import get_session_registry, get_session_token, get_user_repository
from ..repositories.user_repository import UserRepository
from ..services.auth_service import AuthService
from ..limiter import limiter, LOGIN_LIMIT, REGISTER_LIMIT

router = APIRouter()


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    sessions=Depends(get_session_registry),
) -> AuthService:
    return AuthService(user_repo, sessions)


@router.post("/api/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
@limiter.limit(REGISTER_LIMIT)
async def register(
    user_data: UserCreate,
    request: Request,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    await service.register_user(user_data)
    return MessageResponse(message="User created successfully")


@router.post("/api/login", response_model=LoginResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(
    login_data: UserLogin,
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Login to get a session token"""
    result = await service.authenticate_user(login_data)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        result.token,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return result


@router.post("/api/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    service: AuthService = Depends(get_auth_service)
):
    """End the session; succeeds whether or not the token was valid"""
    await service.logout(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out successfully")
