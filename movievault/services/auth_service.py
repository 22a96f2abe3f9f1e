import logging
from typing import Optional

import asyncpg

from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginResponse, SessionUser, UserCreate, UserLogin
from ..core.security import verify_password, get_password_hash
from ..exceptions import ConflictError, InvalidCredentials, storage_errors

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, user_repo: UserRepository, sessions):
        self.user_repo = user_repo
        self.sessions = sessions

    async def register_user(self, user_data: UserCreate) -> int:
        with storage_errors("registering user"):
            if await self.user_repo.get_by_email(user_data.email):
                raise ConflictError()
            if await self.user_repo.get_by_username(user_data.username):
                raise ConflictError()

            hashed_password = get_password_hash(user_data.password)
            try:
                user_id = await self.user_repo.create_user(
                    first_name=user_data.first_name,
                    last_name=user_data.last_name,
                    dob=user_data.dob,
                    gender=user_data.gender.value,
                    phone=user_data.phone,
                    email=user_data.email,
                    username=user_data.username,
                    hashed_password=hashed_password,
                )
            except asyncpg.UniqueViolationError as exc:
                # Lost a race with a concurrent registration
                raise ConflictError() from exc

        logger.info("User registered", extra={"user_id": user_id})
        return user_id

    async def authenticate_user(self, login_data: UserLogin) -> LoginResponse:
        with storage_errors("logging in"):
            user = await self.user_repo.get_by_username(login_data.username)
        if not user or not verify_password(login_data.password, user["hashed_password"]):
            raise InvalidCredentials()

        snapshot = SessionUser(
            id=user["id"],
            first_name=user["first_name"],
            last_name=user["last_name"],
            email=user["email"],
            username=user["username"],
        )
        with storage_errors("logging in"):
            token = await self.sessions.create(snapshot)

        logger.info("User logged in", extra={"user_id": snapshot.id})
        return LoginResponse(token=token, session_id=token, user=snapshot)

    async def logout(self, token: Optional[str]) -> None:
        """Idempotent: unknown or missing tokens are not an error."""
        if not token:
            return
        with storage_errors("logging out"):
            await self.sessions.revoke(token)
        logger.info("Session revoked")
