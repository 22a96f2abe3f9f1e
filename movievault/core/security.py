
from passlib.context import CryptContext
import secrets

SESSION_TOKEN_BYTES = 32

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def generate_session_token() -> str:
    """Opaque bearer token for a login session."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
