from datetime import date
from enum import Enum
from typing import Annotated

from pydantic import Field, StringConstraints

from .common import CamelModel

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PHONE_PATTERN = r"^\d{10}$"

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class UserCreate(CamelModel):
    first_name: Name
    last_name: Name
    dob: date = Field(..., alias="DOB")
    gender: Gender
    phone: Annotated[str, StringConstraints(pattern=PHONE_PATTERN)]
    email: Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN)]
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=30)]
    password: Annotated[str, StringConstraints(min_length=6)]


class UserLogin(CamelModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    password: Annotated[str, StringConstraints(min_length=1)]


class SessionUser(CamelModel):
    """Snapshot of the authenticated user kept for the lifetime of a session."""
    id: int
    first_name: str
    last_name: str
    email: str
    username: str


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Login successful!"
    token: str
    session_id: str
    user: SessionUser
